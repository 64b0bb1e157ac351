"""Key/value hand-off of generated plans to a later rendering step."""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import TypeAdapter

from birthday_planner.schemas.plans import BirthdayPlan
from birthday_planner.schemas.user_input import UserInput
from birthday_planner.services.ai.interfaces import ResultStoreProtocol


PLANS_KEY = "generatedPlans"
USER_INPUT_KEY = "userInput"

_PLANS_ADAPTER = TypeAdapter(list[BirthdayPlan])


class InMemoryResultStore(ResultStoreProtocol):
    """Process local store holding JSON strings, like browser localStorage."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._data


def save_plans(
    store: ResultStoreProtocol, plans: Sequence[BirthdayPlan], user_input: UserInput
) -> None:
    store.set(PLANS_KEY, _PLANS_ADAPTER.dump_json(list(plans), by_alias=True).decode())
    store.set(USER_INPUT_KEY, user_input.model_dump_json(by_alias=True))


def clear_plans(store: ResultStoreProtocol) -> None:
    store.delete(PLANS_KEY)
    store.delete(USER_INPUT_KEY)


def load_plans(store: ResultStoreProtocol) -> list[BirthdayPlan]:
    """Return stored plans in stored order; empty when nothing is stored."""
    raw = store.get(PLANS_KEY)
    if raw is None:
        return []
    return _PLANS_ADAPTER.validate_json(raw)


def load_user_input(store: ResultStoreProtocol) -> UserInput | None:
    raw = store.get(USER_INPUT_KEY)
    if raw is None:
        return None
    return UserInput.model_validate_json(raw)

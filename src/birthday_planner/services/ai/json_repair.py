"""Recover JSON payloads from model output.

Generation providers tend to return near-JSON in three characteristic ways:
trailing commas, JSON wrapped in a Markdown code fence with prose around it,
and bare JSON surrounded by prose. Each repair tier targets one of these,
cheapest first:

1. clean and parse the whole text
2. clean and parse the interior of the first fenced block
3. clean and parse the span from the first opening delimiter to the last
   matching closing delimiter

The trailing comma cleanup is applied before every parse attempt. Only
objects and arrays count as payloads.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Literal


logger = logging.getLogger(__name__)

RepairStatus = Literal["parsed", "empty", "no_payload", "invalid_payload"]
RepairTier = Literal["direct", "fenced", "embedded"]

_TRAILING_COMMA_RE = re.compile(r",\s*([}\]])")
_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)
_CLOSERS = {"{": "}", "[": "]"}

# Length of raw text included in diagnostic log lines
_SNIPPET_CHARS = 200


@dataclass(frozen=True, slots=True)
class RepairResult:
    """Outcome of a repair attempt.

    `status` distinguishes text that held nothing resembling JSON
    (``no_payload``) from text where a candidate was found but could not be
    parsed (``invalid_payload``).
    """

    payload: dict[str, Any] | list[Any] | None
    status: RepairStatus
    tier: RepairTier | None = None

    @property
    def ok(self) -> bool:
        return self.payload is not None


def clean_json_text(text: str) -> str:
    """Remove a comma that directly precedes a closing brace or bracket."""
    return _TRAILING_COMMA_RE.sub(r"\1", text)


def _try_parse(text: str) -> dict[str, Any] | list[Any] | None:
    try:
        parsed = json.loads(clean_json_text(text))
    except (ValueError, RecursionError):
        # ValueError also covers integer literals past the conversion limit
        return None
    if isinstance(parsed, dict | list):
        return parsed
    return None


def extract_fenced_block(text: str) -> str | None:
    """Return the interior of the first fenced code block, if any."""
    match = _FENCE_RE.search(text)
    if match is None:
        return None
    return match.group(1).strip()


def extract_delimited_span(text: str) -> str | None:
    """Return the span from the first ``{``/``[`` to the last matching closer.

    The closer must be of the same kind as the first opener found. Returns
    None when there is no opener or the closer does not follow it.
    """
    positions = [pos for pos in (text.find("{"), text.find("[")) if pos != -1]
    if not positions:
        return None
    start = min(positions)
    end = text.rfind(_CLOSERS[text[start]])
    if end < start:
        return None
    return text[start : end + 1]


def _snippet(text: str) -> str:
    flat = text.replace("\n", " ")
    if len(flat) > _SNIPPET_CHARS:
        return flat[:_SNIPPET_CHARS] + "..."
    return flat


def repair_json_with_diagnostics(raw: str | None) -> RepairResult:
    """Run all repair tiers and report how (or why not) a payload was found.

    Never raises.
    """
    if not isinstance(raw, str) or not raw.strip():
        logger.debug("Repair skipped: empty or non-text input")
        return RepairResult(payload=None, status="empty")

    text = raw.strip()

    parsed = _try_parse(text)
    if parsed is not None:
        return RepairResult(payload=parsed, status="parsed", tier="direct")

    fenced = extract_fenced_block(text)
    if fenced is not None:
        parsed = _try_parse(fenced)
        if parsed is not None:
            logger.debug("Recovered JSON payload from fenced block")
            return RepairResult(payload=parsed, status="parsed", tier="fenced")

    span = extract_delimited_span(text)
    if span is not None:
        parsed = _try_parse(span)
        if parsed is not None:
            logger.debug("Recovered JSON payload embedded in prose")
            return RepairResult(payload=parsed, status="parsed", tier="embedded")

    if fenced is None and span is None:
        logger.warning("No JSON payload found in generated text: %s", _snippet(text))
        return RepairResult(payload=None, status="no_payload")

    logger.warning("JSON payload found but invalid: %s", _snippet(text))
    return RepairResult(payload=None, status="invalid_payload")


def repair_json(raw: str | None) -> dict[str, Any] | list[Any] | None:
    """Return the structured value contained in ``raw`` or None."""
    return repair_json_with_diagnostics(raw).payload

"""pydantic-ai backed generation client."""

from __future__ import annotations

import logging

import httpx
from openai import AsyncOpenAI, OpenAIError
from pydantic_ai import Agent, AgentRunError
from pydantic_ai.models import Model
from pydantic_ai.settings import ModelSettings

from birthday_planner.core.config import Settings
from birthday_planner.schemas.invitation import Invitation, InvitationRequest
from birthday_planner.services.ai.exceptions import ProviderFailure
from birthday_planner.services.ai.interfaces import GenerationClientProtocol
from birthday_planner.services.ai.model_factory import (
    create_image_client,
    create_resilient_http_client,
    get_invitation_model,
    get_optimizer_model,
    get_plan_model,
)
from birthday_planner.services.ai.models import GenerationRequest, OptimizationRequest
from birthday_planner.services.ai.prompts import (
    INVITATION_SYSTEM_PROMPT,
    OPTIMIZER_SYSTEM_PROMPT,
    PLAN_SYSTEM_PROMPT,
    build_invitation_image_prompt,
    build_invitation_prompt,
    build_optimization_prompt,
    build_plan_prompt,
    default_invitation_text,
)


logger = logging.getLogger(__name__)


class PlanGenerationClient(GenerationClientProtocol):
    """Generation client returning raw model text.

    The agents are created with ``output_type=str`` so the text comes back
    untouched; repairing and validating it is the orchestrator's job.
    Provider errors are re-raised as `ProviderFailure` carrying the provider
    message verbatim.
    """

    def __init__(
        self,
        plan_model: Model,
        optimizer_model: Model | None = None,
        *,
        invitation_model: Model | None = None,
        image_client: AsyncOpenAI | None = None,
        plan_temperature: float = 0.7,
        optimizer_temperature: float = 0.6,
        invitation_temperature: float = 0.7,
        image_model: str = "dall-e-3",
        image_size: str = "1024x1024",
    ) -> None:
        self._plan_agent: Agent[None, str] = Agent(
            plan_model,
            output_type=str,
            system_prompt=PLAN_SYSTEM_PROMPT,
            model_settings=ModelSettings(temperature=plan_temperature),
        )
        self._optimizer_agent: Agent[None, str] = Agent(
            optimizer_model or plan_model,
            output_type=str,
            system_prompt=OPTIMIZER_SYSTEM_PROMPT,
            model_settings=ModelSettings(temperature=optimizer_temperature),
        )
        self._invitation_agent: Agent[None, str] = Agent(
            invitation_model or optimizer_model or plan_model,
            output_type=str,
            system_prompt=INVITATION_SYSTEM_PROMPT,
            model_settings=ModelSettings(temperature=invitation_temperature),
        )
        self._image_client = image_client
        self._image_model = image_model
        self._image_size = image_size

    @classmethod
    def from_settings(
        cls, settings: Settings, http_client: httpx.AsyncClient | None = None
    ) -> PlanGenerationClient:
        """Build a client for the configured provider.

        A resilient HTTP client (timeout + transport retries) is created from
        the settings unless one is supplied.
        """
        http_client = http_client or create_resilient_http_client(settings)
        return cls(
            get_plan_model(settings, http_client),
            get_optimizer_model(settings, http_client),
            invitation_model=get_invitation_model(settings, http_client),
            image_client=create_image_client(settings, http_client),
            plan_temperature=settings.PLAN_TEMPERATURE,
            optimizer_temperature=settings.OPTIMIZER_TEMPERATURE,
            invitation_temperature=settings.INVITATION_TEMPERATURE,
            image_model=settings.INVITATION_IMAGE_MODEL,
            image_size=settings.INVITATION_IMAGE_SIZE,
        )

    async def _complete(self, agent: Agent[None, str], prompt: str, action: str) -> str:
        try:
            result = await agent.run(prompt)
        except (AgentRunError, httpx.HTTPError) as e:
            logger.error("Provider call failed for %s: %s", action, e)
            raise ProviderFailure(str(e)) from e
        return result.output or ""

    async def _run(self, agent: Agent[None, str], prompt: str, action: str) -> str:
        text = await self._complete(agent, prompt, action)
        if not text.strip():
            raise ProviderFailure(f"No content returned from provider ({action})")
        return text

    async def generate(self, request: GenerationRequest) -> str:
        logger.info("Requesting plan for profile %s", request.profile)
        return await self._run(self._plan_agent, build_plan_prompt(request), "generatePlans")

    async def optimize_budget(self, request: OptimizationRequest) -> str:
        logger.info("Requesting budget optimization for plan %s", request.plan.id)
        return await self._run(
            self._optimizer_agent, build_optimization_prompt(request), "optimizeBudget"
        )

    async def _generate_image(self, prompt: str) -> str:
        if self._image_client is None:
            logger.warning("No image client configured, invitation has no image")
            return ""
        try:
            response = await self._image_client.images.generate(
                model=self._image_model,
                prompt=prompt,
                n=1,
                size=self._image_size,  # type: ignore[arg-type]
                quality="standard",
            )
        except (OpenAIError, httpx.HTTPError) as e:
            logger.error("Provider call failed for generateInvitation image: %s", e)
            raise ProviderFailure(str(e)) from e
        if not response.data:
            return ""
        return response.data[0].url or ""

    async def generate_invitation(self, request: InvitationRequest) -> Invitation:
        """Write invitation text and request a matching image.

        Blank text falls back to a plain invitation built from the request;
        a missing image leaves ``image_url`` empty.
        """
        logger.info(
            "Requesting %s invitation for plan %s", request.template, request.plan.id
        )
        text = await self._complete(
            self._invitation_agent, build_invitation_prompt(request), "generateInvitation"
        )
        image_url = await self._generate_image(build_invitation_image_prompt(request))
        return Invitation(
            text=text.strip() or default_invitation_text(request),
            image_url=image_url,
            template=request.template,
        )

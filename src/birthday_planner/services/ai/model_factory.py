"""Model factory for the generation client.

Builds pydantic-ai models for the configured provider (OpenAI, Azure OpenAI
or Gemini) and the OpenAI SDK client used for invitation images. Every
function takes an explicit `Settings` instance so the generation client never
reads credentials from process state itself.

Usage:
    from birthday_planner.core.config import get_settings
    from birthday_planner.services.ai.model_factory import (
        create_resilient_http_client,
        get_plan_model,
    )

    settings = get_settings()
    model = get_plan_model(settings, create_resilient_http_client(settings))
"""

from __future__ import annotations

import logging
from typing import Any, cast

from httpx import AsyncClient, HTTPStatusError
from openai import AsyncAzureOpenAI, AsyncOpenAI
from pydantic_ai.models import Model
from pydantic_ai.models.google import GoogleModel
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.google import GoogleProvider
from pydantic_ai.providers.openai import OpenAIProvider
from pydantic_ai.retries import AsyncTenacityTransport, RetryConfig, wait_retry_after
from tenacity import retry_if_exception_type, stop_after_attempt, wait_exponential

from birthday_planner.core.config import Settings


logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = (429, 502, 503, 504)


def _normalize_azure_endpoint(endpoint: str) -> str:
    """Normalize Azure OpenAI endpoint.

    Trailing slashes lead to `//openai/...` URLs, which Azure treats as a
    different path and answers with 404.
    """
    return endpoint.rstrip("/")


def _validate_azure_credentials(settings: Settings) -> bool:
    """Validate that Azure OpenAI credentials are properly configured."""
    if (
        not settings.AZURE_OPENAI_ENDPOINT
        or not settings.AZURE_OPENAI_API_KEY
        or not settings.AZURE_OPENAI_API_VERSION
    ):
        logger.warning(
            "LLM_PROVIDER=azure_openai but credentials missing, falling back to OpenAI"
        )
        return False
    return True


def _resolve_provider(settings: Settings) -> str:
    provider = settings.LLM_PROVIDER
    if provider == "azure_openai" and not _validate_azure_credentials(settings):
        provider = "openai"
    if provider == "openai" and not settings.OPENAI_API_KEY:
        raise ValueError(
            "No valid LLM provider configured. Set OPENAI_API_KEY, Azure OpenAI "
            "credentials (AZURE_OPENAI_ENDPOINT + AZURE_OPENAI_API_KEY + "
            "AZURE_OPENAI_API_VERSION) or LLM_PROVIDER=gemini with GEMINI_API_KEY."
        )
    if provider == "gemini" and not settings.GEMINI_API_KEY:
        raise ValueError("LLM_PROVIDER=gemini but GEMINI_API_KEY is not set")
    return provider


def create_resilient_http_client(settings: Settings) -> AsyncClient:
    """HTTP client that retries transient provider responses.

    429 and 5xx gateway responses are retried with exponential backoff (or
    the provider's Retry-After) up to `GENERATION_MAX_ATTEMPTS` attempts.
    """

    def should_retry_status(response: Any) -> None:
        """Raise exceptions for retryable HTTP status codes."""
        if response.status_code in RETRYABLE_STATUS_CODES:
            response.raise_for_status()

    transport = AsyncTenacityTransport(
        config=RetryConfig(
            retry=retry_if_exception_type(HTTPStatusError),
            wait=wait_retry_after(
                fallback_strategy=wait_exponential(multiplier=2, min=1, max=30),
                max_wait=60,
            ),
            stop=stop_after_attempt(settings.GENERATION_MAX_ATTEMPTS),
            reraise=True,
        ),
        validate_response=should_retry_status,
    )
    return AsyncClient(transport=transport, timeout=settings.GENERATION_TIMEOUT_SECONDS)


def _create_openai_model(
    model_name: str, settings: Settings, http_client: AsyncClient | None = None
) -> Model:
    provider = OpenAIProvider(api_key=settings.OPENAI_API_KEY, http_client=http_client)
    return OpenAIChatModel(model_name, provider=provider)


def _create_azure_client(
    settings: Settings, http_client: AsyncClient | None = None
) -> AsyncAzureOpenAI:
    return AsyncAzureOpenAI(
        azure_endpoint=_normalize_azure_endpoint(settings.AZURE_OPENAI_ENDPOINT or ""),
        api_key=settings.AZURE_OPENAI_API_KEY,
        api_version=settings.AZURE_OPENAI_API_VERSION,
        http_client=http_client,
    )


def _create_azure_model(
    model_name: str, settings: Settings, http_client: AsyncClient | None = None
) -> Model:
    """Create an Azure OpenAI model with the specified deployment name."""
    azure_client = _create_azure_client(settings, http_client)
    return OpenAIChatModel(model_name, provider=OpenAIProvider(openai_client=azure_client))


def _create_gemini_model(
    model_name: str, settings: Settings, http_client: AsyncClient | None = None
) -> Model:
    provider = GoogleProvider(api_key=settings.GEMINI_API_KEY, http_client=http_client)
    return cast(Model, GoogleModel(model_name, provider=provider))


def _create_model(
    model_name: str, settings: Settings, http_client: AsyncClient | None
) -> Model:
    provider = _resolve_provider(settings)
    logger.info(f"Using {provider} model: {model_name}")
    if provider == "azure_openai":
        return _create_azure_model(model_name, settings, http_client)
    if provider == "gemini":
        return _create_gemini_model(model_name, settings, http_client)
    return _create_openai_model(model_name, settings, http_client)


def get_plan_model(settings: Settings, http_client: AsyncClient | None = None) -> Model:
    """Model used to generate one plan per profile."""
    return _create_model(settings.PLAN_MODEL, settings, http_client)


def get_optimizer_model(
    settings: Settings, http_client: AsyncClient | None = None
) -> Model:
    """Model used to rebalance an existing plan against budget priorities."""
    return _create_model(settings.OPTIMIZER_MODEL, settings, http_client)


def get_invitation_model(
    settings: Settings, http_client: AsyncClient | None = None
) -> Model:
    """Model used to write invitation text."""
    return _create_model(settings.INVITATION_MODEL, settings, http_client)


def create_image_client(
    settings: Settings, http_client: AsyncClient | None = None
) -> AsyncOpenAI | None:
    """OpenAI SDK client for invitation images.

    Returns None for Gemini, which has no image endpoint in the OpenAI SDK;
    invitations are then produced without an image.
    """
    provider = _resolve_provider(settings)
    if provider == "gemini":
        logger.info("Invitation images are not available for the gemini provider")
        return None
    if provider == "azure_openai":
        return _create_azure_client(settings, http_client)
    return AsyncOpenAI(api_key=settings.OPENAI_API_KEY, http_client=http_client)

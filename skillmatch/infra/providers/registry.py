"""LLM provider factory/registry."""

from __future__ import annotations

import logging

from skillmatch.config import AppConfig
from skillmatch.infra.providers.anthropic import AnthropicProvider
from skillmatch.infra.providers.base import LLMProvider
from skillmatch.infra.providers.gemini import GeminiProvider
from skillmatch.infra.providers.llamacpp import DEFAULT_BASE_URL, LlamaCppProvider
from skillmatch.infra.providers.openrouter import OpenRouterProvider
from skillmatch.models.provider import ProviderType

logger = logging.getLogger(__name__)


def _build_provider(provider_type: ProviderType, config: AppConfig) -> LLMProvider:
    """Build a single provider instance."""
    prov_config = config.providers.get(provider_type.value)
    api_key = prov_config.api_key if prov_config else ""
    model = prov_config.default_model if prov_config else ""
    timeout = config.inference.timeout

    if provider_type == ProviderType.GEMINI:
        return GeminiProvider(api_key=api_key, model=model, timeout=timeout)
    elif provider_type == ProviderType.ANTHROPIC:
        return AnthropicProvider(api_key=api_key, model=model, timeout=timeout)
    elif provider_type == ProviderType.OPENROUTER:
        return OpenRouterProvider(api_key=api_key, model=model, timeout=timeout)
    elif provider_type == ProviderType.LLAMACPP:
        base_url = prov_config.base_url if prov_config and prov_config.base_url else DEFAULT_BASE_URL
        return LlamaCppProvider(base_url=base_url, timeout=timeout)
    else:
        raise ValueError(f"Unknown provider type: {provider_type}")


def get_provider(provider_type: ProviderType | str, config: AppConfig) -> LLMProvider:
    """Get an LLM provider instance by type, configured from AppConfig."""
    if isinstance(provider_type, str):
        provider_type = ProviderType(provider_type)
    return _build_provider(provider_type, config)


def _is_configured(provider_type: ProviderType, config: AppConfig) -> bool:
    prov_config = config.providers.get(provider_type.value)
    if provider_type == ProviderType.LLAMACPP:
        return prov_config is not None
    return bool(prov_config and prov_config.api_key)


def build_inference_provider(config: AppConfig) -> LLMProvider | None:
    """The one provider used for skill inference, or None to use keywords only.

    A missing API key is not an error: skill inference then runs on keywords.
    Other configured providers are never chained in, so each inference makes
    at most one LLM call.
    """
    inference = config.inference
    if not inference.enabled:
        logger.info("LLM skill inference disabled; using keywords only")
        return None
    try:
        provider_type = ProviderType(inference.provider)
    except ValueError:
        logger.warning("Unknown inference provider %r; using keywords only", inference.provider)
        return None
    if not _is_configured(provider_type, config):
        logger.warning("Provider %s has no API key; using keywords only", provider_type.value)
        return None
    return _build_provider(provider_type, config)

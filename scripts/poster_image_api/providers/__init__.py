"""Provider adapter registry."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from poster_image_api.core.contracts import CredentialLookup, PosterConfig
from poster_image_api.core.errors import ConfigurationError
from poster_image_api.core.utils import env_credentials, lookup_credential
from .base import GeneratedImage, ProviderAdapter


logger = logging.getLogger(__name__)

AdapterFactory = Callable[[str, str], ProviderAdapter]


def _gemini(api_key: str, model: str) -> ProviderAdapter:
    from .gemini import GeminiAdapter
    return GeminiAdapter(api_key, model)


def _nano_banana_pro(api_key: str, model: str) -> ProviderAdapter:
    from .gemini import GeminiAdapter
    return GeminiAdapter(api_key, model, name="nano-banana-pro", label="Nano Banana Pro")


def _grok(api_key: str, model: str) -> ProviderAdapter:
    from .grok import GrokAdapter
    return GrokAdapter(api_key, model)


def _openai(api_key: str, model: str) -> ProviderAdapter:
    from .openai import OpenAIAdapter
    return OpenAIAdapter(api_key, model)


FACTORIES: Dict[str, AdapterFactory] = {
    "gemini": _gemini,
    "nano-banana-pro": _nano_banana_pro,
    "grok": _grok,
    "openai": _openai,
}


def provider_credential(
    provider: str,
    config: PosterConfig,
    credentials: Optional[CredentialLookup] = None,
) -> Optional[str]:
    descriptor = config.providers.get(provider)
    if descriptor is None:
        return None
    lookup = credentials or env_credentials
    return lookup_credential(lookup, (descriptor.api_key_env, *descriptor.alt_api_key_envs))


def resolve_provider_adapter(
    provider: str,
    config: PosterConfig,
    credentials: Optional[CredentialLookup] = None,
    model: Optional[str] = None,
    factories: Optional[Dict[str, AdapterFactory]] = None,
) -> Optional[ProviderAdapter]:
    """Build the adapter for ``provider`` or return ``None`` if it cannot run.

    A missing descriptor, a disabled provider or an absent credential are all
    ordinary "not configured" outcomes. Only asking for a model the provider
    does not offer is treated as an error.
    """
    registry = FACTORIES if factories is None else factories
    descriptor = config.providers.get(provider)
    if descriptor is None or not descriptor.enabled:
        logger.debug("Provider %s is not configured or disabled", provider)
        return None
    factory = registry.get(provider)
    if factory is None:
        logger.debug("No adapter registered for provider %s", provider)
        return None
    api_key = provider_credential(provider, config, credentials)
    if not api_key:
        logger.debug("No credential found for provider %s (%s)", provider, descriptor.api_key_env)
        return None
    chosen_model = model or descriptor.default_model
    if chosen_model not in descriptor.available_models:
        raise ConfigurationError(f"Model {chosen_model} is not available for provider {provider}")
    return factory(api_key, chosen_model)


__all__ = [
    "FACTORIES",
    "GeneratedImage",
    "ProviderAdapter",
    "provider_credential",
    "resolve_provider_adapter",
]

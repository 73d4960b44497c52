from __future__ import annotations

from functools import lru_cache

from studio_companion.config import settings
from studio_companion.errors import UpstreamTransportError
from studio_companion.providers.base import GenerationProvider


def _make_openai() -> GenerationProvider:
    from studio_companion.providers.openai_provider import OpenAIGenerationProvider

    if not settings.openai_api_key:
        raise UpstreamTransportError("OPENAI_API_KEY is not set")
    return OpenAIGenerationProvider(api_key=settings.openai_api_key)


def _make_gemini() -> GenerationProvider:
    from studio_companion.providers.gemini_provider import GeminiGenerationProvider

    if not settings.gemini_api_key:
        raise UpstreamTransportError("GEMINI_API_KEY is not set")
    return GeminiGenerationProvider(api_key=settings.gemini_api_key)


_PROVIDERS = {
    "openai": _make_openai,
    "gemini": _make_gemini,
}


@lru_cache()
def get_provider() -> GenerationProvider:
    """Process-wide generator handle, built on first use and shared read-only."""
    key = settings.generation_provider.strip().lower()
    if key not in _PROVIDERS:
        raise ValueError(f"Unsupported generation provider: {key}")
    return _PROVIDERS[key]()

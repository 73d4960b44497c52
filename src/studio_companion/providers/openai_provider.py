from __future__ import annotations

import logging
from typing import Any

from studio_companion.config import settings
from studio_companion.errors import UpstreamTransportError
from studio_companion.providers.base import GenerationRequest, build_user_parts

logger = logging.getLogger(__name__)


class OpenAIGenerationProvider:
    name = "openai"

    def __init__(self, api_key: str, model: str | None = None) -> None:
        import openai  # type: ignore

        self._openai = openai
        self.client = openai.AsyncOpenAI(api_key=api_key)
        self.model = model or settings.openai_text_model

    async def generate(self, request: GenerationRequest, strict: bool) -> str:
        """
        One chat completion in JSON mode. Returns the message text, or "" when the
        service sends back no content. No parsing and no retries here.
        """
        content: list[dict[str, Any]] = []
        for part in build_user_parts(request, strict):
            if part.kind == "image":
                content.append({"type": "image_url", "image_url": {"url": part.value}})
            else:
                content.append({"type": "text", "text": part.value})

        mp = request.model_params
        kwargs: dict[str, Any] = {
            "model": self.model,
            "temperature": mp.temperature,
            "max_tokens": mp.max_tokens,
            "response_format": {"type": "json_object"},
            "messages": [
                {"role": "system", "content": request.persona},
                {"role": "user", "content": content},
            ],
        }
        if mp.presence_penalty is not None:
            kwargs["presence_penalty"] = mp.presence_penalty
        if mp.frequency_penalty is not None:
            kwargs["frequency_penalty"] = mp.frequency_penalty

        try:
            completion = await self.client.chat.completions.create(**kwargs)
        except self._openai.APIError as exc:
            logger.exception("openai call failed for task=%s", request.task)
            raise UpstreamTransportError(f"Generation service error: {exc}") from exc

        choices = getattr(completion, "choices", None) or []
        if not choices:
            return ""
        message = getattr(choices[0], "message", None)
        return getattr(message, "content", None) or ""

from __future__ import annotations

import logging
from io import BytesIO
from typing import Any

import httpx
from PIL import Image, UnidentifiedImageError

from studio_companion.config import settings
from studio_companion.errors import InvalidInput, UpstreamTransportError
from studio_companion.imaging.normalize import decode_data_url
from studio_companion.providers.base import GenerationRequest, build_user_parts

logger = logging.getLogger(__name__)


class GeminiGenerationProvider:
    name = "gemini"

    def __init__(self, api_key: str, model: str | None = None) -> None:
        # Imported lazily so the app can start without the dependency installed.
        from google import genai  # type: ignore

        self._genai = genai
        self.client = genai.Client(api_key=api_key)
        self.model = model or settings.gemini_vision_model

    async def generate(self, request: GenerationRequest, strict: bool) -> str:
        """
        The google-genai SDK takes PIL images directly in contents, so data URIs
        are decoded here. Returns "" when the response carries no text.
        """
        from google.genai import errors, types  # type: ignore

        contents: list[Any] = []
        for part in build_user_parts(request, strict):
            if part.kind == "image":
                _, raw = decode_data_url(part.value)
                try:
                    contents.append(Image.open(BytesIO(raw)))
                except (UnidentifiedImageError, OSError) as exc:
                    raise InvalidInput("Invalid image") from exc
            else:
                contents.append(part.value)

        mp = request.model_params
        config = types.GenerateContentConfig(
            system_instruction=request.persona,
            response_mime_type="application/json",
            temperature=mp.temperature,
            max_output_tokens=mp.max_tokens,
            presence_penalty=mp.presence_penalty,
            frequency_penalty=mp.frequency_penalty,
        )

        try:
            resp = await self.client.aio.models.generate_content(
                model=self.model,
                contents=contents,
                config=config,
            )
        except (errors.APIError, httpx.HTTPError) as exc:
            logger.exception("gemini call failed for task=%s", request.task)
            raise UpstreamTransportError(f"Generation service error: {exc}") from exc

        return getattr(resp, "text", None) or ""

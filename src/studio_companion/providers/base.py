from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Literal, Protocol

from studio_companion.tasks.prompts import LENIENT_PREFACE, STRICT_PREFACE

AttemptMode = Literal["lenient", "strict"]


@dataclass(frozen=True)
class ModelParams:
    temperature: float = 0.7
    max_tokens: int = 1000
    presence_penalty: float | None = None
    frequency_penalty: float | None = None


@dataclass(frozen=True)
class GenerationRequest:
    task: str
    persona: str
    schema: dict[str, Any]
    intro: str
    constraints: str
    image_data_url: str | None = None
    text: str | None = None
    params: dict[str, str] = field(default_factory=dict)
    model_params: ModelParams = field(default_factory=ModelParams)


@dataclass(frozen=True)
class GenerationAttempt:
    mode: AttemptMode
    raw_text: str


@dataclass(frozen=True)
class ValidatedResult:
    data: dict[str, Any]
    attempts: tuple[GenerationAttempt, ...]


@dataclass(frozen=True)
class ContentPart:
    kind: Literal["text", "image"]
    value: str  # text, or an image data URI


class GenerationProvider(Protocol):
    name: str

    async def generate(self, request: GenerationRequest, strict: bool) -> str: ...


def build_user_parts(request: GenerationRequest, strict: bool) -> list[ContentPart]:
    """
    Ordered user content shared by every provider:
    intro + image (if any), task text (if any), then the schema block.
    """
    parts: list[ContentPart] = []
    if request.image_data_url:
        if request.intro:
            parts.append(ContentPart("text", request.intro))
        parts.append(ContentPart("image", request.image_data_url))
    if request.text:
        parts.append(ContentPart("text", request.text))

    preface = STRICT_PREFACE if strict else LENIENT_PREFACE
    schema_block = f"{preface}\n{json.dumps(request.schema)}\n"
    if request.constraints:
        schema_block += f"{request.constraints}\n"
    parts.append(ContentPart("text", schema_block))
    return parts

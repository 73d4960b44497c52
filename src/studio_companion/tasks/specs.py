from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Literal

from studio_companion.config import settings
from studio_companion.errors import InvalidInput, MissingInput
from studio_companion.imaging.normalize import DATA_URL_IMAGE_PREFIX, NormalizeOptions
from studio_companion.providers.base import GenerationRequest, ModelParams
from studio_companion.tasks import prompts, schemas, validators


class TaskKind(str, Enum):
    ARTIST_MATCH = "who"
    SERIES_IDEAS = "series"
    CRITIQUE = "critique"
    ABSTRACTION_PATHS = "abstractify"
    TITLE_GENERATION = "title"
    STATEMENT = "statement"


ImageRule = Literal["required", "optional", "none"]
Params = dict[str, str]


@dataclass(frozen=True)
class TaskSpec:
    kind: TaskKind
    persona: Callable[[Params], str]
    schema: dict[str, Any]
    validator: validators.Validator
    intro: str
    constraints: str
    build_text: Callable[[Params], str | None]
    image: ImageRule
    fields: tuple[str, ...] = ()
    tones: tuple[str, ...] = ()
    # At least one of these must be non-blank (text-only tasks).
    require_any: tuple[str, ...] = ()
    require_any_message: str = ""
    model_params: ModelParams = field(default_factory=ModelParams)
    normalize: NormalizeOptions | None = None

    def describe(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "task": self.kind.value,
            "image": self.image,
            "fields": list(self.fields),
        }
        if self.tones:
            out["tones"] = list(self.tones)
        if self.normalize is not None:
            out["normalize"] = {
                "max_edge": self.normalize.max_edge,
                "start_quality": self.normalize.start_quality,
                "max_bytes": self.normalize.max_bytes,
                "quality_floor": self.normalize.quality_floor,
            }
        return out


def _static(text: str) -> Callable[[Params], str]:
    return lambda _params: text


def _no_text(_params: Params) -> str | None:
    return None


def _artist_match_text(params: Params) -> str | None:
    description = params.get("description", "").strip()
    if not description:
        return None
    return (
        f'The user describes their painting as: "{description}"\n\n'
        "Suggest artists with strong visual and material similarities."
    )


def _title_text(params: Params) -> str:
    keywords = params.get("keywords", "").strip()
    return "\n".join(
        [
            f"Preferred tone: {params.get('tone', 'poetic')}",
            f"Artist-provided keywords: {keywords}" if keywords else "No additional keywords.",
            "Analyse the artwork's mood, palette, edges, movement, and atmosphere, then propose titles.",
        ]
    )


INTERVIEW_QUESTIONS: tuple[tuple[str, str], ...] = (
    ("q1_images_moods", "Images/moods"),
    ("q2_viewer_feel", "Viewer feel"),
    ("q3_materials_tools", "Materials/tools"),
    ("q4_style_approach", "Style/approach"),
    ("q5_origin_motivation", "Origin/motivation"),
    ("q6_milestones", "Milestones"),
    ("q7_personal_meaning", "Personal meaning"),
)


def _statement_text(params: Params) -> str:
    lines = [
        f"Artist name: {params.get('name') or '(unknown)'}",
        f"Artist location: {params.get('location') or '(unknown)'}",
        f"Tone preference: {params.get('tone', 'plain')}",
        "Interview answers:",
    ]
    for i, (key, label) in enumerate(INTERVIEW_QUESTIONS, start=1):
        lines.append(f"{i}) {label}: {params.get(key, '')}")
    return "\n".join(lines)


_ABSTRACTIFY_PRESET = NormalizeOptions(max_edge=1800, start_quality=0.82, max_bytes=int(2.5 * 1024 * 1024), quality_floor=0.5)


def _default_preset() -> NormalizeOptions:
    return NormalizeOptions.from_settings()


_SPECS: dict[TaskKind, TaskSpec] = {
    TaskKind.ARTIST_MATCH: TaskSpec(
        kind=TaskKind.ARTIST_MATCH,
        persona=_static(prompts.ARTIST_MATCH_PERSONA),
        schema=schemas.ARTIST_MATCH_SCHEMA,
        validator=validators.is_artist_match,
        intro="Analyse this artwork and suggest artists with strong visual and material similarities.",
        constraints=prompts.ARTIST_MATCH_CONSTRAINTS,
        build_text=_artist_match_text,
        image="optional",
        fields=("description",),
        model_params=ModelParams(temperature=0.7, max_tokens=1000, presence_penalty=0.1, frequency_penalty=0.1),
        normalize=_default_preset(),
    ),
    TaskKind.SERIES_IDEAS: TaskSpec(
        kind=TaskKind.SERIES_IDEAS,
        persona=_static(prompts.SERIES_IDEAS_PERSONA),
        schema=schemas.SERIES_IDEAS_SCHEMA,
        validator=validators.is_series_ideas,
        intro="Analyse this artwork and provide thoughtful series ideas following the specified format.",
        constraints=prompts.SERIES_IDEAS_CONSTRAINTS,
        build_text=_no_text,
        image="required",
        model_params=ModelParams(temperature=0.7, max_tokens=1000, presence_penalty=0.1, frequency_penalty=0.1),
        normalize=_default_preset(),
    ),
    TaskKind.CRITIQUE: TaskSpec(
        kind=TaskKind.CRITIQUE,
        persona=_static(prompts.CRITIQUE_PERSONA),
        schema=schemas.CRITIQUE_SCHEMA,
        validator=validators.is_critique,
        intro="Analyse this artwork and provide a thoughtful critique following the specified format.",
        constraints=prompts.CRITIQUE_CONSTRAINTS,
        build_text=_no_text,
        image="required",
        model_params=ModelParams(temperature=0.7, max_tokens=1000, presence_penalty=0.1, frequency_penalty=0.1),
        normalize=_default_preset(),
    ),
    TaskKind.ABSTRACTION_PATHS: TaskSpec(
        kind=TaskKind.ABSTRACTION_PATHS,
        persona=lambda params: prompts.abstraction_paths_persona(params.get("notes", "").strip()),
        schema=schemas.ABSTRACTION_PATHS_SCHEMA,
        validator=validators.is_abstraction_paths,
        intro="Analyse the image and produce the specified outputs.",
        constraints=prompts.ABSTRACTION_PATHS_CONSTRAINTS,
        build_text=_no_text,
        image="required",
        fields=("notes",),
        model_params=ModelParams(temperature=0.7, max_tokens=900, presence_penalty=0.2, frequency_penalty=0.1),
        normalize=_ABSTRACTIFY_PRESET,
    ),
    TaskKind.TITLE_GENERATION: TaskSpec(
        kind=TaskKind.TITLE_GENERATION,
        persona=_static(prompts.TITLE_PERSONA),
        schema=schemas.TITLE_GENERATION_SCHEMA,
        validator=validators.is_title_generation,
        intro="Propose titles for this artwork.",
        constraints=prompts.TITLE_CONSTRAINTS,
        build_text=_title_text,
        image="required",
        fields=("tone", "keywords"),
        tones=("poetic", "cinematic", "minimal", "lyrical", "mysterious"),
        model_params=ModelParams(temperature=0.7, max_tokens=700),
        normalize=_default_preset(),
    ),
    TaskKind.STATEMENT: TaskSpec(
        kind=TaskKind.STATEMENT,
        persona=_static(prompts.STATEMENT_PERSONA),
        schema=schemas.STATEMENT_SCHEMA,
        validator=validators.is_statement,
        intro="",
        constraints=prompts.STATEMENT_CONSTRAINTS,
        build_text=_statement_text,
        image="none",
        fields=("name", "location", "tone") + tuple(key for key, _ in INTERVIEW_QUESTIONS),
        tones=("plain", "poetic", "gallery"),
        require_any=tuple(key for key, _ in INTERVIEW_QUESTIONS),
        require_any_message="Please answer at least one interview question",
        model_params=ModelParams(temperature=0.6, max_tokens=900),
    ),
}


def get_spec(kind: TaskKind | str) -> TaskSpec:
    """Raises ValueError for an unknown task name."""
    return _SPECS[TaskKind(kind)]


def all_specs() -> list[TaskSpec]:
    return list(_SPECS.values())


def validate(kind: TaskKind | str, candidate: Any) -> bool:
    return get_spec(kind).validator(candidate)


def _read_str(body: dict[str, Any], key: str) -> str:
    value = body.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidInput(f"'{key}' must be a string")
    return value


def build_request(spec: TaskSpec, body: dict[str, Any]) -> GenerationRequest:
    """
    Check the task's inputs and assemble an immutable GenerationRequest.
    Raises MissingInput / InvalidInput before anything is sent upstream.
    """
    params: Params = {key: _read_str(body, key) for key in spec.fields}

    image = None
    if spec.image != "none":
        image = _read_str(body, "imageDataUrl") or None
        has_alternative = spec.image == "optional" and params.get("description", "").strip()
        if image is None:
            if spec.image == "required":
                raise MissingInput("Missing or invalid image")
            if not has_alternative:
                raise MissingInput("Please provide either an image or a description")
        elif not image.startswith(DATA_URL_IMAGE_PREFIX):
            raise InvalidInput("Invalid image format" if spec.image == "optional" else "Missing or invalid image")
        if image is not None and len(image) > settings.max_image_data_url_chars:
            raise InvalidInput("Image too large. Please use a smaller image.")

    if spec.require_any and not any(params.get(key, "").strip() for key in spec.require_any):
        raise MissingInput(spec.require_any_message)

    if spec.tones:
        tone = params.get("tone", "").strip() or spec.tones[0]
        if tone not in spec.tones:
            raise InvalidInput(f"Unsupported tone '{tone}'. Choose one of: {', '.join(spec.tones)}")
        params["tone"] = tone

    return GenerationRequest(
        task=spec.kind.value,
        persona=spec.persona(params),
        schema=spec.schema,
        intro=spec.intro,
        constraints=spec.constraints,
        image_data_url=image,
        text=spec.build_text(params),
        params=params,
        model_params=spec.model_params,
    )

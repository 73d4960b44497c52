from __future__ import annotations

import json
import logging
from typing import Any

from studio_companion.config import settings
from studio_companion.errors import UpstreamFormatError
from studio_companion.providers.base import (
    AttemptMode,
    GenerationAttempt,
    GenerationProvider,
    GenerationRequest,
    ValidatedResult,
)
from studio_companion.tasks.specs import TaskSpec

logger = logging.getLogger(__name__)

FORMAT_ERROR_MESSAGE = "Unexpected format from model."

# Content-shape retry only: lenient, then strict, then give up.
ATTEMPT_MODES: tuple[AttemptMode, ...] = ("lenient", "strict")


async def run_task(spec: TaskSpec, request: GenerationRequest, provider: GenerationProvider) -> ValidatedResult:
    """
    Drive at most two sequential generator calls and return the first response
    that parses as JSON and passes the task validator.

    Raises UpstreamFormatError carrying the last raw text (truncated) when neither
    attempt conforms. Transport errors from the provider propagate untouched.
    """
    attempts: list[GenerationAttempt] = []
    for mode in ATTEMPT_MODES:
        raw_text = await provider.generate(request, strict=(mode == "strict"))
        attempt = GenerationAttempt(mode=mode, raw_text=raw_text or "")
        attempts.append(attempt)
        logger.info("task=%s attempt=%s provider=%s chars=%d", request.task, mode, provider.name, len(attempt.raw_text))

        candidate = parse_jsonish(attempt.raw_text)
        if candidate is not None and spec.validator(candidate):
            return ValidatedResult(data=candidate, attempts=tuple(attempts))
        logger.warning(
            "task=%s attempt=%s rejected (%s)",
            request.task,
            mode,
            "unparsable" if candidate is None else "schema mismatch",
        )

    # An empty reply reports "(no content)" rather than an empty debug string.
    debug = attempts[-1].raw_text[: settings.debug_excerpt_chars] if attempts[-1].raw_text else "(no content)"
    logger.warning("task=%s gave up after %d attempts", request.task, len(attempts))
    raise UpstreamFormatError(FORMAT_ERROR_MESSAGE, debug=debug)


def _strip_code_fences(text: str) -> str:
    s = text.strip()
    if s.startswith("```"):
        # Remove leading fence line
        first_nl = s.find("\n")
        if first_nl != -1:
            s = s[first_nl + 1 :]
        # Remove trailing fence
        if s.rstrip().endswith("```"):
            s = s.rstrip()[:-3]
    return s.strip()


def parse_jsonish(raw_text: str | None) -> Any | None:
    """JSON value from raw model text, or None when it does not parse."""
    if not raw_text:
        return None
    try:
        return json.loads(_strip_code_fences(raw_text))
    except ValueError:
        return None

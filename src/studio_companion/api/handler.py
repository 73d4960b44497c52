from __future__ import annotations

import json
import logging
from typing import Any, Callable

from studio_companion.errors import InvalidInput, TaskError
from studio_companion.orchestrator import run_task
from studio_companion.providers.base import GenerationProvider
from studio_companion.tasks.specs import TaskKind, build_request, get_spec

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[], GenerationProvider]


def _parse_body(raw_body: bytes | str) -> dict[str, Any]:
    try:
        body = json.loads(raw_body)
    except ValueError as exc:
        raise InvalidInput("Invalid request body") from exc
    if not isinstance(body, dict):
        raise InvalidInput("Invalid request body")
    return body


async def handle_task_request(
    kind: TaskKind | str,
    raw_body: bytes | str,
    provider_factory: ProviderFactory,
) -> tuple[int, dict[str, Any]]:
    """
    Run one task request end to end and return (status_code, json_body).

    The provider is resolved only once the inputs have been accepted, so
    rejected requests never touch the generator.
    """
    spec = get_spec(kind)
    try:
        body = _parse_body(raw_body)
        request = build_request(spec, body)
        result = await run_task(spec, request, provider_factory())
    except TaskError as exc:
        if exc.status_code >= 500:
            logger.warning("task=%s failed: %s", spec.kind.value, exc.message)
        return exc.status_code, exc.to_body()
    except Exception as exc:
        logger.exception("task=%s crashed", spec.kind.value)
        return 500, {"error": str(exc) or "Server error"}

    return 200, result.data

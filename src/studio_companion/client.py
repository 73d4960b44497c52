from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import httpx

from studio_companion.imaging.normalize import NormalizedImage, NormalizeOptions, UploadedImage, normalize_with
from studio_companion.tasks.specs import TaskKind, get_spec

logger = logging.getLogger(__name__)


def _trim(s: str, n: int = 4000) -> str:
    s = s or ""
    return s if len(s) <= n else (s[:n] + "…<trimmed>")


class RunState(str, Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    COMPLETED = "completed"


@dataclass
class TaskRun:
    """Observable state of one task call: idle -> in_flight -> completed."""

    task: TaskKind
    state: RunState = RunState.IDLE
    result: dict[str, Any] | None = None
    error: str | None = None
    debug: str | None = None
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        return self.state is RunState.COMPLETED and self.error is None


def prepare_image(path: Path | str, task: TaskKind | str) -> NormalizedImage:
    """Normalize a local image with the preset of `task`."""
    options = get_spec(task).normalize or NormalizeOptions.from_settings()
    return normalize_with(UploadedImage.from_path(path), options)


class TaskClient:
    """Minimal async client for the task endpoints."""

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:8000",
        timeout_s: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self._transport = transport
        self._runs: dict[TaskKind, TaskRun] = {}

    def current(self, task: TaskKind | str) -> TaskRun:
        kind = TaskKind(task)
        return self._runs.setdefault(kind, TaskRun(task=kind))

    async def run(self, task: TaskKind | str, payload: dict[str, Any]) -> TaskRun:
        """
        POST the payload and record the outcome. HTTP and transport failures end
        in COMPLETED with `error` set; nothing is raised for them.
        """
        run = self.current(task)
        if run.state is RunState.IN_FLIGHT:
            raise RuntimeError(f"a {run.task.value} request is already in flight")

        # Previous results are cleared when a new request starts.
        run.state = RunState.IN_FLIGHT
        run.result = run.error = run.debug = None
        run.status_code = None

        try:
            await self._send(run, payload)
        finally:
            run.state = RunState.COMPLETED
        return run

    async def _send(self, run: TaskRun, payload: dict[str, Any]) -> None:
        try:
            async with httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport) as client:
                r = await client.post(f"{self.base_url}/api/{run.task.value}", json=payload)
        except httpx.HTTPError as exc:
            logger.warning("request to %s failed: %s", run.task.value, exc)
            run.error = f"Request failed: {exc}"
            return

        run.status_code = r.status_code
        try:
            body = r.json()
        except ValueError:
            body = None

        if r.status_code < 400 and isinstance(body, dict):
            run.result = body
        elif isinstance(body, dict):
            run.error = str(body.get("error") or "Request failed")
            run.debug = body.get("debug")
        else:
            run.error = f"HTTP {r.status_code}: {_trim(r.text)}"

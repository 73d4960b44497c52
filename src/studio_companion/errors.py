from __future__ import annotations

from typing import Any


class TaskError(Exception):
    """Base for every failure surfaced to a caller as `{"error": ...}`."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_body(self) -> dict[str, Any]:
        return {"error": self.message}


class MissingInput(TaskError):
    status_code = 400


class InvalidInput(TaskError):
    status_code = 400


class UpstreamFormatError(TaskError):
    """The generator never produced schema-conformant JSON."""

    status_code = 502

    def __init__(self, message: str, debug: str) -> None:
        super().__init__(message)
        self.debug = debug

    def to_body(self) -> dict[str, Any]:
        return {"error": self.message, "debug": self.debug}


class UpstreamTransportError(TaskError):
    status_code = 500

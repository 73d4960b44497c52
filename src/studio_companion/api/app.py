from __future__ import annotations

import logging
from typing import Any

from fastapi import Depends, FastAPI, File, Form, Request, UploadFile
from fastapi.responses import JSONResponse

from studio_companion.api.handler import ProviderFactory, handle_task_request
from studio_companion.config import settings
from studio_companion.errors import TaskError
from studio_companion.imaging.normalize import NormalizeOptions, UploadedImage, normalize_with
from studio_companion.providers.registry import get_provider
from studio_companion.tasks.specs import TaskKind, all_specs, get_spec

logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="studio_companion")


def provider_factory() -> ProviderFactory:
    return get_provider


@app.exception_handler(TaskError)
async def task_error_handler(request: Request, exc: TaskError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


def _unknown_task(task: str) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": f"Unknown task '{task}'"})


def _is_task(task: str) -> bool:
    return task in {k.value for k in TaskKind}


@app.get("/healthz")
def healthz() -> dict[str, Any]:
    return {"status": "ok", "provider": settings.generation_provider}


@app.get("/api/tasks")
def list_tasks() -> dict[str, Any]:
    return {"tasks": [spec.describe() for spec in all_specs()]}


@app.post("/api/normalize")
def normalize_upload(file: UploadFile = File(...), task: str = Form("")):
    """
    Server-side run of the image normalizer, for clients that cannot resize locally.
    Sync route: Pillow work runs in the threadpool.
    """
    options = NormalizeOptions.from_settings()
    if task:
        if not _is_task(task):
            return _unknown_task(task)
        options = get_spec(task).normalize or options

    image = UploadedImage(data=file.file.read(), mime_type=file.content_type or "")
    normalized = normalize_with(image, options)
    return {
        "dataUrl": normalized.data_url,
        "width": normalized.width,
        "height": normalized.height,
        "quality": normalized.quality,
        "bytes": normalized.byte_length,
    }


@app.post("/api/{task}")
async def run_task_route(task: str, request: Request, factory: ProviderFactory = Depends(provider_factory)):
    if not _is_task(task):
        return _unknown_task(task)
    raw_body = await request.body()
    status_code, body = await handle_task_request(task, raw_body, factory)
    return JSONResponse(status_code=status_code, content=body)

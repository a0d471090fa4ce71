"""API routes for the quote worker."""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.concurrency import run_in_threadpool

from quote_worker.automation import SubmissionOrchestrator
from quote_worker.exceptions import PayloadValidationError
from quote_worker.models.submission import build_submission, new_submission_id
from quote_worker.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter()


def _rejected(status_code: int, submission_id: str, errors: list[str]) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"ok": False, "id": submission_id, "errors": errors})


async def _read_body(request: Request, limit: int) -> bytes | None:
    """Read the request body, or return ``None`` once it grows past *limit* bytes."""
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > limit:
        return None
    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > limit:
            return None
    return bytes(body)


@router.get("/", response_class=PlainTextResponse)
def health() -> str:
    return "OK"


@router.post("/submit-quote")
async def submit_quote(request: Request) -> JSONResponse:
    """Validate the payload, then run every configured carrier in order.

    The orchestrator drives a blocking browser, so it runs in the threadpool.
    """
    submission_id = new_submission_id()
    settings: Settings = request.app.state.settings
    orchestrator: SubmissionOrchestrator = request.app.state.orchestrator

    limit = settings.api.max_body_bytes
    body = await _read_body(request, limit)
    if body is None:
        return _rejected(413, submission_id, [f"request body exceeds {limit} bytes"])

    payload: Any
    try:
        payload = json.loads(body) if body.strip() else {}
    except ValueError:
        return _rejected(400, submission_id, ["request body must be valid JSON"])

    try:
        submission = build_submission(payload, submission_id)
    except PayloadValidationError as exc:
        logger.info("Submission %s rejected: %s", submission_id, exc)
        return _rejected(400, submission_id, exc.errors)

    try:
        result = await run_in_threadpool(orchestrator.submit, submission)
    except Exception as exc:
        logger.exception("Submission %s failed", submission_id)
        return JSONResponse(status_code=500, content={"ok": False, "id": submission_id, "error": str(exc)})

    return JSONResponse(content=result.to_dict())

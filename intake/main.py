from __future__ import annotations

import json
import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from .config import Settings, configure_logging
from .errors import StorageInitError, SubmissionValidationError
from .models import ErrorResponse, StatusResponse, SubmitResponse
from .rules import (
    INTERNAL_ERROR_MESSAGE,
    INVALID_JSON_MESSAGE,
    STATUS_MESSAGE,
    SUCCESS_MESSAGE,
)
from .storage import SubmissionStore, ensure_storage
from .validate import parse_submission

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message).model_dump(),
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the intake app around an explicit configuration."""
    settings = settings or Settings()
    configure_logging(settings)
    storage_config = settings.storage
    store = SubmissionStore(storage_config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            ensure_storage(storage_config)
        except StorageInitError:
            # keep serving; submissions will fail with 500 until the disk is fixed
            logger.exception("storage initialization failed at startup")
        yield

    app = FastAPI(
        title="submission-intake",
        description="Name/email intake appending to JSONL and CSV files",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "method=%s path=%s status=%d duration_ms=%.2f",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    @app.get("/status", response_model=StatusResponse)
    @app.get("/api/status", response_model=StatusResponse, include_in_schema=False)
    def status():
        return {
            "message": STATUS_MESSAGE,
            "time": datetime.now(timezone.utc).isoformat(),
        }

    @app.post(
        "/submit",
        response_model=SubmitResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    async def submit(request: Request):
        try:
            payload = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return _error(400, INVALID_JSON_MESSAGE)

        if isinstance(payload, dict):
            # test data only; mask these before accepting real PII
            logger.info("received name=%r email=%r", payload.get("name"), payload.get("email"))

        try:
            submission = parse_submission(payload)
        except SubmissionValidationError as exc:
            return _error(400, exc.reason)

        try:
            await run_in_threadpool(ensure_storage, storage_config)
            record = await run_in_threadpool(store.append, submission)
        except Exception:
            logger.exception("failed to store submission")
            return _error(500, INTERNAL_ERROR_MESSAGE)

        return SubmitResponse(message=SUCCESS_MESSAGE, data=record)

    return app


app = create_app()

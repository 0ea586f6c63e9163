"""FastAPI application factory for Call Concierge."""

from __future__ import annotations

import json
import logging
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import AppSettings, TwilioCredentials, configure_logging, get_settings, load_twilio_credentials
from .dispatcher import CallDispatcher, CallFailed
from .errors import GENERIC_VALIDATION_MESSAGE, CallError, CallValidationError
from .schemas import CallPlacedResponse, ErrorResponse, VoiceOption, validate_call_request, voice_options
from .twilio_client import TwilioService

logger = logging.getLogger("concierge.api")

_ERROR_RESPONSES = {
    422: {"model": ErrorResponse, "description": "The call parameters failed validation."},
    500: {"model": ErrorResponse, "description": "Twilio credentials are not configured."},
    502: {"model": ErrorResponse, "description": "Twilio rejected or failed the call."},
}


def create_app(
    settings: Optional[AppSettings] = None,
    dispatcher: Optional[CallDispatcher] = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Call Concierge API", version="0.1.0", docs_url="/docs")
    app.state.settings = settings
    app.state.dispatcher = dispatcher or CallDispatcher(TwilioService)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url] if settings.is_production else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(CallError)
    async def call_error_handler(request: Request, exc: CallError) -> JSONResponse:
        return JSONResponse({"error": exc.message}, status_code=exc.status_code)

    def get_dispatcher(request: Request) -> CallDispatcher:
        return request.app.state.dispatcher

    @app.get("/health", summary="Simple health check")
    async def health() -> dict[str, object]:
        return {
            "status": "ok",
            "twilio": load_twilio_credentials() is not None,
            "environment": app.state.settings.environment,
        }

    @app.get("/api/voices", response_model=list[VoiceOption], summary="List supported voices")
    async def list_voices() -> list[VoiceOption]:
        return voice_options()

    @app.post(
        "/api/call",
        response_model=CallPlacedResponse,
        responses=_ERROR_RESPONSES,
        summary="Place an outbound call that reads a message aloud",
    )
    async def place_call(
        request: Request,
        dispatcher: CallDispatcher = Depends(get_dispatcher),
        credentials: Optional[TwilioCredentials] = Depends(load_twilio_credentials),
    ) -> CallPlacedResponse | JSONResponse:
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise CallValidationError(GENERIC_VALIDATION_MESSAGE) from exc

        call = validate_call_request(body)
        result = await run_in_threadpool(dispatcher.dispatch, call, credentials)
        if isinstance(result, CallFailed):
            return JSONResponse({"error": result.message}, status_code=result.status_code)
        return CallPlacedResponse(sid=result.sid)

    return app

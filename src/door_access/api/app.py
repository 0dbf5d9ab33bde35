"""FastAPI application factory."""

import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from door_access.api.verify_models import VerifyQrRequest, VerifyQrResponse
from door_access.app_logging import configure_logging
from door_access.containers import AppContainer
from door_access.domain.verification import VerificationResult, VerificationStatus

_STATUS_CODES = {
    VerificationStatus.SUCCESS: status.HTTP_200_OK,
    VerificationStatus.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    VerificationStatus.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    VerificationStatus.REJECTED: status.HTTP_404_NOT_FOUND,
    VerificationStatus.INFRA_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

MISSING_SECRET_MESSAGE = "Missing qrSecret"
INVALID_SECRET_MESSAGE = "Invalid or already used QR Code"
INTERNAL_ERROR_MESSAGE = "An internal server error occurred."


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/api/verify-qr")
    async def verify_qr(request: Request) -> JSONResponse:
        """Verify a scanned QR secret and trigger the door."""
        state_container: AppContainer = request.app.state.container
        try:
            payload = await request.json()
            body = VerifyQrRequest.model_validate(payload)
        except (json.JSONDecodeError, UnicodeDecodeError, ValidationError):
            return _response(status.HTTP_400_BAD_REQUEST, MISSING_SECRET_MESSAGE)

        try:
            result = await state_container.verification_service.verify(body.qr_secret)
        except Exception:
            logger.exception("Error in /api/verify-qr")
            return _response(
                status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE
            )
        return _response(_STATUS_CODES[result.status], _message(result))

    return app


def _message(result: VerificationResult) -> str:
    match result.status:
        case VerificationStatus.SUCCESS:
            trigger = (
                "Trigger event created."
                if result.trigger_confirmed
                else "Trigger event failed."
            )
            kind = result.kind.value if result.kind else "unknown"
            return f"QR Code verified successfully ({kind}). {trigger}"
        case VerificationStatus.BAD_REQUEST:
            return MISSING_SECRET_MESSAGE
        case VerificationStatus.NOT_FOUND | VerificationStatus.REJECTED:
            return INVALID_SECRET_MESSAGE
        case _:
            return INTERNAL_ERROR_MESSAGE


def _response(status_code: int, message: str) -> JSONResponse:
    body = VerifyQrResponse(
        status="ok" if status_code == status.HTTP_200_OK else "error",
        message=message,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())

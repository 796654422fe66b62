"""Translate domain exceptions into HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from transfer_service.domain.transactions.exceptions import (
    DuplicateReferenceError,
    TransferExecutionError,
    ValidationFailureError,
)
from transfer_service.schemas import ApiResponse

logger = logging.getLogger(__name__)

OPAQUE_ERROR_MESSAGE = "An error occurred during transaction processing"


def _error_response(status_code: int, message: str, error_code: str) -> JSONResponse:
    body = ApiResponse.error(message, error_code).model_dump(mode="json", by_alias=True)
    return JSONResponse(status_code=status_code, content=body)


async def handle_validation_failure(request: Request, exc: ValidationFailureError) -> JSONResponse:
    return _error_response(status.HTTP_400_BAD_REQUEST, str(exc), exc.code)


async def handle_duplicate_reference(request: Request, exc: DuplicateReferenceError) -> JSONResponse:
    return _error_response(status.HTTP_409_CONFLICT, str(exc), exc.code)


async def handle_execution_failure(request: Request, exc: TransferExecutionError) -> JSONResponse:
    logger.error("Transfer execution failure on %s %s: %s", request.method, request.url.path, exc)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, OPAQUE_ERROR_MESSAGE, exc.code)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationFailureError, handle_validation_failure)
    app.add_exception_handler(DuplicateReferenceError, handle_duplicate_reference)
    app.add_exception_handler(TransferExecutionError, handle_execution_failure)

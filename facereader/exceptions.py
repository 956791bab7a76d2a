from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
import logging

logger = logging.getLogger(__name__)

QUOTA_KEYWORD = "quota"
QUOTA_EXCEEDED_MESSAGE = "The AI service quota has been used up for now. Please try again in a few minutes."
PROCESSING_ERROR_PREFIX = "Failed to process image. "


class UploadRejectedError(Exception):
    """Raised by the upload layer before the request handler runs."""

    def __init__(self, message: str, status_code: int = 415):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def is_quota_error(exc: Exception) -> bool:
    return QUOTA_KEYWORD in str(exc).lower()


def create_error_response(error_message: str, status_code: int = 400) -> dict:
    """Create a standardized error response"""
    return {
        "success": False,
        "data": None,
        "error": error_message
    }


def create_quota_error_response() -> dict:
    response = create_error_response(QUOTA_EXCEEDED_MESSAGE, 429)
    response["quotaExceeded"] = True
    return response


def error_response_for(exc: Exception) -> JSONResponse:
    """Map a failure from storage, database or the AI call to a JSON response."""
    if is_quota_error(exc):
        return JSONResponse(status_code=429, content=create_quota_error_response())
    return JSONResponse(
        status_code=500,
        content=create_error_response(PROCESSING_ERROR_PREFIX + str(exc), 500)
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Custom exception handler for HTTPException"""
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(exc.detail, exc.status_code)
    )


async def upload_rejected_handler(request: Request, exc: UploadRejectedError) -> JSONResponse:
    logger.warning(f"Upload rejected on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(f"Upload failed: {exc.message}", exc.status_code)
    )

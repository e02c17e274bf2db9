from typing import Optional

from fastapi import HTTPException
from fastapi.logger import logger
from fastapi.responses import ORJSONResponse

from .settings.globals import ENV


class InvalidResponseError(Exception):
    pass


class ModelRequestError(Exception):
    """Call to the external model failed or was rejected."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def http_error_handler(exc: HTTPException) -> ORJSONResponse:

    message = exc.detail
    if exc.status_code < 500:
        status = "failed"
    else:
        status = "error"
        # In dev and test log full traceback of internal server errors
        logger.error(
            f"Request failed with status {exc.status_code}: {message}",
            exc_info=ENV in ("test", "dev"),
        )
    return ORJSONResponse(
        status_code=exc.status_code, content={"status": status, "error": message}
    )

from typing import Optional

from fastapi import HTTPException, Request, UploadFile
from fastapi.logger import logger

from ..settings.globals import ANONYMOUS_USER


def require(value: Optional[str], detail: str) -> str:
    """Reject missing or blank required input with a 400."""
    if value is None or not value.strip():
        raise HTTPException(status_code=400, detail=detail)
    return value


def resolve_user(user_email: Optional[str]) -> str:
    return user_email or ANONYMOUS_USER


async def read_upload(request: Request, upload: UploadFile) -> bytes:
    """Read an uploaded file, enforcing the body size limit.

    Chunked uploads carry no Content-Length, so the middleware cannot
    reject them up front.
    """
    max_bytes: int = request.app.state.max_upload_bytes
    data = await upload.read()
    if len(data) > max_bytes:
        logger.warning(
            f"Rejected {request.method} {request.url.path}: upload of {len(data)} bytes"
        )
        raise HTTPException(
            status_code=413,
            detail=f"Request body exceeds limit of {max_bytes // (1024 * 1024)} MB",
        )
    return data

from fastapi import Request
from fastapi.logger import logger
from fastapi.responses import ORJSONResponse


async def limit_upload_size(request: Request, call_next):
    """This middleware rejects request bodies above the configured size.

    Only the declared Content-Length is checked, uploads are buffered in
    memory before they are forwarded to the model.
    """
    max_bytes: int = request.app.state.max_upload_bytes
    content_length = request.headers.get("content-length")

    if content_length is not None:
        try:
            size = int(content_length)
        except ValueError:
            return ORJSONResponse(
                status_code=400,
                content={"status": "failed", "error": "Invalid Content-Length header"},
            )
        if size > max_bytes:
            logger.warning(
                f"Rejected {request.method} {request.url.path}: body of {size} bytes"
            )
            return ORJSONResponse(
                status_code=413,
                content={
                    "status": "failed",
                    "error": f"Request body exceeds limit of {max_bytes // (1024 * 1024)} MB",
                },
            )

    return await call_next(request)


async def no_cache_response_header(request: Request, call_next):
    """This middleware adds a cache control response header.

    Documentation and history change with every deployment or analysis,
    so they are never cached.
    """
    no_cache_endpoints = ["/", "/openapi.json", "/docs", "/api/history"]
    response = await call_next(request)

    if request.method == "GET" and request.url.path in no_cache_endpoints:
        response.headers["Cache-Control"] = "no-cache"

    return response

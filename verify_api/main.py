import json
import logging
import os
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.logger import logger
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.requests import Request
from fastapi.responses import ORJSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.base import BaseHTTPMiddleware

from .application import Database, lifespan
from .errors import http_error_handler
from .middleware import limit_upload_size, no_cache_response_header
from .routes import analyze, assistant, health, history, report
from .settings.globals import (
    DATABASE_URL,
    DEPLOYMENT,
    FRONTEND_DIST,
    GEMINI_API_KEY,
    GEMINI_API_URL,
    GEMINI_MODEL,
    MAX_UPLOAD_SIZE_MB,
    MODEL_REQUEST_TIMEOUT,
    PORT,
)
from .utils.gemini import GeminiClient

################
# LOGGING
################

gunicorn_logger = logging.getLogger("gunicorn.error")
logger.handlers = gunicorn_logger.handlers


tags_metadata = [
    {"name": "Analysis", "description": analyze.__doc__},
    {"name": "Assistant", "description": assistant.__doc__},
    {"name": "History", "description": history.__doc__},
    {"name": "Report", "description": report.__doc__},
    {"name": "Health", "description": health.__doc__},
]


def create_app(
    database_url: str = DATABASE_URL,
    model_client: Optional[GeminiClient] = None,
    max_upload_size_mb: int = MAX_UPLOAD_SIZE_MB,
    frontend_dist: Optional[str] = FRONTEND_DIST,
) -> FastAPI:
    """Build the VERIFY API.

    The same application serves every deployment, only the store differs:
    a SQLite file for long running servers, an in-memory SQLite database
    for serverless functions.
    """
    app = FastAPI(title="VERIFY API", redoc_url="/redoc", lifespan=lifespan)

    app.state.db = Database(database_url)
    app.state.model_client = model_client or GeminiClient(
        api_key=str(GEMINI_API_KEY) if GEMINI_API_KEY else None,
        model=GEMINI_MODEL,
        base_url=GEMINI_API_URL,
        timeout=MODEL_REQUEST_TIMEOUT,
    )
    app.state.max_upload_bytes = max_upload_size_mb * 1024 * 1024

    ################
    # ERRORS
    ################

    @app.exception_handler(HTTPException)
    async def httpexception_error_handler(
        request: Request, exc: HTTPException
    ) -> ORJSONResponse:
        return http_error_handler(exc)

    @app.exception_handler(RequestValidationError)
    async def rve_error_handler(
        request: Request, exc: RequestValidationError
    ) -> ORJSONResponse:
        return ORJSONResponse(
            status_code=422,
            content={
                "status": "failed",
                "error": json.loads(json.dumps(exc.errors(), default=str)),
            },
        )

    #################
    # MIDDLEWARE
    #################

    for m in (limit_upload_size, no_cache_response_header):
        app.add_middleware(BaseHTTPMiddleware, dispatch=m)

    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    ###############
    # ROUTES
    ###############

    app.include_router(analyze.router, prefix="/api/analyze")

    api_routers = (assistant.router, history.router, report.router)
    for r in api_routers:
        app.include_router(r, prefix="/api")

    app.include_router(health.router, prefix="")

    #################
    # FRONT END
    #################

    # Mounted last, so the API routes take precedence
    if frontend_dist and os.path.isdir(frontend_dist):
        app.mount("/", StaticFiles(directory=frontend_dist, html=True), name="frontend")

    #######################
    # OPENAPI Documentation
    #######################

    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="VERIFY API",
            version="0.1.0",
            description="Check text, images, video, links and social media profiles "
            "for signs of AI generation and manipulation.",
            routes=app.routes,
        )

        openapi_schema["tags"] = tags_metadata
        openapi_schema["x-tagGroups"] = [
            {"name": "Analysis API", "tags": ["Analysis"]},
            {"name": "Assistant API", "tags": ["Assistant"]},
            {"name": "History API", "tags": ["History", "Report"]},
            {"name": "Health API", "tags": ["Health"]},
        ]

        app.openapi_schema = openapi_schema

        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore

    logger.debug(f"Created {DEPLOYMENT} application using {database_url}")
    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    logger.setLevel(logging.DEBUG)
    uvicorn.run(app, host="0.0.0.0", port=PORT, log_level="info")
else:
    logger.setLevel(gunicorn_logger.level)

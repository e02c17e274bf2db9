from pathlib import Path
from typing import Optional

from starlette.config import Config
from starlette.datastructures import Secret

# Read .env file, if exists
p: Path = Path(__file__).parents[2] / ".env"
config: Config = Config(p if p.exists() else None)

ENV = config("ENV", cast=str, default="dev")

# `server` keeps history in a local SQLite file.
# `serverless` has no persistent filesystem, history lives in memory only.
DEPLOYMENT = config("DEPLOYMENT", cast=str, default="server")
IS_SERVERLESS: bool = DEPLOYMENT == "serverless"

DATABASE_URL: str = config(
    "DATABASE_URL",
    cast=str,
    default="sqlite+aiosqlite://"
    if IS_SERVERLESS
    else "sqlite+aiosqlite:///./authenticity.db",
)

GEMINI_API_KEY: Optional[Secret] = config("GEMINI_API_KEY", cast=Secret, default=None)
GEMINI_MODEL = config("GEMINI_MODEL", cast=str, default="gemini-2.5-flash-lite")
GEMINI_API_URL = config(
    "GEMINI_API_URL",
    cast=str,
    default="https://generativelanguage.googleapis.com/v1beta",
)
MODEL_REQUEST_TIMEOUT: float = config("MODEL_REQUEST_TIMEOUT", cast=float, default=120)

MAX_UPLOAD_SIZE_MB: int = config(
    "MAX_UPLOAD_SIZE_MB", cast=int, default=6 if IS_SERVERLESS else 10
)
HISTORY_LIMIT: int = config(
    "HISTORY_LIMIT", cast=int, default=50 if IS_SERVERLESS else 20
)
MAX_HISTORY_LIMIT: int = 50

FRONTEND_DIST: Optional[str] = config("FRONTEND_DIST", cast=str, default=None)

ANONYMOUS_USER = "anonymous"
CONTENT_SUMMARY_LENGTH = 500
PORT: int = config("PORT", cast=int, default=3000)

from __future__ import annotations
import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from artstore.presentation.api.v1 import router as api_v1_router

# Configure logging level from env (default INFO).
_log_level = os.getenv("LOG_LEVEL", "INFO").upper()

logging.basicConfig(
    level=_log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler()]
)

logging.getLogger("artstore").setLevel(_log_level)
logging.getLogger("artstore.application.use_cases").setLevel(_log_level)

for _name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
    logging.getLogger(_name).setLevel(_log_level)

# Supabase / Gemini のHTTPリクエストログを抑制
logging.getLogger("httpx").setLevel(logging.WARNING)

app = FastAPI(title="Artstore API")

logger = logging.getLogger("artstore.main")
logger.info("Artstore API starting, log level %s", _log_level)


@app.get("/health")
def health():
    return {"status": "ok"}


_cors_origins_env = os.getenv("CORS_ALLOW_ORIGINS", "")
_cors_origins = [o.strip() for o in _cors_origins_env.split(",") if o.strip()]

# デフォルトはローカル開発用のみ
if not _cors_origins and os.getenv("ENV", "local") == "local":
    _cors_origins = ["http://localhost:3000"]

if _cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Requested-With"],
    )

app.include_router(api_v1_router, prefix="/api/v1")

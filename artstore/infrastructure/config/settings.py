from __future__ import annotations
import os
from functools import lru_cache
import dotenv

# Load environment from .env if present (local dev)
dotenv.load_dotenv()


class Settings:
    # Supabase
    supabase_url: str = os.getenv("SUPABASE_URL", "")
    supabase_key: str = os.getenv("SUPABASE_SERVICE_ROLE_KEY", os.getenv("SUPABASE_ANON_KEY", ""))
    artworks_bucket: str = os.getenv("ARTWORKS_BUCKET", "artworks")

    # Runtime
    environment: str = os.getenv("ENV", os.getenv("ENVIRONMENT", "local"))
    app_url: str = os.getenv("APP_URL", "http://localhost:3000")

    # Gemini (image generation)
    gemini_api_key: str | None = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
    gemini_image_model: str = os.getenv("GEMINI_IMAGE_MODEL", "gemini-2.5-flash-image")

    # Admin / cron auth (Bearer)
    admin_secret: str | None = os.getenv("ADMIN_SECRET") or None
    cron_secret: str | None = os.getenv("CRON_SECRET") or None

    # Batch generation
    batch_delay_seconds: float = float(os.getenv("BATCH_DELAY_SECONDS", "2.0"))
    cron_daily_count: int = int(os.getenv("CRON_DAILY_COUNT", "10"))

    # Free downloads (per client IP per UTC day)
    download_daily_limit: int = int(os.getenv("DOWNLOAD_DAILY_LIMIT", "20"))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

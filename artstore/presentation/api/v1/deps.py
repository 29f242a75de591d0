from __future__ import annotations

import hmac
from functools import lru_cache
from typing import Annotated

from fastapi import Header, HTTPException, status

from artstore.application.use_cases.browse_gallery import BrowseGalleryUseCase
from artstore.application.use_cases.generate_artwork import GenerateArtworkUseCase
from artstore.application.use_cases.manage_settings import ManageSettingsUseCase
from artstore.application.use_cases.manage_styles import ManageStylesUseCase
from artstore.application.use_cases.review_artworks import ReviewArtworksUseCase
from artstore.infrastructure.config.settings import get_settings
from artstore.infrastructure.ratelimit.download_limiter import DownloadRateLimiter
from artstore.infrastructure.supabase.repositories.artwork_repository_impl import ArtworkRepositoryImpl
from artstore.infrastructure.supabase.repositories.settings_repository_impl import SettingsRepositoryImpl
from artstore.infrastructure.supabase.repositories.storage_repository_impl import SupabaseBlobStorage
from artstore.infrastructure.supabase.repositories.style_repository_impl import StyleRepositoryImpl


def _bearer_token(authorization: str | None) -> str | None:
    if authorization and authorization.startswith("Bearer "):
        return authorization.split(" ", 1)[1].strip()
    return None


async def require_admin(
    authorization: Annotated[str | None, Header(convert_underscores=False)] = None,
) -> None:
    secret = get_settings().admin_secret
    token = _bearer_token(authorization)
    if not secret or not token or not hmac.compare_digest(token, secret):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


async def require_cron(
    authorization: Annotated[str | None, Header(convert_underscores=False)] = None,
) -> None:
    # CRON_SECRET 未設定時は検証しない
    secret = get_settings().cron_secret
    if not secret:
        return
    token = _bearer_token(authorization)
    if not token or not hmac.compare_digest(token, secret):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


def get_generate_use_case() -> GenerateArtworkUseCase:
    return GenerateArtworkUseCase(
        style_repository=StyleRepositoryImpl(),
        settings_repository=SettingsRepositoryImpl(),
        artwork_repository=ArtworkRepositoryImpl(),
        blob_storage=SupabaseBlobStorage(),
        batch_delay_seconds=get_settings().batch_delay_seconds,
    )


def get_styles_use_case() -> ManageStylesUseCase:
    return ManageStylesUseCase(
        style_repository=StyleRepositoryImpl(),
        artwork_repository=ArtworkRepositoryImpl(),
        blob_storage=SupabaseBlobStorage(),
    )


def get_settings_use_case() -> ManageSettingsUseCase:
    return ManageSettingsUseCase(SettingsRepositoryImpl())


def get_review_use_case() -> ReviewArtworksUseCase:
    return ReviewArtworksUseCase(ArtworkRepositoryImpl())


@lru_cache(maxsize=1)
def get_download_limiter() -> DownloadRateLimiter:
    return DownloadRateLimiter(get_settings().download_daily_limit)


def get_gallery_use_case() -> BrowseGalleryUseCase:
    return BrowseGalleryUseCase(
        ArtworkRepositoryImpl(),
        get_download_limiter(),
        app_url=get_settings().app_url,
    )

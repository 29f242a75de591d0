"""
Supabase Storage への画像アップロード

上書きは禁止（upsert=false）。既存オブジェクトへのアップロードは
StorageConflict、その他の失敗は UploadError に変換する。
"""
from __future__ import annotations

import logging
from typing import Optional

from artstore.domain.errors import StorageConflict, UploadError
from artstore.domain.repositories.gallery_repository import BlobStorage
from artstore.infrastructure.config.settings import get_settings
from artstore.infrastructure.supabase.client import get_supabase

logger = logging.getLogger(__name__)

_CONFLICT_MARKERS = ("duplicate", "already exists", "409")


def _is_conflict(exc: Exception) -> bool:
    msg = str(exc).lower()
    return any(marker in msg for marker in _CONFLICT_MARKERS)


class SupabaseBlobStorage(BlobStorage):
    def __init__(self, bucket: Optional[str] = None):
        self.bucket = bucket or get_settings().artworks_bucket

    def upload(self, path: str, data: bytes, mime_type: str) -> None:
        sb = get_supabase()
        try:
            sb.storage.from_(self.bucket).upload(
                path,
                data,
                file_options={"content-type": mime_type, "upsert": "false"},
            )
        except Exception as e:
            if _is_conflict(e):
                logger.warning("Storage object already exists: %s/%s", self.bucket, path)
                raise StorageConflict(path) from e
            logger.error("Storage upload failed %s/%s: %s", self.bucket, path, e)
            raise UploadError(str(e)) from e

    def get_public_url(self, path: str) -> str:
        sb = get_supabase()
        url = sb.storage.from_(self.bucket).get_public_url(path)
        # 一部バージョンでは末尾に "?" が付く
        return url.rstrip("?") if isinstance(url, str) else str(url)

"""
公開ギャラリーユースケース

公開済み作品の一覧・詳細、閲覧/注文カウンタの記録、無料ダウンロード
（クライアントIP × UTC日 単位の回数制限付き）を提供する。
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from artstore.domain.errors import ArtworkNotFound, DownloadLimitExceeded
from artstore.domain.repositories.gallery_repository import ArtworkRepository
from artstore.infrastructure.ratelimit.download_limiter import DownloadRateLimiter

logger = logging.getLogger(__name__)

TRACKABLE_STATS = ("view", "download", "order")
SORT_OPTIONS = ("newest", "popular", "most_downloaded")
MAX_PAGE_SIZE = 100


class BrowseGalleryUseCase:
    def __init__(self, repository: ArtworkRepository, limiter: DownloadRateLimiter, app_url: str = ""):
        self.repository = repository
        self.limiter = limiter
        self.app_url = app_url.rstrip("/")

    def _present(self, artwork: Dict[str, Any]) -> Dict[str, Any]:
        style = artwork.get("art_styles") or {}
        return {
            "id": artwork.get("id"),
            "title": artwork.get("title"),
            "slug": artwork.get("slug"),
            "description": artwork.get("description"),
            "style": style.get("name"),
            "style_slug": style.get("slug"),
            "tags": artwork.get("tags") or [],
            "colors": artwork.get("colors") or [],
            "orientation": artwork.get("orientation"),
            "urls": {
                "page": f"{self.app_url}/artwork/{artwork.get('slug')}",
                "image": artwork.get("image_url"),
                "download_4k": artwork.get("image_4k_url"),
                "thumbnail": artwork.get("thumbnail_url"),
            },
            "stats": {
                "views": artwork.get("view_count", 0),
                "downloads": artwork.get("download_count", 0),
                "orders": artwork.get("order_count", 0),
            },
            "published": artwork.get("published_at"),
        }

    def list_artworks(
        self,
        *,
        style: Optional[str] = None,
        tag: Optional[str] = None,
        featured: bool = False,
        sort: str = "newest",
        limit: int = 20,
        offset: int = 0,
    ) -> List[Dict[str, Any]]:
        if sort not in SORT_OPTIONS:
            sort = "newest"
        rows = self.repository.list_published(
            tag=tag,
            featured=featured,
            sort=sort,
            limit=min(max(1, limit), MAX_PAGE_SIZE),
            offset=max(0, offset),
        )
        # スタイルは結合先の slug で絞り込む
        if style:
            rows = [r for r in rows if (r.get("art_styles") or {}).get("slug") == style]
        return [self._present(r) for r in rows]

    def get_artwork(self, slug: str) -> Dict[str, Any]:
        artwork = self.repository.get_published_by_slug(slug)
        if artwork is None:
            raise ArtworkNotFound(slug)
        return self._present(artwork)

    def track(self, artwork_id: str, action: str) -> None:
        if action not in TRACKABLE_STATS:
            raise ValueError(f"Invalid action: {action}")
        self.repository.increment_stat(artwork_id, action)

    def download(self, artwork_id: str, client_ip: str) -> Dict[str, Any]:
        artwork = self.repository.get_by_id(artwork_id)
        if artwork is None or artwork.get("status") != "published":
            raise ArtworkNotFound(artwork_id)
        if not self.limiter.hit(client_ip):
            logger.info("Download limit reached: ip=%s", client_ip)
            raise DownloadLimitExceeded(client_ip)

        self.repository.increment_stat(artwork_id, "download")
        return {
            "id": artwork_id,
            "title": artwork.get("title"),
            "download_url": artwork.get("image_4k_url") or artwork.get("image_url"),
            "remaining_today": self.limiter.remaining(client_ip),
        }

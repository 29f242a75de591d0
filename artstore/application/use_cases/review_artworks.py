"""
作品レビューユースケース（管理者）

生成された作品は review で登録される。ここから published / rejected /
archived へ遷移させる。published_at は published への遷移時のみ設定する。
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from artstore.application.use_cases.generate_artwork import slugify, to_base36
from artstore.domain.entities.artwork import ARTWORK_STATUSES
from artstore.domain.errors import ArtworkNotFound
from artstore.domain.repositories.gallery_repository import ArtworkRepository

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = {"title", "description", "tags", "colors", "status", "is_featured"}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ReviewArtworksUseCase:
    def __init__(self, repository: ArtworkRepository, clock: Callable[[], datetime] = _utc_now):
        self.repository = repository
        self.clock = clock

    def list_artworks(self, status: str = "review", limit: int = 50) -> List[Dict[str, Any]]:
        if status not in ARTWORK_STATUSES:
            raise ValueError(f"Invalid status: {status}")
        return self.repository.list_by_status(status, limit=min(max(1, limit), 200))

    def update_artwork(self, artwork_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        updates = {k: v for k, v in payload.items() if k in UPDATABLE_FIELDS}
        if not updates:
            raise ValueError("No fields to update")
        if "status" in updates and updates["status"] not in ARTWORK_STATUSES:
            raise ValueError(f"Invalid status: {updates['status']}")
        if updates.get("status") == "published":
            updates["published_at"] = self.clock().isoformat()

        updated = self.repository.update(artwork_id, updates)
        if updated is None:
            raise ArtworkNotFound(artwork_id)
        logger.info("Artwork updated: id=%s fields=%s", artwork_id, sorted(updates))
        return updated

    def publish(self, artwork_id: str, title: Optional[str] = None) -> Dict[str, Any]:
        artwork = self.repository.get_by_id(artwork_id)
        if artwork is None:
            raise ArtworkNotFound(artwork_id)

        now = self.clock()
        updates: Dict[str, Any] = {"status": "published", "published_at": now.isoformat()}
        if title and title.strip() and title.strip() != artwork.get("title"):
            updates["title"] = title.strip()
            # 一意性は時刻サフィックスで担保
            updates["slug"] = f"{slugify(title)}-{to_base36(int(now.timestamp() * 1000))}"

        updated = self.repository.update(artwork_id, updates)
        logger.info("Artwork published: id=%s", artwork_id)
        return updated or {**artwork, **updates}

    def reject(self, artwork_id: str) -> Dict[str, Any]:
        return self.update_artwork(artwork_id, {"status": "rejected"})

    def archive(self, artwork_id: str) -> Dict[str, Any]:
        return self.update_artwork(artwork_id, {"status": "archived"})

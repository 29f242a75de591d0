from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional

from artstore.domain.errors import DatabaseInsertError
from artstore.domain.repositories.gallery_repository import ArtworkRepository
from artstore.infrastructure.supabase.client import get_supabase

logger = logging.getLogger(__name__)

ARTWORKS_TABLE = "artworks"

PUBLIC_COLUMNS = (
    "id, title, slug, description, image_url, image_4k_url, thumbnail_url, tags, colors, "
    "orientation, width_px, height_px, is_featured, view_count, download_count, order_count, "
    "published_at, art_styles(name, slug)"
)

SORT_COLUMNS = {
    "newest": "published_at",
    "popular": "order_count",
    "most_downloaded": "download_count",
}


class ArtworkRepositoryImpl(ArtworkRepository):
    def insert(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        sb = get_supabase()
        payload = {**payload}
        if "id" not in payload:
            payload["id"] = str(uuid.uuid4())
        try:
            res = sb.table(ARTWORKS_TABLE).insert(payload).execute()
        except Exception as e:
            logger.error("Artwork insert failed: %s", e)
            raise DatabaseInsertError(str(e)) from e
        data = res.data
        if isinstance(data, list) and data:
            return data[0]
        return payload

    def get_by_id(self, artwork_id: str) -> Optional[Dict[str, Any]]:
        sb = get_supabase()
        res = sb.table(ARTWORKS_TABLE).select("*").eq("id", artwork_id).limit(1).execute()
        data = res.data
        if isinstance(data, list) and data:
            return data[0]
        return None

    def get_published_by_slug(self, slug: str) -> Optional[Dict[str, Any]]:
        sb = get_supabase()
        res = (
            sb.table(ARTWORKS_TABLE)
            .select(PUBLIC_COLUMNS)
            .eq("slug", slug)
            .eq("status", "published")
            .limit(1)
            .execute()
        )
        data = res.data
        if isinstance(data, list) and data:
            return data[0]
        return None

    def list_by_status(self, status: str, limit: int = 50) -> List[Dict[str, Any]]:
        sb = get_supabase()
        res = (
            sb.table(ARTWORKS_TABLE)
            .select("*, art_styles(name, slug)")
            .eq("status", status)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return res.data or []

    def list_published(
        self,
        *,
        tag: Optional[str] = None,
        featured: bool = False,
        sort: str = "newest",
        limit: int = 20,
        offset: int = 0,
    ) -> List[Dict[str, Any]]:
        sb = get_supabase()
        q = (
            sb.table(ARTWORKS_TABLE)
            .select(PUBLIC_COLUMNS)
            .eq("status", "published")
        )
        if featured:
            q = q.eq("is_featured", True)
        if tag:
            q = q.contains("tags", [tag])
        q = q.order(SORT_COLUMNS.get(sort, "published_at"), desc=True)
        res = q.range(offset, offset + limit - 1).execute()
        return res.data or []

    def update(self, artwork_id: str, payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        sb = get_supabase()
        res = sb.table(ARTWORKS_TABLE).update(payload).eq("id", artwork_id).execute()
        data = res.data
        if isinstance(data, list) and data:
            return data[0]
        return None

    def count_by_style(self, style_id: str) -> int:
        sb = get_supabase()
        res = (
            sb.table(ARTWORKS_TABLE)
            .select("id", count="exact")
            .eq("style_id", style_id)
            .execute()
        )
        return res.count or 0

    def increment_stat(self, artwork_id: str, stat: str) -> None:
        sb = get_supabase()
        sb.rpc("increment_artwork_stat", {"artwork_uuid": artwork_id, "stat_name": stat}).execute()

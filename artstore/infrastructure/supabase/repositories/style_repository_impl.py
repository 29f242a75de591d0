from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional

from artstore.domain.entities.artwork import Style
from artstore.domain.repositories.gallery_repository import StyleRepository
from artstore.infrastructure.supabase.client import get_supabase

logger = logging.getLogger(__name__)

STYLES_TABLE = "art_styles"


class StyleRepositoryImpl(StyleRepository):
    def get_by_id(self, style_id: str) -> Optional[Style]:
        sb = get_supabase()
        res = sb.table(STYLES_TABLE).select("*").eq("id", style_id).limit(1).execute()
        data = res.data
        if isinstance(data, list) and data:
            return Style.from_row(data[0])
        return None

    def list_active(self) -> List[Style]:
        sb = get_supabase()
        res = (
            sb.table(STYLES_TABLE)
            .select("*")
            .eq("is_active", True)
            .order("sort_order")
            .execute()
        )
        return [Style.from_row(r) for r in (res.data or [])]

    def list_all(self) -> List[Style]:
        sb = get_supabase()
        res = sb.table(STYLES_TABLE).select("*").order("sort_order").execute()
        return [Style.from_row(r) for r in (res.data or [])]

    def get_max_sort_order(self) -> int:
        sb = get_supabase()
        res = (
            sb.table(STYLES_TABLE)
            .select("sort_order")
            .order("sort_order", desc=True)
            .limit(1)
            .execute()
        )
        data = res.data
        if isinstance(data, list) and data and data[0].get("sort_order") is not None:
            return int(data[0]["sort_order"])
        return -1

    def create(self, payload: Dict[str, Any]) -> Style:
        sb = get_supabase()
        payload = {**payload}
        if "id" not in payload:
            payload["id"] = str(uuid.uuid4())
        res = sb.table(STYLES_TABLE).insert(payload).execute()
        data = res.data
        if isinstance(data, list) and data:
            return Style.from_row(data[0])
        return Style.from_row(payload)

    def update(self, style_id: str, payload: Dict[str, Any]) -> Optional[Style]:
        sb = get_supabase()
        res = sb.table(STYLES_TABLE).update(payload).eq("id", style_id).execute()
        data = res.data
        if isinstance(data, list) and data:
            return Style.from_row(data[0])
        return None

    def update_reference_images(self, style_id: str, images: List[str]) -> Optional[Style]:
        return self.update(style_id, {"reference_images": images})

    def delete(self, style_id: str) -> bool:
        sb = get_supabase()
        sb.table(STYLES_TABLE).delete().eq("id", style_id).execute()
        return True

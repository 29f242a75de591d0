from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from artstore.domain.repositories.gallery_repository import SettingsRepository
from artstore.infrastructure.supabase.client import get_supabase

SETTINGS_TABLE = "site_settings"


class SettingsRepositoryImpl(SettingsRepository):
    def get(self, key: str) -> Optional[str]:
        sb = get_supabase()
        res = sb.table(SETTINGS_TABLE).select("*").eq("key", key).limit(1).execute()
        data = res.data
        if isinstance(data, list) and data:
            return data[0].get("value")
        return None

    def list_all(self) -> List[Dict[str, Any]]:
        sb = get_supabase()
        res = sb.table(SETTINGS_TABLE).select("*").order("key").execute()
        return res.data or []

    def upsert(self, key: str, value: Optional[str]) -> Dict[str, Any]:
        sb = get_supabase()
        payload = {
            "key": key,
            "value": value,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        res = sb.table(SETTINGS_TABLE).upsert(payload, on_conflict="key").execute()
        data = res.data
        if isinstance(data, list) and data:
            return data[0]
        return payload

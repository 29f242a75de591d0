from __future__ import annotations

from typing import Any, Dict, List, Optional

from artstore.application.use_cases.generate_artwork import BASE_PROMPT_KEY
from artstore.domain.repositories.gallery_repository import SettingsRepository
from artstore.domain.services.prompt_builder import DEFAULT_BASE_PROMPT


class ManageSettingsUseCase:
    """サイト設定（キー/値）とベースプロンプトの管理"""

    def __init__(self, repository: SettingsRepository):
        self.repository = repository

    def get_setting(self, key: str) -> Dict[str, Any]:
        return {"key": key, "value": self.repository.get(key)}

    def list_settings(self) -> List[Dict[str, Any]]:
        return self.repository.list_all()

    def save_setting(self, key: str, value: Optional[str]) -> Dict[str, Any]:
        if not key or not key.strip():
            raise ValueError("Missing key")
        return self.repository.upsert(key.strip(), value)

    def get_base_prompt(self) -> Dict[str, Any]:
        stored = self.repository.get(BASE_PROMPT_KEY)
        is_default = not (stored and stored.strip())
        return {
            "value": DEFAULT_BASE_PROMPT if is_default else stored,
            "is_default": is_default,
            "default": DEFAULT_BASE_PROMPT,
        }

    def save_base_prompt(self, value: str) -> Dict[str, Any]:
        if not value or not value.strip():
            raise ValueError("Base prompt must not be empty")
        return self.repository.upsert(BASE_PROMPT_KEY, value)

    def reset_base_prompt(self) -> Dict[str, Any]:
        # 行は削除せず、既定値で上書きする
        return self.repository.upsert(BASE_PROMPT_KEY, DEFAULT_BASE_PROMPT)

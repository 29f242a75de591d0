"""
ギャラリー用リポジトリのインターフェース

ドメイン層でインターフェースを定義し、インフラ層（Supabase）で実装する。
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from artstore.domain.entities.artwork import Style


class StyleRepository(ABC):
    """スタイルリポジトリのインターフェース"""

    @abstractmethod
    def get_by_id(self, style_id: str) -> Optional[Style]:
        pass

    @abstractmethod
    def list_active(self) -> List[Style]:
        """アクティブなスタイルを sort_order 順で取得"""
        pass

    @abstractmethod
    def list_all(self) -> List[Style]:
        pass

    @abstractmethod
    def get_max_sort_order(self) -> int:
        pass

    @abstractmethod
    def create(self, payload: Dict[str, Any]) -> Style:
        pass

    @abstractmethod
    def update(self, style_id: str, payload: Dict[str, Any]) -> Optional[Style]:
        pass

    @abstractmethod
    def update_reference_images(self, style_id: str, images: List[str]) -> Optional[Style]:
        pass

    @abstractmethod
    def delete(self, style_id: str) -> bool:
        pass


class SettingsRepository(ABC):
    """キー/値のサイト設定"""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def list_all(self) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    def upsert(self, key: str, value: Optional[str]) -> Dict[str, Any]:
        pass


class BlobStorage(ABC):
    """画像オブジェクトストレージ"""

    @abstractmethod
    def upload(self, path: str, data: bytes, mime_type: str) -> None:
        """上書き禁止でアップロード。既存なら StorageConflict、それ以外の失敗は UploadError"""
        pass

    @abstractmethod
    def get_public_url(self, path: str) -> str:
        pass


class ArtworkRepository(ABC):
    """作品リポジトリのインターフェース"""

    @abstractmethod
    def insert(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        pass

    @abstractmethod
    def get_by_id(self, artwork_id: str) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    def get_published_by_slug(self, slug: str) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    def list_by_status(self, status: str, limit: int = 50) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    def list_published(
        self,
        *,
        tag: Optional[str] = None,
        featured: bool = False,
        sort: str = "newest",
        limit: int = 20,
        offset: int = 0,
    ) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    def update(self, artwork_id: str, payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    def count_by_style(self, style_id: str) -> int:
        pass

    @abstractmethod
    def increment_stat(self, artwork_id: str, stat: str) -> None:
        pass

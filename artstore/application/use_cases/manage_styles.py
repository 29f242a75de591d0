"""
スタイル管理ユースケース

スタイルの作成・更新・削除と、ムードボード（参考画像）の追加/削除を行う。
slug は作成時に名前から生成し、以降は名前を変更しても再生成しない。
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from artstore.application.use_cases.generate_artwork import image_extension, slugify
from artstore.domain.entities.artwork import Style
from artstore.domain.errors import StyleNotFound
from artstore.domain.repositories.gallery_repository import (
    ArtworkRepository,
    BlobStorage,
    StyleRepository,
)
from artstore.infrastructure.http.image_fetcher import parse_data_url

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = {"name", "description", "prompt_prefix", "is_active", "sort_order", "reference_images"}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ManageStylesUseCase:
    def __init__(
        self,
        style_repository: StyleRepository,
        artwork_repository: ArtworkRepository,
        blob_storage: BlobStorage,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.style_repository = style_repository
        self.artwork_repository = artwork_repository
        self.blob_storage = blob_storage
        self.clock = clock

    def list_styles(self) -> List[Style]:
        return self.style_repository.list_all()

    def _require(self, style_id: str) -> Style:
        style = self.style_repository.get_by_id(style_id)
        if style is None:
            raise StyleNotFound(style_id)
        return style

    def create_style(
        self,
        name: str,
        prompt_prefix: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Style:
        if not name or not name.strip():
            raise ValueError("Style name is required")
        name = name.strip()
        slug = slugify(name)
        if not slug:
            raise ValueError("Style name must contain letters or digits")

        next_order = self.style_repository.get_max_sort_order() + 1
        style = self.style_repository.create({
            "name": name,
            "slug": slug,
            "prompt_prefix": prompt_prefix or f"Create a {name.lower()} artwork",
            "description": description or None,
            "reference_images": [],
            "is_active": True,
            "sort_order": next_order,
        })
        logger.info("Style created: id=%s slug=%s", style.id, style.slug)
        return style

    def update_style(self, style_id: str, payload: Dict[str, Any]) -> Style:
        filtered = {k: v for k, v in payload.items() if k in UPDATABLE_FIELDS}
        if not filtered:
            raise ValueError("No fields to update")
        updated = self.style_repository.update(style_id, filtered)
        if updated is None:
            raise StyleNotFound(style_id)
        return updated

    def add_reference_image(self, style_id: str, image_data_url: str) -> tuple[Style, str]:
        """data URL の画像をアップロードしてムードボード末尾に追加する"""
        image = parse_data_url(image_data_url)
        if image is None:
            raise ValueError("Invalid image data URL")
        style = self._require(style_id)

        millis = int(self.clock().timestamp() * 1000)
        path = f"reference-images/{style_id}/{millis}.{image_extension(image.mime_type)}"
        self.blob_storage.upload(path, image.data, image.mime_type)
        url = self.blob_storage.get_public_url(path)

        updated = self.style_repository.update_reference_images(style_id, [*style.reference_images, url])
        return updated or style, url

    def remove_reference_image(self, style_id: str, image_url: str) -> Style:
        style = self._require(style_id)
        if image_url not in style.reference_images:
            raise ValueError("Reference image not found on style")
        # ストレージ上のファイルは残す（他スタイルや過去の生成から参照されうる）
        remaining = [u for u in style.reference_images if u != image_url]
        return self.style_repository.update_reference_images(style_id, remaining) or style

    def delete_style(self, style_id: str) -> bool:
        used = self.artwork_repository.count_by_style(style_id)
        if used > 0:
            raise ValueError(
                f"Cannot delete: {used} artwork{'s' if used != 1 else ''} use this style. Archive them first."
            )
        return self.style_repository.delete(style_id)

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

ORIENTATIONS = ("portrait", "landscape", "square")

# 公称ピクセル寸法（実画像からは計測しない）
ORIENTATION_DIMENSIONS: Dict[str, tuple[int, int]] = {
    "portrait": (2560, 3840),
    "landscape": (3840, 2560),
    "square": (3840, 3840),
}

ARTWORK_STATUSES = ("draft", "review", "published", "rejected", "archived")


@dataclass
class Style:
    id: str
    name: str
    slug: str
    description: Optional[str] = None
    prompt_prefix: Optional[str] = None
    reference_images: List[str] = field(default_factory=list)
    is_active: bool = True
    sort_order: int = 0

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Style":
        return cls(
            id=row["id"],
            name=row.get("name") or "",
            slug=row.get("slug") or "",
            description=row.get("description"),
            prompt_prefix=row.get("prompt_prefix"),
            reference_images=list(row.get("reference_images") or []),
            is_active=bool(row.get("is_active", True)),
            sort_order=int(row.get("sort_order") or 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ReferenceImage:
    """モデルに添付するインライン画像"""
    data: bytes
    mime_type: str


@dataclass
class GenerationOptions:
    custom_prompt: Optional[str] = None
    orientation: Optional[str] = None
    reference_notes: Optional[str] = None
    auto_publish: bool = False
    base_prompt_override: Optional[str] = None
    # data URL (data:<mime>;base64,<payload>)、スタイルには保存しない
    inspiration_images: List[str] = field(default_factory=list)


@dataclass
class ArtworkMetadata:
    title: str
    description: str
    tags: List[str]
    colors: List[str]


@dataclass
class GenerationResult:
    success: bool
    artwork_id: Optional[str] = None
    title: Optional[str] = None
    slug: Optional[str] = None
    image_url: Optional[str] = None
    image_data_url: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def failure(cls, error: str) -> "GenerationResult":
        return cls(success=False, error=error)

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass
class BatchSummary:
    success: int = 0
    failed: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)

from __future__ import annotations
from typing import List, Optional
from pydantic import BaseModel


class StyleResponse(BaseModel):
    id: str
    name: str
    slug: str
    description: Optional[str] = None
    prompt_prefix: Optional[str] = None
    reference_images: List[str] = []
    is_active: bool = True
    sort_order: int = 0


class StyleCreate(BaseModel):
    name: str
    prompt_prefix: Optional[str] = None
    description: Optional[str] = None


class StyleUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    prompt_prefix: Optional[str] = None
    is_active: Optional[bool] = None
    sort_order: Optional[int] = None
    reference_images: Optional[List[str]] = None


class ReferenceImageUpload(BaseModel):
    image_data_url: str


class ReferenceImageRemove(BaseModel):
    image_url: str


class SettingUpsert(BaseModel):
    key: str
    value: Optional[str] = None


class BasePromptUpdate(BaseModel):
    value: str


class ArtworkUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[List[str]] = None
    colors: Optional[List[str]] = None
    status: Optional[str] = None
    is_featured: Optional[bool] = None


class PublishRequest(BaseModel):
    title: Optional[str] = None


class TrackRequest(BaseModel):
    artwork_id: str
    action: str

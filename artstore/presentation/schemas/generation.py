from __future__ import annotations
from typing import List, Literal, Optional
from pydantic import BaseModel, Field

Orientation = Literal["portrait", "landscape", "square"]


class GenerateRequest(BaseModel):
    """管理画面からの生成リクエスト"""
    mode: Literal["single", "batch", "preview"] = "single"
    style_id: Optional[str] = Field(None, description="single/preview では必須、batch で省略時は全アクティブスタイルを巡回")
    orientation: Optional[Orientation] = None
    custom_prompt: Optional[str] = None
    reference_notes: Optional[str] = None
    auto_publish: bool = False
    base_prompt_override: Optional[str] = None
    inspiration_images: List[str] = Field(default_factory=list, description="data URL の一時的な参考画像")
    # batch 専用。1〜50 に丸める
    count: int = 10


class GenerationResultResponse(BaseModel):
    success: bool
    artwork_id: Optional[str] = None
    title: Optional[str] = None
    slug: Optional[str] = None
    image_url: Optional[str] = None
    image_data_url: Optional[str] = None
    error: Optional[str] = None


class BatchSummaryResponse(BaseModel):
    success: int
    failed: int


class BatchGenerateResponse(BaseModel):
    results: List[GenerationResultResponse]
    summary: BatchSummaryResponse

"""
作品生成 API ルーター（管理者）

GET  /admin/generate  生成可能なスタイル一覧
POST /admin/generate  mode=single | batch | preview
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Union

from fastapi import APIRouter, Depends, HTTPException

from artstore.application.use_cases.generate_artwork import GenerateArtworkUseCase
from artstore.domain.entities.artwork import GenerationOptions
from artstore.presentation.api.v1.deps import get_generate_use_case, require_admin
from artstore.presentation.schemas.generation import (
    BatchGenerateResponse,
    BatchSummaryResponse,
    GenerateRequest,
    GenerationResultResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("")
def list_generation_styles(
    use_case: GenerateArtworkUseCase = Depends(get_generate_use_case),
) -> Dict[str, Any]:
    return {"styles": [s.to_dict() for s in use_case.list_active_styles()]}


@router.post(
    "",
    response_model=Union[BatchGenerateResponse, GenerationResultResponse],
    response_model_exclude_none=True,
)
async def generate(
    body: GenerateRequest,
    use_case: GenerateArtworkUseCase = Depends(get_generate_use_case),
):
    if body.mode == "batch":
        results, summary = await use_case.batch_generate(
            body.count,
            style_id=body.style_id,
            orientation=body.orientation,
            auto_publish=body.auto_publish,
            base_prompt_override=body.base_prompt_override,
        )
        return BatchGenerateResponse(
            results=[GenerationResultResponse(**r.to_dict()) for r in results],
            summary=BatchSummaryResponse(**summary.to_dict()),
        )

    if not body.style_id:
        raise HTTPException(status_code=400, detail=f"style_id required for {body.mode} generation")

    options = GenerationOptions(
        custom_prompt=body.custom_prompt,
        orientation=body.orientation,
        reference_notes=body.reference_notes,
        auto_publish=body.auto_publish,
        base_prompt_override=body.base_prompt_override,
        inspiration_images=body.inspiration_images,
    )
    if body.mode == "preview":
        result = await asyncio.to_thread(use_case.preview, body.style_id, options)
    else:
        result = await asyncio.to_thread(use_case.generate, body.style_id, options)
    return GenerationResultResponse(**result.to_dict())

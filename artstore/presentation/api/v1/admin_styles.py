"""
スタイル管理 API ルーター（管理者）
"""
from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException

from artstore.application.use_cases.manage_styles import ManageStylesUseCase
from artstore.domain.errors import GenerationError, StyleNotFound
from artstore.presentation.api.v1.deps import get_styles_use_case, require_admin
from artstore.presentation.schemas.admin import (
    ReferenceImageRemove,
    ReferenceImageUpload,
    StyleCreate,
    StyleUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("")
def list_styles(use_case: ManageStylesUseCase = Depends(get_styles_use_case)) -> Dict[str, Any]:
    return {"styles": [s.to_dict() for s in use_case.list_styles()]}


@router.post("")
def create_style(
    body: StyleCreate,
    use_case: ManageStylesUseCase = Depends(get_styles_use_case),
) -> Dict[str, Any]:
    try:
        style = use_case.create_style(body.name, body.prompt_prefix, body.description)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"style": style.to_dict()}


@router.patch("/{style_id}")
def update_style(
    style_id: str,
    body: StyleUpdate,
    use_case: ManageStylesUseCase = Depends(get_styles_use_case),
) -> Dict[str, Any]:
    try:
        style = use_case.update_style(style_id, body.model_dump(exclude_none=True))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StyleNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"style": style.to_dict()}


@router.delete("/{style_id}")
def delete_style(
    style_id: str,
    use_case: ManageStylesUseCase = Depends(get_styles_use_case),
) -> Dict[str, Any]:
    try:
        use_case.delete_style(style_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"success": True}


@router.post("/{style_id}/references")
def add_reference_image(
    style_id: str,
    body: ReferenceImageUpload,
    use_case: ManageStylesUseCase = Depends(get_styles_use_case),
) -> Dict[str, Any]:
    try:
        style, url = use_case.add_reference_image(style_id, body.image_data_url)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StyleNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except GenerationError as e:
        logger.error("Reference upload failed: style=%s error=%s", style_id, e)
        raise HTTPException(status_code=500, detail=str(e))
    return {"style": style.to_dict(), "uploaded_url": url}


@router.delete("/{style_id}/references")
def remove_reference_image(
    style_id: str,
    body: ReferenceImageRemove,
    use_case: ManageStylesUseCase = Depends(get_styles_use_case),
) -> Dict[str, Any]:
    try:
        style = use_case.remove_reference_image(style_id, body.image_url)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StyleNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"style": style.to_dict()}

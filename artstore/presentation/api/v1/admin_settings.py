from __future__ import annotations
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from artstore.application.use_cases.manage_settings import ManageSettingsUseCase
from artstore.presentation.api.v1.deps import get_settings_use_case, require_admin
from artstore.presentation.schemas.admin import BasePromptUpdate, SettingUpsert

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("")
def read_settings(
    key: Optional[str] = Query(None),
    use_case: ManageSettingsUseCase = Depends(get_settings_use_case),
) -> Dict[str, Any]:
    if key:
        return use_case.get_setting(key)
    return {"settings": use_case.list_settings()}


@router.put("")
def upsert_setting(
    body: SettingUpsert,
    use_case: ManageSettingsUseCase = Depends(get_settings_use_case),
) -> Dict[str, Any]:
    try:
        return use_case.save_setting(body.key, body.value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/base-prompt")
def get_base_prompt(use_case: ManageSettingsUseCase = Depends(get_settings_use_case)) -> Dict[str, Any]:
    return use_case.get_base_prompt()


@router.put("/base-prompt")
def save_base_prompt(
    body: BasePromptUpdate,
    use_case: ManageSettingsUseCase = Depends(get_settings_use_case),
) -> Dict[str, Any]:
    try:
        return use_case.save_base_prompt(body.value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/base-prompt/reset")
def reset_base_prompt(use_case: ManageSettingsUseCase = Depends(get_settings_use_case)) -> Dict[str, Any]:
    return use_case.reset_base_prompt()

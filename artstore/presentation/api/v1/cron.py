from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException

from artstore.application.use_cases.generate_artwork import GenerateArtworkUseCase
from artstore.infrastructure.config.settings import get_settings
from artstore.presentation.api.v1.deps import get_generate_use_case, require_cron

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_cron)])


@router.get("/generate")
async def daily_generate(
    use_case: GenerateArtworkUseCase = Depends(get_generate_use_case),
) -> Dict[str, Any]:
    """日次自動生成。常にレビュー待ちで登録する"""
    count = get_settings().cron_daily_count
    try:
        _, summary = await use_case.batch_generate(count, auto_publish=False)
    except Exception as e:
        logger.error("[cron] Daily generation failed: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Generation failed")

    logger.info("[cron] Daily generation complete: %d success, %d failed", summary.success, summary.failed)
    return {
        "message": "Daily generation complete",
        **summary.to_dict(),
        "generated_at": datetime.now(timezone.utc).isoformat(),
    }

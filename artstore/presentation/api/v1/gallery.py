"""
公開ギャラリー API ルーター

GET  /gallery                       公開作品一覧（style, tag, featured, limit, offset, sort）
GET  /artworks/{slug}               公開作品の詳細
POST /track                         view / download / order カウンタ
POST /artworks/{artwork_id}/download  無料ダウンロード（IP × 日 単位で回数制限）
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from artstore.application.use_cases.browse_gallery import BrowseGalleryUseCase
from artstore.domain.errors import ArtworkNotFound, DownloadLimitExceeded
from artstore.presentation.api.v1.deps import get_gallery_use_case
from artstore.presentation.schemas.admin import TrackRequest

logger = logging.getLogger(__name__)

router = APIRouter()


def _client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


@router.get("/gallery")
def list_gallery(
    style: Optional[str] = Query(None),
    tag: Optional[str] = Query(None),
    featured: bool = Query(False),
    limit: int = Query(20, ge=1),
    offset: int = Query(0, ge=0),
    sort: str = Query("newest"),
    use_case: BrowseGalleryUseCase = Depends(get_gallery_use_case),
) -> JSONResponse:
    artworks = use_case.list_artworks(
        style=style, tag=tag, featured=featured, sort=sort, limit=limit, offset=offset
    )
    return JSONResponse(
        {"total_results": len(artworks), "artworks": artworks},
        headers={"Cache-Control": "public, s-maxage=300, stale-while-revalidate=600"},
    )


@router.get("/artworks/{slug}")
def get_artwork(slug: str, use_case: BrowseGalleryUseCase = Depends(get_gallery_use_case)) -> Dict[str, Any]:
    try:
        return use_case.get_artwork(slug)
    except ArtworkNotFound:
        raise HTTPException(status_code=404, detail="Artwork not found")


@router.post("/track")
def track(body: TrackRequest, use_case: BrowseGalleryUseCase = Depends(get_gallery_use_case)) -> Dict[str, Any]:
    try:
        use_case.track(body.artwork_id, body.action)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid params")
    except Exception as e:
        logger.error("Failed to track %s for %s: %s", body.action, body.artwork_id, e)
        raise HTTPException(status_code=500, detail="Failed to track")
    return {"ok": True}


@router.post("/artworks/{artwork_id}/download")
def download(
    artwork_id: str,
    request: Request,
    use_case: BrowseGalleryUseCase = Depends(get_gallery_use_case),
) -> Dict[str, Any]:
    try:
        return use_case.download(artwork_id, _client_ip(request))
    except ArtworkNotFound:
        raise HTTPException(status_code=404, detail="Artwork not found")
    except DownloadLimitExceeded:
        raise HTTPException(status_code=429, detail="Daily download limit reached. Try again tomorrow.")

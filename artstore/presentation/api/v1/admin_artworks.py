from __future__ import annotations
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Query

from artstore.application.use_cases.review_artworks import ReviewArtworksUseCase
from artstore.domain.errors import ArtworkNotFound
from artstore.presentation.api.v1.deps import get_review_use_case, require_admin
from artstore.presentation.schemas.admin import ArtworkUpdate, PublishRequest

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("")
def list_artworks(
    status: str = Query("review"),
    limit: int = Query(50, ge=1, le=200),
    use_case: ReviewArtworksUseCase = Depends(get_review_use_case),
) -> Dict[str, Any]:
    try:
        return {"artworks": use_case.list_artworks(status, limit)}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{artwork_id}")
def update_artwork(
    artwork_id: str,
    body: ArtworkUpdate,
    use_case: ReviewArtworksUseCase = Depends(get_review_use_case),
) -> Dict[str, Any]:
    try:
        return {"artwork": use_case.update_artwork(artwork_id, body.model_dump(exclude_none=True))}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ArtworkNotFound:
        raise HTTPException(status_code=404, detail="Artwork not found")


@router.post("/{artwork_id}/publish")
def publish_artwork(
    artwork_id: str,
    body: PublishRequest | None = None,
    use_case: ReviewArtworksUseCase = Depends(get_review_use_case),
) -> Dict[str, Any]:
    try:
        artwork = use_case.publish(artwork_id, title=body.title if body else None)
    except ArtworkNotFound:
        raise HTTPException(status_code=404, detail="Artwork not found")
    return {"success": True, "artwork": artwork}


@router.post("/{artwork_id}/reject")
def reject_artwork(
    artwork_id: str,
    use_case: ReviewArtworksUseCase = Depends(get_review_use_case),
) -> Dict[str, Any]:
    try:
        return {"success": True, "artwork": use_case.reject(artwork_id)}
    except ArtworkNotFound:
        raise HTTPException(status_code=404, detail="Artwork not found")


@router.post("/{artwork_id}/archive")
def archive_artwork(
    artwork_id: str,
    use_case: ReviewArtworksUseCase = Depends(get_review_use_case),
) -> Dict[str, Any]:
    try:
        return {"success": True, "artwork": use_case.archive(artwork_id)}
    except ArtworkNotFound:
        raise HTTPException(status_code=404, detail="Artwork not found")

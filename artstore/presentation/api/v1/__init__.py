from fastapi import APIRouter

from .admin_artworks import router as admin_artworks_router
from .admin_generate import router as admin_generate_router
from .admin_settings import router as admin_settings_router
from .admin_styles import router as admin_styles_router
from .cron import router as cron_router
from .gallery import router as gallery_router

router = APIRouter()
router.include_router(gallery_router, tags=["gallery"])
router.include_router(admin_generate_router, prefix="/admin/generate", tags=["admin-generate"])
router.include_router(admin_styles_router, prefix="/admin/styles", tags=["admin-styles"])
router.include_router(admin_settings_router, prefix="/admin/settings", tags=["admin-settings"])
router.include_router(admin_artworks_router, prefix="/admin/artworks", tags=["admin-artworks"])
router.include_router(cron_router, prefix="/cron", tags=["cron"])

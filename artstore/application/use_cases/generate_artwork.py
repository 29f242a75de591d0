"""
作品生成ユースケース

1. スタイルとベースプロンプトを解決し、プロンプトと参考画像を組み立てる
2. Gemini で画像を生成
3. スタイル slug からメタデータ（タイトル・説明・タグ・配色）を生成
4. 画像を Storage にアップロードし、artworks に行を追加

プレビューは 1〜2 のみで、画像は data URL で返す（Storage/DB へは書き込まない）。
バッチは 1 件ずつ直列に実行し、各件の間に固定の待機を入れる。
各段階の失敗は GenerationError として送出され、ここで GenerationResult の
失敗に変換される。
"""
from __future__ import annotations

import asyncio
import base64
import logging
import random
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Awaitable, Callable, List, Optional, Tuple

from artstore.domain.entities.artwork import (
    ORIENTATION_DIMENSIONS,
    ORIENTATIONS,
    ArtworkMetadata,
    BatchSummary,
    GenerationOptions,
    GenerationResult,
    ReferenceImage,
    Style,
)
from artstore.domain.errors import GenerationError, StorageConflict, StyleNotFound
from artstore.domain.repositories.gallery_repository import (
    ArtworkRepository,
    BlobStorage,
    SettingsRepository,
    StyleRepository,
)
from artstore.domain.services.image_synthesis_port import ImageSynthesisPort, SynthesizedImage
from artstore.domain.services.metadata_synthesizer import MetadataSynthesizer
from artstore.domain.services.prompt_builder import DEFAULT_BASE_PROMPT, build_prompt
from artstore.infrastructure.gemini.image_generator import GeminiImageGenerator
from artstore.infrastructure.http.image_fetcher import ReferenceImageFetcher, decode_inspiration_images

logger = logging.getLogger(__name__)

BASE_PROMPT_KEY = "base_prompt"
BATCH_MAX_COUNT = 50
BATCH_DELAY_SECONDS = 2.0
# 同一ミリ秒・同一スタイルで衝突した場合の連番サフィックス上限
MAX_COLLISION_SUFFIX = 3

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def slugify(text: str) -> str:
    return _NON_SLUG_CHARS.sub("-", (text or "").lower()).strip("-")


def to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def image_extension(mime_type: str) -> str:
    mime = (mime_type or "").lower()
    return "jpg" if "jpeg" in mime or "jpg" in mime else "png"


@dataclass
class ResolvedRequest:
    style: Style
    orientation: str
    prompt: str
    images: List[ReferenceImage]


class GenerateArtworkUseCase:
    def __init__(
        self,
        style_repository: StyleRepository,
        settings_repository: SettingsRepository,
        artwork_repository: ArtworkRepository,
        blob_storage: BlobStorage,
        synthesizer: Optional[ImageSynthesisPort] = None,
        synthesizer_factory: Optional[Callable[[], ImageSynthesisPort]] = None,
        image_fetcher: Optional[ReferenceImageFetcher] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = _utc_now,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        batch_delay_seconds: float = BATCH_DELAY_SECONDS,
    ):
        self.style_repository = style_repository
        self.settings_repository = settings_repository
        self.artwork_repository = artwork_repository
        self.blob_storage = blob_storage
        self._synthesizer = synthesizer
        self._synthesizer_factory = synthesizer_factory or GeminiImageGenerator
        self.image_fetcher = image_fetcher or ReferenceImageFetcher()
        self.rng = rng or random.Random()
        self.metadata = MetadataSynthesizer(self.rng)
        self.clock = clock
        self.sleep = sleep
        self.batch_delay_seconds = batch_delay_seconds

    # ── Collaborators ──

    def _get_synthesizer(self) -> ImageSynthesisPort:
        # API キー未設定（ConfigurationMissing）は生成試行の失敗として扱うため遅延生成
        if self._synthesizer is None:
            self._synthesizer = self._synthesizer_factory()
        return self._synthesizer

    # ── Style & prompt resolution ──

    def resolve_base_prompt(self, override: Optional[str] = None) -> str:
        if override and override.strip():
            return override
        stored = self.settings_repository.get(BASE_PROMPT_KEY)
        if stored and stored.strip():
            return stored
        return DEFAULT_BASE_PROMPT

    def resolve(self, style_id: str, options: GenerationOptions, default_orientation: Optional[str] = None) -> ResolvedRequest:
        style = self.style_repository.get_by_id(style_id)
        if style is None:
            raise StyleNotFound(style_id)

        orientation = options.orientation or default_orientation or self.rng.choice(ORIENTATIONS)
        if orientation not in ORIENTATIONS:
            raise ValueError(f"Invalid orientation: {orientation}")

        images = list(self.image_fetcher.fetch_moodboard(style.reference_images))
        inspiration = decode_inspiration_images(options.inspiration_images)
        images.extend(inspiration)

        # ムードボードは URL の有無で判定（取得失敗でも指示文は残す）
        has_images = bool(style.reference_images or inspiration)
        prompt = build_prompt(
            style,
            base_prompt=self.resolve_base_prompt(options.base_prompt_override),
            orientation=orientation,
            custom_prompt=options.custom_prompt,
            reference_notes=options.reference_notes,
            has_images=has_images,
            rng=self.rng,
        )
        return ResolvedRequest(style=style, orientation=orientation, prompt=prompt, images=images)

    # ── Persistence ──

    def _upload(self, style_slug: str, image: SynthesizedImage, timestamp_ms: int) -> str:
        ext = image_extension(image.mime_type)
        path = f"{style_slug}/{timestamp_ms}.{ext}"
        for n in range(MAX_COLLISION_SUFFIX + 1):
            if n:
                path = f"{style_slug}/{timestamp_ms}-{n}.{ext}"
            try:
                self.blob_storage.upload(path, image.data, image.mime_type)
                return path
            except StorageConflict:
                logger.warning("[generate] storage path taken, retrying with suffix: %s", path)
        raise StorageConflict(path)

    def persist(
        self,
        resolved: ResolvedRequest,
        image: SynthesizedImage,
        metadata: ArtworkMetadata,
        *,
        auto_publish: bool,
        model: str,
    ) -> GenerationResult:
        now = self.clock()
        timestamp_ms = int(now.timestamp() * 1000)

        path = self._upload(resolved.style.slug, image, timestamp_ms)
        image_url = self.blob_storage.get_public_url(path)

        width, height = ORIENTATION_DIMENSIONS[resolved.orientation]
        status = "published" if auto_publish else "review"
        slug = f"{slugify(metadata.title)}-{to_base36(timestamp_ms)}"

        artwork = self.artwork_repository.insert({
            "title": metadata.title,
            "slug": slug,
            "description": metadata.description,
            "image_url": image_url,
            "image_4k_url": image_url,
            "thumbnail_url": image_url,
            "style_id": resolved.style.id,
            "tags": metadata.tags,
            "colors": metadata.colors,
            "orientation": resolved.orientation,
            "width_px": width,
            "height_px": height,
            "generation_prompt": resolved.prompt,
            "generation_model": model,
            "status": status,
            "published_at": now.isoformat() if status == "published" else None,
        })

        return GenerationResult(
            success=True,
            artwork_id=artwork.get("id"),
            title=artwork.get("title", metadata.title),
            slug=artwork.get("slug", slug),
            image_url=image_url,
        )

    # ── Public operations ──

    def generate(self, style_id: str, options: Optional[GenerationOptions] = None) -> GenerationResult:
        options = options or GenerationOptions()
        try:
            resolved = self.resolve(style_id, options)
            synthesizer = self._get_synthesizer()
            image = synthesizer.synthesize(resolved.prompt, resolved.images)
            metadata = self.metadata.synthesize(resolved.style.slug)
            result = self.persist(
                resolved,
                image,
                metadata,
                auto_publish=options.auto_publish,
                model=synthesizer.model,
            )
        except (GenerationError, ValueError) as e:
            logger.warning("[generate] failed: style=%s error=%s", style_id, e)
            return GenerationResult.failure(str(e))
        except Exception as e:
            logger.error("[generate] unexpected error: style=%s", style_id, exc_info=True)
            return GenerationResult.failure(str(e) or "Unknown generation error")

        logger.info("[generate] created: id=%s title=%s style=%s", result.artwork_id, result.title, style_id)
        return result

    def preview(self, style_id: str, options: Optional[GenerationOptions] = None) -> GenerationResult:
        options = options or GenerationOptions()
        try:
            resolved = self.resolve(style_id, options, default_orientation="square")
            image = self._get_synthesizer().synthesize(resolved.prompt, resolved.images)
        except (GenerationError, ValueError) as e:
            logger.warning("[preview] failed: style=%s error=%s", style_id, e)
            return GenerationResult.failure(str(e))
        except Exception as e:
            logger.error("[preview] unexpected error: style=%s", style_id, exc_info=True)
            return GenerationResult.failure(str(e) or "Unknown generation error")

        encoded = base64.b64encode(image.data).decode("ascii")
        return GenerationResult(success=True, image_data_url=f"data:{image.mime_type};base64,{encoded}")

    async def batch_generate(
        self,
        count: int,
        *,
        style_id: Optional[str] = None,
        orientation: Optional[str] = None,
        auto_publish: bool = False,
        base_prompt_override: Optional[str] = None,
    ) -> Tuple[List[GenerationResult], BatchSummary]:
        count = min(max(1, count), BATCH_MAX_COUNT)

        if style_id:
            style_ids = [style_id]
        else:
            try:
                style_ids = [s.id for s in await asyncio.to_thread(self.style_repository.list_active)]
            except Exception as e:
                # スタイル取得失敗は 0 件として扱う
                logger.warning("[batch] failed to load active styles: %s", e)
                return [], BatchSummary()

        summary = BatchSummary()
        results: List[GenerationResult] = []
        if not style_ids:
            logger.info("[batch] no active styles, nothing to generate")
            return results, summary

        logger.info("[batch] start: count=%d styles=%d", count, len(style_ids))
        for i in range(count):
            options = GenerationOptions(
                orientation=orientation or self.rng.choice(ORIENTATIONS),
                auto_publish=auto_publish,
                base_prompt_override=base_prompt_override,
            )
            result = await asyncio.to_thread(self.generate, style_ids[i % len(style_ids)], options)
            results.append(result)
            if result.success:
                summary.success += 1
            else:
                summary.failed += 1
                logger.warning("[batch] item %d/%d failed: %s", i + 1, count, result.error)

            if i < count - 1:
                await self.sleep(self.batch_delay_seconds)

        logger.info("[batch] done: success=%d failed=%d", summary.success, summary.failed)
        return results, summary

    def list_active_styles(self) -> List[Style]:
        return self.style_repository.list_active()

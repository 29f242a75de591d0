"""
Gemini 画像生成クライアント

プロンプトとインライン参考画像を送信し、レスポンスから最初の画像を取り出す。
失敗は以下の優先順で分類する:
  1. 通信エラー / 非2xx            → SynthesisTransportError
  2. 候補なし + blockReason あり    → SynthesisBlocked
  3. 候補なし                       → SynthesisEmpty
  4. 画像パートなし                 → SynthesisNoImage（テキスト先頭200文字）
リトライは行わない。
"""
from __future__ import annotations

import logging
from time import perf_counter
from typing import Any, List, Optional

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from artstore.domain.entities.artwork import ReferenceImage
from artstore.domain.errors import (
    ConfigurationMissing,
    SynthesisBlocked,
    SynthesisEmpty,
    SynthesisNoImage,
    SynthesisTransportError,
)
from artstore.domain.services.image_synthesis_port import SynthesizedImage
from artstore.infrastructure.config.settings import get_settings

logger = logging.getLogger(__name__)


class GeminiImageGenerator:
    """Gemini の画像生成モデルを使った ImageSynthesisPort 実装"""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None, client: Any = None):
        settings = get_settings()
        self.model = model or settings.gemini_image_model
        if client is not None:
            self.client = client
            return
        key = api_key or settings.gemini_api_key
        if not key:
            raise ConfigurationMissing(
                "Gemini API key is required. Set GEMINI_API_KEY or GOOGLE_API_KEY."
            )
        self.client = genai.Client(api_key=key)

    def synthesize(self, prompt: str, images: List[ReferenceImage]) -> SynthesizedImage:
        t0 = perf_counter()

        contents: List[Any] = [prompt]
        for img in images:
            contents.append(types.Part.from_bytes(data=img.data, mime_type=img.mime_type))

        logger.info("Generating image: model=%s, refs=%d", self.model, len(images))

        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=contents,
                config=types.GenerateContentConfig(response_modalities=["TEXT", "IMAGE"]),
            )
        except genai_errors.APIError as e:
            code = getattr(e, "code", None)
            body = getattr(e, "message", "") or str(e)
            logger.warning("Gemini API error model=%s code=%s msg=%s", self.model, code, body)
            raise SynthesisTransportError(code, body) from e
        except httpx.HTTPError as e:
            raise SynthesisTransportError(None, str(e)) from e

        latency_ms = int((perf_counter() - t0) * 1000)
        image = extract_image(response)
        logger.info(
            "Image generated: latency=%dms, mime=%s, bytes=%d",
            latency_ms,
            image.mime_type,
            len(image.data),
        )
        return image


def _block_reason(response: Any) -> Optional[str]:
    feedback = getattr(response, "prompt_feedback", None)
    reason = getattr(feedback, "block_reason", None) if feedback else None
    if not reason:
        return None
    return getattr(reason, "value", None) or str(reason)


def extract_image(response: Any) -> SynthesizedImage:
    """レスポンスから最初の画像パートを取り出す（残りの画像・テキストは捨てる）"""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        reason = _block_reason(response)
        if reason:
            raise SynthesisBlocked(reason)
        raise SynthesisEmpty()

    first_text: Optional[str] = None
    for candidate in candidates:
        content = getattr(candidate, "content", None)
        if not content or not content.parts:
            continue
        for part in content.parts:
            if getattr(part, "thought", None):
                continue
            inline = getattr(part, "inline_data", None)
            if inline is not None and inline.data:
                return SynthesizedImage(data=inline.data, mime_type=inline.mime_type or "image/png")
            if first_text is None and getattr(part, "text", None):
                first_text = part.text

    raise SynthesisNoImage(first_text)

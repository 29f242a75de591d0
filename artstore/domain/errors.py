"""
生成パイプラインのエラー分類

いずれも単一の生成試行にとって終端エラーであり、パイプライン内では
リトライしない。ユースケース層で GenerationResult の失敗に変換される。
"""
from __future__ import annotations

from typing import Optional


class GenerationError(Exception):
    """生成パイプラインの基底例外"""


class ConfigurationMissing(GenerationError):
    pass


class StyleNotFound(GenerationError):
    def __init__(self, style_id: str):
        self.style_id = style_id
        super().__init__(f"Style not found: {style_id}")


class SynthesisTransportError(GenerationError):
    def __init__(self, status_code: Optional[int], body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Gemini API error: {status_code} - {body}")


class SynthesisBlocked(GenerationError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Generation blocked: {reason}")


class SynthesisEmpty(GenerationError):
    def __init__(self) -> None:
        super().__init__("No candidates in response")


class SynthesisNoImage(GenerationError):
    MAX_TEXT = 200

    def __init__(self, model_text: Optional[str]):
        self.model_text = (model_text or "unknown")[: self.MAX_TEXT]
        super().__init__(f"No image in response. Model said: {self.model_text}")


class UploadError(GenerationError):
    def __init__(self, message: str):
        super().__init__(f"Upload failed: {message}")


class StorageConflict(GenerationError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Upload failed: object already exists at {path}")


class DatabaseInsertError(GenerationError):
    def __init__(self, message: str):
        super().__init__(f"Database insert failed: {message}")


class ArtworkNotFound(LookupError):
    pass


class DownloadLimitExceeded(Exception):
    pass

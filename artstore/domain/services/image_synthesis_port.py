from __future__ import annotations
from dataclasses import dataclass
from typing import List, Protocol

from artstore.domain.entities.artwork import ReferenceImage


@dataclass
class SynthesizedImage:
    data: bytes
    mime_type: str


class ImageSynthesisPort(Protocol):
    """画像生成プロバイダのポート

    実装は画像を1枚返すか、artstore.domain.errors の Synthesis* 例外を送出する。
    """

    model: str

    def synthesize(self, prompt: str, images: List[ReferenceImage]) -> SynthesizedImage:
        ...

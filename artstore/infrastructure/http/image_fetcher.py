"""
参考画像の取得

ムードボードの URL は生成のたびに取得する。個々の取得失敗は致命的ではなく、
その画像を省くだけ。インスピレーション画像（data URL）はその場でデコードする。
"""
from __future__ import annotations

import base64
import binascii
import logging
import re
from typing import Iterable, List, Optional

import httpx

from artstore.domain.entities.artwork import ReferenceImage

logger = logging.getLogger(__name__)

MAX_IMAGES = 3
FETCH_TIMEOUT_SECONDS = 15.0

_DATA_URL = re.compile(r"^data:([^;]+);base64,(.+)$", re.DOTALL)


def parse_data_url(data_url: str) -> Optional[ReferenceImage]:
    match = _DATA_URL.match(data_url or "")
    if not match:
        return None
    try:
        data = base64.b64decode(match.group(2), validate=False)
    except (binascii.Error, ValueError):
        return None
    return ReferenceImage(data=data, mime_type=match.group(1))


def decode_inspiration_images(data_urls: Iterable[str]) -> List[ReferenceImage]:
    images: List[ReferenceImage] = []
    for url in list(data_urls)[:MAX_IMAGES]:
        img = parse_data_url(url)
        if img is None:
            logger.warning("Skipping malformed inspiration image data URL")
            continue
        images.append(img)
    return images


class ReferenceImageFetcher:
    def __init__(self, client: Optional[httpx.Client] = None):
        self._client = client

    def fetch(self, url: str) -> Optional[ReferenceImage]:
        try:
            if self._client is not None:
                res = self._client.get(url)
            else:
                res = httpx.get(url, timeout=FETCH_TIMEOUT_SECONDS, follow_redirects=True)
            res.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("Failed to fetch reference image %s: %s", url, e)
            return None
        mime = res.headers.get("content-type", "image/png").split(";")[0].strip() or "image/png"
        return ReferenceImage(data=res.content, mime_type=mime)

    def fetch_moodboard(self, urls: Iterable[str]) -> List[ReferenceImage]:
        images: List[ReferenceImage] = []
        for url in list(urls)[:MAX_IMAGES]:
            img = self.fetch(url)
            if img is not None:
                images.append(img)
        return images

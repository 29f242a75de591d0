from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Callable, Dict, Optional


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DownloadRateLimiter:
    """クライアントIP × UTC日 単位のダウンロード回数カウンタ

    プロセス内のみで保持する。再起動でリセットされ、複数インスタンス間では共有しない。
    """

    def __init__(self, daily_limit: int, now: Callable[[], datetime] = _utc_now):
        self.daily_limit = daily_limit
        self._now = now
        self._lock = threading.Lock()
        self._counts: Dict[str, int] = {}
        self._bucket: Optional[str] = None

    def _key(self, client_ip: str) -> tuple[str, str]:
        bucket = self._now().strftime("%Y-%m-%d")
        return bucket, f"{client_ip}-{bucket}"

    def hit(self, client_ip: str) -> bool:
        """1回分を計上する。当日の上限に達していれば False"""
        bucket, key = self._key(client_ip)
        with self._lock:
            if bucket != self._bucket:
                # 日付が変わったら前日分を破棄
                self._counts.clear()
                self._bucket = bucket
            used = self._counts.get(key, 0)
            if used >= self.daily_limit:
                return False
            self._counts[key] = used + 1
            return True

    def remaining(self, client_ip: str) -> int:
        _, key = self._key(client_ip)
        with self._lock:
            return max(0, self.daily_limit - self._counts.get(key, 0))

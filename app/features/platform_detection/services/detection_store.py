import logging
from threading import Lock
from typing import Dict, Optional

from redis.asyncio import Redis

from app.features.platform_detection.schemas.platform import PlatformDetectionResult
from app.platform.cache.redis import get_redis
from app.platform.config import settings

logger = logging.getLogger(__name__)


class DetectionStore:
    """
    Write-once cache of the winning platform detection per scan.

    The first result saved for a scan is kept; later saves return that
    stored result unchanged. Uses Redis when a client is given, otherwise
    an in-process dictionary.
    """

    KEY_PREFIX = "platform_detection:"

    def __init__(self, redis: Optional[Redis] = None, ttl_seconds: Optional[int] = None):
        self.redis = redis
        self.ttl_seconds = ttl_seconds or settings.DETECTION_CACHE_TTL_SECONDS
        self.memory_store: Dict[str, PlatformDetectionResult] = {}
        self._lock = Lock()

    def _key(self, scan_id: str) -> str:
        return f"{self.KEY_PREFIX}{scan_id}"

    async def get(self, scan_id: str) -> Optional[PlatformDetectionResult]:
        if self.redis is None:
            with self._lock:
                return self.memory_store.get(scan_id)

        raw = await self.redis.get(self._key(scan_id))
        if raw is None:
            return None
        return PlatformDetectionResult.model_validate_json(raw)

    async def save(self, scan_id: str, result: PlatformDetectionResult) -> PlatformDetectionResult:
        if self.redis is None:
            with self._lock:
                stored = self.memory_store.setdefault(scan_id, result)
        else:
            created = await self.redis.set(
                self._key(scan_id), result.model_dump_json(), ex=self.ttl_seconds, nx=True
            )
            stored = result if created else (await self.get(scan_id) or result)

        if stored is not result:
            logger.info(f"Detection for scan {scan_id} already stored, keeping {stored.platform.value}")
        return stored


_store: Optional[DetectionStore] = None


def get_detection_store() -> DetectionStore:
    """FastAPI dependency returning the process-wide detection store."""
    global _store

    if _store is None:
        redis = None if settings.FORCE_IN_MEMORY_DETECTION_CACHE else get_redis()
        _store = DetectionStore(redis=redis)
        logger.info(f"Detection store initialised ({'redis' if redis else 'in-memory'})")
    return _store

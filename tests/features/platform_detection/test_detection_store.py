"""
Tests for the write-once detection cache.
"""

from unittest.mock import AsyncMock

import pytest

from app.features.platform_detection.schemas.platform import (
    EvidenceSource,
    Platform,
    PlatformDetectionResult,
)
from app.features.platform_detection.services.capabilities import get_capabilities
from app.features.platform_detection.services.detection_store import DetectionStore


def result_for(platform: Platform, confidence: float) -> PlatformDetectionResult:
    return PlatformDetectionResult(
        platform=platform,
        confidence=confidence,
        evidence_source=EvidenceSource.url,
        capabilities=get_capabilities(platform),
        guides_available=confidence > 0.5,
    )


class TestInMemoryDetectionStore:

    @pytest.mark.asyncio
    async def test_missing_scan_returns_none(self):
        assert await DetectionStore().get("nope") is None

    @pytest.mark.asyncio
    async def test_save_then_get(self):
        store = DetectionStore()
        result = result_for(Platform.webflow, 0.9)
        assert await store.save("scan_1", result) == result
        assert await store.get("scan_1") == result

    @pytest.mark.asyncio
    async def test_first_write_wins(self):
        store = DetectionStore()
        first = result_for(Platform.webflow, 0.9)
        second = result_for(Platform.wordpress, 1.0)

        await store.save("scan_1", first)
        kept = await store.save("scan_1", second)

        assert kept == first
        assert await store.get("scan_1") == first

    @pytest.mark.asyncio
    async def test_scans_are_independent(self):
        store = DetectionStore()
        await store.save("a", result_for(Platform.webflow, 0.9))
        await store.save("b", result_for(Platform.framer, 0.6))
        assert (await store.get("a")).platform == Platform.webflow
        assert (await store.get("b")).platform == Platform.framer


class TestRedisDetectionStore:

    @pytest.mark.asyncio
    async def test_save_uses_set_if_absent_with_ttl(self):
        redis = AsyncMock()
        redis.set.return_value = True
        store = DetectionStore(redis=redis, ttl_seconds=60)
        result = result_for(Platform.webflow, 0.9)

        assert await store.save("scan_1", result) == result

        redis.set.assert_awaited_once()
        args, kwargs = redis.set.call_args
        assert args[0] == "platform_detection:scan_1"
        assert kwargs == {"ex": 60, "nx": True}

    @pytest.mark.asyncio
    async def test_existing_key_is_kept(self):
        stored = result_for(Platform.wordpress, 0.8)
        redis = AsyncMock()
        redis.set.return_value = None
        redis.get.return_value = stored.model_dump_json()
        store = DetectionStore(redis=redis)

        kept = await store.save("scan_1", result_for(Platform.webflow, 0.9))

        assert kept == stored

    @pytest.mark.asyncio
    async def test_get_decodes_json(self):
        stored = result_for(Platform.framer, 0.7)
        redis = AsyncMock()
        redis.get.return_value = stored.model_dump_json()

        assert await DetectionStore(redis=redis).get("scan_1") == stored
        redis.get.assert_awaited_once_with("platform_detection:scan_1")

from typing import Literal, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from selenium.common.exceptions import TimeoutException, WebDriverException
from starlette.concurrency import run_in_threadpool

from app.features.platform_detection.schemas.platform import (
    DetectionRequest,
    PlatformGuideResponse,
)
from app.features.platform_detection.services.capabilities import (
    get_capabilities,
    get_platform_actions,
)
from app.features.platform_detection.services.classifier import classify_platform
from app.features.platform_detection.services.detection_store import (
    DetectionStore,
    get_detection_store,
)
from app.features.platform_detection.services.signal_collector import SignalCollectorService
from app.features.platform_detection.utils.guides import get_platform_guide, has_guides
from app.platform.logger import get_logger
from app.platform.response import api_response
from app.platform.utils.url_validator import validate_url

logger = get_logger("platform_routes")
router = APIRouter(prefix="/platform", tags=["platform-detection"])


class CollectRequest(BaseModel):
    """Load a live page, classify it and cache the result for a scan."""
    url: str
    scan_id: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "url": "https://acme.webflow.io",
                "scan_id": "019ac123-4567-89ab-cdef-0123456789ab",
            }
        }


@router.post("/detect", summary="Classify page signals")
async def detect_platform(
    data: DetectionRequest,
    store: DetectionStore = Depends(get_detection_store),
):
    """
    Classify a PageSignals snapshot handed in by the page loader.

    When ``scan_id`` is given the result is cached for that scan. The cache
    is write-once: if the scan already has a detection, that stored result
    is returned instead of the new one.
    """
    result = classify_platform(data.signals)

    if data.scan_id:
        result = await store.save(data.scan_id, result)

    return api_response(data=result, message="Platform detected")


@router.post("/collect", summary="Load a page and classify it")
async def collect_and_detect(
    data: CollectRequest,
    store: DetectionStore = Depends(get_detection_store),
):
    is_valid, url, error = validate_url(data.url)
    if not is_valid:
        return api_response(status_code=status.HTTP_400_BAD_REQUEST, message=error)

    if data.scan_id:
        cached = await store.get(data.scan_id)
        if cached is not None:
            logger.info(f"Reusing stored detection for scan {data.scan_id}")
            return api_response(data=cached, message="Platform detected")

    try:
        signals = await run_in_threadpool(SignalCollectorService.collect, url)
    except (TimeoutException, WebDriverException) as e:
        logger.warning(f"Could not load {url} for platform detection: {e}")
        return api_response(
            status_code=status.HTTP_502_BAD_GATEWAY,
            message=f"Could not load page: {url}",
        )

    result = classify_platform(signals)
    if data.scan_id:
        result = await store.save(data.scan_id, result)

    return api_response(data=result, message="Platform detected")


@router.get("/scans/{scan_id}", summary="Stored detection for a scan")
async def get_scan_platform(
    scan_id: str,
    store: DetectionStore = Depends(get_detection_store),
):
    result = await store.get(scan_id)
    if result is None:
        return api_response(
            status_code=status.HTTP_404_NOT_FOUND,
            message=f"No platform detection stored for scan {scan_id}",
        )
    return api_response(data=result, message="Platform detection found")


@router.get("/guides/{platform}", summary="Platform remediation guide")
async def get_guide(
    platform: str,
    issue_type: str,
    mode: Literal["founder", "developer"] = "founder",
):
    guide = PlatformGuideResponse(
        platform=platform,
        issue_type=issue_type,
        mode=mode,
        guide=get_platform_guide(platform, issue_type, mode),
        has_guides=has_guides(platform),
        actions=get_platform_actions(platform),
        capabilities=get_capabilities(platform),
    )
    return api_response(data=guide, message="Guide retrieved")

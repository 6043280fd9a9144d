"""
Test configuration and fixtures for the Site Audit AI Assistant.

Every test runs against the in-memory detection cache and the deterministic
responder; provider-backed behaviour is exercised with mocked clients.
"""

import os
from typing import Generator

from dotenv import load_dotenv

import pytest
from fastapi.testclient import TestClient

load_dotenv()

# Must be set before app.platform.config is imported
os.environ["OPENAI_API_KEY"] = ""
os.environ["REDIS_URL"] = ""
os.environ["FORCE_IN_MEMORY_DETECTION_CACHE"] = "true"

from app.features.assistant.schemas.assistant import ChatContext  # noqa: E402
from app.features.assistant.services.context_builder import ContextBuilder  # noqa: E402
from app.features.assistant.services.strategy_selector import (  # noqa: E402
    ProviderConfig,
    ResponseStrategySelector,
    get_strategy_selector,
)
from app.features.platform_detection.services.detection_store import (  # noqa: E402
    DetectionStore,
    get_detection_store,
)


@pytest.fixture(scope="session")
def test_app():
    """Create FastAPI test application."""
    from app.main import app

    return app


@pytest.fixture
def detection_store() -> DetectionStore:
    return DetectionStore()


@pytest.fixture
def deterministic_selector() -> ResponseStrategySelector:
    return ResponseStrategySelector(ProviderConfig(provider_available=False))


@pytest.fixture(scope="function")
def client(test_app, detection_store, deterministic_selector) -> Generator[TestClient, None, None]:
    """
    Test client with a fresh in-memory detection store and the deterministic
    responder for each test function.
    """
    test_app.dependency_overrides[get_detection_store] = lambda: detection_store
    test_app.dependency_overrides[get_strategy_selector] = lambda: deterministic_selector
    with TestClient(test_app) as test_client:
        yield test_client
    test_app.dependency_overrides.clear()


def make_issue(rule: str, impact: str, description: str = None, **extra) -> dict:
    issue = {
        "id": extra.pop("id", rule),
        "rule_id": rule,
        "description": description or f"{rule} violation",
        "impact": impact,
        "wcag": extra.pop("wcag", ["1.1.1"]),
        "selector": extra.pop("selector", f".{rule}"),
    }
    issue.update(extra)
    return issue


@pytest.fixture
def issue_factory():
    return make_issue


@pytest.fixture
def context_factory():
    """Build an AssistantContext from keyword overrides of the wire context."""
    builder = ContextBuilder(issue_limit=10, history_window=5)

    def _build(issues=None, mode="founder", platform="webflow", history=None, **overrides):
        raw = {
            "scanId": "scan_1",
            "teamId": "team_1",
            "siteUrl": "https://acme.webflow.io",
            "siteName": "Acme",
            "verdict": "at-risk",
            "mode": mode,
            "platform": platform,
            "topIssues": issues or [],
        }
        raw.update(overrides)
        return builder.build(ChatContext.model_validate(raw), history or [])

    return _build

"""
Tests for choosing between the language model and the deterministic router.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.features.assistant.schemas.assistant import Mode
from app.features.assistant.services.intent_router import IntentRouter
from app.features.assistant.services.llm_strategy import EmptyCompletionError, LLMResponder
from app.features.assistant.services.strategy_selector import (
    ProviderConfig,
    ResponseStrategySelector,
)
from app.platform.config import Settings


def completion_with(text):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=text))],
        usage=SimpleNamespace(total_tokens=42),
    )


def mock_client(result=None, error=None):
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=result, side_effect=error)
    return client


@pytest.fixture
def issues(issue_factory):
    return [issue_factory("image-alt", "critical", "Images must have alternate text")]


class TestProviderConfig:

    def test_from_settings(self):
        assert ProviderConfig.from_settings(Settings(OPENAI_API_KEY="sk-test")).provider_available is True
        assert ProviderConfig.from_settings(Settings(OPENAI_API_KEY=None)).provider_available is False
        assert ProviderConfig.from_settings(Settings(OPENAI_API_KEY="")).provider_available is False


class TestResponseStrategySelector:

    @pytest.mark.asyncio
    async def test_without_provider_uses_router(self, context_factory, issues):
        llm = MagicMock()
        selector = ResponseStrategySelector(ProviderConfig(provider_available=False), llm=llm)
        context = context_factory(issues=issues)

        response = await selector.respond("what are my priorities", context, Mode.founder)

        assert selector.uses_llm is False
        assert response.intent == "priorities"

    @pytest.mark.asyncio
    async def test_provider_success(self, context_factory, issues):
        client = mock_client(result=completion_with("Add alt text in the Designer. ~15min. Next: publish."))
        llm = LLMResponder(client=client, model="gpt-4o-mini", temperature=0.7, max_tokens=500)
        selector = ResponseStrategySelector(ProviderConfig(provider_available=True), llm=llm)

        response = await selector.respond("how do I fix this", context_factory(issues=issues), Mode.founder)

        assert response.intent == "llm"
        assert response.content.startswith("Add alt text")
        assert 1 <= len(response.actions) <= 3

        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["temperature"] == 0.7
        assert kwargs["max_tokens"] == 500
        assert kwargs["messages"][0]["role"] == "system"
        assert kwargs["messages"][-1] == {"role": "user", "content": "how do I fix this"}

    @pytest.mark.asyncio
    async def test_provider_failure_matches_router(self, context_factory, issues):
        client = mock_client(error=RuntimeError("503 from provider"))
        llm = LLMResponder(client=client)
        selector = ResponseStrategySelector(ProviderConfig(provider_available=True), llm=llm)
        context = context_factory(issues=issues)

        response = await selector.respond("what are my priorities", context, Mode.founder)

        assert response == IntentRouter().route("what are my priorities", context, Mode.founder)
        client.chat.completions.create.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_empty_completion_falls_back(self, context_factory, issues):
        llm = LLMResponder(client=mock_client(result=completion_with("   ")))
        selector = ResponseStrategySelector(ProviderConfig(provider_available=True), llm=llm)
        context = context_factory(issues=issues, mode="developer")

        response = await selector.respond("hello", context, Mode.developer)

        assert response.intent == "greeting"

    @pytest.mark.asyncio
    async def test_empty_completion_raises_in_responder(self, context_factory, issues):
        llm = LLMResponder(client=mock_client(result=completion_with(None)))
        with pytest.raises(EmptyCompletionError):
            await llm.respond("hello", context_factory(issues=issues), Mode.founder)

    @pytest.mark.asyncio
    async def test_history_is_forwarded(self, context_factory, issues):
        client = mock_client(result=completion_with("Sure."))
        llm = LLMResponder(client=client)
        history = [
            {"role": "user", "content": "hi"},
            {"role": "assistant", "content": "hello!"},
            {"role": "system", "content": "odd role"},
        ]
        await llm.respond("next", context_factory(issues=issues, history=history), Mode.founder)

        messages = client.chat.completions.create.call_args.kwargs["messages"]
        assert [m["role"] for m in messages] == ["system", "user", "assistant", "assistant", "user"]

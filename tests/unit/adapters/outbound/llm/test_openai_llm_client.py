"""Unit tests for OpenAILLMClient."""

import asyncio
from unittest.mock import AsyncMock, Mock, patch

import httpx
import pytest
from openai import APIConnectionError

from transcript_triage.adapters.outbound.llm.openai_llm_client import OpenAILLMClient
from transcript_triage.application.errors import LLMUnavailableError
from transcript_triage.application.ports.llm_client import LLMClient


def _completion(content):
    mock_choice = Mock()
    mock_choice.message.content = content

    mock_response = Mock()
    mock_response.choices = [mock_choice]
    return mock_response


@pytest.fixture
def openai_client():
    """Create OpenAILLMClient with a mocked SDK client."""
    with patch(
        "transcript_triage.adapters.outbound.llm.openai_llm_client.AsyncOpenAI"
    ) as mock_openai_class:
        mock_client_instance = Mock()
        mock_client_instance.chat.completions.create = AsyncMock()
        mock_openai_class.return_value = mock_client_instance
        client = OpenAILLMClient(api_key="test-api-key", base_url="http://localhost:11434/v1")
        yield client


def test_openai_client_implements_llm_client_port(openai_client):
    assert isinstance(openai_client, LLMClient)


def test_openai_client_raises_error_when_api_key_missing():
    with patch("transcript_triage.adapters.outbound.llm.openai_llm_client.AsyncOpenAI"):
        with patch(
            "transcript_triage.adapters.outbound.llm.openai_llm_client.settings"
        ) as mock_settings:
            mock_settings.openai_api_key = ""
            with pytest.raises(ValueError, match="OpenAI API key is required"):
                OpenAILLMClient(api_key="")


@pytest.mark.asyncio
async def test_generate_sends_single_user_message(openai_client):
    """Test that the prompt is sent as one user message with the timeout."""
    create = openai_client._client.chat.completions.create
    create.return_value = _completion('  [{"title": "x"}] ')

    reply = await openai_client.generate("llama3.2:1b", "Extract leads", 30.0)

    assert reply == '[{"title": "x"}]'
    create.assert_awaited_once()
    kwargs = create.call_args.kwargs
    assert kwargs["model"] == "llama3.2:1b"
    assert kwargs["messages"] == [{"role": "user", "content": "Extract leads"}]
    assert kwargs["timeout"] == 30.0
    assert kwargs["stream"] is False


@pytest.mark.asyncio
async def test_generate_api_error_raises_unavailable(openai_client):
    openai_client._client.chat.completions.create.side_effect = APIConnectionError(
        request=httpx.Request("POST", "http://localhost:11434/v1/chat/completions")
    )

    with pytest.raises(LLMUnavailableError):
        await openai_client.generate("llama3.2:1b", "ping", 60.0)


@pytest.mark.asyncio
@pytest.mark.parametrize("content", [None, "", "   "])
async def test_generate_empty_reply_raises_unavailable(openai_client, content):
    openai_client._client.chat.completions.create.return_value = _completion(content)

    with pytest.raises(LLMUnavailableError):
        await openai_client.generate("llama3.2:1b", "ping", 60.0)


@pytest.mark.asyncio
async def test_generate_no_choices_raises_unavailable(openai_client):
    response = Mock()
    response.choices = []
    openai_client._client.chat.completions.create.return_value = response

    with pytest.raises(LLMUnavailableError):
        await openai_client.generate("llama3.2:1b", "ping", 60.0)


@pytest.mark.asyncio
async def test_generate_slow_call_hits_total_deadline(openai_client):
    async def slow_create(**kwargs):
        await asyncio.sleep(1)
        return _completion("late")

    openai_client._client.chat.completions.create.side_effect = slow_create

    with pytest.raises(LLMUnavailableError) as exc_info:
        await openai_client.generate("llama3.2:1b", "ping", 0.05)
    assert "timed out" in str(exc_info.value)


@pytest.mark.asyncio
@pytest.mark.parametrize("content", [None, "", "pong"])
async def test_warmup_ignores_reply_content(openai_client, content):
    """Test that warmup succeeds whenever the call completes."""
    create = openai_client._client.chat.completions.create
    create.return_value = _completion(content)

    assert await openai_client.warmup("llama3.2:1b", "ping", 60.0) is None
    assert create.call_args.kwargs["messages"] == [{"role": "user", "content": "ping"}]


@pytest.mark.asyncio
async def test_warmup_api_error_raises_unavailable(openai_client):
    openai_client._client.chat.completions.create.side_effect = APIConnectionError(
        request=httpx.Request("POST", "http://localhost:11434/v1/chat/completions")
    )

    with pytest.raises(LLMUnavailableError):
        await openai_client.warmup("llama3.2:1b", "ping", 60.0)

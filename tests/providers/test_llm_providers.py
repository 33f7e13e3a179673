"""
Tests for the LLM provider implementations.
"""
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from google.generativeai import protos
from google.generativeai.types import GenerateContentResponse

from app.core.exceptions import ConfigurationError, EmptyResponseError
from app.core.providers.gemini_provider import GeminiProvider
from app.core.providers.groq_provider import GroqProvider
from app.core.providers.llm_provider import LLMMessage
from app.models.enums import LLMRole
from app.services.summarization import SummarizationService


def gemini_response(*texts):
    """Build an SDK response whose single candidate holds the given text parts."""
    return GenerateContentResponse.from_response(
        protos.GenerateContentResponse(
            candidates=[
                protos.Candidate(
                    content=protos.Content(parts=[protos.Part(text=text) for text in texts]),
                    finish_reason=protos.Candidate.FinishReason.STOP,
                )
            ]
        )
    )


def gemini_provider_returning(response):
    with patch("app.core.providers.gemini_provider.genai") as mock_genai:
        model = MagicMock()
        model.generate_content_async = AsyncMock(return_value=response)
        mock_genai.GenerativeModel.return_value = model
        provider = GeminiProvider(api_key="key", model_name="gemini-test")
    return provider, model, mock_genai


@pytest.mark.parametrize("provider_cls, setting", [(GeminiProvider, "GEMINI_API_KEY"), (GroqProvider, "GROQ_API_KEY")])
def test_missing_api_key(provider_cls, setting):
    with pytest.raises(ConfigurationError) as exc_info:
        provider_cls(api_key=None)
    assert exc_info.value.setting_name == setting


@pytest.mark.asyncio
async def test_gemini_sends_single_prompt_as_is():
    provider, model, mock_genai = gemini_provider_returning(gemini_response("TL;DR: ", "ok"))

    response = await provider.generate_text(
        [LLMMessage(role=LLMRole.USER, content="prompt text")], temperature=0.3
    )

    mock_genai.configure.assert_called_once_with(api_key="key")
    args, _ = model.generate_content_async.call_args
    assert args[0] == "prompt text"
    assert response.content == "TL;DR: ok"
    assert response.model == "gemini-test"


@pytest.mark.asyncio
async def test_gemini_reply_without_parts_is_empty():
    provider, _, _ = gemini_provider_returning(gemini_response())

    response = await provider.generate_text([LLMMessage(role=LLMRole.USER, content="prompt")])

    assert response.content == ""


@pytest.mark.asyncio
async def test_gemini_reply_without_candidates_is_empty():
    provider, _, _ = gemini_provider_returning(
        GenerateContentResponse.from_response(protos.GenerateContentResponse(candidates=[]))
    )

    response = await provider.generate_text([LLMMessage(role=LLMRole.USER, content="prompt")])

    assert response.content == ""


@pytest.mark.asyncio
async def test_blank_gemini_reply_raises_empty_response():
    provider, _, _ = gemini_provider_returning(gemini_response())
    service = SummarizationService(llm_provider=provider)

    with pytest.raises(EmptyResponseError):
        await service.summarize("x" * 100)


def test_gemini_labels_multiple_messages():
    with patch("app.core.providers.gemini_provider.genai"):
        provider = GeminiProvider(api_key="key")

    prompt = provider._format_messages([
        LLMMessage(role=LLMRole.SYSTEM, content="Be brief."),
        LLMMessage(role=LLMRole.USER, content="Hello"),
    ])
    assert prompt == "System Instructions: Be brief.\n\nUser: Hello\n"


@pytest.mark.asyncio
async def test_groq_generate_text():
    provider = GroqProvider(api_key="key", model_name="llama-test")
    completion = SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content="- point"))],
        usage=SimpleNamespace(prompt_tokens=10, completion_tokens=2, total_tokens=12),
    )
    provider.client = MagicMock()
    provider.client.chat.completions.create = AsyncMock(return_value=completion)

    response = await provider.generate_text([LLMMessage(role=LLMRole.USER, content="prompt")])

    _, kwargs = provider.client.chat.completions.create.call_args
    assert kwargs["messages"] == [{"role": "user", "content": "prompt"}]
    assert response.content == "- point"
    assert response.usage == {"prompt_tokens": 10, "completion_tokens": 2, "total_tokens": 12}

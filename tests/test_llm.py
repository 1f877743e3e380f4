"""
LiteLLM 封装：消息组装、JSON 模式参数、超时与异常包装、默认服务选择；以及 token 截断。
全部 mock 掉 litellm.acompletion，不发真实请求。
"""
import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from jobdesk.core.errors import CompletionError, CompletionTimeout
from jobdesk.core.llm import (
    LiteLLMCompletion,
    OfflineCompletion,
    get_completion_service,
    to_messages,
)
from jobdesk.core.tokens import truncate_to_tokens


def run(coro):
    return asyncio.run(coro)


def _resp(content):
    resp = MagicMock()
    resp.choices[0].message.content = content
    return resp


class TestToMessages:
    def test_string_becomes_user_message(self):
        assert to_messages("hi") == [{"role": "user", "content": "hi"}]

    def test_list_is_copied(self):
        original = [{"role": "system", "content": "s"}]
        out = to_messages(original)
        assert out == original
        assert out[0] is not original[0]


class TestLiteLLMCompletion:
    def test_returns_stripped_text(self):
        mock = AsyncMock(return_value=_resp("  SEARCH \n"))
        with patch("litellm.acompletion", mock):
            text = run(LiteLLMCompletion(model="openai/gpt-4o", timeout=5).complete("classify"))
        assert text == "SEARCH"
        kwargs = mock.call_args.kwargs
        assert kwargs["model"] == "openai/gpt-4o"
        assert kwargs["messages"] == [{"role": "user", "content": "classify"}]
        assert kwargs["drop_params"] is True
        assert "response_format" not in kwargs

    def test_json_mode_and_temperature(self, monkeypatch):
        monkeypatch.setenv("JOBDESK_JSON_MODE", "true")
        mock = AsyncMock(return_value=_resp("{}"))
        with patch("litellm.acompletion", mock):
            run(LiteLLMCompletion(model="m", timeout=5).complete("x", json_mode=True, temperature=0.3))
        kwargs = mock.call_args.kwargs
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["temperature"] == 0.3

    def test_json_mode_disabled_by_config(self, monkeypatch):
        monkeypatch.setenv("JOBDESK_JSON_MODE", "false")
        mock = AsyncMock(return_value=_resp("{}"))
        with patch("litellm.acompletion", mock):
            run(LiteLLMCompletion(model="m", timeout=5).complete("x", json_mode=True))
        assert "response_format" not in mock.call_args.kwargs

    def test_none_content_is_empty_string(self):
        with patch("litellm.acompletion", AsyncMock(return_value=_resp(None))):
            assert run(LiteLLMCompletion(model="m", timeout=5).complete("x")) == ""

    def test_provider_error_wrapped(self):
        with patch("litellm.acompletion", AsyncMock(side_effect=RuntimeError("rate limited"))):
            with pytest.raises(CompletionError) as exc:
                run(LiteLLMCompletion(model="m", timeout=5).complete("x"))
        assert "rate limited" in str(exc.value)

    def test_auth_error_message_hides_details(self):
        err = RuntimeError("Invalid API key sk-ant-123456")
        with patch("litellm.acompletion", AsyncMock(side_effect=err)):
            with pytest.raises(CompletionError) as exc:
                run(LiteLLMCompletion(model="m", timeout=5).complete("x"))
        assert "sk-ant" not in str(exc.value)

    def test_timeout(self):
        async def slow(**kwargs):
            await asyncio.sleep(10)

        with patch("litellm.acompletion", slow):
            with pytest.raises(CompletionTimeout):
                run(LiteLLMCompletion(model="m", timeout=0.05).complete("x"))


class TestDefaultService:
    def test_offline_when_llm_disabled(self):
        service = get_completion_service()
        assert isinstance(service, OfflineCompletion)
        with pytest.raises(CompletionError):
            run(service.complete("x"))

    def test_litellm_when_key_present(self, monkeypatch):
        monkeypatch.setenv("JOBDESK_USE_LLM", "true")
        monkeypatch.setenv("OPENAI_API_KEY", "test-key")
        monkeypatch.setenv("JOBDESK_DEFAULT_MODEL", "openai/gpt-4o-mini")
        service = get_completion_service()
        assert isinstance(service, LiteLLMCompletion)
        assert service.model == "openai/gpt-4o-mini"


class TestTruncateToTokens:
    def test_short_text_untouched(self):
        assert truncate_to_tokens("short resume", 100) == "short resume"

    def test_empty(self):
        assert truncate_to_tokens("", 10) == ""

    def test_long_text_char_fallback_without_encoding(self):
        with patch("jobdesk.core.tokens._get_encoding_for_model", return_value=None):
            out = truncate_to_tokens("x" * 1000, 10)
        assert out == "x" * 40

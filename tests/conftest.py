"""
测试公共设施：可编排的假 completion 服务，以及禁用真实 LLM 的全局开关。

所有测试都不需要 API Key 与网络。
"""
import asyncio

import pytest

from jobdesk.core.errors import CompletionError
from jobdesk.core.llm import set_completion_service


class FakeCompletion:
    """
    按顺序回放预置回复：字符串直接返回；异常实例被抛出；可调用对象以 prompt 为参数调用后返回。
    回复用完后使用 default（为 None 时抛 CompletionError）。calls 记录每次调用参数。
    """

    def __init__(self, *replies, default=None, delay: float = 0.0):
        self.replies = list(replies)
        self.default = default
        self.delay = delay
        self.calls: list[dict] = []

    async def complete(self, prompt_or_messages, *, json_mode=False, temperature=None):
        self.calls.append({"prompt": prompt_or_messages, "json_mode": json_mode, "temperature": temperature})
        if self.delay:
            await asyncio.sleep(self.delay)
        reply = self.replies.pop(0) if self.replies else self.default
        if reply is None:
            raise CompletionError("no scripted reply")
        if isinstance(reply, BaseException):
            raise reply
        if callable(reply):
            return reply(prompt_or_messages)
        return reply


class FailingCompletion:
    """每次调用都失败。"""

    def __init__(self):
        self.calls = 0

    async def complete(self, prompt_or_messages, *, json_mode=False, temperature=None):
        self.calls += 1
        raise CompletionError("service unavailable")


@pytest.fixture(autouse=True)
def _no_real_llm(monkeypatch):
    """禁止测试误连真实厂商：关闭 LLM 开关，并在每个用例前后重置默认服务。"""
    monkeypatch.setenv("JOBDESK_USE_LLM", "false")
    set_completion_service(None)
    yield
    set_completion_service(None)


@pytest.fixture
def fake_llm():
    """工厂：fake_llm("SEARCH", '{"role": ...}') -> FakeCompletion。"""
    return FakeCompletion


@pytest.fixture
def failing_llm():
    return FailingCompletion()

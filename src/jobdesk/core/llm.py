"""
LiteLLM 统一多平台模型调用：一套请求逻辑、一套错误处理，换模型只改 model 字符串。

环境变量（任选其一即可）：OPENAI_API_KEY、ANTHROPIC_API_KEY、DEEPSEEK_API_KEY 等，
LiteLLM 会自动读取，无需在代码里区分厂商。
模型名使用 LiteLLM 格式，例如：anthropic/claude-sonnet-4-20250514、openai/gpt-4o、deepseek/deepseek-chat。

对外只有一个抽象操作 complete(prompt_or_messages) -> text；鉴权、模型选择由本模块负责，
上层（分类、提取、生成、打分）只处理返回文本与失败。
"""
from __future__ import annotations

import asyncio
from typing import Any, Protocol, Union

from jobdesk.core.config import completion_timeout, get_default_model, json_mode_enabled, use_llm
from jobdesk.core.errors import CompletionError, CompletionTimeout
from jobdesk.core.log import get_logger

log = get_logger(__name__)

Messages = list[dict[str, str]]
PromptOrMessages = Union[str, Messages]


def to_messages(prompt_or_messages: PromptOrMessages) -> Messages:
    """字符串视为单条 user 消息；消息列表原样复制。"""
    if isinstance(prompt_or_messages, str):
        return [{"role": "user", "content": prompt_or_messages}]
    return [dict(m) for m in prompt_or_messages]


def response_text(resp: Any) -> str:
    """取 litellm 响应正文：response.choices[0].message.content。"""
    return (resp.choices[0].message.content or "").strip()


def _short_error(e: BaseException) -> str:
    # 简短错误提示，便于排查（不暴露 key 或长栈）
    msg = (str(e).strip() or type(e).__name__)[:120]
    if any(w in msg.lower() for w in ("key", "secret", "auth")):
        msg = type(e).__name__ + " (check the provider API key and JOBDESK_DEFAULT_MODEL)"
    return msg


class CompletionService(Protocol):
    """外部文本生成服务：输入 prompt 或消息序列，返回文本；任何一次调用都可能失败。"""

    async def complete(
        self,
        prompt_or_messages: PromptOrMessages,
        *,
        json_mode: bool = False,
        temperature: float | None = None,
    ) -> str:
        ...


class LiteLLMCompletion:
    """
    基于 litellm.acompletion 的实现。
    每次调用带超时（asyncio.wait_for），超时抛 CompletionTimeout，其余异常统一包成 CompletionError；
    取消（CancelledError）不拦截，原样向上传播。
    """

    def __init__(self, model: str | None = None, timeout: float | None = None):
        self.model = model or get_default_model()
        self.timeout = timeout if timeout is not None else completion_timeout()

    async def complete(
        self,
        prompt_or_messages: PromptOrMessages,
        *,
        json_mode: bool = False,
        temperature: float | None = None,
    ) -> str:
        from litellm import acompletion

        kwargs: dict[str, Any] = {}
        if temperature is not None:
            kwargs["temperature"] = temperature
        if json_mode and json_mode_enabled():
            # 厂商不支持 json_object 时由 drop_params 丢弃，回到纯文本 + 文本扫描
            kwargs["response_format"] = {"type": "json_object"}
        try:
            resp = await asyncio.wait_for(
                acompletion(
                    model=self.model,
                    messages=to_messages(prompt_or_messages),
                    timeout=self.timeout,
                    drop_params=True,
                    **kwargs,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise CompletionTimeout(f"{self.model} did not answer within {self.timeout:g}s") from e
        except Exception as e:
            raise CompletionError(f"{self.model}: {_short_error(e)}") from e
        return response_text(resp)


class OfflineCompletion:
    """未配置任何 API Key（或 JOBDESK_USE_LLM=false）时使用：每次调用立即失败，各步骤直接走回退。"""

    async def complete(
        self,
        prompt_or_messages: PromptOrMessages,
        *,
        json_mode: bool = False,
        temperature: float | None = None,
    ) -> str:
        raise CompletionError("LLM disabled: no provider API key configured")


_service: CompletionService | None = None


def get_completion_service() -> CompletionService:
    """进程内默认的 completion 服务（懒加载单例）。"""
    global _service
    if _service is None:
        if use_llm():
            _service = LiteLLMCompletion()
            log.info("Completion service: LiteLLM (%s)", _service.model)
        else:
            _service = OfflineCompletion()
            log.warning("No LLM API key configured; every step will use its fallback")
    return _service


def set_completion_service(service: CompletionService | None) -> None:
    """替换默认服务（测试或自定义接入时使用）；传 None 则下次重新按配置创建。"""
    global _service
    _service = service

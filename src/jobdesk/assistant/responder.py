"""
回复生成：按意图选 system prompt，附上最近 4 条历史（2 轮往返），一次 completion 调用。
HELP 意图不经过这里，由 help_reply 按关键词直接给固定文案。
"""
from __future__ import annotations

import json
from typing import Sequence

from jobdesk.core.config import chat_temperature
from jobdesk.core.errors import GenerationFailure
from jobdesk.core.llm import CompletionService, get_completion_service
from jobdesk.core.log import get_logger
from .prompts import (
    BASE_SYSTEM_PROMPT,
    CLEAR_CONFIRM_PROMPT,
    FILTER_CONFIRM_PROMPT,
    HELP_APPLICATIONS,
    HELP_DEFAULT,
    HELP_MATCH,
    HELP_RESUME,
)
from .schemas import FilterDelta, Intent

log = get_logger(__name__)

# 作为生成上下文的历史条数
CONTEXT_WINDOW = 4

# 关键词 → 固定回复，按顺序命中第一条
HELP_TOPICS: list[tuple[tuple[str, ...], str]] = [
    (("application", "track"), HELP_APPLICATIONS),
    (("resume", "upload"), HELP_RESUME),
    (("match", "score"), HELP_MATCH),
]


def help_reply(message: str) -> str:
    """HELP 的零延迟路径：对原始消息做子串匹配，不调 LLM。"""
    msg = (message or "").lower()
    for keywords, reply in HELP_TOPICS:
        if any(kw in msg for kw in keywords):
            return reply
    return HELP_DEFAULT


def build_system_prompt(intent: Intent, filters: FilterDelta) -> str:
    prompt = BASE_SYSTEM_PROMPT
    if intent in (Intent.SEARCH, Intent.FILTER):
        applied = json.dumps(filters, indent=2, ensure_ascii=False) if filters else "none"
        goal = "search for jobs" if intent == Intent.SEARCH else "apply filters"
        prompt += FILTER_CONFIRM_PROMPT.format(goal=goal, filters=applied)
    elif intent == Intent.CLEAR:
        prompt += CLEAR_CONFIRM_PROMPT
    return prompt


class ResponseGenerator:
    def __init__(self, llm: CompletionService | None = None, temperature: float | None = None):
        self.llm = llm or get_completion_service()
        self.temperature = temperature if temperature is not None else chat_temperature()

    def build_messages(
        self,
        message: str,
        intent: Intent,
        filters: FilterDelta,
        history: Sequence[dict[str, str]],
    ) -> list[dict[str, str]]:
        return [
            {"role": "system", "content": build_system_prompt(intent, filters)},
            *(dict(m) for m in list(history)[-CONTEXT_WINDOW:]),
            {"role": "user", "content": message},
        ]

    async def generate(
        self,
        message: str,
        intent: Intent,
        filters: FilterDelta,
        history: Sequence[dict[str, str]] = (),
    ) -> str:
        """失败时抛 GenerationFailure（不在这里吸收，由 Orchestrator.chat 统一兜底）。"""
        messages = self.build_messages(message, intent, filters, history)
        try:
            return await self.llm.complete(messages, temperature=self.temperature)
        except Exception as e:
            raise GenerationFailure(f"reply generation failed: {e}") from e

"""
对话编排：固定的小状态机，每条用户消息跑一遍 Start → … → Done。

    START             → CLASSIFY_INTENT
    CLASSIFY_INTENT   → HELP_RESPONSE      (HELP)
                      → EXTRACT_FILTERS    (SEARCH / FILTER)
                      → GENERATE_RESPONSE  (CLEAR / GENERAL)
    EXTRACT_FILTERS   → GENERATE_RESPONSE
    HELP_RESPONSE     → DONE
    GENERATE_RESPONSE → DONE

每一步返回部分更新，经 ConversationState.apply 按字段规则合并。一次执行只处理一轮，不可跨轮恢复；
跨轮记忆只有会话历史（仅作生成上下文，不参与意图分类）。
"""
from __future__ import annotations

from collections import deque
from enum import Enum
from typing import Any, Sequence

from jobdesk.core.config import history_limit
from jobdesk.core.llm import CompletionService, get_completion_service
from jobdesk.core.log import get_logger
from .classifier import IntentClassifier
from .extractor import FilterExtractor
from .prompts import APOLOGY, EMPTY_RESPONSE_FALLBACK
from .responder import ResponseGenerator, help_reply
from .schemas import ChatResult, ConversationState, Intent

log = get_logger(__name__)


class Step(str, Enum):
    START = "start"
    CLASSIFY_INTENT = "classify_intent"
    EXTRACT_FILTERS = "extract_filters"
    HELP_RESPONSE = "help_response"
    GENERATE_RESPONSE = "generate_response"
    DONE = "done"


def next_step(step: Step, state: ConversationState) -> Step:
    """状态转移表；DONE 之后无转移。"""
    if step == Step.START:
        return Step.CLASSIFY_INTENT
    if step == Step.CLASSIFY_INTENT:
        if state.intent == Intent.HELP:
            return Step.HELP_RESPONSE
        if state.intent in (Intent.SEARCH, Intent.FILTER):
            return Step.EXTRACT_FILTERS
        return Step.GENERATE_RESPONSE
    if step == Step.EXTRACT_FILTERS:
        return Step.GENERATE_RESPONSE
    if step in (Step.HELP_RESPONSE, Step.GENERATE_RESPONSE):
        return Step.DONE
    raise ValueError(f"no transition out of {step.value}")


class DialogueOrchestrator:
    """一个会话一个实例：持有该会话的滚动历史（默认 10 条，超出丢最旧的）。"""

    def __init__(
        self,
        llm: CompletionService | None = None,
        classifier: IntentClassifier | None = None,
        extractor: FilterExtractor | None = None,
        generator: ResponseGenerator | None = None,
        max_history: int | None = None,
    ):
        llm = llm or get_completion_service()
        self.classifier = classifier or IntentClassifier(llm)
        self.extractor = extractor or FilterExtractor(llm)
        self.generator = generator or ResponseGenerator(llm)
        self._history: deque[dict[str, str]] = deque(maxlen=max_history or history_limit())

    @property
    def history(self) -> list[dict[str, str]]:
        """历史副本，按时间先后排列。"""
        return list(self._history)

    def clear_history(self) -> None:
        self._history.clear()

    async def _run_step(
        self, step: Step, state: ConversationState, context: Sequence[dict[str, str]]
    ) -> dict[str, Any]:
        message = state.last_message
        if step == Step.CLASSIFY_INTENT:
            return {"intent": await self.classifier.classify(message)}
        if step == Step.EXTRACT_FILTERS:
            return {"filters": await self.extractor.extract(message)}
        if step == Step.HELP_RESPONSE:
            return {"response": help_reply(message)}
        if step == Step.GENERATE_RESPONSE:
            intent = state.intent or Intent.GENERAL
            return {"response": await self.generator.generate(message, intent, state.filters, context)}
        return {}

    async def run_turn(self, message: str, context: Sequence[dict[str, str]] = ()) -> ConversationState:
        """跑完一轮状态机；生成失败（GenerationFailure）原样抛出。"""
        state = ConversationState(messages=[{"role": "user", "content": message}])
        step = Step.START
        while step != Step.DONE:
            state.apply(await self._run_step(step, state, context))
            step = next_step(step, state)
        return state

    async def chat(self, message: str) -> ChatResult:
        """
        单轮对话入口。生成上下文取本轮之前的历史；用户消息无论成败都计入历史，回复成功才计入。
        整轮失败（如所有 completion 调用都失败）时返回固定致歉、GENERAL 与空筛选，不向上抛错。
        """
        message = (message or "").strip()
        context = self.history
        self._history.append({"role": "user", "content": message})
        try:
            state = await self.run_turn(message, context)
        except Exception:
            log.exception("Assistant turn failed, returning apology")
            return ChatResult(response=APOLOGY, intent=Intent.GENERAL, filters={})

        response = (state.response or "").strip() or EMPTY_RESPONSE_FALLBACK
        self._history.append({"role": "assistant", "content": response})
        log.info("Turn done: intent=%s filters=%s", state.intent.value if state.intent else None, sorted(state.filters))
        return ChatResult(response=response, intent=state.intent or Intent.GENERAL, filters=state.filters)

"""意图分类：一次 completion 调用，输出归一化后校验是否在意图枚举内；任何失败都降级为 GENERAL。"""
from __future__ import annotations

from jobdesk.core.config import chat_temperature
from jobdesk.core.errors import ClassificationFailure
from jobdesk.core.llm import CompletionService, get_completion_service
from jobdesk.core.log import get_logger
from .prompts import INTENT_PROMPT
from .schemas import Intent

log = get_logger(__name__)


class IntentClassifier:
    def __init__(self, llm: CompletionService | None = None, temperature: float | None = None):
        self.llm = llm or get_completion_service()
        self.temperature = temperature if temperature is not None else chat_temperature()

    async def _classify(self, message: str) -> Intent:
        text = await self.llm.complete(INTENT_PROMPT.format(message=message), temperature=self.temperature)
        intent = Intent.parse(text)
        if intent is None:
            raise ClassificationFailure(f"unrecognized intent output: {text[:40]!r}")
        return intent

    async def classify(self, message: str) -> Intent:
        """不重试、不抛错：调用失败、空输出或未知 token 都返回 GENERAL。"""
        try:
            return await self._classify(message)
        except Exception as e:
            log.warning("Intent classification degraded to GENERAL: %s", e)
            return Intent.GENERAL

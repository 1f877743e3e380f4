"""
对话助理：意图分类 → （筛选提取）→ 回复生成，由固定状态机编排；会话管理负责实例生命周期。
"""
from .schemas import (
    Intent,
    FILTER_FIELDS,
    FilterDelta,
    ConversationState,
    ChatResult,
    clean_filters,
)
from .classifier import IntentClassifier
from .extractor import FilterExtractor
from .responder import ResponseGenerator, help_reply
from .orchestrator import DialogueOrchestrator, Step, next_step
from .sessions import SessionManager

__all__ = [
    "Intent",
    "FILTER_FIELDS",
    "FilterDelta",
    "ConversationState",
    "ChatResult",
    "clean_filters",
    "IntentClassifier",
    "FilterExtractor",
    "ResponseGenerator",
    "help_reply",
    "DialogueOrchestrator",
    "Step",
    "next_step",
    "SessionManager",
]

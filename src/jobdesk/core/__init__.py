# 配置、日志、LiteLLM 封装、tiktoken 截断、JSON 提取

from .config import (
    use_llm,
    get_default_model,
    completion_timeout,
    match_concurrency,
    match_timeout,
    history_limit,
    session_ttl,
    max_sessions,
)
from .errors import (
    JobdeskError,
    CompletionError,
    CompletionTimeout,
    ClassificationFailure,
    ExtractionFailure,
    ScoringFailure,
    GenerationFailure,
)
from .jsonparse import extract_json_object
from .llm import (
    CompletionService,
    LiteLLMCompletion,
    OfflineCompletion,
    get_completion_service,
    set_completion_service,
)
from .log import get_logger
from .tokens import truncate_to_tokens

__all__ = [
    "use_llm",
    "get_default_model",
    "completion_timeout",
    "match_concurrency",
    "match_timeout",
    "history_limit",
    "session_ttl",
    "max_sessions",
    "JobdeskError",
    "CompletionError",
    "CompletionTimeout",
    "ClassificationFailure",
    "ExtractionFailure",
    "ScoringFailure",
    "GenerationFailure",
    "extract_json_object",
    "CompletionService",
    "LiteLLMCompletion",
    "OfflineCompletion",
    "get_completion_service",
    "set_completion_service",
    "get_logger",
    "truncate_to_tokens",
]

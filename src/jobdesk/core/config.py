"""
配置：从环境变量读取，供对话助理、职位匹配与 HTTP 入口使用。

所有开关都是小函数（每次调用读取 os.getenv），测试里用 monkeypatch 改环境变量即可生效。
"""
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

# 可选加载 .env（若存在）：先项目根（与 pyproject.toml 同层），再当前工作目录
_env_paths = [
    Path(__file__).resolve().parents[3] / ".env",  # 从 src/jobdesk/core 往上的项目根
    Path.cwd() / ".env",
]
for _p in _env_paths:
    if _p.exists():
        from dotenv import load_dotenv
        load_dotenv(_p)
        break

_TRUTHY = ("true", "1", "yes")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Invalid %s=%r, using default %s", name, raw, default)
        return default


def _env_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return max(minimum, int(raw))
    except ValueError:
        logger.warning("Invalid %s=%r, using default %s", name, raw, default)
        return default


# 是否调用 LLM（有任一 key 且开关为 true 时走 LLM；否则各步骤直接走确定性回退）
def use_llm() -> bool:
    key = (
        os.getenv("OPENAI_API_KEY")
        or os.getenv("ANTHROPIC_API_KEY")
        or os.getenv("DEEPSEEK_API_KEY")
    )
    use = os.getenv("JOBDESK_USE_LLM", "true").lower() in _TRUTHY
    return bool(key) and use


def get_default_model() -> str:
    """LiteLLM 格式的模型名，如 anthropic/claude-sonnet-4-20250514、openai/gpt-4o。"""
    return os.getenv("JOBDESK_DEFAULT_MODEL", "anthropic/claude-sonnet-4-20250514")


def chat_temperature() -> float:
    return _env_float("JOBDESK_CHAT_TEMPERATURE", 0.7)


def match_temperature() -> float:
    return _env_float("JOBDESK_MATCH_TEMPERATURE", 0.3)


def completion_timeout() -> float:
    """单次 completion 调用超时（秒）。"""
    return _env_float("JOBDESK_COMPLETION_TIMEOUT", 30.0)


def json_mode_enabled() -> bool:
    """需要 JSON 输出时是否请求厂商的 json_object 模式（不支持的厂商由 LiteLLM 丢弃该参数）。"""
    return os.getenv("JOBDESK_JSON_MODE", "true").lower() in _TRUTHY


def match_concurrency() -> int:
    """批量打分时同时在途的 LLM 调用上限。"""
    return _env_int("JOBDESK_MATCH_CONCURRENCY", 8)


def match_timeout() -> float:
    """单条职位打分的整体超时（秒），超时走关键词回退。"""
    return _env_float("JOBDESK_MATCH_TIMEOUT", 45.0)


def history_limit() -> int:
    """每个会话保留的历史消息条数。"""
    return _env_int("JOBDESK_HISTORY_LIMIT", 10)


def session_ttl() -> float:
    """会话空闲多久（秒）后被回收。"""
    return _env_float("JOBDESK_SESSION_TTL", 1800.0)


def max_sessions() -> int:
    return _env_int("JOBDESK_MAX_SESSIONS", 1000)


def resume_token_budget() -> int:
    """打分 prompt 中简历正文的 token 上限。"""
    return _env_int("JOBDESK_RESUME_TOKENS", 3000)


def job_source_id() -> str:
    """职位源：mock（默认）。"""
    return (os.getenv("JOBDESK_JOB_SOURCE") or "mock").strip().lower()


def log_level() -> str:
    return (os.getenv("JOBDESK_LOG_LEVEL") or "INFO").strip().upper()

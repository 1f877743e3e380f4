"""
筛选条件提取：仅在 SEARCH / FILTER 意图下调用。
一次 completion 调用（请求 JSON 模式），取第一个完整 JSON 对象，丢掉 null 字段与未知字段；
任何失败返回空增量，不影响本轮其余状态。
"""
from __future__ import annotations

from jobdesk.core.config import chat_temperature
from jobdesk.core.errors import ExtractionFailure
from jobdesk.core.jsonparse import extract_json_object
from jobdesk.core.llm import CompletionService, get_completion_service
from jobdesk.core.log import get_logger
from .prompts import FILTER_PROMPT
from .schemas import FilterDelta, clean_filters

log = get_logger(__name__)


def parse_filter_output(text: str) -> FilterDelta:
    """解析模型输出为筛选增量；无 JSON 或 JSON 不合法时抛 ExtractionFailure。"""
    try:
        return clean_filters(extract_json_object(text))
    except ValueError as e:
        raise ExtractionFailure(f"invalid filter output: {e}") from e


class FilterExtractor:
    def __init__(self, llm: CompletionService | None = None, temperature: float | None = None):
        self.llm = llm or get_completion_service()
        self.temperature = temperature if temperature is not None else chat_temperature()

    async def extract(self, message: str) -> FilterDelta:
        try:
            text = await self.llm.complete(
                FILTER_PROMPT.format(message=message),
                json_mode=True,
                temperature=self.temperature,
            )
            return parse_filter_output(text)
        except Exception as e:
            log.warning("Filter extraction failed, keeping filters unchanged: %s", e)
            return {}

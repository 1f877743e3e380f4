"""
tiktoken：请求前算账，控制打分 prompt 中简历正文的长度。

批量打分时同一份简历会随每条职位发送一次，先按 token 截断可避免超长请求与意外扣费。
"""
from __future__ import annotations

from typing import Optional

from jobdesk.core.log import get_logger

log = get_logger(__name__)

# 常用模型与 tiktoken 编码的映射（OpenAI 兼容 API 多用 cl100k_base / o200k_base）
_MODEL_ENCODING = {
    "gpt-4o": "o200k_base",
    "gpt-4": "cl100k_base",
    "gpt-3.5-turbo": "cl100k_base",
    "claude": "cl100k_base",  # Claude 无公开编码表，按 cl100k_base 估算
    "deepseek": "cl100k_base",
}
_DEFAULT_ENCODING = "cl100k_base"


def _get_encoding_for_model(model_name: Optional[str] = None) -> "tiktoken.Encoding | None":
    """根据模型名获取 tiktoken 编码；未知模型用 cl100k_base。加载失败（如无网络拉取编码表）返回 None。"""
    import tiktoken
    try:
        name = (model_name or "").strip().lower()
        for key, enc in _MODEL_ENCODING.items():
            if key in name:
                return tiktoken.get_encoding(enc)
        return tiktoken.get_encoding(_DEFAULT_ENCODING)
    except Exception as e:
        log.debug("tiktoken encoding unavailable (%s), approximating by characters", e)
        return None


def truncate_to_tokens(text: str, max_tokens: int, model_name: Optional[str] = None) -> str:
    """
    把文本截断到最多 max_tokens 个 token。
    字符数不超过 max_tokens 时必然不超限，直接返回（不加载编码表）。
    """
    if not text or len(text) <= max_tokens:
        return text or ""
    enc = _get_encoding_for_model(model_name)
    if enc is None:
        return text[: max_tokens * 4]
    tokens = enc.encode(text)
    if len(tokens) <= max_tokens:
        return text
    return enc.decode(tokens[:max_tokens])

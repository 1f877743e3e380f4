"""
对话助理的数据模型：意图枚举、筛选增量、单轮对话状态与 chat 返回结构。
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional

from pydantic import BaseModel, Field


class Intent(str, Enum):
    """用户一句话的目的，固定五选一。"""
    SEARCH = "SEARCH"    # 搜索特定职位
    FILTER = "FILTER"    # 设置/修改筛选条件
    HELP = "HELP"        # 询问用法
    CLEAR = "CLEAR"      # 清空筛选
    GENERAL = "GENERAL"  # 闲聊及其他

    @classmethod
    def parse(cls, raw: str | None) -> Optional["Intent"]:
        """大小写与首尾空白、引号、句号不敏感；不在枚举内返回 None。"""
        token = (raw or "").strip().strip("\"'`.").strip().upper()
        try:
            return cls(token)
        except ValueError:
            return None


# 筛选增量允许的字段（与前端筛选面板一致）
FILTER_FIELDS = ("role", "skills", "datePosted", "jobType", "workMode", "location", "matchScore")

FilterDelta = dict[str, Any]


def skill_list(value: Any) -> list[str] | None:
    """skills 归一为字符串列表；既不是字符串也不是列表时返回 None。"""
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [s for s in value if isinstance(s, str)]
    return None


def clean_filters(raw: dict[str, Any] | None) -> FilterDelta:
    """
    只保留 FILTER_FIELDS 中且值非 null 的键。
    skills 只接受字符串列表：单个字符串包成列表，列表中的非字符串项丢弃，其他类型整个丢弃。
    """
    cleaned: FilterDelta = {}
    for key, value in (raw or {}).items():
        if key not in FILTER_FIELDS or value is None:
            continue
        if key == "skills":
            value = skill_list(value)
            if value is None:
                continue
        cleaned[key] = value
    return cleaned


def _append(left: list, right: list | None) -> list:
    return left + list(right or [])


def _last_write(left: Any, right: Any) -> Any:
    return left if right is None else right


def _merge(left: dict, right: dict | None) -> dict:
    return {**left, **(right or {})}


# 各字段的合并规则：messages 只追加；intent / response 后写覆盖（None 不覆盖）；filters 浅合并
REDUCERS: dict[str, Callable[[Any, Any], Any]] = {
    "messages": _append,
    "intent": _last_write,
    "filters": _merge,
    "response": _last_write,
}


@dataclass
class ConversationState:
    """单轮对话状态：每条用户消息新建一份，产出回复后丢弃。"""
    messages: list[dict[str, str]] = field(default_factory=list)
    intent: Optional[Intent] = None
    filters: FilterDelta = field(default_factory=dict)
    response: str = ""

    @property
    def last_message(self) -> str:
        return self.messages[-1]["content"] if self.messages else ""

    def apply(self, update: dict[str, Any]) -> "ConversationState":
        """按 REDUCERS 把某一步的部分更新并入当前状态（原地修改并返回自身）。"""
        for key, value in update.items():
            reducer = REDUCERS.get(key)
            if reducer is None:
                raise KeyError(f"unknown state field: {key}")
            setattr(self, key, reducer(getattr(self, key), value))
        return self


class ChatResult(BaseModel):
    """chat 的返回：回复、意图、本轮提取出的筛选条件。"""
    response: str = Field(..., description="助理回复")
    intent: Intent = Field(..., description="本轮意图")
    filters: FilterDelta = Field(default_factory=dict, description="筛选增量（不含 null 值）")

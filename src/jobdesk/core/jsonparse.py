"""从模型的自由文本输出中取出第一个完整的 JSON 对象。"""
from __future__ import annotations

import json
import re
from typing import Any

_FENCE = re.compile(r"```(?:json)?\s*([\s\S]*?)```")


def _first_balanced_object(text: str) -> str | None:
    """扫描第一个 '{' 起的括号配对；字符串内的括号与转义字符不计。"""
    start = text.find("{")
    if start < 0:
        return None
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start : i + 1]
    return None


def extract_json_object(text: str) -> dict[str, Any]:
    """
    允许被 markdown 代码块包裹、前后夹杂说明文字。
    找不到对象、括号不配对、JSON 不合法或顶层不是对象时抛 ValueError。
    """
    text = (text or "").strip()
    if "```" in text:
        m = _FENCE.search(text)
        if m:
            text = m.group(1).strip()
    raw = _first_balanced_object(text)
    if raw is None:
        raise ValueError("no JSON object found in model output")
    data = json.loads(raw)  # json.JSONDecodeError 是 ValueError 的子类
    if not isinstance(data, dict):
        raise ValueError("model output JSON is not an object")
    return data

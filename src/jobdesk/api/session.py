"""
会话识别：从请求头 X-Session-Id 取会话 ID。登录与会话签发不在本服务内，缺失或不合法即 401。
"""
import re

from fastapi import Header, HTTPException

_VALID = re.compile(r"[a-zA-Z0-9\-_]{1,64}")


def get_session_id(x_session_id: str | None = Header(None, alias="X-Session-Id")) -> str:
    """依赖项：返回会话 ID（仅允许字母数字、- 与 _，最长 64）；不做改写，避免不同 ID 落到同一会话。"""
    sid = (x_session_id or "").strip()
    if not _VALID.fullmatch(sid):
        raise HTTPException(status_code=401, detail="missing or invalid X-Session-Id")
    return sid

"""
会话管理：session_id → DialogueOrchestrator，懒创建。

空闲超过 TTL 的会话在下一次访问时回收；会话数超过上限时回收最久未用的。
同一会话的轮次串行执行（每会话一把 asyncio.Lock），不同会话互不影响。
"""
from __future__ import annotations

import asyncio
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Callable

from jobdesk.core.config import max_sessions, session_ttl
from jobdesk.core.log import get_logger
from .orchestrator import DialogueOrchestrator
from .schemas import ChatResult

log = get_logger(__name__)


@dataclass
class _Session:
    assistant: DialogueOrchestrator
    last_used: float
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)


class SessionManager:
    def __init__(
        self,
        factory: Callable[[], DialogueOrchestrator] = DialogueOrchestrator,
        ttl: float | None = None,
        max_size: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.factory = factory
        self.ttl = ttl if ttl is not None else session_ttl()
        self.max_size = max_size or max_sessions()
        self.clock = clock
        # 按最近使用排序：队首最旧
        self._sessions: OrderedDict[str, _Session] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def evict_expired(self) -> int:
        """回收空闲超时的会话，返回回收数量。"""
        now = self.clock()
        # 有轮次在跑的会话不回收
        expired = [
            sid for sid, s in self._sessions.items()
            if now - s.last_used > self.ttl and not s.lock.locked()
        ]
        for sid in expired:
            del self._sessions[sid]
            log.info("Evicted idle session %s", sid)
        return len(expired)

    def _evict_over_capacity(self, keep: str) -> None:
        """超出上限时从最久未用的开始回收；有轮次在跑的与刚创建的 keep 跳过（此时允许暂时超限）。"""
        overflow = len(self._sessions) - self.max_size
        if overflow <= 0:
            return
        idle = [sid for sid, s in self._sessions.items() if sid != keep and not s.lock.locked()][:overflow]
        for sid in idle:
            del self._sessions[sid]
            log.info("Evicted least recently used session %s", sid)

    def _session(self, session_id: str) -> _Session:
        self.evict_expired()
        session = self._sessions.get(session_id)
        if session is None:
            session = _Session(assistant=self.factory(), last_used=self.clock())
            self._sessions[session_id] = session
            log.info("Created assistant for session %s", session_id)
            self._evict_over_capacity(keep=session_id)
        else:
            session.last_used = self.clock()
            self._sessions.move_to_end(session_id)
        return session

    def get(self, session_id: str) -> DialogueOrchestrator:
        return self._session(session_id).assistant

    async def chat(self, session_id: str, message: str) -> ChatResult:
        session = self._session(session_id)
        async with session.lock:
            result = await session.assistant.chat(message)
        session.last_used = self.clock()
        if self._sessions.get(session_id) is session:
            self._sessions.move_to_end(session_id)
        return result

    def reset(self, session_id: str) -> None:
        """清空某会话历史（会话不存在时无操作）。"""
        session = self._sessions.get(session_id)
        if session is not None:
            session.assistant.clear_history()

    def drop(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

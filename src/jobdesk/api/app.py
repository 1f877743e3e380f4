"""
jobdesk HTTP 入口：对话助理与职位列表。

- POST /v1/chat        一轮对话：意图 + 筛选增量 + 回复（按 X-Session-Id 区分会话）
- POST /v1/chat/reset  清空当前会话历史
- POST /v1/jobs        按 filters 筛选职位，有简历时并发打分、降序排列并给出 Best Matches

启动：uvicorn jobdesk.api.app:app --port 3001
"""
from fastapi import Depends, FastAPI, HTTPException

from jobdesk.assistant import ChatResult, SessionManager
from jobdesk.core.log import get_logger
from jobdesk.jobs import JobFeedRequest, JobFeedResponse, JobInfo, build_job_feed
from jobdesk.jobs.sources import get_job_source

from .schemas import ChatRequest
from .session import get_session_id

log = get_logger(__name__)

app = FastAPI(
    title="jobdesk API",
    description="Job tracker assistant: chat-driven job filters and résumé match scoring",
    version="0.1.0",
)

_sessions: SessionManager | None = None
_catalog: list[JobInfo] | None = None


def get_sessions() -> SessionManager:
    """进程内会话管理器（懒加载）；测试可通过 app.dependency_overrides 替换。"""
    global _sessions
    if _sessions is None:
        _sessions = SessionManager()
    return _sessions


def get_catalog() -> list[JobInfo]:
    """职位目录（懒加载，按 JOBDESK_JOB_SOURCE 选择职位源）。"""
    global _catalog
    if _catalog is None:
        _catalog = get_job_source().fetch_jobs()
        log.info("Loaded %d jobs into catalog", len(_catalog))
    return _catalog


@app.get("/health")
def health():
    """探活。"""
    return {"status": "ok", "service": "jobdesk"}


@app.post("/v1/chat", response_model=ChatResult)
async def chat(
    request: ChatRequest,
    session_id: str = Depends(get_session_id),
    sessions: SessionManager = Depends(get_sessions),
):
    """一轮对话；助理内部失败时仍返回 200 与固定致歉文案。"""
    if not request.message.strip():
        raise HTTPException(status_code=400, detail="message is required")
    return await sessions.chat(session_id, request.message)


@app.post("/v1/chat/reset")
def chat_reset(
    session_id: str = Depends(get_session_id),
    sessions: SessionManager = Depends(get_sessions),
):
    """清空当前会话的对话历史。"""
    sessions.reset(session_id)
    return {"ok": True}


@app.post("/v1/jobs", response_model=JobFeedResponse, response_model_by_alias=True)
async def jobs(
    request: JobFeedRequest,
    session_id: str = Depends(get_session_id),
    catalog: list[JobInfo] = Depends(get_catalog),
):
    """
    职位列表：先按 filters 筛选；带 resumeText 时逐条 LLM 打分（失败的条目走关键词回退），
    按匹配分降序返回，并给出匹配分 >70 的前 8 条作为 Best Matches。
    """
    return await build_job_feed(catalog, request.filters, request.resume_text)

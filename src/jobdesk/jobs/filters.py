"""按对话助理给出的 filters 过滤职位列表；所有文本比较不区分大小写。"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Sequence, TypeVar

from jobdesk.jobs.schemas import JobInfo

J = TypeVar("J", bound=JobInfo)

# datePosted 取值 → 最大发布时长（小时）
DATE_WINDOWS_HOURS = {"24h": 24, "week": 168, "month": 720}

HIGH_MATCH = 70
MEDIUM_MATCH = 40


def _lower(value: Any) -> str:
    return str(value or "").strip().lower()


def _skills(value: Any) -> list[str]:
    # 请求体未经校验：非字符串/列表的 skills 视为未设置
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [s for s in value if isinstance(s, str)]
    return []


def _hours_since(posted: str | None, now: datetime) -> float | None:
    if not posted:
        return None
    try:
        dt = datetime.fromisoformat(posted.replace("Z", "+00:00"))
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return (now - dt).total_seconds() / 3600


def matches_filters(job: JobInfo, filters: dict[str, Any], now: datetime | None = None) -> bool:
    now = now or datetime.now(timezone.utc)

    role = _lower(filters.get("role"))
    if role and role not in _lower(job.title):
        return False

    wanted = [_lower(s) for s in _skills(filters.get("skills")) if _lower(s)]
    if wanted:
        job_skills = [_lower(s) for s in job.skills]
        if not any(w in js for w in wanted for js in job_skills):
            return False

    window = DATE_WINDOWS_HOURS.get(_lower(filters.get("datePosted")))
    if window is not None:
        hours = _hours_since(job.posted_date, now)
        if hours is None or hours > window:
            return False

    job_type = _lower(filters.get("jobType"))
    if job_type and job_type != _lower(job.job_type):
        return False

    work_mode = _lower(filters.get("workMode"))
    if work_mode and work_mode != _lower(job.work_mode):
        return False

    location = _lower(filters.get("location"))
    if location and location not in _lower(job.location):
        return False

    level = _lower(filters.get("matchScore"))
    if level in ("high", "medium"):
        score = getattr(job, "match_score", 0) or 0
        if level == "high" and score < HIGH_MATCH:
            return False
        if level == "medium" and not (MEDIUM_MATCH <= score < HIGH_MATCH):
            return False

    return True


def filter_jobs(jobs: Sequence[J], filters: dict[str, Any] | None, now: datetime | None = None) -> list[J]:
    """返回满足全部条件的职位（保持原顺序）；filters 为空时原样返回副本。"""
    if not filters:
        return list(jobs)
    now = now or datetime.now(timezone.utc)
    return [job for job in jobs if matches_filters(job, filters, now)]

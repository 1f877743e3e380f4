"""
职位匹配：职位源 + 筛选 + 简历 vs 职位 LLM 打分（关键词回退）+ 并发受限的批量排序。
"""
from .schemas import (
    JobInfo,
    JobMatchResult,
    MatchDetails,
    RankedJob,
    JobFeedRequest,
    JobFeedResponse,
)
from .scoring import JobMatchScorer, fallback_match
from .ranking import BatchRanker
from .filters import filter_jobs
from .pipeline import build_job_feed, select_best_matches

__all__ = [
    "JobInfo",
    "JobMatchResult",
    "MatchDetails",
    "RankedJob",
    "JobFeedRequest",
    "JobFeedResponse",
    "JobMatchScorer",
    "fallback_match",
    "BatchRanker",
    "filter_jobs",
    "build_job_feed",
    "select_best_matches",
]

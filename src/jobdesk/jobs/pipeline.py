"""
职位列表流水线：筛选 → 批量打分（有简历时）→ 按匹配分排序 → 选出 Best Matches。
"""
from __future__ import annotations

from typing import Any, Sequence

from jobdesk.core.log import get_logger
from jobdesk.jobs.filters import filter_jobs
from jobdesk.jobs.ranking import BatchRanker
from jobdesk.jobs.schemas import JobFeedResponse, JobInfo, RankedJob

log = get_logger(__name__)

# Best Matches：匹配分高于阈值的前 N 条
BEST_MATCH_THRESHOLD = 70
BEST_MATCH_LIMIT = 8


def select_best_matches(jobs: Sequence[RankedJob]) -> list[RankedJob]:
    """jobs 须已按匹配分降序。"""
    return [j for j in jobs if j.match_score > BEST_MATCH_THRESHOLD][:BEST_MATCH_LIMIT]


async def build_job_feed(
    jobs: Sequence[JobInfo],
    filters: dict[str, Any] | None = None,
    resume_text: str | None = None,
    ranker: BatchRanker | None = None,
) -> JobFeedResponse:
    """
    filters 中的 matchScore 依赖匹配分，放在打分之后再过滤；其余条件先过滤以减少 LLM 调用。
    resume_text 为空时不打分，所有职位 matchScore=0。
    """
    filters = dict(filters or {})
    score_level = filters.pop("matchScore", None)
    candidates = filter_jobs(jobs, filters)

    resume_text = (resume_text or "").strip()
    if resume_text:
        ranker = ranker or BatchRanker()
        ranked = await ranker.rank_all(candidates, resume_text)
    else:
        ranked = [RankedJob.unscored(job) for job in candidates]

    if score_level:
        ranked = filter_jobs(ranked, {"matchScore": score_level})

    ranked.sort(key=lambda j: j.match_score, reverse=True)
    best = select_best_matches(ranked)
    log.info("Job feed: %d of %d jobs after filters, %d best matches", len(ranked), len(jobs), len(best))
    return JobFeedResponse(jobs=ranked, total=len(ranked), best_matches=best)

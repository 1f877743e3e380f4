"""
批量排序：对一批职位并发打分，按输入顺序合并为 RankedJob 列表。

并发受信号量限制（JOBDESK_MATCH_CONCURRENCY），每条职位另有整体超时（JOBDESK_MATCH_TIMEOUT）；
单条超时或异常只影响该条（走关键词回退），不会中断或拖住整批。排序与 Best Matches 选取由调用方负责。
"""
from __future__ import annotations

import asyncio
from typing import Sequence

from jobdesk.core.config import match_concurrency, match_timeout
from jobdesk.core.log import get_logger
from jobdesk.jobs.schemas import JobInfo, JobMatchResult, RankedJob
from jobdesk.jobs.scoring import JobMatchScorer, fallback_match

log = get_logger(__name__)


class BatchRanker:
    def __init__(
        self,
        scorer: JobMatchScorer | None = None,
        max_concurrency: int | None = None,
        timeout: float | None = None,
    ):
        self.scorer = scorer or JobMatchScorer()
        self.max_concurrency = max(1, max_concurrency or match_concurrency())
        self.timeout = timeout if timeout is not None else match_timeout()

    async def _score_one(
        self, job: JobInfo, resume_text: str, semaphore: asyncio.Semaphore
    ) -> JobMatchResult:
        async with semaphore:
            try:
                return await asyncio.wait_for(self.scorer.score(job, resume_text), timeout=self.timeout)
            except asyncio.TimeoutError:
                log.warning("Scoring %s timed out after %gs, using keyword fallback", job.id, self.timeout)
            except Exception:
                # scorer 自身已吸收 LLM 失败；这里兜住其余意外，保证整批不被单条拖垮
                log.exception("Scoring %s raised unexpectedly, using keyword fallback", job.id)
            return fallback_match(job, resume_text)

    async def rank_all(self, jobs: Sequence[JobInfo], resume_text: str) -> list[RankedJob]:
        """返回与 jobs 等长、同序的 RankedJob 列表；输入职位不被修改。"""
        if not jobs:
            return []
        semaphore = asyncio.Semaphore(self.max_concurrency)
        log.info("Matching %d jobs (concurrency=%d)", len(jobs), self.max_concurrency)
        results = await asyncio.gather(
            *(self._score_one(job, resume_text, semaphore) for job in jobs)
        )
        log.info("Matching finished for %d jobs", len(results))
        return [RankedJob.from_match(job, result) for job, result in zip(jobs, results)]

"""根据配置返回当前使用的职位源。"""
from jobdesk.core.config import job_source_id
from jobdesk.jobs.sources.base import JobSource
from jobdesk.jobs.sources.mock import MockJobSource


def get_job_source(source_id: str | None = None) -> JobSource:
    """
    返回职位源实例。
    source_id 可选：mock（默认）。不传则从环境变量 JOBDESK_JOB_SOURCE 读取。
    """
    sid = (source_id or job_source_id()).strip().lower()
    if sid != "mock":
        raise ValueError(f"unknown job source: {sid}")
    return MockJobSource()

"""
职位源：拉取职位列表，供筛选与打分。
- mock：按固定种子生成的示例职位目录，无需外部 API，用于本地闭环与测试。
"""
from .base import JobSource
from .mock import MockJobSource
from .registry import get_job_source

__all__ = ["JobSource", "MockJobSource", "get_job_source"]

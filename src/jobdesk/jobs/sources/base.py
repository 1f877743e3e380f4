"""职位源抽象：拉取职位列表。"""
from abc import ABC, abstractmethod
from jobdesk.jobs.schemas import JobInfo


class JobSource(ABC):
    """职位源接口：返回可筛选、可打分的职位列表。"""

    @abstractmethod
    def fetch_jobs(self, limit: int = 200) -> list[JobInfo]:
        """拉取职位，最多返回 limit 条。"""
        ...

"""
职位与匹配结果的数据模型。
字段在 Python 侧用 snake_case，序列化（by_alias）为前端使用的 camelCase：jobType、matchScore、matchDetails 等。
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class JobInfo(_CamelModel):
    """职位信息（来自职位源）：打分只读取 title / company / description / skills / location / job_type。"""
    id: str = Field(..., description="职位 ID")
    title: str = Field(..., description="职位名称")
    company: str = Field(..., description="公司名称")
    description: Optional[str] = Field(None, description="职位描述")
    skills: list[str] = Field(default_factory=list, description="职位要求技能")
    location: Optional[str] = Field(None, description="工作地点")
    job_type: Optional[str] = Field(None, description="Full-time / Part-time / Contract / Internship")
    work_mode: Optional[str] = Field(None, description="Remote / Hybrid / On-site")
    posted_date: Optional[str] = Field(None, description="发布时间，ISO 8601")
    salary: Optional[str] = Field(None, description="薪资区间文本")
    apply_url: Optional[str] = Field(None, description="投递链接")


class MatchDetails(_CamelModel):
    """匹配说明：打分之外的四个字段。"""
    matching_skills: list[str] = Field(default_factory=list)
    relevant_experience: list[str] = Field(default_factory=list)
    keyword_alignment: list[str] = Field(default_factory=list)
    reasoning: str = ""


class JobMatchResult(MatchDetails):
    """
    单条（职位, 简历）的匹配结果，LLM 输出或关键词回退产生；创建后不可修改。
    score 为 0–100 的整数，越界值在构造时被截断到区间内。
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    score: int = Field(..., description="匹配分 0–100")

    @field_validator("score", mode="before")
    @classmethod
    def _clamp_score(cls, v: Any) -> int:
        return max(0, min(100, int(v)))

    @field_validator("matching_skills", mode="after")
    @classmethod
    def _dedupe_skills(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(v))

    def details(self) -> MatchDetails:
        return MatchDetails(
            matching_skills=list(self.matching_skills),
            relevant_experience=list(self.relevant_experience),
            keyword_alignment=list(self.keyword_alignment),
            reasoning=self.reasoning,
        )


def _job_fields(job: JobInfo) -> dict[str, Any]:
    # 传入的可能已是 RankedJob，只取职位本身字段
    return job.model_dump(include=set(JobInfo.model_fields))


class RankedJob(JobInfo):
    """职位 + 匹配分：批量排序产出的新视图，原 JobInfo 不被修改。"""
    match_score: int = Field(0, ge=0, le=100, description="匹配分 0–100；未上传简历时为 0")
    match_details: Optional[MatchDetails] = Field(None, description="匹配说明；未打分时为空")

    @classmethod
    def from_match(cls, job: JobInfo, result: JobMatchResult) -> "RankedJob":
        return cls(**_job_fields(job), match_score=result.score, match_details=result.details())

    @classmethod
    def unscored(cls, job: JobInfo) -> "RankedJob":
        return cls(**_job_fields(job), match_score=0)


class JobFeedRequest(_CamelModel):
    """POST /v1/jobs 请求：筛选条件（对话助理给出的 filters）+ 可选简历正文。"""
    filters: dict[str, Any] = Field(default_factory=dict, description="role / skills / datePosted / jobType / workMode / location / matchScore")
    resume_text: Optional[str] = Field(None, description="简历纯文本；为空时不做匹配打分")


class JobFeedResponse(_CamelModel):
    """POST /v1/jobs 响应。"""
    jobs: list[RankedJob] = Field(default_factory=list, description="按匹配分降序")
    total: int = Field(0, description="筛选后的职位数")
    best_matches: list[RankedJob] = Field(default_factory=list, description="匹配分 >70 的前 8 条")

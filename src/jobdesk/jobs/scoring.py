"""
简历 vs 职位 LLM 打分：一次 completion 调用，输出 JSON（score、matchingSkills、relevantExperience、
keywordAlignment、reasoning）。任何失败都退回确定性的关键词匹配，从不向调用方抛错。
"""
from __future__ import annotations

import math
from typing import Any

from jobdesk.core.config import get_default_model, match_temperature, resume_token_budget
from jobdesk.core.errors import ScoringFailure
from jobdesk.core.jsonparse import extract_json_object
from jobdesk.core.llm import CompletionService, get_completion_service
from jobdesk.core.log import get_logger
from jobdesk.core.tokens import truncate_to_tokens
from jobdesk.jobs.schemas import JobInfo, JobMatchResult

log = get_logger(__name__)

# 关键词回退的计分规则
SKILL_POINTS = 15
TITLE_POINTS = 20
FALLBACK_REASONING = "Basic keyword matching applied"

NOT_SPECIFIED = "Not specified"

MATCH_PROMPT = """You are an expert job matching AI. Analyze how well this candidate's resume matches the job posting.

Resume:
{resume}

Job Posting:
Title: {title}
Company: {company}
Description: {description}
Required Skills: {skills}
Location: {location}
Job Type: {job_type}

Provide your analysis in this EXACT JSON format (no other text):
{{
  "score": <number 0-100>,
  "matchingSkills": ["skill1", "skill2"],
  "relevantExperience": ["experience1", "experience2"],
  "keywordAlignment": ["keyword1", "keyword2"],
  "reasoning": "Brief explanation of the match"
}}

Focus on:
1. Direct skill matches (highest weight)
2. Relevant experience and projects
3. Education and certifications
4. Keywords from job description appearing in resume
5. Years of experience alignment

Be precise and realistic with scoring."""


def build_match_prompt(job: JobInfo, resume_text: str) -> str:
    return MATCH_PROMPT.format(
        resume=resume_text,
        title=job.title,
        company=job.company,
        description=job.description or NOT_SPECIFIED,
        skills=", ".join(job.skills) if job.skills else NOT_SPECIFIED,
        location=job.location or NOT_SPECIFIED,
        job_type=job.job_type or NOT_SPECIFIED,
    )


def _round_half_up(value: Any) -> int:
    if isinstance(value, bool):
        raise ScoringFailure(f"score is not numeric: {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ScoringFailure(f"score is not numeric: {value!r}") from e
    if not math.isfinite(number):
        raise ScoringFailure(f"score is not finite: {value!r}")
    return int(math.floor(number + 0.5))


def _str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if v is not None]


def parse_match_output(text: str) -> JobMatchResult:
    """解析模型输出；无 JSON、JSON 不合法或缺少数值 score 时抛 ScoringFailure。"""
    try:
        data = extract_json_object(text)
    except ValueError as e:
        raise ScoringFailure(f"invalid match output: {e}") from e
    if "score" not in data:
        raise ScoringFailure("match output has no score")
    reasoning = data.get("reasoning")
    return JobMatchResult(
        score=_round_half_up(data["score"]),
        matching_skills=_str_list(data.get("matchingSkills")),
        relevant_experience=_str_list(data.get("relevantExperience")),
        keyword_alignment=_str_list(data.get("keywordAlignment")),
        reasoning=reasoning if isinstance(reasoning, str) else "",
    )


def fallback_match(job: JobInfo, resume_text: str) -> JobMatchResult:
    """
    关键词回退：职位每个技能在简历中出现（不区分大小写子串）+15，职位名称出现 +20，总分封顶 100。
    同样输入永远得到同样结果。
    """
    resume_lower = (resume_text or "").lower()
    score = 0
    matching_skills: list[str] = []
    for skill in job.skills:
        if skill and skill.lower() in resume_lower:
            score += SKILL_POINTS
            matching_skills.append(skill)
    if job.title and job.title.lower() in resume_lower:
        score += TITLE_POINTS
    return JobMatchResult(
        score=min(score, 100),
        matching_skills=matching_skills,
        relevant_experience=[],
        keyword_alignment=[],
        reasoning=FALLBACK_REASONING,
    )


class JobMatchScorer:
    """单条（职位, 简历）打分：LLM 主路径 + 关键词回退。"""

    def __init__(self, llm: CompletionService | None = None, temperature: float | None = None):
        self.llm = llm or get_completion_service()
        self.temperature = temperature if temperature is not None else match_temperature()

    async def score(self, job: JobInfo, resume_text: str) -> JobMatchResult:
        resume = truncate_to_tokens(resume_text or "", resume_token_budget(), get_default_model())
        try:
            text = await self.llm.complete(
                build_match_prompt(job, resume),
                json_mode=True,
                temperature=self.temperature,
            )
            return parse_match_output(text)
        except Exception as e:
            log.warning("Scoring %s (%s) failed, using keyword fallback: %s", job.id, job.title, e)
            return fallback_match(job, resume_text)

#!/usr/bin/env python3
"""
用本地简历文本跑完整职位列表流水线：职位源 → 筛选 → 并发打分 → 排序 → 打印 Best Matches 与 Top N。
用法: python scripts/rank_jobs_with_resume.py [简历 .txt/.md 路径] [--top N] [--filter jobType=full-time ...]
未配置 API Key（或 JOBDESK_USE_LLM=false）时全部走关键词回退打分。
"""
import argparse
import asyncio
import sys
from pathlib import Path

SAMPLE_RESUME = (
    "Frontend engineer with 5 years of React, TypeScript and Node.js. "
    "Built design systems and payment dashboards; some AWS and Docker."
)


def parse_filters(pairs: list[str]) -> dict:
    filters = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            print(f"忽略无效筛选: {pair}（应为 key=value）")
            continue
        filters[key.strip()] = [s.strip() for s in value.split(",")] if key.strip() == "skills" else value.strip()
    return filters


def main():
    parser = argparse.ArgumentParser(description="简历 × 职位目录匹配（本地验证）")
    parser.add_argument("resume", nargs="?", default="", help="简历文本文件，缺省使用内置示例")
    parser.add_argument("--top", type=int, default=5, help="打印前 N 条")
    parser.add_argument("--filter", action="append", default=[], help="筛选条件 key=value，可重复")
    args = parser.parse_args()

    if args.resume:
        path = Path(args.resume)
        if not path.exists():
            print(f"文件不存在: {path}")
            sys.exit(1)
        resume_text = path.read_text(encoding="utf-8")
    else:
        resume_text = SAMPLE_RESUME
        print("未指定简历，使用内置示例\n")

    from jobdesk.core.config import use_llm
    from jobdesk.jobs import build_job_feed
    from jobdesk.jobs.sources import get_job_source

    if not use_llm():
        print("提示: 未配置 LLM，打分走关键词回退。可在 .env 中设置 ANTHROPIC_API_KEY（或 OPENAI_API_KEY）与 JOBDESK_DEFAULT_MODEL。\n")

    filters = parse_filters(args.filter)
    catalog = get_job_source().fetch_jobs()
    print(f"=== 职位目录: {len(catalog)} 条，筛选: {filters or '无'} ===\n")

    feed = asyncio.run(build_job_feed(catalog, filters, resume_text))

    print(f"筛选后: {feed.total} 条，Best Matches: {len(feed.best_matches)} 条\n")
    for i, job in enumerate(feed.jobs[: args.top], 1):
        details = job.match_details
        print(f"--- #{i} [{job.match_score}] {job.title} @ {job.company} ---")
        print(f"地点: {job.location or '-'} | {job.job_type or '-'} | {job.work_mode or '-'}")
        if details is not None:
            print(f"匹配技能: {details.matching_skills}")
            print(f"理由: {details.reasoning or '-'}")
        print()

    print("=== 完成 ===")


if __name__ == "__main__":
    main()

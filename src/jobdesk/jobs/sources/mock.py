"""Mock 职位源：按固定随机种子生成示例职位目录，无需外部 API，同一种子结果可复现。"""
import random
from datetime import datetime, timedelta, timezone

from jobdesk.jobs.schemas import JobInfo
from .base import JobSource

COMPANIES = [
    "Google", "Microsoft", "Amazon", "Meta", "Apple", "Netflix", "Spotify", "Uber", "Airbnb", "Stripe",
    "Shopify", "Adobe", "Salesforce", "Oracle", "IBM", "Intel", "NVIDIA", "Tesla", "Twitter", "LinkedIn",
]

ROLES = [
    ("Senior Frontend Developer", ["React", "TypeScript", "CSS", "JavaScript", "Redux"]),
    ("Backend Engineer", ["Node.js", "Python", "PostgreSQL", "MongoDB", "Redis"]),
    ("Full Stack Developer", ["React", "Node.js", "TypeScript", "PostgreSQL", "AWS"]),
    ("ML Engineer", ["Python", "PyTorch", "TensorFlow", "Scikit-learn", "Pandas"]),
    ("DevOps Engineer", ["Kubernetes", "Docker", "AWS", "Jenkins", "Terraform"]),
    ("Data Scientist", ["Python", "R", "SQL", "Machine Learning", "Statistics"]),
    ("Mobile Developer", ["React Native", "iOS", "Android", "Swift", "Kotlin"]),
    ("UI/UX Designer", ["Figma", "Adobe XD", "Sketch", "Prototyping", "User Research"]),
    ("Product Manager", ["Product Strategy", "Agile", "Analytics", "User Stories", "Roadmapping"]),
    ("QA Engineer", ["Selenium", "Jest", "Testing", "Automation", "Bug Tracking"]),
]

LOCATIONS = ["Bangalore", "Mumbai", "Delhi", "Hyderabad", "Pune", "Chennai", "Kolkata", "Remote", "Gurgaon", "Noida"]
JOB_TYPES = ["Full-time", "Part-time", "Contract", "Internship"]
WORK_MODES = ["Remote", "Hybrid", "On-site"]

DESCRIPTIONS = [
    "Join our innovative team to build cutting-edge solutions that impact millions of users worldwide. "
    "We are looking for passionate developers who love to solve complex problems.",
    "We are seeking a talented professional to help us scale our platform and deliver exceptional user "
    "experiences. Great opportunity for growth and learning.",
    "Be part of a dynamic startup environment where your contributions directly impact product success. "
    "Work with modern technologies and best practices.",
    "Looking for someone who can hit the ground running and contribute to our fast-paced development cycle. "
    "Competitive compensation and benefits.",
    "Excellent opportunity to work on challenging projects with a collaborative team. "
    "We value innovation, creativity, and continuous learning.",
]

DEFAULT_CATALOG_SIZE = 150


class MockJobSource(JobSource):
    """默认 150 条职位，发布时间分布在最近 30 天内。"""

    def __init__(self, seed: int = 42, size: int = DEFAULT_CATALOG_SIZE, now: datetime | None = None):
        self.seed = seed
        self.size = size
        self.now = now

    def fetch_jobs(self, limit: int = 200) -> list[JobInfo]:
        rng = random.Random(self.seed)
        now = self.now or datetime.now(timezone.utc)
        jobs: list[JobInfo] = []
        for i in range(min(limit, self.size)):
            title, skills = rng.choice(ROLES)
            company = rng.choice(COMPANIES)
            posted = now - timedelta(days=rng.randrange(30), hours=rng.randrange(24))
            low = 80 + rng.randrange(120)
            high = max(low + 10, 120 + rng.randrange(100))
            jobs.append(
                JobInfo(
                    id=f"job-{i + 1}",
                    title=title,
                    company=company,
                    location=rng.choice(LOCATIONS),
                    job_type=rng.choice(JOB_TYPES),
                    work_mode=rng.choice(WORK_MODES),
                    description=rng.choice(DESCRIPTIONS),
                    skills=list(skills),
                    posted_date=posted.isoformat(),
                    apply_url=f"https://careers.{company.lower().replace(' ', '')}.com/job/{i + 1}",
                    salary=f"${low}k - ${high}k",
                )
            )
        return jobs

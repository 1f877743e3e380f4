"""对话助理的 prompt 模板。"""

INTENT_PROMPT = """Classify the user's intent. User message: "{message}"

Return ONLY ONE of these intents as a single word:
- SEARCH (searching for specific jobs)
- FILTER (applying/changing filters)
- HELP (asking for help/information)
- CLEAR (clearing filters)
- GENERAL (general conversation)

Intent:"""

FILTER_PROMPT = """Extract job search filters from: "{message}"

Return ONLY valid JSON with these exact fields (use null if not mentioned):
{{
  "role": string or null,
  "skills": array of strings or null,
  "datePosted": "24h" or "week" or "month" or "any" or null,
  "jobType": "full-time" or "part-time" or "contract" or "internship" or null,
  "workMode": "remote" or "hybrid" or "on-site" or null,
  "location": string or null,
  "matchScore": "high" or "medium" or "all" or null
}}

Examples:
"Show me React developer jobs" -> {{"role": "React developer", "skills": ["React"], "datePosted": null, "jobType": null, "workMode": null, "location": null, "matchScore": null}}
"Remote frontend jobs" -> {{"role": "frontend", "skills": null, "datePosted": null, "jobType": null, "workMode": "remote", "location": null, "matchScore": null}}
"Only full-time roles in Bangalore" -> {{"role": null, "skills": null, "datePosted": null, "jobType": "full-time", "workMode": null, "location": "Bangalore", "matchScore": null}}

JSON:"""

BASE_SYSTEM_PROMPT = "You are a helpful AI assistant for a job tracking application. Be concise and friendly."

FILTER_CONFIRM_PROMPT = """

The user wants to {goal}.
Filters being applied: {filters}

Respond naturally confirming what filters you're applying. Be brief (1-2 sentences)."""

CLEAR_CONFIRM_PROMPT = """

Confirm that you're clearing all filters. Be brief."""

# HELP 意图的固定回复（不调 LLM），按关键词顺序匹配
HELP_APPLICATIONS = (
    'Your applications are in the "Applications" tab. '
    "Click \"Apply\" on any job, and I'll help you track it!"
)
HELP_RESUME = (
    "Go to your Profile (top right) to upload or update your resume. "
    "This helps me match jobs to your skills!"
)
HELP_MATCH = (
    "Match scores show how well jobs fit your resume. "
    "Green (>70%) = Great match, Yellow (40-70%) = Good match, Gray (<40%) = Lower match."
)
HELP_DEFAULT = (
    'I can help you search jobs, apply filters, or answer questions. '
    'Try: "Show me React jobs" or "Remote roles only"!'
)

# 生成结果为空时的兜底回复
EMPTY_RESPONSE_FALLBACK = "I can help you find jobs! Try asking me to search or filter jobs."

# 整轮失败时的固定致歉
APOLOGY = "Sorry, I encountered an error. Please try again."

"""
Prompt templates for scoring, cover letters and job extraction.

Each template asks for a fixed output shape; the scoring and extraction ones
demand bare JSON so ``services.extraction`` can pick it out of the reply.
"""
from jobbot.models.job import Job
from jobbot.schemas.settings import CandidateProfile


def _or(value, fallback: str) -> str:
    if value is None or value == "" or value == []:
        return fallback
    return str(value)


def _joined(values: list[str], fallback: str) -> str:
    return ", ".join(values) if values else fallback


def _money(amount: int | None, fallback: str) -> str:
    return f"${amount:,}" if amount else fallback


def _salary_range(job: Job) -> str:
    if not (job.salary_min or job.salary_max):
        return "Not specified"
    low = (job.salary_min or 0) / 1000
    high = (job.salary_max or 0) / 1000
    return f"${low:.0f}k - ${high:.0f}k"


def build_match_prompt(profile: CandidateProfile, job: Job) -> str:
    return f"""You are an expert job match analyst. Evaluate how well this job fits the candidate and return a JSON object.

CANDIDATE PROFILE:
Name: {_or(profile.name, "Not set")}
Target Title: {_or(profile.target_title, "Product Manager")}
Years of Experience: {_or(profile.years_experience, "Not specified")}
Location: {_or(profile.location, "Not specified")}
Remote Preference: {_or(profile.remote_preference, "any")}
Target Salary: {_money(profile.target_salary, "Not specified")}
Target Industries: {_joined(profile.target_industries, "Not specified")}
Key Skills: {_joined(profile.skills, "Not specified")}
Background: {_or(profile.background, "Not provided")}

JOB POSTING:
Title: {job.title}
Company: {job.company}
Location: {_or(job.location, "Not specified")}
Remote: {"Yes" if job.remote else "No"}
Salary: {_salary_range(job)}
Description: {_or(job.description, "Not provided")}
Requirements: {_or(job.requirements, "Not provided")}

Return ONLY a valid JSON object (no markdown, no explanation) with this exact structure:
{{
  "match_quality": "perfect" | "wider_net" | "no_match",
  "match_confidence": <integer 0-100>,
  "match_reasoning": "<detailed markdown analysis with ## sections>"
}}

Definitions:
- "perfect": Direct match: correct title, experience level, industry, and compensation range
- "wider_net": Related but not ideal: slightly different title, minor over/under qualification, or secondary industry
- "no_match": Clearly unsuitable: wrong field, extreme level mismatch, or deal-breaking requirements

In match_reasoning, use markdown with sections like:
## Strengths
## Concerns
## Overall Assessment"""


def build_cover_letter_prompt(profile: CandidateProfile, job: Job) -> str:
    location = _or(job.location, "")
    if job.remote:
        location = f"{location} (Remote)".strip()

    return f"""You are an expert cover letter writer specialising in product management roles. Write a compelling, tailored cover letter for the following job application.

CANDIDATE PROFILE:
Name: {_or(profile.name, "The Candidate")}
Target Title: {_or(profile.target_title, "Product Manager")}
Years of Experience: {_or(profile.years_experience, "several years")}
Location: {_or(profile.location, "")}
Target Salary: {_money(profile.target_salary, "competitive")}
Key Skills: {_joined(profile.skills, "")}
Background: {_or(profile.background, "Experienced product manager")}

JOB TO APPLY FOR:
Title: {job.title}
Company: {job.company}
Location: {location}
Description: {_or(job.description, "")}
Requirements: {_or(job.requirements, "")}

Write a professional cover letter that:
1. Opens with a strong, specific hook that references the company and role
2. Highlights 2-3 of the candidate's most relevant achievements or skills for this specific job
3. Shows genuine interest in and knowledge of the company/role
4. Closes with a confident call to action
5. Keeps a warm, professional tone, not overly formal or stuffy
6. Is 3-4 paragraphs, approximately 300-400 words

Format the letter in markdown. Start directly with "Dear Hiring Manager," (no subject line or date).
Do not include a signature block; end after the closing paragraph."""


def build_page_extraction_prompt(page_text: str) -> str:
    return f"""Extract job posting details from the following web page text and return a JSON object.

PAGE TEXT:
{page_text}

Return ONLY a valid JSON object (no markdown, no extra text) with this structure:
{{
  "title": "<job title>",
  "company": "<company name>",
  "location": "<city, state or country, or null>",
  "remote": <true | false>,
  "description": "<full job description in markdown>",
  "requirements": "<requirements / qualifications section in markdown, or null>",
  "salary_min": <annual USD integer or null>,
  "salary_max": <annual USD integer or null>
}}

Rules:
- If salary is hourly, convert to annual (x2080)
- If no salary is mentioned, use null for both salary fields
- location should be null if fully remote with no base location
- description should be comprehensive: include responsibilities, about the company, benefits etc.
- requirements should include education, experience, skills requirements"""


def build_feed_extraction_prompt(feed_text: str, feed_url: str) -> str:
    return f"""Parse this RSS/XML job feed and extract all job listings. Return ONLY a valid JSON array (no markdown, no explanation).

FEED URL: {feed_url}
FEED CONTENT:
{feed_text}

Return a JSON array where each element has:
{{
  "title": "<job title>",
  "company": "<company name or infer from feed if possible>",
  "url": "<direct link to job posting>",
  "location": "<city/state/country or null if fully remote>",
  "remote": <true | false>,
  "description": "<job description in plain text, max 1000 chars>",
  "requirements": "<requirements section in plain text, or null>",
  "salary_min": <annual USD integer or null>,
  "salary_max": <annual USD integer or null>
}}

Rules:
- Only include product management, product owner, or closely related roles
- Skip engineering, design, sales, or unrelated roles
- If salary is hourly, multiply by 2080 for annual
- If the feed only lists job titles with links and no description, that's fine; use null for missing fields
- Return an empty array [] if no relevant jobs are found"""

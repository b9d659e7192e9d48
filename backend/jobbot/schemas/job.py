from pydantic import BaseModel, Field, field_validator


class JobCreate(BaseModel):
    title: str
    company: str
    url: str
    location: str | None = None
    remote: bool = False
    salary_min: int | None = Field(None, ge=0, lt=2**63)
    salary_max: int | None = Field(None, ge=0, lt=2**63)
    description: str | None = None
    requirements: str | None = None
    source: str = "manual"

    @field_validator("salary_min", "salary_max", mode="before")
    @classmethod
    def _blank_salary(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class JobStatusUpdate(BaseModel):
    status: str


class JobSummary(BaseModel):
    id: str
    title: str
    company: str
    location: str | None
    remote: bool
    url: str
    salary_min: int | None
    salary_max: int | None
    source: str
    match_quality: str | None
    match_confidence: int | None
    status: str
    discovered_date: str


class JobResponse(JobSummary):
    company_id: str | None
    description: str | None
    requirements: str | None
    match_reasoning: str | None
    match_reasoning_html: str | None = None
    fingerprint: str | None

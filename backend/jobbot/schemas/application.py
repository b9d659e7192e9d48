from pydantic import BaseModel, Field


class ApplyRequest(BaseModel):
    notes: str | None = None
    submission_method: str | None = None


class ApplicationUpdate(BaseModel):
    status: str | None = None
    user_rating: int | None = Field(None, ge=1, le=5)
    user_notes: str | None = None
    failure_reason: str | None = None


class ApplicationJob(BaseModel):
    id: str
    title: str
    company: str
    location: str | None
    url: str


class ApplicationResponse(BaseModel):
    id: str
    job_id: str
    cover_letter_id: str | None
    status: str
    application_type: str
    submission_method: str | None
    failure_reason: str | None
    retry_count: int
    user_rating: int | None
    user_notes: str | None
    application_date: str
    job: ApplicationJob | None = None

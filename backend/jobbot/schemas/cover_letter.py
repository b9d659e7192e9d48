from typing import Any

from pydantic import BaseModel


class CoverLetterResponse(BaseModel):
    id: str
    job_id: str
    content: str
    content_html: str
    template_used: str | None
    customization_notes: dict[str, Any] | None
    created_at: str
    job_title: str | None = None
    company: str | None = None

from pydantic import BaseModel


class CompanyCreate(BaseModel):
    name: str
    website: str | None = None


class CompanyResponse(BaseModel):
    id: str
    name: str
    website: str | None
    created_at: str
    job_count: int = 0

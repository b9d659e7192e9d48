from pydantic import BaseModel


class ImportUrlRequest(BaseModel):
    url: str = ""


class DiscoveryResponse(BaseModel):
    feeds_processed: int
    new_jobs: int
    duplicates_skipped: int
    total_cost: float = 0.0
    errors: list[str] | None = None


class ScoredJob(BaseModel):
    id: str
    match_quality: str
    match_confidence: int


class BatchAnalysisResponse(BaseModel):
    analyzed: int
    remaining: int
    total_cost: float
    failed: int = 0
    results: list[ScoredJob] = []
    message: str | None = None


class PendingAnalysisResponse(BaseModel):
    unanalyzed: int

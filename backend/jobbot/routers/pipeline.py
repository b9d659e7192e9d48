from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobbot.database import get_db
from jobbot.dependencies import (
    get_completion_client,
    get_feed_fetcher,
    get_page_fetcher,
    get_settings_repo,
)
from jobbot.routers.jobs import _get_job_or_404, _job_to_response
from jobbot.schemas.job import JobResponse
from jobbot.schemas.pipeline import (
    BatchAnalysisResponse,
    DiscoveryResponse,
    ImportUrlRequest,
    PendingAnalysisResponse,
    ScoredJob,
)
from jobbot.services.completion import CompletionClient
from jobbot.services.fetcher import Fetcher
from jobbot.services.ingestion import discover_from_feeds, import_from_url
from jobbot.services.scoring import analyze_job, analyze_pending, count_pending
from jobbot.services.settings_service import BotSettingsRepository

router = APIRouter(prefix="/jobs", tags=["pipeline"])


# Plain ``def`` routes: fetches and completions block, so they run in the threadpool.

@router.post("/import-url", response_model=JobResponse, status_code=201)
def import_url(
    req: ImportUrlRequest,
    db: Session = Depends(get_db),
    fetcher: Fetcher = Depends(get_page_fetcher),
    completion: CompletionClient = Depends(get_completion_client),
):
    job = import_from_url(db, req.url, fetcher, completion)
    return _job_to_response(job)


@router.post("/discover", response_model=DiscoveryResponse, response_model_exclude_none=True)
def discover(
    db: Session = Depends(get_db),
    settings_repo: BotSettingsRepository = Depends(get_settings_repo),
    fetcher: Fetcher = Depends(get_feed_fetcher),
    completion: CompletionClient = Depends(get_completion_client),
):
    summary = discover_from_feeds(db, settings_repo, fetcher, completion)
    return DiscoveryResponse(
        feeds_processed=summary.feeds_processed,
        new_jobs=summary.new_jobs,
        duplicates_skipped=summary.duplicates_skipped,
        total_cost=round(summary.total_cost, 4),
        errors=summary.errors or None,
    )


@router.get("/analyze-all", response_model=PendingAnalysisResponse)
async def pending_analysis(db: Session = Depends(get_db)):
    return PendingAnalysisResponse(unanalyzed=count_pending(db))


@router.post("/analyze-all", response_model=BatchAnalysisResponse, response_model_exclude_none=True)
def analyze_all(
    db: Session = Depends(get_db),
    settings_repo: BotSettingsRepository = Depends(get_settings_repo),
    completion: CompletionClient = Depends(get_completion_client),
):
    summary = analyze_pending(db, settings_repo, completion)
    if not summary.results and not summary.failed:
        return BatchAnalysisResponse(
            analyzed=0, remaining=0, total_cost=0, message="All jobs already analysed"
        )
    return BatchAnalysisResponse(
        analyzed=summary.analyzed,
        remaining=summary.remaining,
        total_cost=summary.total_cost,
        failed=summary.failed,
        results=[
            ScoredJob(
                id=r.job.id,
                match_quality=r.analysis.match_quality,
                match_confidence=r.analysis.match_confidence,
            )
            for r in summary.results
        ],
    )


@router.post("/{job_id}/analyze", response_model=JobResponse)
def analyze_one(
    job_id: str,
    db: Session = Depends(get_db),
    settings_repo: BotSettingsRepository = Depends(get_settings_repo),
    completion: CompletionClient = Depends(get_completion_client),
):
    job = _get_job_or_404(db, job_id)
    result = analyze_job(db, job, settings_repo.get_user_profile(), completion)
    return _job_to_response(result.job)

"""
LLM match scoring of jobs against the stored candidate profile.
"""
import logging
from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from jobbot.config import settings
from jobbot.errors import PersistenceError
from jobbot.models.job import NEWEST_FIRST, Job
from jobbot.schemas.extraction import MatchAnalysis
from jobbot.schemas.settings import CandidateProfile
from jobbot.services.batch import best_effort_map
from jobbot.services.completion import CompletionClient
from jobbot.services.extraction import extract_json_object
from jobbot.services.prompts import build_match_prompt
from jobbot.services.settings_service import BotSettingsRepository
from jobbot.services.usage_service import record_usage

logger = logging.getLogger(__name__)


@dataclass
class ScoreResult:
    job: Job
    analysis: MatchAnalysis
    cost: float


@dataclass
class BatchScoreSummary:
    analyzed: int = 0
    remaining: int = 0
    total_cost: float = 0.0
    failed: int = 0
    results: list[ScoreResult] = field(default_factory=list)


def analyze_job(db: Session, job: Job, profile: CandidateProfile, completion: CompletionClient) -> ScoreResult:
    reply = completion.complete(build_match_prompt(profile, job), settings.scoring_max_tokens)
    analysis = MatchAnalysis.model_validate(extract_json_object(reply.text))

    job.match_quality = analysis.match_quality
    job.match_confidence = analysis.match_confidence
    job.match_reasoning = analysis.match_reasoning
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise PersistenceError(f"Could not save match analysis: {exc}") from exc
    db.refresh(job)

    record_usage(db, "job_scoring", reply, job_id=job.id)
    logger.info(
        "Scored %s as %s (%d%%)", job.id, analysis.match_quality, analysis.match_confidence
    )
    return ScoreResult(job=job, analysis=analysis, cost=reply.cost)


def count_pending(db: Session) -> int:
    return db.query(Job).filter(Job.match_quality.is_(None)).count()


def analyze_pending(
    db: Session,
    settings_repo: BotSettingsRepository,
    completion: CompletionClient,
    batch_size: int | None = None,
) -> BatchScoreSummary:
    jobs = (
        db.query(Job)
        .filter(Job.match_quality.is_(None))
        .order_by(*NEWEST_FIRST)
        .limit(batch_size or settings.analyze_batch_size)
        .all()
    )
    if not jobs:
        return BatchScoreSummary()

    profile = settings_repo.get_user_profile()
    outcome = best_effort_map(
        jobs,
        lambda job: analyze_job(db, job, profile, completion),
        label=lambda job: f"job {job.id}",
        on_failure=lambda _job, _exc: db.rollback(),
    )

    summary = BatchScoreSummary(
        analyzed=len(outcome.succeeded),
        remaining=count_pending(db),
        total_cost=round(sum(r.cost for r in outcome.succeeded), 4),
        failed=len(outcome.failed),
        results=outcome.succeeded,
    )
    logger.info(
        "Batch scoring: %d analyzed, %d failed, %d remaining",
        summary.analyzed,
        summary.failed,
        summary.remaining,
    )
    return summary

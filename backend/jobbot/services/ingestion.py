"""
Job ingestion: single-URL import and batch discovery from RSS feeds.

Both paths run fetch -> sanitize -> prompt -> completion -> parse -> dedup ->
persist. URL import stops at the first error; feed discovery isolates each
feed so one failing source never aborts the others.
"""
import logging
from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from jobbot.config import settings
from jobbot.errors import (
    ConfigurationError,
    DuplicateError,
    ExtractionError,
    IncompleteExtractionError,
    JobBotError,
    TooShortError,
    TransportError,
    ValidationError,
)
from jobbot.models.job import Job
from jobbot.schemas.extraction import ExtractedJob
from jobbot.services.batch import best_effort_map
from jobbot.services.completion import CompletionClient
from jobbot.services.extraction import extract_json_array, extract_json_object
from jobbot.services.fetcher import Fetcher
from jobbot.services.job_service import find_job_by_url, insert_job
from jobbot.services.prompts import build_feed_extraction_prompt, build_page_extraction_prompt
from jobbot.services.sanitizer import sanitize_feed, sanitize_page
from jobbot.services.settings_service import BotSettingsRepository
from jobbot.services.usage_service import record_usage

logger = logging.getLogger(__name__)


@dataclass
class FeedResult:
    new_jobs: int = 0
    duplicates_skipped: int = 0
    cost: float = 0.0


@dataclass
class DiscoverySummary:
    feeds_processed: int = 0
    new_jobs: int = 0
    duplicates_skipped: int = 0
    total_cost: float = 0.0
    errors: list[str] = field(default_factory=list)


def _job_fields(extracted: ExtractedJob) -> dict:
    return {
        "title": extracted.title,
        "company": extracted.company or "Unknown",
        "location": extracted.location,
        "remote": extracted.remote,
        "description": extracted.description,
        "requirements": extracted.requirements,
        "salary_min": extracted.salary_min,
        "salary_max": extracted.salary_max,
    }


def import_from_url(db: Session, url: str, fetcher: Fetcher, completion: CompletionClient) -> Job:
    url = (url or "").strip()
    if not url.startswith("http"):
        raise ValidationError("A valid URL is required")

    existing = find_job_by_url(db, url)
    if existing:
        raise DuplicateError("This job URL has already been imported", job_id=existing.id)

    try:
        html = fetcher.fetch(url)
    except TransportError as exc:
        raise exc.__class__(
            f"Could not fetch the URL: {exc}", upstream_status=exc.upstream_status
        ) from exc

    page_text = sanitize_page(html)
    if len(page_text) < settings.min_page_chars:
        raise TooShortError("Page content too short, the site may be blocking automated access")

    reply = completion.complete(build_page_extraction_prompt(page_text), settings.url_import_max_tokens)
    extracted = ExtractedJob.model_validate(extract_json_object(reply.text))
    if not extracted.title or not extracted.company:
        raise IncompleteExtractionError("Could not identify job title or company from the page")

    job = insert_job(
        db,
        url=url,
        source="url_import",
        status="discovered",
        fingerprint=url,
        **_job_fields(extracted),
    )
    record_usage(db, "url_import", reply, job_id=job.id)
    logger.info("Imported %r at %s from %s", job.title, job.company, url)
    return job


def _ingest_feed(db: Session, feed_url: str, fetcher: Fetcher, completion: CompletionClient) -> FeedResult:
    feed_text = sanitize_feed(fetcher.fetch(feed_url))
    reply = completion.complete(
        build_feed_extraction_prompt(feed_text, feed_url), settings.feed_max_tokens
    )
    record_usage(db, "feed_discovery", reply)
    result = FeedResult(cost=reply.cost)

    try:
        items = extract_json_array(reply.text)
    except ExtractionError as exc:
        # An unparseable reply means "no jobs", not a failed feed.
        logger.warning("No jobs parsed from %s: %s", feed_url, exc)
        items = []

    for item in items:
        if not isinstance(item, dict):
            continue
        try:
            candidate = ExtractedJob.model_validate(item)
            if not candidate.url or not candidate.title:
                continue
            if find_job_by_url(db, candidate.url):
                result.duplicates_skipped += 1
                continue
            insert_job(db, url=candidate.url, source="rss", **_job_fields(candidate))
        except DuplicateError:
            result.duplicates_skipped += 1
            continue
        except (JobBotError, SQLAlchemyError, OverflowError) as exc:
            # One unsavable item is skipped; the rest of the feed still counts.
            db.rollback()
            logger.warning("Skipping item %r from %s: %s", item.get("url"), feed_url, exc)
            continue
        result.new_jobs += 1

    logger.info(
        "Feed %s: %d new, %d duplicates", feed_url, result.new_jobs, result.duplicates_skipped
    )
    return result


def discover_from_feeds(
    db: Session,
    settings_repo: BotSettingsRepository,
    fetcher: Fetcher,
    completion: CompletionClient,
) -> DiscoverySummary:
    feed_urls = settings_repo.get_feed_urls()
    if not feed_urls:
        raise ConfigurationError("No RSS feed URLs configured. Add them in Settings.")

    outcome = best_effort_map(
        feed_urls,
        lambda feed_url: _ingest_feed(db, feed_url, fetcher, completion),
        on_failure=lambda _feed_url, _exc: db.rollback(),
    )

    summary = DiscoverySummary(
        feeds_processed=len(outcome.succeeded),
        new_jobs=sum(r.new_jobs for r in outcome.succeeded),
        duplicates_skipped=sum(r.duplicates_skipped for r in outcome.succeeded),
        total_cost=sum(r.cost for r in outcome.succeeded),
        errors=[failure.message for failure in outcome.failed],
    )
    logger.info(
        "Discovery finished: %d/%d feeds, %d new jobs, %d duplicates, %d errors",
        summary.feeds_processed,
        len(feed_urls),
        summary.new_jobs,
        summary.duplicates_skipped,
        len(summary.errors),
    )
    return summary

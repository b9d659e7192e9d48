import uuid
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from jobbot.errors import DuplicateError, PersistenceError
from jobbot.models.job import Job


def find_job_by_url(db: Session, url: str) -> Job | None:
    return db.query(Job).filter(Job.url == url).first()


def insert_job(db: Session, **fields) -> Job:
    """
    Insert a new job. The unique constraint on ``jobs.url`` is the final word
    on duplicates; a violation comes back as DuplicateError.
    """
    now = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    fields.setdefault("status", "discovered")
    fields.setdefault("fingerprint", fields.get("url"))
    job = Job(id=str(uuid.uuid4()), discovered_date=now, **fields)
    db.add(job)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        existing = find_job_by_url(db, fields.get("url"))
        if existing is None:
            raise PersistenceError(f"Could not save job: {exc.orig}") from exc
        raise DuplicateError("A job with this URL already exists", job_id=existing.id) from exc
    except (SQLAlchemyError, OverflowError) as exc:
        db.rollback()
        raise PersistenceError(f"Could not save job: {exc}") from exc
    db.refresh(job)
    return job

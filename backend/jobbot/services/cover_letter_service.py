import uuid
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from jobbot.config import settings
from jobbot.errors import CompletionError
from jobbot.models.cover_letter import CoverLetter
from jobbot.models.job import Job
from jobbot.schemas.settings import CandidateProfile
from jobbot.services.completion import CompletionClient
from jobbot.services.prompts import build_cover_letter_prompt
from jobbot.services.usage_service import record_usage


def generate_cover_letter(
    db: Session, job: Job, profile: CandidateProfile, completion: CompletionClient
) -> CoverLetter:
    reply = completion.complete(build_cover_letter_prompt(profile, job), settings.cover_letter_max_tokens)
    content = reply.text.strip()
    if not content:
        raise CompletionError("Empty response from AI")

    # One current letter per job: replace rather than version.
    db.query(CoverLetter).filter(CoverLetter.job_id == job.id).delete()

    now = datetime.now(timezone.utc)
    letter = CoverLetter(
        id=str(uuid.uuid4()),
        job_id=job.id,
        content=content,
        template_used=reply.model,
        customization_notes={
            "generated_at": now.isoformat(),
            "model": reply.model,
        },
        created_at=now.strftime("%Y-%m-%dT%H:%M:%SZ"),
    )
    db.add(letter)
    db.commit()
    db.refresh(letter)

    record_usage(db, "cover_letter_generation", reply, job_id=job.id)
    return letter


def latest_cover_letter(db: Session, job_id: str) -> CoverLetter | None:
    return (
        db.query(CoverLetter)
        .filter(CoverLetter.job_id == job_id)
        .order_by(CoverLetter.created_at.desc())
        .first()
    )

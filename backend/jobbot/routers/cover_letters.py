from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobbot.database import get_db
from jobbot.dependencies import get_completion_client, get_settings_repo
from jobbot.models.cover_letter import CoverLetter
from jobbot.routers.jobs import _get_job_or_404
from jobbot.schemas.cover_letter import CoverLetterResponse
from jobbot.services.completion import CompletionClient
from jobbot.services.cover_letter_service import generate_cover_letter, latest_cover_letter
from jobbot.services.markdown import render_html
from jobbot.services.settings_service import BotSettingsRepository

router = APIRouter(tags=["cover-letters"])


def _letter_to_response(letter: CoverLetter) -> CoverLetterResponse:
    job = letter.job
    return CoverLetterResponse(
        id=letter.id,
        job_id=letter.job_id,
        content=letter.content,
        content_html=render_html(letter.content),
        template_used=letter.template_used,
        customization_notes=letter.customization_notes,
        created_at=letter.created_at,
        job_title=job.title if job else None,
        company=job.company if job else None,
    )


@router.post("/jobs/{job_id}/cover-letter", response_model=CoverLetterResponse, status_code=201)
def create_cover_letter(
    job_id: str,
    db: Session = Depends(get_db),
    settings_repo: BotSettingsRepository = Depends(get_settings_repo),
    completion: CompletionClient = Depends(get_completion_client),
):
    job = _get_job_or_404(db, job_id)
    letter = generate_cover_letter(db, job, settings_repo.get_user_profile(), completion)
    return _letter_to_response(letter)


@router.get("/jobs/{job_id}/cover-letter", response_model=CoverLetterResponse | None)
async def get_cover_letter(job_id: str, db: Session = Depends(get_db)):
    _get_job_or_404(db, job_id)
    letter = latest_cover_letter(db, job_id)
    return _letter_to_response(letter) if letter else None


@router.get("/cover-letters", response_model=list[CoverLetterResponse])
async def list_cover_letters(db: Session = Depends(get_db)):
    letters = db.query(CoverLetter).order_by(CoverLetter.created_at.desc()).all()
    return [_letter_to_response(letter) for letter in letters]

import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from jobbot.database import get_db
from jobbot.models.application import APPLICATION_STATUSES, Application
from jobbot.routers.jobs import _get_job_or_404
from jobbot.schemas.application import (
    ApplicationJob,
    ApplicationResponse,
    ApplicationUpdate,
    ApplyRequest,
)
from jobbot.services.cover_letter_service import latest_cover_letter

router = APIRouter(tags=["applications"])


def _app_to_response(application: Application) -> ApplicationResponse:
    job = application.job
    return ApplicationResponse(
        id=application.id,
        job_id=application.job_id,
        cover_letter_id=application.cover_letter_id,
        status=application.status,
        application_type=application.application_type,
        submission_method=application.submission_method,
        failure_reason=application.failure_reason,
        retry_count=application.retry_count or 0,
        user_rating=application.user_rating,
        user_notes=application.user_notes,
        application_date=application.application_date,
        job=ApplicationJob(
            id=job.id,
            title=job.title,
            company=job.company,
            location=job.location,
            url=job.url,
        ) if job else None,
    )


@router.post("/jobs/{job_id}/apply", response_model=ApplicationResponse, status_code=201)
async def apply_to_job(job_id: str, req: ApplyRequest | None = None, db: Session = Depends(get_db)):
    """Record a manual application and mark the job as applied."""
    job = _get_job_or_404(db, job_id)
    req = req or ApplyRequest()
    letter = latest_cover_letter(db, job_id)

    application = Application(
        id=str(uuid.uuid4()),
        job_id=job.id,
        cover_letter_id=letter.id if letter else None,
        status="submitted",
        application_type="manual",
        submission_method=req.submission_method or "manual",
        user_notes=req.notes,
        retry_count=0,
        application_date=datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
    )
    db.add(application)
    job.status = "applied"
    db.commit()
    db.refresh(application)
    return _app_to_response(application)


@router.get("/applications", response_model=list[ApplicationResponse])
async def list_applications(status: str | None = None, db: Session = Depends(get_db)):
    query = db.query(Application)
    if status:
        query = query.filter(Application.status == status)
    applications = query.order_by(Application.application_date.desc()).all()
    return [_app_to_response(a) for a in applications]


@router.patch("/applications/{application_id}", response_model=ApplicationResponse)
async def update_application(
    application_id: str, req: ApplicationUpdate, db: Session = Depends(get_db)
):
    application = db.query(Application).filter(Application.id == application_id).first()
    if not application:
        raise HTTPException(status_code=404, detail="Application not found")

    if req.status is not None and req.status not in APPLICATION_STATUSES:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid status. Must be one of: {', '.join(APPLICATION_STATUSES)}",
        )

    for field, value in req.model_dump(exclude_unset=True).items():
        setattr(application, field, value)

    db.commit()
    db.refresh(application)
    return _app_to_response(application)

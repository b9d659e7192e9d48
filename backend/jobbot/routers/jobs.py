from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func
from sqlalchemy.orm import Session

from jobbot.database import get_db
from jobbot.models.company import Company
from jobbot.models.job import JOB_SOURCES, JOB_STATUSES, NEWEST_FIRST, Job
from jobbot.schemas.job import JobCreate, JobResponse, JobStatusUpdate, JobSummary
from jobbot.services.job_service import insert_job
from jobbot.services.markdown import render_html

router = APIRouter(prefix="/jobs", tags=["jobs"])

_OPEN_STATUSES_EXCLUDED = ("applied", "skipped")


def _job_to_summary(job: Job) -> JobSummary:
    return JobSummary(
        id=job.id,
        title=job.title,
        company=job.company,
        location=job.location,
        remote=bool(job.remote),
        url=job.url,
        salary_min=job.salary_min,
        salary_max=job.salary_max,
        source=job.source,
        match_quality=job.match_quality,
        match_confidence=job.match_confidence,
        status=job.status,
        discovered_date=job.discovered_date,
    )


def _job_to_response(job: Job) -> JobResponse:
    return JobResponse(
        **_job_to_summary(job).model_dump(),
        company_id=job.company_id,
        description=job.description,
        requirements=job.requirements,
        match_reasoning=job.match_reasoning,
        match_reasoning_html=render_html(job.match_reasoning) or None,
        fingerprint=job.fingerprint,
    )


def _get_job_or_404(db: Session, job_id: str) -> Job:
    job = db.query(Job).filter(Job.id == job_id).first()
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


@router.get("", response_model=list[JobSummary])
async def list_jobs(
    filter: str = Query("all", pattern="^(all|perfect|wider|queued|applied|skipped)$"),
    q: str | None = None,
    limit: int = Query(60, ge=1, le=100),
    db: Session = Depends(get_db),
):
    query = db.query(Job)

    if filter == "perfect":
        query = query.filter(Job.match_quality == "perfect", Job.status.notin_(_OPEN_STATUSES_EXCLUDED))
    elif filter == "wider":
        query = query.filter(Job.match_quality == "wider_net", Job.status.notin_(_OPEN_STATUSES_EXCLUDED))
    elif filter in ("queued", "applied", "skipped"):
        query = query.filter(Job.status == filter)

    if q and q.strip():
        term = f"%{q.strip()}%"
        query = query.filter(Job.title.ilike(term) | Job.company.ilike(term))

    jobs = query.order_by(*NEWEST_FIRST).limit(limit).all()
    return [_job_to_summary(j) for j in jobs]


@router.post("", response_model=JobResponse, status_code=201)
async def create_job(req: JobCreate, db: Session = Depends(get_db)):
    title, company, url = req.title.strip(), req.company.strip(), req.url.strip()
    if not title or not company or not url:
        raise HTTPException(status_code=400, detail="title, company, and url are required")
    if req.source not in JOB_SOURCES:
        raise HTTPException(status_code=400, detail=f"Invalid source. Must be one of: {', '.join(JOB_SOURCES)}")

    company_row = db.query(Company).filter(func.lower(Company.name) == company.lower()).first()

    # A duplicate URL surfaces as DuplicateError (409 with the existing job_id).
    job = insert_job(
        db,
        title=title,
        company=company,
        company_id=company_row.id if company_row else None,
        url=url,
        location=(req.location or "").strip() or None,
        remote=req.remote,
        salary_min=req.salary_min,
        salary_max=req.salary_max,
        description=(req.description or "").strip() or None,
        requirements=(req.requirements or "").strip() or None,
        source=req.source,
        status="discovered",
    )
    return _job_to_response(job)


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: str, db: Session = Depends(get_db)):
    return _job_to_response(_get_job_or_404(db, job_id))


@router.patch("/{job_id}", response_model=JobResponse)
async def update_job_status(job_id: str, req: JobStatusUpdate, db: Session = Depends(get_db)):
    if req.status not in JOB_STATUSES:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid status. Must be one of: {', '.join(JOB_STATUSES)}",
        )
    job = _get_job_or_404(db, job_id)
    job.status = req.status
    db.commit()
    db.refresh(job)
    return _job_to_response(job)

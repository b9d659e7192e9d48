import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session

from jobbot.database import get_db
from jobbot.models.company import Company
from jobbot.models.job import Job
from jobbot.schemas.company import CompanyCreate, CompanyResponse

router = APIRouter(prefix="/companies", tags=["companies"])


@router.get("", response_model=list[CompanyResponse])
async def list_companies(db: Session = Depends(get_db)):
    rows = (
        db.query(Company, func.count(Job.id))
        .outerjoin(Job, Job.company_id == Company.id)
        .group_by(Company.id)
        .order_by(Company.name)
        .all()
    )
    return [
        CompanyResponse(
            id=c.id,
            name=c.name,
            website=c.website,
            created_at=c.created_at,
            job_count=count,
        )
        for c, count in rows
    ]


@router.post("", response_model=CompanyResponse, status_code=201)
async def create_company(req: CompanyCreate, db: Session = Depends(get_db)):
    name = req.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="name is required")

    existing = db.query(Company).filter(func.lower(Company.name) == name.lower()).first()
    if existing:
        raise HTTPException(status_code=409, detail="Company already exists")

    company = Company(
        id=str(uuid.uuid4()),
        name=name,
        website=(req.website or "").strip() or None,
        created_at=datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
    )
    db.add(company)
    db.commit()
    db.refresh(company)
    return CompanyResponse(
        id=company.id,
        name=company.name,
        website=company.website,
        created_at=company.created_at,
    )

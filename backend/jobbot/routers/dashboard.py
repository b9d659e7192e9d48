from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from jobbot.database import get_db
from jobbot.dependencies import get_settings_repo
from jobbot.models.ai_usage_log import AiUsageLog
from jobbot.models.application import Application
from jobbot.models.job import Job
from jobbot.services.settings_service import BotSettingsRepository

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

_TS = "%Y-%m-%dT%H:%M:%SZ"


def _period_starts(now: datetime) -> tuple[str, str]:
    # Weeks start on Monday.
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    week = today - timedelta(days=today.weekday())
    return today.strftime(_TS), week.strftime(_TS)


@router.get("/stats")
async def get_stats(
    db: Session = Depends(get_db),
    settings_repo: BotSettingsRepository = Depends(get_settings_repo),
):
    today_start, week_start = _period_starts(datetime.now(timezone.utc))

    def applications_since(start: str) -> int:
        return db.query(Application).filter(Application.application_date >= start).count()

    recent = (
        db.query(Application)
        .order_by(Application.application_date.desc())
        .limit(5)
        .all()
    )
    ai_spend = db.query(func.coalesce(func.sum(AiUsageLog.cost), 0.0)).scalar()

    return {
        "today_count": applications_since(today_start),
        "week_count": applications_since(week_start),
        "total_submitted": db.query(Application).filter(Application.status == "submitted").count(),
        "queued_jobs": db.query(Job).filter(Job.status == "queued").count(),
        "perfect_match_jobs": db.query(Job)
        .filter(Job.match_quality == "perfect", Job.status == "discovered")
        .count(),
        "daily_quota": settings_repo.get_daily_quota().total,
        "bot_enabled": settings_repo.is_bot_enabled(),
        "ai_spend_total": round(ai_spend or 0.0, 4),
        "recent_applications": [
            {
                "id": a.id,
                "status": a.status,
                "application_date": a.application_date,
                "application_type": a.application_type,
                "job": {
                    "title": a.job.title,
                    "company": a.job.company,
                    "location": a.job.location,
                } if a.job else None,
            }
            for a in recent
        ],
    }

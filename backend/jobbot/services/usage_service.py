import uuid
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from jobbot.models.ai_usage_log import AiUsageLog
from jobbot.services.completion import Completion


def record_usage(
    db: Session,
    operation: str,
    completion: Completion,
    job_id: str | None = None,
    application_id: str | None = None,
) -> AiUsageLog:
    """Append one row to the usage ledger. Rows are never updated afterwards."""
    now = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    log = AiUsageLog(
        id=str(uuid.uuid4()),
        job_id=job_id,
        application_id=application_id,
        operation=operation,
        model=completion.model,
        input_tokens=completion.input_tokens,
        output_tokens=completion.output_tokens,
        cost=completion.cost,
        created_at=now,
    )
    db.add(log)
    db.commit()
    return log

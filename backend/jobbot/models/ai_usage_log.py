from sqlalchemy import Column, Float, ForeignKey, Integer, Text
from jobbot.database import Base


class AiUsageLog(Base):
    __tablename__ = "ai_usage_logs"

    id = Column(Text, primary_key=True)
    job_id = Column(Text, ForeignKey("jobs.id", ondelete="SET NULL"))
    application_id = Column(Text, ForeignKey("applications.id", ondelete="SET NULL"))
    operation = Column(Text, nullable=False)
    model = Column(Text, nullable=False)
    input_tokens = Column(Integer, nullable=False)
    output_tokens = Column(Integer, nullable=False)
    cost = Column(Float, nullable=False)
    created_at = Column(Text, nullable=False)

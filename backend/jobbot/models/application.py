from sqlalchemy import Column, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from jobbot.database import Base

APPLICATION_STATUSES = ("pending", "processing", "submitted", "failed", "manual_review")
APPLICATION_TYPES = ("automated", "ad_hoc", "manual")


class Application(Base):
    __tablename__ = "applications"

    id = Column(Text, primary_key=True)
    job_id = Column(Text, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False)
    cover_letter_id = Column(Text, ForeignKey("cover_letters.id", ondelete="SET NULL"))
    status = Column(Text, nullable=False, default="pending")
    application_type = Column(Text, nullable=False, default="manual")
    submission_method = Column(Text)
    failure_reason = Column(Text)
    retry_count = Column(Integer, nullable=False, default=0)
    user_rating = Column(Integer)
    user_notes = Column(Text)
    application_date = Column(Text, nullable=False)

    job = relationship("Job", back_populates="applications")

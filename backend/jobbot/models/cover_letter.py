from sqlalchemy import JSON, Column, ForeignKey, Text
from sqlalchemy.orm import relationship
from jobbot.database import Base


class CoverLetter(Base):
    __tablename__ = "cover_letters"

    id = Column(Text, primary_key=True)
    job_id = Column(Text, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False)
    template_used = Column(Text)
    customization_notes = Column(JSON)
    created_at = Column(Text, nullable=False)

    job = relationship("Job", back_populates="cover_letters")

from sqlalchemy import Boolean, Column, ForeignKey, Integer, Text, literal_column
from sqlalchemy.orm import relationship
from jobbot.database import Base

JOB_SOURCES = ("manual", "rss", "url_import")
JOB_STATUSES = ("discovered", "queued", "applied", "skipped")
MATCH_QUALITIES = ("perfect", "wider_net", "no_match")


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Text, primary_key=True)
    title = Column(Text, nullable=False)
    company = Column(Text, nullable=False)
    company_id = Column(Text, ForeignKey("companies.id", ondelete="SET NULL"))
    location = Column(Text)
    remote = Column(Boolean, nullable=False, default=False)
    url = Column(Text, nullable=False, unique=True)
    description = Column(Text)
    requirements = Column(Text)
    salary_min = Column(Integer)
    salary_max = Column(Integer)
    source = Column(Text, nullable=False, default="manual")
    status = Column(Text, nullable=False, default="discovered")
    match_quality = Column(Text)
    match_confidence = Column(Integer)
    match_reasoning = Column(Text)
    fingerprint = Column(Text)
    discovered_date = Column(Text, nullable=False)

    company_ref = relationship("Company", back_populates="jobs")
    cover_letters = relationship("CoverLetter", back_populates="job", cascade="all, delete-orphan")
    applications = relationship("Application", back_populates="job", cascade="all, delete-orphan")


# discovered_date has one-second resolution; rowid breaks ties by insertion order.
NEWEST_FIRST = (Job.discovered_date.desc(), literal_column("jobs.rowid").desc())

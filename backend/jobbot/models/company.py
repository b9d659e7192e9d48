from sqlalchemy import Column, Text
from sqlalchemy.orm import relationship
from jobbot.database import Base


class Company(Base):
    __tablename__ = "companies"

    id = Column(Text, primary_key=True)
    name = Column(Text, nullable=False, unique=True)
    website = Column(Text)
    created_at = Column(Text, nullable=False)

    jobs = relationship("Job", back_populates="company_ref")

"""
Job ORM Model
SQLAlchemy model for job postings
"""
from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, DateTime, JSON, Text, ForeignKey

from core.database import Base


class JobModel(Base):
    """Job posting table ORM model"""

    __tablename__ = "jobs"

    # Primary Key
    id = Column(Integer, primary_key=True, autoincrement=True, index=True)

    # Basic Info
    title = Column(String(500), nullable=False, index=True)
    description = Column(Text, nullable=False)
    budget = Column(Integer, nullable=False)
    skills = Column(JSON, nullable=False, default=list)  # List[str]

    # Owner
    business_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Status
    status = Column(String(50), nullable=False, default="open", index=True)

    # Timestamps
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False
    )

    def __repr__(self):
        return f"<JobModel {self.id} {self.title}>"

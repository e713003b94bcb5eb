"""
Proposal ORM Model
SQLAlchemy model for proposals and job requests
"""
from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, DateTime, Text, ForeignKey

from core.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProposalModel(Base):
    """Proposal table ORM model"""

    __tablename__ = "proposals"

    # Primary Key
    id = Column(Integer, primary_key=True, autoincrement=True, index=True)

    # Foreign Keys
    job_id = Column(Integer, ForeignKey("jobs.id"), nullable=False, index=True)
    freelancer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Proposal Details
    cover_letter = Column(Text, nullable=False)
    proposed_rate = Column(Integer, nullable=False)
    status = Column(String(50), nullable=False, default="applied", index=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    def __repr__(self):
        return f"<ProposalModel {self.id} - {self.status}>"

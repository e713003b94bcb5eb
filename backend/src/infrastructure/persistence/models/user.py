"""
User ORM Model
SQLAlchemy model for persistence
"""
from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, DateTime, JSON, Text

from core.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserModel(Base):
    """User table ORM model"""

    __tablename__ = "users"

    # Primary Key
    id = Column(Integer, primary_key=True, autoincrement=True, index=True)

    # Identity
    role = Column(String(20), nullable=False, index=True)  # freelancer, business, admin
    display_name = Column(String(255), nullable=False)

    # Profile
    bio = Column(Text, nullable=True)
    skills = Column(JSON, nullable=False, default=list)  # List[str]

    # Freelancer only
    hourly_rate = Column(Integer, nullable=True)
    portfolio = Column(JSON, nullable=True)  # Portfolio.to_dict()

    # Business only
    company = Column(String(255), nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    def __repr__(self):
        return f"<UserModel {self.id} {self.role} {self.display_name}>"

"""
SQLAlchemy Unit of Work
One session and transaction shared by the marketplace repositories
"""
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from application.repositories.interfaces import IUnitOfWork
from infrastructure.persistence.repositories.user import SQLAlchemyUserRepository
from infrastructure.persistence.repositories.job import SQLAlchemyJobRepository
from infrastructure.persistence.repositories.proposal import SQLAlchemyProposalRepository


class SQLAlchemyUnitOfWork(IUnitOfWork):
    """Opens a session on enter; commits on clean exit, rolls back otherwise"""

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory
        self.session: Optional[AsyncSession] = None

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        self.session = self.session_factory()
        self.users = SQLAlchemyUserRepository(self.session)
        self.jobs = SQLAlchemyJobRepository(self.session)
        self.proposals = SQLAlchemyProposalRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        try:
            if exc_type is None:
                await self.session.commit()
            else:
                await self.session.rollback()
        finally:
            await self.session.close()
            self.session = None

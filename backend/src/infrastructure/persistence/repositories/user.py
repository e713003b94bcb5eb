"""
User Repository Implementation
SQLAlchemy-based user repository
"""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from domain.entities import User
from domain.enums import UserRole
from domain.value_objects import SkillSet, Portfolio
from application.repositories.interfaces import IUserRepository
from infrastructure.persistence.models.user import UserModel
from core.exceptions import RepositoryException


class SQLAlchemyUserRepository(IUserRepository):
    """SQLAlchemy implementation of user repository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID"""
        try:
            model = await self.session.get(UserModel, user_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to get user by ID {user_id}: {str(e)}")
            raise RepositoryException(f"Failed to get user: {str(e)}")
        return self._to_entity(model) if model else None

    async def list_by_role(self, role: UserRole) -> List[User]:
        """List users with the given role"""
        try:
            result = await self.session.execute(
                select(UserModel)
                .where(UserModel.role == UserRole(role).value)
                .order_by(UserModel.id)
            )
            models = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list users with role {role}: {str(e)}")
            raise RepositoryException(f"Failed to list users: {str(e)}")
        return [self._to_entity(m) for m in models]

    async def create(self, user: User) -> User:
        """Create new user"""
        try:
            model = self._to_model(user)
            self.session.add(model)
            await self.session.flush()
            await self.session.refresh(model)
        except SQLAlchemyError as e:
            logger.error(f"Failed to create user {user.display_name}: {str(e)}")
            raise RepositoryException(f"Failed to create user: {str(e)}")
        return self._to_entity(model)

    async def update(self, user: User) -> User:
        """Update existing user"""
        try:
            model = await self.session.get(UserModel, user.id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load user {user.id} for update: {str(e)}")
            raise RepositoryException(f"Failed to update user: {str(e)}")
        if not model:
            raise RepositoryException(f"User not found: {user.id}")

        # Update fields (role is immutable)
        model.display_name = user.display_name
        model.bio = user.bio
        model.skills = user.skills.to_list()
        model.hourly_rate = user.hourly_rate
        model.company = user.company
        model.portfolio = None if user.portfolio.is_empty() else user.portfolio.to_dict()
        if user.updated_at is not None:
            model.updated_at = user.updated_at

        try:
            await self.session.flush()
            await self.session.refresh(model)
        except SQLAlchemyError as e:
            logger.error(f"Failed to update user {user.id}: {str(e)}")
            raise RepositoryException(f"Failed to update user: {str(e)}")
        return self._to_entity(model)

    def _to_model(self, user: User) -> UserModel:
        """Convert User entity to ORM model"""
        model = UserModel(
            role=user.role.value,
            display_name=user.display_name,
            bio=user.bio,
            skills=user.skills.to_list(),
            hourly_rate=user.hourly_rate,
            company=user.company,
            portfolio=None if user.portfolio.is_empty() else user.portfolio.to_dict(),
        )
        if user.id is not None:
            model.id = user.id
        if user.created_at is not None:
            model.created_at = user.created_at
        if user.updated_at is not None:
            model.updated_at = user.updated_at
        return model

    def _to_entity(self, model: UserModel) -> User:
        """Convert ORM model to User entity"""
        return User(
            id=model.id,
            role=UserRole(model.role),
            display_name=model.display_name,
            bio=model.bio,
            skills=SkillSet.of(model.skills or []),
            hourly_rate=model.hourly_rate,
            company=model.company,
            portfolio=Portfolio.from_dict(model.portfolio),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

"""
User Service Implementation
"""
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from loguru import logger

from domain.entities import User
from domain.enums import UserRole
from domain.value_objects import Actor, Portfolio, SkillSet
from core.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)
from application.repositories.interfaces import IUnitOfWork
from .interfaces import IUserService


EDITABLE_FIELDS = frozenset({"display_name", "bio", "skills", "hourly_rate", "company", "portfolio"})


def _to_portfolio(value: Optional[Union[Portfolio, Dict[str, Any]]]) -> Portfolio:
    if value is None:
        return Portfolio()
    if isinstance(value, Portfolio):
        return value
    return Portfolio.from_dict(value)


class UserService(IUserService):
    """User service implementation"""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.uow_factory = uow_factory
        self.clock = clock

    async def register_user(
        self,
        role: Union[UserRole, str],
        display_name: str,
        bio: Optional[str] = None,
        skills: Optional[Iterable[str]] = None,
        hourly_rate: Optional[int] = None,
        company: Optional[str] = None,
        portfolio: Optional[Union[Portfolio, Dict[str, Any]]] = None,
    ) -> User:
        try:
            role = UserRole(role)
        except ValueError:
            raise ValidationException("role", f"Unknown role: {role!r}")
        if role == UserRole.ADMIN:
            raise ValidationException("role", "Admin accounts cannot self-register")

        now = self.clock()
        try:
            user = User(
                id=None,
                role=role,
                display_name=(display_name or "").strip(),
                bio=bio,
                skills=SkillSet.of(skills),
                hourly_rate=hourly_rate,
                company=company,
                portfolio=_to_portfolio(portfolio),
                created_at=now,
                updated_at=now,
            )
        except (ValueError, TypeError) as e:
            raise ValidationException("user", str(e))

        async with self.uow_factory() as uow:
            created = await uow.users.create(user)

        logger.info(f"Registered {created.role.value} {created.id}: {created.display_name}")
        return created

    async def update_profile(self, user_id: int, actor: Actor, **changes: Any) -> User:
        if actor.user_id != user_id:
            raise AuthorizationException(f"{actor} cannot edit profile {user_id}")

        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValidationException(", ".join(sorted(unknown)), "Field cannot be updated")

        try:
            if "skills" in changes:
                changes["skills"] = SkillSet.of(changes["skills"])
            if "portfolio" in changes:
                changes["portfolio"] = _to_portfolio(changes["portfolio"])
        except (ValueError, TypeError) as e:
            raise ValidationException("user", str(e))
        if isinstance(changes.get("display_name"), str):
            changes["display_name"] = changes["display_name"].strip()

        async with self.uow_factory() as uow:
            user = await uow.users.get_by_id(user_id)
            if user is None:
                raise ResourceNotFoundException("User", user_id)
            try:
                updated = replace(user, updated_at=self.clock(), **changes)
            except (ValueError, TypeError) as e:
                raise ValidationException("user", str(e))
            saved = await uow.users.update(updated)

        logger.info(f"User {user_id} updated profile fields: {sorted(changes)}")
        return saved

    async def get_freelancer(self, freelancer_id: int, actor: Actor) -> User:
        self._require_viewer(actor)
        async with self.uow_factory() as uow:
            user = await uow.users.get_by_id(freelancer_id)
        if user is None or not user.is_freelancer():
            raise ResourceNotFoundException("Freelancer", freelancer_id)
        return user

    async def list_freelancers(self, actor: Actor) -> List[User]:
        self._require_viewer(actor)
        async with self.uow_factory() as uow:
            return await uow.users.list_by_role(UserRole.FREELANCER)

    @staticmethod
    def _require_viewer(actor: Actor) -> None:
        if not (actor.is_business or actor.is_admin):
            raise AuthorizationException("Only businesses can view freelancer profiles")

"""
User Service Interface
Profile registration, editing and freelancer directory
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Union

from domain.entities import User
from domain.enums import UserRole
from domain.value_objects import Actor, Portfolio


class IUserService(ABC):
    """User service interface"""

    @abstractmethod
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
        """
        Create a freelancer or business profile

        Raises:
            ValidationException: bad field values or fields foreign to the role
        """
        pass

    @abstractmethod
    async def update_profile(self, user_id: int, actor: Actor, **changes: Any) -> User:
        """
        Update the actor's own profile

        Raises:
            AuthorizationException: actor is not the profile owner
            ValidationException: unknown or invalid fields
        """
        pass

    @abstractmethod
    async def get_freelancer(self, freelancer_id: int, actor: Actor) -> User:
        """Get a freelancer profile (business or admin viewers)"""
        pass

    @abstractmethod
    async def list_freelancers(self, actor: Actor) -> List[User]:
        """List all freelancers (business or admin viewers)"""
        pass

"""
Users Service Package
"""
from .interfaces import IUserService
from .impl import UserService

__all__ = ["IUserService", "UserService"]

"""
Jobs Service Package
"""
from .interfaces import IJobService
from .impl import JobService

__all__ = [
    "IJobService",
    "JobService",
]

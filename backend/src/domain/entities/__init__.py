"""Domain Entities - Core business objects"""

from .user import User
from .job import Job
from .proposal import Proposal
__all__ = ["User", "Job", "Proposal"]

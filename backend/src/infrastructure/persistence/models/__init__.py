"""ORM Models Package"""

from .user import UserModel
from .job import JobModel
from .proposal import ProposalModel

__all__ = [
    "UserModel",
    "JobModel",
    "ProposalModel",
]

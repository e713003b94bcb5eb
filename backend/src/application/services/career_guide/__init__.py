"""
Career Guide Service Interface
Conversational career advice for freelancers
"""
from abc import ABC, abstractmethod


class ICareerGuideService(ABC):
    """Career guide service interface"""

    @abstractmethod
    async def generate_advice(self, user_message: str) -> str:
        """
        Answer a career question

        Args:
            user_message: The user's question

        Returns:
            Advice text; a canned answer when the oracle is unavailable

        Raises:
            ValidationException: empty message
        """
        pass

"""
MatchScore Value Object
Type-safe job/freelancer compatibility score (0-100)
"""
import math
from dataclasses import dataclass

from .skill_set import SkillSet


@dataclass(frozen=True)
class MatchScore:
    """Match score value object - immutable"""

    value: int

    def __post_init__(self):
        """Validate match score range"""
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError("Match score must be an integer")

        if not 0 <= self.value <= 100:
            raise ValueError("Match score must be between 0 and 100")

    @classmethod
    def from_number(cls, number: float) -> "MatchScore":
        """Round a numeric score half-up; the number must already be within 0-100"""
        if isinstance(number, bool) or not isinstance(number, (int, float)):
            raise TypeError("Match score must be a number")
        if math.isnan(number) or not 0 <= number <= 100:
            raise ValueError(f"Match score out of range: {number}")
        return cls(value=int(math.floor(number + 0.5)))

    @classmethod
    def from_skill_overlap(cls, job_skills: SkillSet, freelancer_skills: SkillSet) -> "MatchScore":
        """Share of the job's skills the freelancer has, 0 when the job lists none"""
        if not job_skills:
            return cls(value=0)
        matched = job_skills.overlap_count(freelancer_skills)
        return cls.from_number(100 * matched / len(job_skills))

    def is_good_match(self, threshold: int = 70) -> bool:
        """Check if score meets threshold for good match"""
        return self.value >= threshold

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return f"{self.value}%"

    def __repr__(self) -> str:
        return f"MatchScore({self.value})"

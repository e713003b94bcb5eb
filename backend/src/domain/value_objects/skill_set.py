"""
SkillSet Value Object
Normalized, ordered, duplicate-free collection of skill names
"""
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple


MAX_SKILL_LENGTH = 100


@dataclass(frozen=True)
class SkillSet:
    """Skill collection value object - immutable

    Skills keep their first-seen spelling and order. Comparison between
    sets ignores case and surrounding whitespace.
    """

    items: Tuple[str, ...] = ()

    def __post_init__(self):
        """Validate skill names"""
        for skill in self.items:
            if not isinstance(skill, str):
                raise TypeError("Skill names must be strings")
            if not skill or skill != skill.strip():
                raise ValueError(f"Skill names must be trimmed and non-empty: {skill!r}")
            if len(skill) > MAX_SKILL_LENGTH:
                raise ValueError(f"Skill name too long: {skill[:20]}...")
        keys = [s.casefold() for s in self.items]
        if len(keys) != len(set(keys)):
            raise ValueError("Duplicate skills are not allowed")

    @classmethod
    def of(cls, skills: Optional[Iterable[str]]) -> "SkillSet":
        """Build a SkillSet from raw input, trimming blanks and duplicates"""
        if skills is None:
            return cls()
        if isinstance(skills, SkillSet):
            return skills
        if isinstance(skills, str):
            raise TypeError("Skills must be a collection of strings, not a string")

        seen = set()
        cleaned = []
        for raw in skills:
            if not isinstance(raw, str):
                raise TypeError("Skill names must be strings")
            skill = raw.strip()
            key = skill.casefold()
            if skill and key not in seen:
                seen.add(key)
                cleaned.append(skill)
        return cls(tuple(cleaned))

    def keys(self) -> frozenset:
        return frozenset(s.casefold() for s in self.items)

    def overlap(self, other: "SkillSet") -> Tuple[str, ...]:
        """Skills of this set that also appear in other, in this set's order"""
        other_keys = other.keys()
        return tuple(s for s in self.items if s.casefold() in other_keys)

    def overlap_count(self, other: "SkillSet") -> int:
        return len(self.overlap(other))

    def to_list(self) -> list:
        return list(self.items)

    def __contains__(self, skill: object) -> bool:
        return isinstance(skill, str) and skill.strip().casefold() in self.keys()

    def __iter__(self) -> Iterator[str]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __str__(self) -> str:
        return ", ".join(self.items)

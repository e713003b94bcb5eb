"""
Portfolio Value Objects
Freelancer portfolio records: projects, education, work history, certifications
"""
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Iterable, Optional, Tuple


def _require(value: Optional[str], name: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} cannot be empty")


@dataclass(frozen=True)
class PortfolioProject:
    """A showcased project"""

    title: str
    description: str
    technologies: Tuple[str, ...] = ()
    link: Optional[str] = None

    def __post_init__(self):
        _require(self.title, "Project title")
        _require(self.description, "Project description")
        if isinstance(self.technologies, str):
            raise TypeError("Project technologies must be a collection of strings")
        object.__setattr__(self, "technologies", tuple(self.technologies))


@dataclass(frozen=True)
class Education:
    """An education entry"""

    institution: str
    degree: str
    field_of_study: str
    start_date: str
    end_date: Optional[str] = None

    def __post_init__(self):
        _require(self.institution, "Institution")
        _require(self.degree, "Degree")
        _require(self.field_of_study, "Field of study")
        _require(self.start_date, "Education start date")


@dataclass(frozen=True)
class WorkExperience:
    """A previous position"""

    company: str
    position: str
    start_date: str
    description: str
    end_date: Optional[str] = None

    def __post_init__(self):
        _require(self.company, "Company")
        _require(self.position, "Position")
        _require(self.start_date, "Work start date")
        _require(self.description, "Work description")


@dataclass(frozen=True)
class Certification:
    """A professional certification"""

    name: str
    issuer: str
    date: str
    link: Optional[str] = None

    def __post_init__(self):
        _require(self.name, "Certification name")
        _require(self.issuer, "Certification issuer")
        _require(self.date, "Certification date")


def _records(cls, items: Optional[Iterable[Any]]) -> tuple:
    if not items:
        return ()
    records = []
    for item in items:
        if isinstance(item, cls):
            records.append(item)
        elif isinstance(item, dict):
            records.append(cls(**item))
        else:
            raise TypeError(f"Expected {cls.__name__} or dict, got {type(item).__name__}")
    return tuple(records)


@dataclass(frozen=True)
class Portfolio:
    """Ordered portfolio sections of a freelancer profile"""

    title: Optional[str] = None
    summary: Optional[str] = None
    projects: Tuple[PortfolioProject, ...] = field(default_factory=tuple)
    education: Tuple[Education, ...] = field(default_factory=tuple)
    work_experience: Tuple[WorkExperience, ...] = field(default_factory=tuple)
    certifications: Tuple[Certification, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Portfolio":
        """Build a portfolio from loosely-typed input (API payloads, JSON columns)"""
        if not data:
            return cls()
        return cls(
            title=data.get("title"),
            summary=data.get("summary"),
            projects=_records(PortfolioProject, data.get("projects")),
            education=_records(Education, data.get("education")),
            work_experience=_records(WorkExperience, data.get("work_experience")),
            certifications=_records(Certification, data.get("certifications")),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for project in data["projects"]:
            project["technologies"] = list(project["technologies"])
        for key in ("projects", "education", "work_experience", "certifications"):
            data[key] = list(data[key])
        return data

    def is_empty(self) -> bool:
        return not (
            self.title or self.summary or self.projects
            or self.education or self.work_experience or self.certifications
        )

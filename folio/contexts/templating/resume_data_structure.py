"""
Resume Data Structure

Typed representation of a resume identity's data, validated once at load time:

- ResumeDescriptor: data/<id>/resume.json (sidebar + main sections)
- SharedHeader: data/shared/header.json
- ResumeData: descriptor + header + styling, with every Markdown reference inlined

Markdown references carry `markdown_path` as written in the JSON; the data
loader fills in `content` (raw Markdown) and `html` (rendered) on each one.
Styling is pass-through data for templates and is kept as a plain dict.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Union

from markupsafe import Markup

from folio.utils.errors import InvalidResumeDataError

HEADER_FIELDS = ("name", "title", "email", "phone", "location", "linkedin", "github", "website")


def _require_dict(value: Any, where: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise InvalidResumeDataError(f"{where} must be an object, got {type(value).__name__}")
    return value


def _require_list(value: Any, where: str) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise InvalidResumeDataError(f"{where} must be a list, got {type(value).__name__}")
    return value


def _optional_str(value: Any, where: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, (str, int)):
        raise InvalidResumeDataError(f"{where} must be a string, got {type(value).__name__}")
    return str(value)


@dataclass
class MarkdownSection:
    """
    A titled block whose body lives in a Markdown file.

    Attributes:
        title: Section heading shown by templates
        markdown_path: Reference relative to the resume directory
        content: Raw Markdown (None if the file is missing)
        html: Rendered HTML (None if the file is missing)
    """

    title: str = ""
    markdown_path: Optional[str] = None
    content: Optional[str] = None
    html: Optional[Markup] = None

    @classmethod
    def from_dict(cls, raw: Any, where: str) -> "MarkdownSection":
        raw = _require_dict(raw, where)
        return cls(
            title=_optional_str(raw.get("title"), f"{where}.title") or "",
            markdown_path=_optional_str(raw.get("markdownPath"), f"{where}.markdownPath"),
        )


@dataclass
class SkillCategory:
    name: str
    markdown_path: Optional[str] = None
    content: Optional[str] = None
    html: Optional[Markup] = None

    @classmethod
    def from_dict(cls, raw: Any, where: str) -> "SkillCategory":
        raw = _require_dict(raw, where)
        name = _optional_str(raw.get("name"), f"{where}.name")
        if not name:
            raise InvalidResumeDataError(f"{where} is missing 'name'")
        return cls(
            name=name,
            markdown_path=_optional_str(raw.get("markdownPath"), f"{where}.markdownPath"),
        )


@dataclass
class SkillsSection:
    title: str = ""
    categories: List[SkillCategory] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Any, where: str) -> "SkillsSection":
        raw = _require_dict(raw, where)
        categories = _require_list(raw.get("categories"), f"{where}.categories")
        return cls(
            title=_optional_str(raw.get("title"), f"{where}.title") or "",
            categories=[
                SkillCategory.from_dict(category, f"{where}.categories[{i}]")
                for i, category in enumerate(categories)
            ],
        )


@dataclass
class ExperienceEntry:
    """
    One job in the experience section.

    Dates are kept as written (ISO date, YYYY-MM or YYYY); templates format
    them with the format_date filter. A null end date means "present".
    """

    company: str = ""
    title: str = ""
    location: str = ""
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    markdown_path: Optional[str] = None
    content: Optional[str] = None
    html: Optional[Markup] = None

    @classmethod
    def from_dict(cls, raw: Any, where: str) -> "ExperienceEntry":
        raw = _require_dict(raw, where)
        return cls(
            company=_optional_str(raw.get("company"), f"{where}.company") or "",
            title=_optional_str(raw.get("title"), f"{where}.title") or "",
            location=_optional_str(raw.get("location"), f"{where}.location") or "",
            start_date=_optional_str(raw.get("startDate"), f"{where}.startDate"),
            end_date=_optional_str(raw.get("endDate"), f"{where}.endDate"),
            markdown_path=_optional_str(raw.get("markdownPath"), f"{where}.markdownPath"),
        )


@dataclass
class ExperienceSection:
    title: str = ""
    jobs: List[ExperienceEntry] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Any, where: str) -> "ExperienceSection":
        raw = _require_dict(raw, where)
        jobs = _require_list(raw.get("jobs"), f"{where}.jobs")
        return cls(
            title=_optional_str(raw.get("title"), f"{where}.title") or "",
            jobs=[ExperienceEntry.from_dict(job, f"{where}.jobs[{i}]") for i, job in enumerate(jobs)],
        )


@dataclass
class Sidebar:
    photo: Optional[str] = None
    summary: Optional[MarkdownSection] = None
    skills: SkillsSection = field(default_factory=SkillsSection)

    @classmethod
    def from_dict(cls, raw: Any) -> "Sidebar":
        raw = _require_dict(raw, "sidebar")
        summary = raw.get("summary")
        return cls(
            photo=_optional_str(raw.get("photo"), "sidebar.photo"),
            summary=MarkdownSection.from_dict(summary, "sidebar.summary") if summary is not None else None,
            skills=SkillsSection.from_dict(raw.get("skills"), "sidebar.skills"),
        )


@dataclass
class MainSection:
    experience: ExperienceSection = field(default_factory=ExperienceSection)

    @classmethod
    def from_dict(cls, raw: Any) -> "MainSection":
        raw = _require_dict(raw, "main")
        return cls(experience=ExperienceSection.from_dict(raw.get("experience"), "main.experience"))


MarkdownReference = Union[MarkdownSection, SkillCategory, ExperienceEntry]


@dataclass
class ResumeDescriptor:
    """Parsed data/<id>/resume.json."""

    sidebar: Sidebar = field(default_factory=Sidebar)
    main: MainSection = field(default_factory=MainSection)

    @classmethod
    def from_dict(cls, raw: Any) -> "ResumeDescriptor":
        """
        Validate and build a descriptor.

        Raises:
            InvalidResumeDataError: If a section has the wrong shape
        """
        if not isinstance(raw, dict):
            raise InvalidResumeDataError("resume.json must contain an object")
        return cls(
            sidebar=Sidebar.from_dict(raw.get("sidebar")),
            main=MainSection.from_dict(raw.get("main")),
        )

    def markdown_references(self) -> Iterator[MarkdownReference]:
        """Every item that points at a Markdown file, in document order."""
        summary = self.sidebar.summary
        if summary is not None and summary.markdown_path:
            yield summary
        for category in self.sidebar.skills.categories:
            if category.markdown_path:
                yield category
        for job in self.main.experience.jobs:
            if job.markdown_path:
                yield job


@dataclass
class SharedHeader:
    """
    Contact header shared by every resume identity.

    Attributes:
        links: Any header keys beyond the named contact fields
    """

    name: str
    title: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: Optional[str] = None
    github: Optional[str] = None
    website: Optional[str] = None
    links: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Any) -> "SharedHeader":
        if not isinstance(raw, dict):
            raise InvalidResumeDataError("header.json must contain an object")
        if not raw.get("name"):
            raise InvalidResumeDataError("header.json is missing 'name'")

        values = {key: _optional_str(raw.get(key), f"header.{key}") for key in HEADER_FIELDS}
        links = {
            key: str(value) for key, value in raw.items() if key not in HEADER_FIELDS and value is not None
        }
        return cls(
            name=values["name"],
            title=values["title"] or "",
            email=values["email"] or "",
            phone=values["phone"] or "",
            location=values["location"] or "",
            linkedin=values["linkedin"],
            github=values["github"],
            website=values["website"],
            links=links,
        )


@dataclass
class ResumeData:
    """
    Fully loaded resume: descriptor with Markdown inlined, plus shared data.

    Attributes:
        resume_id: Resume identity (directory name under data/)
        header: Shared contact header
        styling: Shared styling tokens (pass-through)
        sidebar: Sidebar section
        main: Main section
    """

    resume_id: str
    header: SharedHeader
    styling: Dict[str, Any]
    sidebar: Sidebar
    main: MainSection

    def template_variables(self) -> Dict[str, Any]:
        """Top-level names visible to templates."""
        return {
            "header": self.header,
            "styling": self.styling,
            "sidebar": self.sidebar,
            "main": self.main,
        }

    def to_dict(self) -> Dict[str, Any]:
        """JSON-compatible representation (HTML fields become plain strings)."""
        return asdict(self)

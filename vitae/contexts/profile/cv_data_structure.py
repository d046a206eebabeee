"""
CV Document Structure

Defines the structured representation of a résumé profile. This structure is
the interface between the Profile context (which builds it from JSON) and the
Rendering context (which lays it out into pages).

Instances are built once per export and treated as read-only by rendering.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union


class Language(str, Enum):
    """Supported profile languages."""

    PT = "pt"
    EN = "en"

    @classmethod
    def parse(cls, value: Union[str, "Language", None], default: "Language" = None) -> "Language":
        """Resolve a language code ("pt", "EN", "en-US") to a Language."""
        if isinstance(value, Language):
            return value
        if not value:
            if default is None:
                raise ValueError("Language code is required")
            return default
        code = str(value).strip().lower().split("-")[0].split("_")[0]
        try:
            return cls(code)
        except ValueError:
            supported = ", ".join(lang.value for lang in cls)
            raise ValueError(f"Unsupported language: {value!r} (supported: {supported})")


class SectionKey(str, Enum):
    """Content sections a résumé may carry, in canonical export order."""

    OBJECTIVE = "objective"
    SUMMARY = "summary"
    PROJECTS = "projects"
    SKILLS = "skills"
    EDUCATION = "education"
    CERTIFICATIONS = "certifications"
    EXPERIENCE = "experience"


class SkillsKind(str, Enum):
    """Tag for the skills variant, resolved once at load time."""

    CATEGORIZED = "categorized"
    FLAT = "flat"


@dataclass(frozen=True)
class CategorizedSkills:
    """
    Skills grouped by category.

    Attributes:
        categories: Category key -> ordered skill names (insertion order preserved)
    """

    categories: Dict[str, List[str]] = field(default_factory=dict)
    kind: SkillsKind = field(default=SkillsKind.CATEGORIZED, init=False)

    def is_empty(self) -> bool:
        return not any(self.categories.values())


@dataclass(frozen=True)
class FlatSkills:
    """
    Skills as a single ordered list.

    Attributes:
        items: Ordered skill names
    """

    items: List[str] = field(default_factory=list)
    kind: SkillsKind = field(default=SkillsKind.FLAT, init=False)

    def is_empty(self) -> bool:
        return not self.items


Skills = Union[CategorizedSkills, FlatSkills]


@dataclass(frozen=True)
class ContactLinks:
    github: Optional[str] = None
    linkedin: Optional[str] = None


@dataclass(frozen=True)
class Contact:
    """
    Contact block rendered under the name.

    Attributes:
        email: E-mail address
        links: Profile links (GitHub, LinkedIn)
        phone: Phone number
    """

    email: Optional[str] = None
    links: ContactLinks = field(default_factory=ContactLinks)
    phone: Optional[str] = None


@dataclass(frozen=True)
class ExperienceEntry:
    """
    One job in the work history.

    Attributes:
        role: Job title
        company: Employer
        period: Free-form date range (e.g., "2021 - Present")
        tasks: Ordered responsibilities, rendered as bullets
    """

    role: Optional[str] = None
    company: Optional[str] = None
    period: Optional[str] = None
    tasks: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ProjectEntry:
    name: str
    description: Optional[str] = None
    link: Optional[str] = None


@dataclass(frozen=True)
class EducationEntry:
    """
    One education record.

    Attributes:
        institution: School or university
        course: Degree or course title
        period: Free-form date range
        status: Completion status (e.g., "Completed", "In progress")
        description: Optional free text
    """

    institution: Optional[str] = None
    course: Optional[str] = None
    period: Optional[str] = None
    status: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class CVDocument:
    """
    Complete résumé profile.

    Every section is optional except ``name``; empty sections are skipped by
    the renderer.

    Attributes:
        name: Full name (required, non-empty)
        language: Profile language, drives localized titles and footer
        subtitle: Professional title shown under the name
        summary: Professional summary paragraph
        objective: Career objective paragraph
        contact: Contact block
        skills: Categorized or flat skills
        experience: Ordered work history
        projects: Ordered projects
        education: Ordered education records
        certifications: Ordered certification names
        section_titles: Section key -> localized label overrides
    """

    name: str
    language: Language = Language.PT
    subtitle: Optional[str] = None
    summary: Optional[str] = None
    objective: Optional[str] = None
    contact: Contact = field(default_factory=Contact)
    skills: Skills = field(default_factory=FlatSkills)
    experience: List[ExperienceEntry] = field(default_factory=list)
    projects: List[ProjectEntry] = field(default_factory=list)
    education: List[EducationEntry] = field(default_factory=list)
    certifications: List[str] = field(default_factory=list)
    section_titles: Dict[str, str] = field(default_factory=dict)

    def has_section(self, key: SectionKey) -> bool:
        """True if the section has anything to render."""
        if key == SectionKey.OBJECTIVE:
            return bool(self.objective and self.objective.strip())
        if key == SectionKey.SUMMARY:
            return bool(self.summary and self.summary.strip())
        if key == SectionKey.SKILLS:
            return self.skills is not None and not self.skills.is_empty()
        if key == SectionKey.PROJECTS:
            return bool(self.projects)
        if key == SectionKey.EDUCATION:
            return bool(self.education)
        if key == SectionKey.CERTIFICATIONS:
            return bool(self.certifications)
        if key == SectionKey.EXPERIENCE:
            return bool(self.experience)
        return False

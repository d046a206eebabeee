"""
Profile Context

Responsibilities:
- Loads résumé profiles (JSON) per language
- Validates required fields and normalizes field names and shapes
- Resolves the skills shape once (categorized vs flat)

Owns: CVDocument data model, JSON profile parsing
Never: Makes layout or rendering decisions
"""

from vitae.contexts.profile.cv_data_structure import (
    CategorizedSkills,
    Contact,
    ContactLinks,
    CVDocument,
    EducationEntry,
    ExperienceEntry,
    FlatSkills,
    Language,
    ProjectEntry,
    SectionKey,
    SkillsKind,
)
from vitae.contexts.profile.exceptions import InvalidProfileError
from vitae.contexts.profile.loader import load_cv, load_cv_for_language, parse_cv

__all__ = [
    # Loading
    "load_cv",
    "load_cv_for_language",
    "parse_cv",
    "InvalidProfileError",
    # Data structure classes
    "CVDocument",
    "Contact",
    "ContactLinks",
    "ExperienceEntry",
    "ProjectEntry",
    "EducationEntry",
    "CategorizedSkills",
    "FlatSkills",
    "SkillsKind",
    "Language",
    "SectionKey",
]

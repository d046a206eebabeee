"""
JSON Profile Loader

Reads résumé profiles from JSON and normalizes them into CVDocument instances.

Accepts both the Portuguese keys of the site's data files (``nome``,
``resumo``, ``experiencia`` ...) and the English keys of the data model
(``name``, ``summary``, ``experience`` ...). Shape ambiguities (skills as a
mapping or a list, projects as strings or objects, education as a string or
a list) are resolved here, once, so the renderer never inspects runtime types.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from dotenv import load_dotenv

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
    Skills,
)
from vitae.contexts.profile.exceptions import InvalidProfileError
from vitae.contexts.profile.logger import _log_debug, _log_info, _log_warning
from vitae.utils.text_processing import clean_text

load_dotenv()
PROFILE_DATA_PATH = Path(os.getenv("PROFILE_DATA_PATH", "data/profiles"))

# Data file per language
DATA_FILES = {
    Language.PT: "cv.json",
    Language.EN: "cv.en.json",
}

# Field aliases, model key first
FIELD_ALIASES: Dict[str, List[str]] = {
    "name": ["name", "nome"],
    "subtitle": ["subtitle", "title", "cargo", "area"],
    "summary": ["summary", "resumo"],
    "objective": ["objective", "objetivo"],
    "email": ["email"],
    "phone": ["phone", "telefone"],
    "links": ["links"],
    "contact": ["contact", "contato"],
    "skills": ["skills", "habilidades"],
    "experience": ["experience", "experiencia"],
    "projects": ["projects", "projetos"],
    "education": ["education", "formacao"],
    "certifications": ["certifications", "certificacoes"],
    "section_titles": ["sectionTitles", "section_titles", "secoes"],
    "language": ["language", "idioma"],
}

EXPERIENCE_ALIASES = {
    "role": ["role", "cargo"],
    "company": ["company", "empresa"],
    "period": ["period", "periodo"],
    "tasks": ["tasks", "tarefas"],
}

PROJECT_ALIASES = {
    "name": ["name", "nome"],
    "description": ["description", "descricao"],
    "link": ["link", "url"],
}

EDUCATION_ALIASES = {
    "institution": ["institution", "instituicao"],
    "course": ["course", "curso"],
    "period": ["period", "periodo"],
    "status": ["status", "situacao"],
    "description": ["description", "descricao"],
}

# Section-title keys used by the Portuguese data files
SECTION_TITLE_ALIASES = {
    "objetivo": SectionKey.OBJECTIVE.value,
    "resumo": SectionKey.SUMMARY.value,
    "projetos": SectionKey.PROJECTS.value,
    "habilidades": SectionKey.SKILLS.value,
    "formacao": SectionKey.EDUCATION.value,
    "certificacoes": SectionKey.CERTIFICATIONS.value,
    "experiencia": SectionKey.EXPERIENCE.value,
}


def _lookup(payload: Dict[str, Any], aliases: Iterable[str]) -> Any:
    """Return the first present alias value, or None."""
    for key in aliases:
        if key in payload and payload[key] is not None:
            return payload[key]
    return None


def _clean_list(values: Any) -> List[str]:
    """Trim list items and drop blanks; a bare string becomes a one-item list."""
    if values is None:
        return []
    if isinstance(values, str):
        values = [values]
    if not isinstance(values, list):
        raise InvalidProfileError(f"Expected a list, got {type(values).__name__}")
    cleaned = []
    for value in values:
        text = clean_text(value)
        if text:
            cleaned.append(text)
    return cleaned


def _parse_skills(raw: Any) -> Skills:
    if raw is None:
        return FlatSkills()
    if isinstance(raw, dict):
        categories = {}
        for category, values in raw.items():
            category_key = clean_text(category)
            if not category_key:
                continue
            categories[category_key] = _clean_list(values)
        return CategorizedSkills(categories=categories)
    return FlatSkills(items=_clean_list(raw))


def _parse_experience(raw: Any) -> List[ExperienceEntry]:
    entries = []
    for item in raw or []:
        if not isinstance(item, dict):
            raise InvalidProfileError("Experience entries must be objects", field_name="experience")
        entry = ExperienceEntry(
            role=clean_text(_lookup(item, EXPERIENCE_ALIASES["role"])),
            company=clean_text(_lookup(item, EXPERIENCE_ALIASES["company"])),
            period=clean_text(_lookup(item, EXPERIENCE_ALIASES["period"])),
            tasks=_clean_list(_lookup(item, EXPERIENCE_ALIASES["tasks"])),
        )
        if entry.role or entry.company or entry.period or entry.tasks:
            entries.append(entry)
    return entries


def _parse_projects(raw: Any) -> List[ProjectEntry]:
    entries = []
    for item in raw or []:
        if isinstance(item, dict):
            name = clean_text(_lookup(item, PROJECT_ALIASES["name"]))
            if not name:
                _log_warning("Skipping project without a name")
                continue
            entries.append(
                ProjectEntry(
                    name=name,
                    description=clean_text(_lookup(item, PROJECT_ALIASES["description"])),
                    link=clean_text(_lookup(item, PROJECT_ALIASES["link"])),
                )
            )
        else:
            # Older data files list projects as plain strings
            name = clean_text(item)
            if name:
                entries.append(ProjectEntry(name=name))
    return entries


def _parse_education(raw: Any) -> List[EducationEntry]:
    if isinstance(raw, str):
        # Older data files carry education as a single paragraph
        text = clean_text(raw)
        return [EducationEntry(course=text)] if text else []
    if isinstance(raw, dict):
        raw = [raw]
    entries = []
    for item in raw or []:
        if not isinstance(item, dict):
            text = clean_text(item)
            if text:
                entries.append(EducationEntry(course=text))
            continue
        entry = EducationEntry(
            institution=clean_text(_lookup(item, EDUCATION_ALIASES["institution"])),
            course=clean_text(_lookup(item, EDUCATION_ALIASES["course"])),
            period=clean_text(_lookup(item, EDUCATION_ALIASES["period"])),
            status=clean_text(_lookup(item, EDUCATION_ALIASES["status"])),
            description=clean_text(_lookup(item, EDUCATION_ALIASES["description"])),
        )
        if any(
            (entry.institution, entry.course, entry.period, entry.status, entry.description)
        ):
            entries.append(entry)
    return entries


def _parse_contact(payload: Dict[str, Any]) -> Contact:
    nested = _lookup(payload, FIELD_ALIASES["contact"])
    nested = nested if isinstance(nested, dict) else {}

    links = _lookup(payload, FIELD_ALIASES["links"]) or nested.get("links") or {}
    if not isinstance(links, dict):
        raise InvalidProfileError("'links' must be an object", field_name="links")

    return Contact(
        email=clean_text(_lookup(payload, FIELD_ALIASES["email"]) or nested.get("email")),
        links=ContactLinks(
            github=clean_text(links.get("github")),
            linkedin=clean_text(links.get("linkedin")),
        ),
        phone=clean_text(
            _lookup(payload, FIELD_ALIASES["phone"]) or _lookup(nested, FIELD_ALIASES["phone"])
        ),
    )


def _parse_section_titles(raw: Any) -> Dict[str, str]:
    if not isinstance(raw, dict):
        return {}
    titles = {}
    for key, label in raw.items():
        label = clean_text(label)
        if not label:
            continue
        titles[SECTION_TITLE_ALIASES.get(key, key)] = label
    return titles


def parse_cv(
    payload: Any,
    language: Union[str, Language, None] = None,
    source_path: Optional[Path] = None,
) -> CVDocument:
    """
    Normalize a decoded JSON profile into a CVDocument.

    Args:
        payload: Decoded JSON (must be an object)
        language: Profile language; falls back to the payload's language field, then pt
        source_path: File the payload came from (for error messages)

    Returns:
        CVDocument

    Raises:
        InvalidProfileError: If the payload is not an object, has no name,
            or a nested field has the wrong shape
    """
    if not isinstance(payload, dict):
        raise InvalidProfileError("Profile must be a JSON object", source_path=source_path)

    name = clean_text(_lookup(payload, FIELD_ALIASES["name"]))
    if not name:
        raise InvalidProfileError(
            "Profile is missing a non-empty name", source_path=source_path, field_name="name"
        )

    try:
        resolved_language = Language.parse(
            language or _lookup(payload, FIELD_ALIASES["language"]), default=Language.PT
        )
    except ValueError as e:
        raise InvalidProfileError(str(e), source_path=source_path, field_name="language")

    try:
        cv = CVDocument(
            name=name,
            language=resolved_language,
            subtitle=clean_text(_lookup(payload, FIELD_ALIASES["subtitle"])),
            summary=clean_text(_lookup(payload, FIELD_ALIASES["summary"])),
            objective=clean_text(_lookup(payload, FIELD_ALIASES["objective"])),
            contact=_parse_contact(payload),
            skills=_parse_skills(_lookup(payload, FIELD_ALIASES["skills"])),
            experience=_parse_experience(_lookup(payload, FIELD_ALIASES["experience"])),
            projects=_parse_projects(_lookup(payload, FIELD_ALIASES["projects"])),
            education=_parse_education(_lookup(payload, FIELD_ALIASES["education"])),
            certifications=_clean_list(_lookup(payload, FIELD_ALIASES["certifications"])),
            section_titles=_parse_section_titles(_lookup(payload, FIELD_ALIASES["section_titles"])),
        )
    except InvalidProfileError as e:
        if e.source_path is None and source_path is not None:
            raise InvalidProfileError(e.message, source_path=source_path, field_name=e.field_name)
        raise

    present = [key.value for key in SectionKey if cv.has_section(key)]
    _log_debug(f"Parsed profile '{cv.name}' ({cv.language.value}): sections {present}")
    return cv


def _language_from_filename(path: Path) -> Optional[Language]:
    for language, filename in DATA_FILES.items():
        if path.name == filename:
            return language
    return None


def load_cv(path: Union[str, Path], language: Union[str, Language, None] = None) -> CVDocument:
    """
    Load a résumé profile from a JSON file.

    Language resolution order: the ``language`` argument, the payload's
    ``language``/``idioma`` field, the data file name (``cv.en.json`` is
    English), then Portuguese.

    Raises:
        FileNotFoundError: If the file does not exist
        InvalidProfileError: If the file is not valid JSON or fails validation
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Profile not found: {path}")

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise InvalidProfileError(f"Invalid JSON: {e.msg} (line {e.lineno})", source_path=path)

    if language is None and isinstance(payload, dict):
        if _lookup(payload, FIELD_ALIASES["language"]) is None:
            language = _language_from_filename(path)

    cv = parse_cv(payload, language=language, source_path=path)
    _log_info(f"Loaded profile: {path}")
    return cv


def load_cv_for_language(
    language: Union[str, Language], data_dir: Optional[Path] = None
) -> CVDocument:
    """
    Load the profile data file for a language (``cv.json`` / ``cv.en.json``).

    Args:
        language: Language code
        data_dir: Directory holding the data files (default: PROFILE_DATA_PATH)

    Raises:
        InvalidProfileError: If the language is not supported
        FileNotFoundError: If the data file does not exist
    """
    try:
        resolved = Language.parse(language)
    except ValueError as e:
        raise InvalidProfileError(str(e), field_name="language")

    data_dir = Path(data_dir) if data_dir is not None else PROFILE_DATA_PATH
    return load_cv(data_dir / DATA_FILES[resolved], language=resolved)

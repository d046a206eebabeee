"""Unit tests for JSON profile loading and normalization."""

import json

import pytest

from vitae.contexts.profile import (
    CategorizedSkills,
    FlatSkills,
    InvalidProfileError,
    Language,
    SectionKey,
    SkillsKind,
    load_cv,
    load_cv_for_language,
    parse_cv,
)

PORTUGUESE_PAYLOAD = {
    "nome": "  Ana Souza ",
    "cargo": "Engenheira de Dados",
    "resumo": "Engenheira com foco em pipelines.",
    "email": "ana@example.com",
    "telefone": "+55 11 99999-0000",
    "links": {"github": "https://github.com/ana", "linkedin": ""},
    "habilidades": {"backend": ["Python", " SQL "], "tools": []},
    "experiencia": [
        {
            "cargo": "Engenheira de Dados",
            "empresa": "Dados S.A.",
            "periodo": "2022 - Atual",
            "tarefas": ["Modelagem", "", "Orquestração"],
        }
    ],
    "projetos": [{"nome": "ETL", "descricao": "Pipeline diário", "link": "https://example.com"}],
    "formacao": "Bacharelado em Estatística - USP (2018)",
    "certificacoes": ["GCP Data Engineer"],
    "secoes": {"resumo": "SOBRE MIM"},
}


@pytest.mark.unit
def test_parse_portuguese_payload():
    cv = parse_cv(PORTUGUESE_PAYLOAD)

    assert cv.name == "Ana Souza"
    assert cv.language == Language.PT
    assert cv.subtitle == "Engenheira de Dados"
    assert cv.contact.email == "ana@example.com"
    assert cv.contact.phone == "+55 11 99999-0000"
    assert cv.contact.links.github == "https://github.com/ana"
    assert cv.contact.links.linkedin is None
    assert cv.experience[0].company == "Dados S.A."
    assert cv.experience[0].tasks == ["Modelagem", "Orquestração"]
    assert cv.projects[0].description == "Pipeline diário"
    assert cv.certifications == ["GCP Data Engineer"]
    assert cv.section_titles == {"summary": "SOBRE MIM"}


@pytest.mark.unit
def test_skills_mapping_becomes_categorized():
    cv = parse_cv(PORTUGUESE_PAYLOAD)

    assert isinstance(cv.skills, CategorizedSkills)
    assert cv.skills.kind == SkillsKind.CATEGORIZED
    assert cv.skills.categories == {"backend": ["Python", "SQL"], "tools": []}


@pytest.mark.unit
def test_skills_list_becomes_flat():
    cv = parse_cv({"name": "Jane Doe", "skills": ["Python", "", "Go"]})

    assert isinstance(cv.skills, FlatSkills)
    assert cv.skills.kind == SkillsKind.FLAT
    assert cv.skills.items == ["Python", "Go"]


@pytest.mark.unit
def test_legacy_education_string():
    """A single education paragraph becomes one entry with the text as course."""
    cv = parse_cv(PORTUGUESE_PAYLOAD)

    assert len(cv.education) == 1
    assert cv.education[0].course == "Bacharelado em Estatística - USP (2018)"


@pytest.mark.unit
def test_legacy_project_strings():
    cv = parse_cv({"name": "Jane Doe", "projects": ["Portfolio site", "  "]})

    assert [project.name for project in cv.projects] == ["Portfolio site"]
    assert cv.projects[0].description is None


@pytest.mark.unit
@pytest.mark.parametrize("payload", [{}, {"name": ""}, {"nome": "   "}, {"name": None}])
def test_missing_name_rejected(payload):
    with pytest.raises(InvalidProfileError, match="name"):
        parse_cv(payload)


@pytest.mark.unit
def test_non_object_payload_rejected():
    with pytest.raises(InvalidProfileError):
        parse_cv(["not", "an", "object"])


@pytest.mark.unit
def test_malformed_experience_rejected():
    with pytest.raises(InvalidProfileError) as exc_info:
        parse_cv({"name": "Jane Doe", "experience": ["just a string"]})

    assert exc_info.value.field_name == "experience"


@pytest.mark.unit
def test_unsupported_language_rejected():
    with pytest.raises(InvalidProfileError) as exc_info:
        parse_cv({"name": "Jane Doe", "language": "fr"})

    assert exc_info.value.field_name == "language"


@pytest.mark.unit
@pytest.mark.parametrize(
    "code, expected",
    [("pt", Language.PT), ("EN", Language.EN), ("en-US", Language.EN), ("pt_BR", Language.PT)],
)
def test_language_parse(code, expected):
    assert Language.parse(code) == expected


@pytest.mark.unit
def test_empty_sections_are_absent():
    cv = parse_cv({"name": "Jane Doe", "summary": "ok", "certifications": []})

    assert cv.has_section(SectionKey.SUMMARY)
    assert not cv.has_section(SectionKey.CERTIFICATIONS)
    assert not cv.has_section(SectionKey.SKILLS)
    assert not cv.has_section(SectionKey.EXPERIENCE)


@pytest.mark.unit
def test_load_cv_language_from_filename(tmp_path):
    path = tmp_path / "cv.en.json"
    path.write_text(json.dumps({"name": "Jane Doe"}), encoding="utf-8")

    assert load_cv(path).language == Language.EN


@pytest.mark.unit
def test_load_cv_invalid_json(tmp_path):
    path = tmp_path / "cv.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(InvalidProfileError) as exc_info:
        load_cv(path)

    assert exc_info.value.source_path == path


@pytest.mark.unit
def test_load_cv_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_cv(tmp_path / "missing.json")


@pytest.mark.unit
@pytest.mark.parametrize("language", ["pt", "en"])
def test_bundled_profiles_load(profiles_path, language):
    cv = load_cv_for_language(language, data_dir=profiles_path)

    assert cv.name == "Mariana Costa Ribeiro"
    assert cv.language == Language(language)
    assert cv.skills.kind == SkillsKind.CATEGORIZED
    assert all(cv.has_section(key) for key in SectionKey)

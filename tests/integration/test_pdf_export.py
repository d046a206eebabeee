"""
Integration tests for PDF export.
Tests: profile JSON → ReportLab PDF → text read back with pdfplumber/PyPDF2.
"""

from datetime import date

import pytest
from PyPDF2 import PdfReader

from vitae.contexts.profile import CVDocument, ExperienceEntry, Language, load_cv_for_language
from vitae.contexts.rendering import (
    CallbackNotifier,
    FileExportSink,
    SurfaceUnavailableError,
    build_layout_config,
    export_cv,
)
from vitae.utils.pdf_processing import PDFDocument, page_count

EXPORT_DATE = date(2025, 11, 14)


def export_pdf(cv, config, tmp_path, **kwargs):
    return export_cv(
        cv,
        config=config,
        sink=FileExportSink(tmp_path / "results"),
        log_dir=tmp_path / "logs",
        events_file=tmp_path / "events.log",
        on_date=EXPORT_DATE,
        **kwargs,
    )


@pytest.mark.integration
@pytest.mark.parametrize("language", ["pt", "en"])
def test_export_bundled_profile(profiles_path, layout_config, tmp_path, language):
    cv = load_cv_for_language(language, data_dir=profiles_path)
    result = export_pdf(cv, layout_config, tmp_path)

    assert result.success
    assert result.path.name == f"Mariana_Costa_Ribeiro_Resume_ATS_{language}_2025-11-14.pdf"
    assert result.path.read_bytes().startswith(b"%PDF")
    assert page_count(result.path) == result.page_count

    pdf = PDFDocument(result.path)
    assert pdf.find("MARIANA COSTA RIBEIRO", whole_line=True)[0] == 1
    assert pdf.find("mariana.ribeiro@example.com") is not None


@pytest.mark.integration
def test_single_page_summary_pdf(layout_config, jane_doe, tmp_path):
    result = export_pdf(jane_doe, layout_config, tmp_path)

    assert result.page_count == 1
    lines = PDFDocument(result.path).get_lines(1)
    assert lines[0] == "JANE DOE"
    assert "PROFESSIONAL SUMMARY" in lines
    assert "CERTIFICATIONS" not in lines
    assert lines[-1] == "Jane Doe – Page 1 of 1"


@pytest.mark.integration
def test_long_history_paginates(layout_config, tmp_path):
    tasks = [f"Delivered feature number {i:02d} for the billing platform" for i in range(1, 61)]
    cv = CVDocument(
        name="Jane Doe",
        language=Language.EN,
        experience=[ExperienceEntry(role="Engineer", company="ACME", period="2015 - 2025", tasks=tasks)],
    )
    result = export_pdf(cv, layout_config, tmp_path)

    assert result.page_count >= 2
    pdf = PDFDocument(result.path)
    assert pdf.page_count == result.page_count

    found = []
    for page in pdf.iter_pages():
        found.extend(line for line in pdf.get_lines(page) if line.startswith("• "))
    assert found == [f"• {task}" for task in tasks]


@pytest.mark.integration
def test_document_metadata(layout_config, jane_doe, tmp_path):
    result = export_pdf(jane_doe, layout_config, tmp_path)
    metadata = PdfReader(str(result.path)).metadata

    assert metadata.title == "Resume - Curriculum Vitae"
    assert metadata.author == "Jane Doe"


@pytest.mark.integration
def test_letter_page_size(presets_path, jane_doe, tmp_path):
    config = build_layout_config(["page_letter"], config_path=presets_path)
    result = export_pdf(jane_doe, config, tmp_path)

    page = PdfReader(str(result.path)).pages[0]
    assert float(page.mediabox.width) == pytest.approx(612.0, abs=0.5)
    assert float(page.mediabox.height) == pytest.approx(792.0, abs=0.5)


@pytest.mark.integration
def test_missing_font_fails_before_layout(jane_doe, tmp_path):
    config = build_layout_config(
        overrides={
            "font_family": "NoSuchFont",
            "font_files": {"normal": str(tmp_path / "NoSuchFont.ttf")},
            "max_load_attempts": 2,
            "load_check_interval_s": 0,
        }
    )
    notifications = []

    with pytest.raises(SurfaceUnavailableError):
        export_pdf(
            jane_doe,
            config,
            tmp_path,
            notifier=CallbackNotifier(lambda outcome, message: notifications.append(outcome)),
        )

    assert notifications == ["failure"]
    assert not (tmp_path / "results").exists()


@pytest.mark.integration
def test_bullets_and_accents_survive_text_extraction(layout_config, tmp_path):
    cv = CVDocument(
        name="Ângela Simões",
        language=Language.PT,
        certifications=["AWS CCP"],
        experience=[
            ExperienceEntry(role="Engenheira", company="ACME", tasks=["Migração de serviços"])
        ],
    )
    result = export_pdf(cv, layout_config, tmp_path)

    lines = PDFDocument(result.path).get_lines(1)
    assert lines[0] == "ÂNGELA SIMÕES"
    assert "• AWS CCP" in lines
    assert "• Migração de serviços" in lines
    assert not any("(cid:" in line for line in lines)
    assert lines[-1] == "Ângela Simões – Página 1 de 1"

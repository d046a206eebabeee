"""Unit tests for the diagnostics hierarchy."""

import pytest

from vitae.contexts.rendering.diagnostics import (
    DocumentDiagnostics,
    PageDiagnostics,
    SectionDiagnostics,
)


@pytest.mark.unit
def test_issues_bubble_up_to_document():
    diagnostics = DocumentDiagnostics(actual_page_count=2, expected_page_count=1)
    diagnostics.components.append(PageDiagnostics(page_number=1, expected_footer="x", footer_found=True))
    diagnostics.components.append(SectionDiagnostics(section_key="summary", title="SUMMARY"))

    issues = diagnostics.get_inherited_issues()
    assert len(issues) == 2
    assert issues[0].startswith("Page count mismatch")
    assert "not found" in issues[1]
    assert not diagnostics.is_valid
    assert diagnostics.pages[0].is_valid


@pytest.mark.unit
def test_page_issues():
    page = PageDiagnostics(
        page_number=2,
        expected_footer="Jane Doe – Page 2 of 2",
        footer_found=False,
        lines_below_margin=["stray text"],
    )

    issues = page.get_issues()
    assert issues == [
        "Page 2: footer 'Jane Doe – Page 2 of 2' not found",
        "Page 2: 1 line(s) below bottom margin (first: 'stray text')",
    ]


@pytest.mark.unit
def test_section_out_of_order():
    section = SectionDiagnostics(
        section_key="summary", title="SUMMARY", page=1, line_index=3, preceded_by="skills"
    )

    assert section.found
    assert section.get_issues() == ["Section 'summary': found on page 1 before 'skills'"]


@pytest.mark.unit
def test_empty_document():
    assert DocumentDiagnostics(actual_page_count=0).get_issues() == ["PDF has no pages"]

"""
Layout diagnostics for exported résumé PDFs.

Reads an exported PDF back and checks it against the CVDocument and the
LayoutConfig it was rendered with:

- Footer: every page carries "{name} – Page i of N" (localized) with the
  right i and N
- Sections: every non-empty section title is present, in configured order
- Margins: no content line starts below the bottom margin (the footer band
  is exempt)

Text is matched after normalize_for_matching(), so punctuation and the
en dash in the footer don't affect matching.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from reportlab.lib.units import mm

from vitae.contexts.profile.cv_data_structure import CVDocument, SectionKey
from vitae.contexts.rendering.config import LayoutConfig
from vitae.utils.pdf_processing import PDFDocument, find_line, normalize_for_matching


class IssueTemplates:
    """Centralized issue message templates (f-string style)."""

    # Document-level
    PAGE_COUNT_MISMATCH = "Page count mismatch: {actual} (expected {expected})"
    EMPTY_DOCUMENT = "PDF has no pages"

    # Page-level
    FOOTER_NOT_FOUND = "Page {page}: footer '{footer}' not found"
    CONTENT_BELOW_MARGIN = "Page {page}: {count} line(s) below bottom margin (first: '{line}')"

    # Section-level
    SECTION_NOT_FOUND = "Section '{section}': title '{title}' not found"
    SECTION_OUT_OF_ORDER = "Section '{section}': found on page {page} before '{previous}'"


# =============================================================================
# Diagnostics Hierarchy
# =============================================================================


@dataclass
class Diagnostics:
    """Base class for hierarchical diagnostics."""

    components: List["Diagnostics"] = field(default_factory=list)

    def get_issues(self) -> List[str]:
        """Generate issues for this level based on field values. Override in subclasses."""
        return []

    def get_inherited_issues(self) -> List[str]:
        """Collect issues from this level and all descendants."""
        all_issues = list(self.get_issues())
        for component in self.components:
            all_issues.extend(component.get_inherited_issues())
        return all_issues

    @property
    def is_valid(self) -> bool:
        """True if no issues at this level or any descendant."""
        return len(self.get_inherited_issues()) == 0


@dataclass
class SectionDiagnostics(Diagnostics):
    """Where a section title was found, and whether it respects the configured order."""

    section_key: str = ""
    title: str = ""
    page: Optional[int] = None
    line_index: Optional[int] = None
    preceded_by: Optional[str] = None  # Section expected earlier but found later

    @property
    def found(self) -> bool:
        return self.page is not None

    def get_issues(self) -> List[str]:
        if not self.found:
            return [IssueTemplates.SECTION_NOT_FOUND.format(section=self.section_key, title=self.title)]
        if self.preceded_by:
            return [
                IssueTemplates.SECTION_OUT_OF_ORDER.format(
                    section=self.section_key, page=self.page, previous=self.preceded_by
                )
            ]
        return []


@dataclass
class PageDiagnostics(Diagnostics):
    """Footer and margin checks for one page."""

    page_number: int = 0
    expected_footer: str = ""
    footer_found: bool = False
    lines_below_margin: List[str] = field(default_factory=list)

    def get_issues(self) -> List[str]:
        issues = []
        if not self.footer_found:
            issues.append(
                IssueTemplates.FOOTER_NOT_FOUND.format(
                    page=self.page_number, footer=self.expected_footer
                )
            )
        if self.lines_below_margin:
            issues.append(
                IssueTemplates.CONTENT_BELOW_MARGIN.format(
                    page=self.page_number,
                    count=len(self.lines_below_margin),
                    line=self.lines_below_margin[0],
                )
            )
        return issues


@dataclass
class DocumentDiagnostics(Diagnostics):
    """Top-level diagnostics for an exported document."""

    pdf_path: Optional[Path] = None
    actual_page_count: int = 0
    expected_page_count: Optional[int] = None

    @property
    def pages(self) -> List[PageDiagnostics]:
        return [c for c in self.components if isinstance(c, PageDiagnostics)]

    @property
    def sections(self) -> List[SectionDiagnostics]:
        return [c for c in self.components if isinstance(c, SectionDiagnostics)]

    def get_issues(self) -> List[str]:
        issues = []
        if self.actual_page_count == 0:
            issues.append(IssueTemplates.EMPTY_DOCUMENT)
        if self.expected_page_count is not None and self.actual_page_count != self.expected_page_count:
            issues.append(
                IssueTemplates.PAGE_COUNT_MISMATCH.format(
                    actual=self.actual_page_count, expected=self.expected_page_count
                )
            )
        return issues


# =============================================================================
# Analysis
# =============================================================================


def _analyze_page(
    pdf: PDFDocument, page: int, total: int, cv: CVDocument, config: LayoutConfig
) -> PageDiagnostics:
    footer = config.texts.footer_text(cv.name.strip(), page, total, cv.language.value)
    footer_norm = normalize_for_matching(footer)
    boxes = pdf.get_line_boxes(page)

    # pdfplumber measures from the top edge in points
    page_height_pt = pdf.page_height(page) or config.page_height * mm
    bottom_limit_pt = page_height_pt - config.margins.bottom * mm
    below_margin = [
        line.text
        for line in boxes
        if line.top > bottom_limit_pt and normalize_for_matching(line.text) != footer_norm
    ]

    return PageDiagnostics(
        page_number=page,
        expected_footer=footer,
        footer_found=find_line(footer, [line.text for line in boxes]) is not None,
        lines_below_margin=below_margin,
    )


def _analyze_sections(
    pdf: PDFDocument, cv: CVDocument, config: LayoutConfig
) -> List[SectionDiagnostics]:
    results: List[SectionDiagnostics] = []
    latest = None  # (page, line_index, section_key) of the furthest section so far

    for raw_key in config.section_order:
        key = SectionKey(raw_key)
        if not cv.has_section(key):
            continue

        title = config.texts.section_title(key.value, cv.language.value, cv.section_titles)
        location = pdf.find(title, whole_line=True)
        diagnostics = SectionDiagnostics(section_key=key.value, title=title)

        if location is not None:
            diagnostics.page, diagnostics.line_index = location
            if latest is not None and location < latest[:2]:
                diagnostics.preceded_by = latest[2]
            else:
                latest = (location[0], location[1], key.value)

        results.append(diagnostics)

    return results


def analyze_export(
    pdf_path: Union[str, Path],
    cv: CVDocument,
    config: LayoutConfig,
    expected_page_count: Optional[int] = None,
) -> DocumentDiagnostics:
    """
    Check an exported PDF against the document and layout it came from.

    Args:
        pdf_path: Exported PDF
        cv: Document that was exported
        config: Layout configuration used for the export
        expected_page_count: Optional page count to enforce

    Returns:
        DocumentDiagnostics with per-page and per-section components

    Raises:
        FileNotFoundError: If pdf_path doesn't exist
    """
    pdf = PDFDocument(pdf_path)
    total = pdf.page_count

    diagnostics = DocumentDiagnostics(
        pdf_path=Path(pdf_path),
        actual_page_count=total,
        expected_page_count=expected_page_count,
    )
    for page in range(1, total + 1):
        diagnostics.components.append(_analyze_page(pdf, page, total, cv, config))
    diagnostics.components.extend(_analyze_sections(pdf, cv, config))

    return diagnostics

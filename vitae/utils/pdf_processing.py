"""
PDF processing utilities for reading exported résumés back as text lines.

Main class:
    PDFDocument: Parsed PDF with line reconstruction, positions and search.

Helper functions:
    page_count: Quick page count without full extraction.
    normalize_for_matching: Text normalization for fuzzy matching.
    cluster_by_y_tolerance: Y-coordinate clustering for line detection.
    find_line: Find a line in a list of lines.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple, Union

import pdfplumber
from PyPDF2 import PdfReader


def page_count(pdf_path: Path) -> Optional[int]:
    """Get page count from PDF, or None if unreadable."""
    try:
        reader = PdfReader(str(pdf_path))
        return len(reader.pages)
    except Exception:
        return None


def normalize_for_matching(text: str) -> str:
    """Keep only lowercase alphanumeric characters for fuzzy text matching."""
    return "".join(c for c in text.lower() if c.isalnum())


def cluster_by_y_tolerance(chars: List, tolerance: float = 3.0) -> List[List]:
    """
    Group characters into lines by Y-coordinate proximity.

    Handles baseline shifts between bold/regular text that would otherwise split lines.
    """
    if not chars:
        return []

    sorted_chars = sorted(chars, key=lambda c: c["top"])

    lines = []
    current_line = [sorted_chars[0]]
    current_y = sorted_chars[0]["top"]

    for char in sorted_chars[1:]:
        if abs(char["top"] - current_y) <= tolerance:
            current_line.append(char)
        else:
            lines.append(current_line)
            current_line = [char]
            current_y = char["top"]

    if current_line:
        lines.append(current_line)

    return lines


def find_line(text: str, lines: List[str], whole_line: bool = True) -> Optional[int]:
    """Find index of text in lines using normalized matching, or None."""
    target = normalize_for_matching(text)
    for i, line in enumerate(lines):
        line_norm = normalize_for_matching(line)
        if (target == line_norm) if whole_line else (target in line_norm):
            return i
    return None


@dataclass
class PDFLine:
    """
    A reconstructed text line with its vertical extent in points.

    Attributes:
        text: Line text, characters ordered left to right
        top: Distance from the top of the page to the top of the line
        bottom: Distance from the top of the page to the bottom of the line
    """

    text: str
    top: float
    bottom: float


class PDFDocument:
    """
    Parsed PDF with line-based text extraction.

    Characters are clustered into lines by their Y coordinate and spaces are
    re-inserted where pdfplumber reports a horizontal gap. Page data is
    lazily loaded and cached on first access.

    Args:
        pdf_path: Path to PDF file
        y_tolerance: Max Y-distance (points) to group characters as same line.

    Example:
        >>> pdf = PDFDocument(Path("Jane_Doe_Resume_ATS_en_2025-11-14.pdf"))
        >>> for line in pdf.get_lines(page=1):
        ...     print(line)
    """

    def __init__(self, pdf_path: Union[str, Path], y_tolerance: float = 3.0):
        pdf_path = Path(pdf_path)
        if not pdf_path.exists():
            raise FileNotFoundError(f"PDF not found: {pdf_path}")

        self.pdf_path = pdf_path
        self.y_tolerance = y_tolerance
        self._pages_cache: Optional[Dict[int, List[PDFLine]]] = None
        self._page_heights: Dict[int, float] = {}
        self._page_count: Optional[int] = None

    @property
    def page_count(self) -> int:
        if self._page_count is None:
            self._page_count = page_count(self.pdf_path) or 0
        return self._page_count

    def _extract_pages(self, max_pages: int = 100) -> Dict[int, List[PDFLine]]:
        """Extract positioned text lines from every page (1-indexed)."""
        pages_data: Dict[int, List[PDFLine]] = {}

        with pdfplumber.open(self.pdf_path) as pdf:
            for page_num, page in enumerate(pdf.pages[:max_pages], start=1):
                self._page_heights[page_num] = float(page.height)
                pages_data[page_num] = self._chars_to_lines(page.chars)

        return pages_data

    def _chars_to_lines(self, chars: List) -> List[PDFLine]:
        """Convert character list to positioned lines with Y-clustering."""
        lines = []
        for char_objs in cluster_by_y_tolerance(chars, tolerance=self.y_tolerance):
            char_objs.sort(key=lambda c: c["x0"])
            pieces = []
            previous = None
            for char in char_objs:
                # Re-insert spaces that the PDF encodes as positioning gaps
                if previous is not None and char["x0"] - previous["x1"] > char["size"] * 0.2:
                    if not pieces or pieces[-1] != " ":
                        pieces.append(" ")
                pieces.append(char["text"])
                previous = char
            lines.append(
                PDFLine(
                    text="".join(pieces),
                    top=min(c["top"] for c in char_objs),
                    bottom=max(c["bottom"] for c in char_objs),
                )
            )
        return lines

    def _ensure_loaded(self) -> None:
        """Lazily load page data if not already cached."""
        if self._pages_cache is None:
            self._pages_cache = self._extract_pages()

    def get_line_boxes(self, page: int) -> List[PDFLine]:
        """Positioned lines for a page (1-indexed); empty if the page doesn't exist."""
        self._ensure_loaded()
        return list(self._pages_cache.get(page, []))

    def get_lines(self, page: int) -> List[str]:
        """Text lines for a page (1-indexed), top-to-bottom order."""
        return [line.text for line in self.get_line_boxes(page)]

    def page_height(self, page: int) -> Optional[float]:
        """Height of a page in points, or None if the page doesn't exist."""
        self._ensure_loaded()
        return self._page_heights.get(page)

    def find(self, text: str, whole_line: bool = False) -> Optional[Tuple[int, int]]:
        """
        Find first occurrence of text in the document.

        Returns:
            Tuple of (page, line_index) for first match, or None.
        """
        result = self.find_all(text, whole_line=whole_line, limit=1)
        return result[0] if result else None

    def find_all(
        self, text: str, whole_line: bool = False, limit: Optional[int] = None
    ) -> List[Tuple[int, int]]:
        """Find all occurrences of text as (page, line_index) tuples."""
        self._ensure_loaded()
        results: List[Tuple[int, int]] = []
        text_norm = normalize_for_matching(text)

        for page_num in sorted(self._pages_cache.keys()):
            for line_idx, line in enumerate(self._pages_cache[page_num]):
                line_norm = normalize_for_matching(line.text)
                match = (text_norm == line_norm) if whole_line else (text_norm in line_norm)
                if match:
                    results.append((page_num, line_idx))
                    if limit and len(results) >= limit:
                        return results

        return results

    def iter_pages(self) -> Iterator[int]:
        """Iterate over page numbers (1-indexed)."""
        self._ensure_loaded()
        return iter(sorted(self._pages_cache.keys()))

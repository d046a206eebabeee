"""
Rendering Surfaces

A surface is the drawing target of one export: font and color selection,
text measurement, text and line drawing, page creation and page addressing.

Surfaces record drawing calls into a per-page display list, so any page
1..N can be revisited (the footer pass does this) before the artifact is
produced by ``output()``.

Readiness is an explicit state machine:

    UNINITIALIZED -> LOADING -> READY
                             -> FAILED

``ensure_ready()`` polls the backend a bounded number of times and raises
SurfaceUnavailableError once attempts are exhausted. No drawing call is
accepted before the surface is READY.
"""

import time
from dataclasses import dataclass
from enum import Enum
from io import BytesIO
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from reportlab import rl_config
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen.canvas import Canvas

from vitae.contexts.rendering.defaults import BUNDLED_FONT_FILES, DEFAULT_FONT_FAMILY
from vitae.contexts.rendering.exceptions import SurfaceUnavailableError
from vitae.contexts.rendering.logger import _log_debug, _log_warning
from vitae.contexts.rendering.measurement import (
    FixedWidthMeasurer,
    FontContext,
    ReportLabMeasurer,
    TextMeasurer,
)

RGB = Tuple[int, int, int]


class SurfaceState(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class DrawOp:
    """
    One recorded drawing call.

    Attributes:
        kind: "text" or "line"
        x: Left (text) or start (line) x, mm from the left edge
        y: Baseline (text) or start (line) y, mm from the top edge
        font: Font selected when the call was made
        color: Fill (text) or stroke (line) color
        text: Text drawn (text ops only)
        x2: End x (line ops only)
        y2: End y (line ops only)
        line_width: Stroke width in mm (line ops only)
    """

    kind: str
    x: float
    y: float
    font: FontContext
    color: RGB
    text: Optional[str] = None
    x2: Optional[float] = None
    y2: Optional[float] = None
    line_width: Optional[float] = None


class DisplayListSurface:
    """
    Base surface recording drawing calls per page.

    Args:
        page_width: Page width (mm)
        page_height: Page height (mm)
        measurer: Text measurement adapter
        font_family: Initial font family
    """

    backend_name = "display-list"

    def __init__(
        self,
        page_width: float,
        page_height: float,
        measurer: TextMeasurer,
        font_family: str = "Helvetica",
    ):
        self.page_width = page_width
        self.page_height = page_height
        self.measurer = measurer
        self.font_family = font_family
        self.state = SurfaceState.UNINITIALIZED
        self.last_error: Optional[BaseException] = None
        self.properties: Dict[str, str] = {}
        self._pages: List[List[DrawOp]] = []
        self._current_page = 0
        self._font = FontContext(family=font_family)
        self._text_color: RGB = (0, 0, 0)
        self._draw_color: RGB = (0, 0, 0)
        self._line_width = 0.2

    # ------------------------------------------------------------------
    # Readiness
    # ------------------------------------------------------------------

    def _probe(self) -> bool:
        """Check (and if needed load) the backend. May raise; errors count as not ready."""
        return True

    def ensure_ready(
        self,
        max_attempts: int = 50,
        interval_s: float = 0.2,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Poll the backend until it is ready, at most ``max_attempts`` times.

        Raises:
            SurfaceUnavailableError: If the surface is (or becomes) FAILED
        """
        if self.state == SurfaceState.READY:
            return
        if self.state == SurfaceState.FAILED:
            raise SurfaceUnavailableError(
                f"{self.backend_name} surface previously failed to load",
                stage="surface",
                original_error=self.last_error,
            )

        self.state = SurfaceState.LOADING
        for attempt in range(1, max(1, max_attempts) + 1):
            try:
                ready = self._probe()
            except Exception as e:
                self.last_error = e
                ready = False
                _log_debug(f"{self.backend_name} probe {attempt}/{max_attempts} failed: {e}")

            if ready:
                self.state = SurfaceState.READY
                _log_debug(f"{self.backend_name} surface ready after {attempt} attempt(s)")
                return

            if attempt < max_attempts:
                sleep(interval_s)

        self.state = SurfaceState.FAILED
        _log_warning(f"{self.backend_name} surface failed after {max_attempts} attempt(s)")
        raise SurfaceUnavailableError(
            f"{self.backend_name} surface not ready after {max_attempts} attempt(s)",
            stage="surface",
            original_error=self.last_error,
        )

    def _require_ready(self) -> None:
        if self.state != SurfaceState.READY:
            raise SurfaceUnavailableError(
                f"{self.backend_name} surface is {self.state.value}, not ready", stage="surface"
            )

    # ------------------------------------------------------------------
    # Document and pages
    # ------------------------------------------------------------------

    def new_document(self, properties: Optional[Dict[str, str]] = None) -> None:
        """Discard any recorded content and start over with a single empty page."""
        self._require_ready()
        self._pages = [[]]
        self._current_page = 1
        self.properties = dict(properties or {})
        self._font = FontContext(family=self.font_family)
        self._text_color = (0, 0, 0)
        self._draw_color = (0, 0, 0)

    def add_page(self) -> int:
        """Append a page and make it current. Returns its 1-based number."""
        self._require_ready()
        self._pages.append([])
        self._current_page = len(self._pages)
        return self._current_page

    def set_page(self, page: int) -> None:
        """Make an existing page (1-based) current."""
        if not 1 <= page <= len(self._pages):
            raise IndexError(f"Page {page} out of range (1..{len(self._pages)})")
        self._current_page = page

    @property
    def page_count(self) -> int:
        return len(self._pages)

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def pages(self) -> List[Tuple[DrawOp, ...]]:
        """Recorded operations per page (read-only snapshot)."""
        return [tuple(ops) for ops in self._pages]

    # ------------------------------------------------------------------
    # State selection
    # ------------------------------------------------------------------

    def set_font(self, style: Optional[str] = None, size: Optional[float] = None) -> None:
        self._font = FontContext(
            family=self.font_family,
            style=style if style is not None else self._font.style,
            size=size if size is not None else self._font.size,
        )

    @property
    def font(self) -> FontContext:
        return self._font

    def set_text_color(self, color: RGB) -> None:
        self._text_color = tuple(color)

    def set_draw_color(self, color: RGB) -> None:
        self._draw_color = tuple(color)

    def set_line_width(self, width: float) -> None:
        self._line_width = width

    # ------------------------------------------------------------------
    # Measurement and drawing
    # ------------------------------------------------------------------

    def measure(self, text: str) -> float:
        """Width of text (mm) under the currently selected font."""
        return self.measurer.measure(text, self._font)

    def text(self, text: str, x: float, y: float) -> None:
        self._require_ready()
        self._pages[self._current_page - 1].append(
            DrawOp(kind="text", x=x, y=y, font=self._font, color=self._text_color, text=text)
        )

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self._require_ready()
        self._pages[self._current_page - 1].append(
            DrawOp(
                kind="line",
                x=x1,
                y=y1,
                x2=x2,
                y2=y2,
                font=self._font,
                color=self._draw_color,
                line_width=self._line_width,
            )
        )

    # ------------------------------------------------------------------
    # Output and lifecycle
    # ------------------------------------------------------------------

    def output(self) -> bytes:
        raise NotImplementedError

    def close(self) -> None:
        """Release recorded content. The surface can't be drawn on until new_document()."""
        self._pages = []
        self._current_page = 0

    def __enter__(self) -> "DisplayListSurface":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class TextSurface(DisplayListSurface):
    """
    Plain-text surface with fixed-width measurement.

    The artifact is UTF-8 text: each page's text runs ordered top-to-bottom
    (runs sharing a baseline joined left-to-right with a space), pages
    separated by a form feed.
    """

    backend_name = "text"
    file_extension = "txt"

    def __init__(self, page_width: float, page_height: float, char_width: float = 2.0, **kwargs):
        super().__init__(page_width, page_height, FixedWidthMeasurer(char_width), **kwargs)

    def page_lines(self, page: int) -> List[str]:
        """Text lines of a page (1-based), top-to-bottom."""
        rows: Dict[float, List[DrawOp]] = {}
        for op in self._pages[page - 1]:
            if op.kind == "text":
                rows.setdefault(round(op.y, 3), []).append(op)
        return [
            " ".join(op.text for op in sorted(rows[y], key=lambda op: op.x)) for y in sorted(rows)
        ]

    def output(self) -> bytes:
        pages = ["\n".join(self.page_lines(n)) for n in range(1, self.page_count + 1)]
        return "\f".join(pages).encode("utf-8")


def resolve_font_file(font_path: str) -> Path:
    """
    Locate a TrueType file: as given, else on ReportLab's TTF search path
    (which includes the fonts ReportLab ships).

    Raises:
        FileNotFoundError: If the file is found nowhere
    """
    path = Path(font_path)
    if path.is_file():
        return path
    if not path.is_absolute():
        for directory in rl_config.TTFSearchPath:
            candidate = Path(directory) / path
            if candidate.is_file():
                return candidate
    raise FileNotFoundError(f"Font file not found: {font_path}")


class ReportLabSurface(DisplayListSurface):
    """
    PDF surface backed by ReportLab.

    Measurement uses ReportLab's font metrics so wrapping matches what is
    drawn. TrueType fonts listed in ``font_files`` ({"normal": path,
    "bold": path}) are registered during the readiness probe; families in
    BUNDLED_FONT_FILES need no explicit files.
    """

    backend_name = "reportlab"
    file_extension = "pdf"

    def __init__(
        self,
        page_width: float,
        page_height: float,
        font_family: str = DEFAULT_FONT_FAMILY,
        font_files: Optional[Dict[str, str]] = None,
    ):
        super().__init__(page_width, page_height, ReportLabMeasurer(), font_family=font_family)
        self.font_files = dict(font_files or BUNDLED_FONT_FILES.get(font_family, {}))

    def _probe(self) -> bool:
        for style, font_path in self.font_files.items():
            font_name = FontContext(family=self.font_family, style=style).font_name
            if font_name not in pdfmetrics.getRegisteredFontNames():
                path = resolve_font_file(font_path)
                pdfmetrics.registerFont(TTFont(font_name, str(path)))

        # Raises KeyError if a font can't be resolved
        for style in ("normal", "bold"):
            pdfmetrics.getFont(FontContext(family=self.font_family, style=style).font_name)
        return True

    def output(self) -> bytes:
        self._require_ready()
        buffer = BytesIO()
        canvas = Canvas(buffer, pagesize=(self.page_width * mm, self.page_height * mm))

        if self.properties.get("title"):
            canvas.setTitle(self.properties["title"])
        if self.properties.get("subject"):
            canvas.setSubject(self.properties["subject"])
        if self.properties.get("author"):
            canvas.setAuthor(self.properties["author"])
        if self.properties.get("creator"):
            canvas.setCreator(self.properties["creator"])

        for ops in self._pages:
            for op in ops:
                if op.kind == "text":
                    canvas.setFont(op.font.font_name, op.font.size)
                    canvas.setFillColorRGB(*(c / 255 for c in op.color))
                    canvas.drawString(op.x * mm, (self.page_height - op.y) * mm, op.text)
                elif op.kind == "line":
                    canvas.setStrokeColorRGB(*(c / 255 for c in op.color))
                    canvas.setLineWidth(op.line_width * mm)
                    canvas.line(
                        op.x * mm,
                        (self.page_height - op.y) * mm,
                        op.x2 * mm,
                        (self.page_height - op.y2) * mm,
                    )
            canvas.showPage()

        canvas.save()
        return buffer.getvalue()

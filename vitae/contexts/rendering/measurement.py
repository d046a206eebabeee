"""
Text measurement adapters.

A measurer returns the rendered width of a string, in millimetres, under a
given font context. Layout code never measures directly: it asks the
rendering surface, which forwards to its measurer with the font currently
selected. Widths must be queried again after every font change.
"""

from dataclasses import dataclass
from typing import Protocol

from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics

# Standard Type 1 families and their bold variants
STANDARD_BOLD_FONTS = {
    "Helvetica": "Helvetica-Bold",
    "Times-Roman": "Times-Bold",
    "Courier": "Courier-Bold",
}


@dataclass(frozen=True)
class FontContext:
    """
    Currently selected font.

    Attributes:
        family: Base font family (e.g., "Helvetica")
        style: "normal" or "bold"
        size: Font size in points
    """

    family: str = "Helvetica"
    style: str = "normal"
    size: float = 11.0

    @property
    def font_name(self) -> str:
        """Concrete font name for the style (e.g., "Helvetica-Bold")."""
        if self.style != "bold":
            return self.family
        if self.family in STANDARD_BOLD_FONTS:
            return STANDARD_BOLD_FONTS[self.family]
        return f"{self.family}-Bold"


class TextMeasurer(Protocol):
    def measure(self, text: str, font: FontContext) -> float: ...


class ReportLabMeasurer:
    """Measures with the font metrics ReportLab uses to draw, converted to millimetres."""

    def measure(self, text: str, font: FontContext) -> float:
        return pdfmetrics.stringWidth(text, font.font_name, font.size) / mm


class FixedWidthMeasurer:
    """
    Every character is ``char_width`` wide, regardless of font.

    Gives deterministic layouts for plain-text previews and tests.
    """

    def __init__(self, char_width: float = 2.0):
        if char_width <= 0:
            raise ValueError(f"char_width must be positive, got {char_width}")
        self.char_width = char_width

    def measure(self, text: str, font: FontContext) -> float:
        return len(text) * self.char_width

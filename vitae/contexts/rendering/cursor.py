"""
Layout cursor and page-break control.

The cursor tracks where the next unit of content goes: the vertical offset
from the top of the page (mm) and the 1-based page index. ``ensure_space``
is called before every atomic unit (one wrapped line, one bullet, one
section title). Page breaks are therefore decided per line, not per block,
so a paragraph or task list may continue on the next page.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from vitae.contexts.rendering.config import LayoutConfig, Margins


@dataclass
class LayoutCursor:
    """
    Mutable layout position for one export.

    Attributes:
        y: Current vertical offset from the top edge (mm)
        page: Current page (1-based)
        page_width: Page width (mm)
        page_height: Page height (mm)
        margins: Page margins (mm)
    """

    y: float
    page: int
    page_width: float
    page_height: float
    margins: Margins

    @classmethod
    def from_config(cls, config: LayoutConfig) -> "LayoutCursor":
        """Fresh cursor at the top margin of page 1."""
        return cls(
            y=config.margins.top,
            page=1,
            page_width=config.page_width,
            page_height=config.page_height,
            margins=config.margins,
        )

    @property
    def bottom_limit(self) -> float:
        """Lowest y content may reach on a page."""
        return self.page_height - self.margins.bottom

    @property
    def content_width(self) -> float:
        return self.page_width - self.margins.left - self.margins.right

    @property
    def remaining(self) -> float:
        """Vertical space left above the bottom margin."""
        return self.bottom_limit - self.y

    def advance(self, amount: float) -> None:
        self.y += amount


def ensure_space(
    cursor: LayoutCursor,
    required_space: float,
    on_new_page: Optional[Callable[[], object]] = None,
) -> bool:
    """
    Start a new page if ``required_space`` doesn't fit above the bottom margin.

    On a break the page index grows by exactly one and ``y`` resets to the
    top margin; ``on_new_page`` (typically the surface's ``add_page``) is
    called so the drawing target follows the cursor. Otherwise the cursor is
    left untouched.

    Returns:
        True if a new page was started
    """
    if cursor.y + required_space > cursor.bottom_limit:
        cursor.page += 1
        cursor.y = cursor.margins.top
        if on_new_page is not None:
            on_new_page()
        return True
    return False

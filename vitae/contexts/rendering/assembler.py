"""
Document Assembler

Drives one export through a strictly sequential state machine:

    IDLE -> INITIALIZED -> HEADER_RENDERED -> CONTENT_RENDERED
         -> FOOTER_RENDERED -> SAVED

Each assemble() call creates its own surface through the factory and closes
it afterwards, so nothing leaks between exports. Any failure before SAVED
aborts the export and no partial artifact is returned.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from vitae.contexts.profile.cv_data_structure import CVDocument, SectionKey
from vitae.contexts.rendering.config import LayoutConfig
from vitae.contexts.rendering.cursor import LayoutCursor
from vitae.contexts.rendering.exceptions import (
    ExportError,
    InvalidInputError,
    LayoutFailureError,
    SurfaceUnavailableError,
)
from vitae.contexts.rendering.logger import _log_debug, _log_info
from vitae.contexts.rendering.sections import SectionRenderer
from vitae.contexts.rendering.surface import DisplayListSurface, ReportLabSurface
from vitae.contexts.rendering.wrapping import single_line, wrap_text

SurfaceFactory = Callable[[LayoutConfig], DisplayListSurface]


class AssemblerState(str, Enum):
    IDLE = "idle"
    INITIALIZED = "initialized"
    HEADER_RENDERED = "header_rendered"
    CONTENT_RENDERED = "content_rendered"
    FOOTER_RENDERED = "footer_rendered"
    SAVED = "saved"


@dataclass
class RenderedDocument:
    """
    Finished artifact of one assemble() call.

    Attributes:
        content: Serialized artifact (PDF bytes or UTF-8 text)
        page_count: Number of pages produced
        extension: File extension matching the surface ("pdf", "txt")
        sections: Section keys that produced output, in render order
    """

    content: bytes
    page_count: int
    extension: str
    sections: List[SectionKey]


def reportlab_surface_factory(config: LayoutConfig) -> DisplayListSurface:
    """Default factory: a fresh ReportLab PDF surface sized from the config."""
    return ReportLabSurface(
        page_width=config.page_width,
        page_height=config.page_height,
        font_family=config.font_family,
        font_files=config.font_files,
    )


class DocumentAssembler:
    """
    Lays out a CVDocument into a paginated artifact.

    Args:
        config: Layout configuration
        surface_factory: Creates a fresh surface per export (default: ReportLab PDF)
    """

    def __init__(self, config: LayoutConfig, surface_factory: Optional[SurfaceFactory] = None):
        self.config = config
        self.surface_factory = surface_factory or reportlab_surface_factory
        self.state = AssemblerState.IDLE
        self.surface: Optional[DisplayListSurface] = None
        self.cursor: Optional[LayoutCursor] = None

    def _advance_state(self, state: AssemblerState) -> None:
        _log_debug(f"Assembler: {self.state.value} -> {state.value}")
        self.state = state

    def _center_text(self, text: str, y: float) -> None:
        x = (self.config.page_width - self.surface.measure(text)) / 2
        self.surface.text(text, x, y)

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def _initialize(self, cv: CVDocument) -> None:
        self.surface.ensure_ready(
            max_attempts=self.config.max_load_attempts,
            interval_s=self.config.load_check_interval_s,
        )
        if not cv.name or not cv.name.strip():
            raise InvalidInputError("CV name is required", stage=AssemblerState.INITIALIZED.value)

        properties = dict(self.config.document_properties)
        properties.setdefault("author", cv.name)
        self.surface.new_document(properties)
        self.cursor = LayoutCursor.from_config(self.config)
        self._advance_state(AssemblerState.INITIALIZED)

    def _render_header(self, cv: CVDocument) -> None:
        surface, cursor, config = self.surface, self.cursor, self.config
        spacing = config.spacing
        language = cv.language.value

        surface.set_font(style="bold", size=config.font_sizes.name)
        surface.set_text_color(config.colors.primary)
        self._center_text(cv.name.strip().upper(), cursor.y)
        cursor.advance(spacing.header_spacing)

        if cv.subtitle:
            surface.set_font(style="normal", size=config.font_sizes.subsection)
            surface.set_text_color(config.colors.text)
            for line in wrap_text(single_line(cv.subtitle), cursor.content_width, surface.measure):
                self._center_text(line, cursor.y)
                cursor.advance(spacing.compact_line)
            cursor.advance(spacing.header_spacing - spacing.compact_line)

        surface.set_font(style="normal", size=config.font_sizes.body)
        surface.set_text_color(config.colors.text)
        for line in self._contact_lines(cv, language):
            for wrapped in wrap_text(single_line(line), cursor.content_width, surface.measure):
                self._center_text(wrapped, cursor.y)
                cursor.advance(spacing.compact_line)
        cursor.advance(spacing.header_spacing)

        surface.set_line_width(0.3)
        surface.set_draw_color(config.colors.rule)
        surface.line(
            config.margins.left + spacing.separator_inset,
            cursor.y,
            config.page_width - config.margins.right - spacing.separator_inset,
            cursor.y,
        )
        cursor.advance(spacing.header_spacing)
        self._advance_state(AssemblerState.HEADER_RENDERED)

    def _contact_lines(self, cv: CVDocument, language: str) -> List[str]:
        texts = self.config.texts
        contact = cv.contact
        entries = [
            ("email", contact.email),
            ("github", contact.links.github),
            ("linkedin", contact.links.linkedin),
            ("phone", contact.phone),
        ]
        return [f"{texts.contact_label(key, language)}: {value}" for key, value in entries if value]

    def _render_content(self, cv: CVDocument) -> List[SectionKey]:
        renderer = SectionRenderer(self.surface, self.cursor, self.config, cv)
        rendered = renderer.render_all(self.config.section_order)
        self._advance_state(AssemblerState.CONTENT_RENDERED)
        return rendered

    def _render_footer(self, cv: CVDocument) -> None:
        surface, config = self.surface, self.config
        total = surface.page_count
        footer_y = config.page_height - config.spacing.footer_offset

        for page in range(1, total + 1):
            surface.set_page(page)
            surface.set_font(style="normal", size=config.font_sizes.small)
            surface.set_text_color(config.colors.muted)
            footer = config.texts.footer_text(cv.name.strip(), page, total, cv.language.value)
            self._center_text(footer, footer_y)

        self._advance_state(AssemblerState.FOOTER_RENDERED)

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def assemble(self, cv: CVDocument) -> RenderedDocument:
        """
        Run every stage on a fresh surface and return the finished artifact.

        Raises:
            SurfaceUnavailableError: If the surface could not be created or never became ready
            InvalidInputError: If the document has no name
            LayoutFailureError: If layout fails for any other reason
        """
        self.state = AssemblerState.IDLE
        try:
            self.surface = self.surface_factory(self.config)
        except ExportError:
            raise
        except Exception as e:
            raise SurfaceUnavailableError(
                "Could not create a rendering surface",
                stage=self.state.value,
                original_error=e,
            ) from e

        try:
            self._initialize(cv)
            self._render_header(cv)
            sections = self._render_content(cv)
            self._render_footer(cv)

            document = RenderedDocument(
                content=self.surface.output(),
                page_count=self.surface.page_count,
                extension=getattr(self.surface, "file_extension", "bin"),
                sections=sections,
            )
            self._advance_state(AssemblerState.SAVED)
            _log_info(
                f"Assembled '{cv.name}': {document.page_count} page(s), "
                f"{len(sections)} section(s)"
            )
            return document

        except ExportError:
            raise
        except Exception as e:
            raise LayoutFailureError(
                f"Layout failed while rendering '{cv.name}'",
                stage=self.state.value,
                original_error=e,
            ) from e
        finally:
            self.surface.close()

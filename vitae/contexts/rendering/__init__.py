"""
Rendering Context

Responsibilities:
- Measures and word-wraps text against the content width
- Paginates content with per-line page-break checks
- Renders résumé sections and assembles header, content and footer passes
- Exports the artifact (PDF or plain text) and reports the outcome
- Diagnoses exported PDFs (footers, section order, margins)

Owns: Layout configuration, rendering surfaces, document assembly, export
Never: Modifies profile content
"""

from vitae.contexts.rendering.assembler import (
    AssemblerState,
    DocumentAssembler,
    RenderedDocument,
)
from vitae.contexts.rendering.config import (
    LayoutConfig,
    build_layout_config,
    load_layout_presets,
)
from vitae.contexts.rendering.cursor import LayoutCursor, ensure_space
from vitae.contexts.rendering.diagnostics import DocumentDiagnostics, analyze_export
from vitae.contexts.rendering.exceptions import (
    ExportError,
    InvalidInputError,
    LayoutFailureError,
    SurfaceUnavailableError,
)
from vitae.contexts.rendering.export import (
    CallbackNotifier,
    FileExportSink,
    LogNotifier,
    MemoryExportSink,
    build_filename,
)
from vitae.contexts.rendering.exporter import ExportResult, export_cv
from vitae.contexts.rendering.surface import ReportLabSurface, SurfaceState, TextSurface
from vitae.contexts.rendering.wrapping import wrap_lines, wrap_text

__all__ = [
    # Orchestration
    "export_cv",
    "ExportResult",
    "DocumentAssembler",
    "AssemblerState",
    "RenderedDocument",
    # Configuration
    "LayoutConfig",
    "build_layout_config",
    "load_layout_presets",
    # Layout engine
    "wrap_text",
    "wrap_lines",
    "LayoutCursor",
    "ensure_space",
    # Surfaces
    "ReportLabSurface",
    "TextSurface",
    "SurfaceState",
    # Export collaborators
    "build_filename",
    "FileExportSink",
    "MemoryExportSink",
    "LogNotifier",
    "CallbackNotifier",
    # Diagnostics
    "analyze_export",
    "DocumentDiagnostics",
    # Errors
    "ExportError",
    "SurfaceUnavailableError",
    "InvalidInputError",
    "LayoutFailureError",
]

"""
Export orchestration.

Wraps the DocumentAssembler with session logging, pipeline events (Tier 2),
artifact saving and user notification.
"""

import os
import time
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from vitae.contexts.profile.cv_data_structure import CVDocument
from vitae.contexts.rendering.assembler import (
    DocumentAssembler,
    SurfaceFactory,
    reportlab_surface_factory,
)
from vitae.contexts.rendering.config import LayoutConfig, build_layout_config
from vitae.contexts.rendering.exceptions import ExportError
from vitae.contexts.rendering.export import (
    ExportSink,
    FileExportSink,
    LogNotifier,
    NotificationSink,
    build_filename,
)
from vitae.contexts.rendering.logger import (
    _log_debug,
    log_export_result,
    log_export_start,
    setup_rendering_logger,
)
from vitae.contexts.rendering.surface import DisplayListSurface, TextSurface
from vitae.utils.event_logging import log_pipeline_event
from vitae.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))


def text_surface_factory(config: LayoutConfig) -> DisplayListSurface:
    """Plain-text surface sized from the config."""
    return TextSurface(page_width=config.page_width, page_height=config.page_height)


SURFACE_FACTORIES = {
    "pdf": reportlab_surface_factory,
    "text": text_surface_factory,
}


@dataclass
class ExportResult:
    """
    Result of one export.

    Attributes:
        success: Whether the artifact was produced and saved
        path: Where the sink stored the artifact (None for in-memory sinks or failures)
        filename: Generated filename
        page_count: Pages in the artifact (None if failed)
        errors: Error messages (empty on success)
        elapsed_s: Wall time of the export
    """

    success: bool
    path: Optional[Path] = None
    filename: Optional[str] = None
    page_count: Optional[int] = None
    errors: List[str] = field(default_factory=list)
    elapsed_s: float = 0.0


def export_cv(
    cv: CVDocument,
    config: Optional[LayoutConfig] = None,
    surface_factory: Optional[SurfaceFactory] = None,
    sink: Optional[ExportSink] = None,
    notifier: Optional[NotificationSink] = None,
    output_format: str = "pdf",
    log_dir: Optional[Path] = None,
    events_file: Optional[Path] = None,
    on_date: Optional[date] = None,
    verbose: bool = False,
) -> ExportResult:
    """
    Export a résumé: assemble, save, notify and record pipeline events.

    On failure the user is notified and an export_failed event is written
    before the error is re-raised; nothing is handed to the sink.

    Args:
        cv: Document to export
        config: Layout configuration (default: build_layout_config())
        surface_factory: Overrides the factory chosen by output_format
        sink: Where the artifact goes (default: FileExportSink into RESULTS_PATH/<today>)
        notifier: Outcome notification (default: LogNotifier)
        output_format: "pdf" or "text"
        log_dir: Session log directory (default: LOGS_PATH/export_<timestamp>)
        events_file: Override for the pipeline events file
        on_date: Date used in the filename (default: today)
        verbose: Show DEBUG on the console and every error line on failure

    Returns:
        ExportResult of the successful export

    Raises:
        ValueError: If output_format is unknown
        ExportError: If assembly fails (subclass tells why)
    """
    if surface_factory is None:
        if output_format not in SURFACE_FACTORIES:
            raise ValueError(
                f"Unknown output format '{output_format}'. Available: {sorted(SURFACE_FACTORIES)}"
            )
        surface_factory = SURFACE_FACTORIES[output_format]

    config = config or build_layout_config()
    sink = sink or FileExportSink()
    notifier = notifier or LogNotifier()
    language = cv.language.value

    if log_dir is None:
        log_dir = LOGS_PATH / f"export_{now()}"
    setup_rendering_logger(
        log_dir, cv.name, language, output_format=output_format, config=config, verbose=verbose
    )

    log_export_start(cv.name, language, output_format, list(config.section_order))
    log_pipeline_event(
        "export_started",
        cv_name=cv.name,
        source="rendering",
        events_file=events_file,
        language=language,
        output_format=output_format,
    )

    start_time = time.time()
    try:
        document = DocumentAssembler(config, surface_factory).assemble(cv)
        filename = build_filename(
            cv.name, config.category_tag, language, on_date=on_date, extension=document.extension
        )
        path = sink.save(filename, document.content)
    except ExportError as e:
        elapsed_s = time.time() - start_time
        result = ExportResult(success=False, errors=[str(e)], elapsed_s=elapsed_s)
        log_export_result(cv.name, result, verbose=verbose)
        notifier.notify("failure", config.texts.notification("failure", language))
        log_pipeline_event(
            "export_failed",
            cv_name=cv.name,
            source="rendering",
            events_file=events_file,
            stage=e.stage,
            error_type=type(e).__name__,
            error=e.message,
            elapsed_s=round(elapsed_s, 2),
        )
        raise

    result = ExportResult(
        success=True,
        path=path,
        filename=filename,
        page_count=document.page_count,
        elapsed_s=time.time() - start_time,
    )
    log_export_result(cv.name, result, verbose=verbose)
    _log_debug(f"Rendered sections: {', '.join(key.value for key in document.sections)}")
    notifier.notify("success", config.texts.notification("success", language))
    log_pipeline_event(
        "export_completed",
        cv_name=cv.name,
        source="rendering",
        events_file=events_file,
        filename=filename,
        path=str(path) if path else None,
        page_count=document.page_count,
        sections=[key.value for key in document.sections],
        elapsed_s=round(result.elapsed_s, 2),
    )
    return result

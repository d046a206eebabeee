"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from vitae.contexts.rendering.config import LayoutConfig
from vitae.utils.logger import ExportSession
from vitae.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(
    log_dir: Path,
    cv_name: str,
    language: str,
    output_format: str = "pdf",
    config: Optional[LayoutConfig] = None,
    verbose: bool = False,
) -> Path:
    """
    Setup logger for one export session of the rendering context.

    The session header records the profile, language, format and, when a
    config is given, the presets, page size and font it was built from.

    Args:
        log_dir: Directory for this export session (its name is the session id)
        cv_name: Name on the résumé being exported
        language: Profile language
        output_format: "pdf" or "text"
        config: Layout configuration in use
        verbose: Show DEBUG lines on the console

    Returns:
        Path to log file

    Example:
        from vitae.contexts.rendering.logger import setup_rendering_logger, _log_info

        log_file = setup_rendering_logger(log_dir, "Jane Doe", "en")
        _log_info("Starting export...")
    """
    session = ExportSession(
        session_id=log_dir.name,
        profile=cv_name,
        language=language,
        output_format=output_format,
    )
    if config is not None:
        session.presets = config.preset_names
        session.details = {
            "Page": f"{config.page_width:g} x {config.page_height:g} mm",
            "Font": config.font_family,
        }
    return _setup_logger("render", log_dir, session, verbose=verbose)


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_export_start(cv_name: str, language: str, output_format: str, sections: list) -> None:
    """Log start of an export with context."""
    _log_info(f"Starting export: {cv_name} ({language}, {output_format})")
    _log_debug(f"  Sections: {', '.join(sections) if sections else '(none)'}")


def log_export_result(
    cv_name: str,
    result,  # ExportResult
    verbose: bool = False,
) -> None:
    """
    Log export result with diagnostics.

    Args:
        cv_name: Name on the résumé
        result: ExportResult from export_cv()
        verbose: Show every error line (default: first 5)
    """
    if result.success:
        _log_success(f"{cv_name}: {result.page_count} page(s) ({result.elapsed_s:.2f}s)")
        if result.path:
            _log_debug(f"  Artifact: {result.path}")
    else:
        _log_error(f"{cv_name}: export failed ({result.elapsed_s:.2f}s)")
        error_limit = len(result.errors) if verbose else 5
        for i, err in enumerate(result.errors[:error_limit], 1):
            _log_error(f"  Error {i}: {err}")
        if len(result.errors) > error_limit:
            _log_error(f"  ... and {len(result.errors) - error_limit} more errors")


def log_diagnostics_result(pdf_path: Path, diagnostics) -> None:
    """Log layout diagnostics of an exported PDF."""
    issues = diagnostics.get_inherited_issues()
    if not issues:
        _log_success(f"Layout diagnostics passed: {pdf_path.name}")
        return
    _log_warning(f"Layout diagnostics found {len(issues)} issue(s) in {pdf_path.name}")
    for issue in issues:
        _log_warning(f"  {issue}")

"""
Export session logging (Tier 1).

Every export run writes to its own directory, one file per context
("render.log"). The file keeps every level and tags each line with the
session id; the console shows INFO and above, DEBUG when verbose. The file
opens with a header describing the session: which profile, language,
format and presets, and which library versions produced the artifact.

Context-specific wrappers live in contexts/{context}/logger.py.
"""

import sys
from contextlib import suppress
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Sequence

from loguru import logger
from reportlab import Version as REPORTLAB_VERSION

from vitae import __version__

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <7} | {extra[session]} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"

# Handler ids added by setup_logger; sinks added by anyone else are left alone
_session_handlers: List[int] = []
_default_handler_removed = False


@dataclass
class ExportSession:
    """
    What one export run is about.

    Attributes:
        session_id: Identifier stamped on every file log line (the log dir name)
        profile: Name on the résumé being exported
        language: Profile language ("pt", "en")
        output_format: "pdf" or "text"
        presets: Layout presets applied, in order
        details: Extra header lines (page size, font, ...)
    """

    session_id: str
    profile: str
    language: str
    output_format: str
    presets: Sequence[str] = ()
    details: Dict[str, str] = field(default_factory=dict)

    def header_lines(self) -> List[str]:
        lines = [
            f"Session: {self.session_id}",
            f"Profile: {self.profile} ({self.language})",
            f"Format: {self.output_format}",
            f"Presets: {', '.join(self.presets) if self.presets else '(defaults)'}",
        ]
        lines.extend(f"{key}: {value}" for key, value in self.details.items())
        return lines


def reset_session_handlers() -> None:
    """Remove the sinks of the previous session, and loguru's stderr default once."""
    global _default_handler_removed

    if not _default_handler_removed:
        # Id 0 is loguru's stderr sink; it may already be gone
        with suppress(ValueError):
            logger.remove(0)
        _default_handler_removed = True

    while _session_handlers:
        with suppress(ValueError):
            logger.remove(_session_handlers.pop())


def setup_logger(
    context_name: str,
    log_dir: Path,
    session: ExportSession,
    verbose: bool = False,
) -> Path:
    """
    Point loguru at a new export session.

    Args:
        context_name: Context identifier, used as the log file stem ("render")
        log_dir: Directory for this session (created if missing)
        session: Session described in the header and stamped on file lines
        verbose: Show DEBUG on the console too

    Returns:
        Path to the session log file
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    reset_session_handlers()
    logger.configure(extra={"session": session.session_id})

    _session_handlers.append(
        logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    )
    _session_handlers.append(
        logger.add(
            sys.stdout,
            format=CONSOLE_FORMAT,
            level="DEBUG" if verbose else "INFO",
            colorize=True,
        )
    )

    log_session_header(session)
    return log_file


def log_session_header(session: ExportSession) -> None:
    """Write the session header: versions, command line, then the session itself."""
    logger.info("=" * 80)
    logger.info(f"vitae {__version__} | reportlab {REPORTLAB_VERSION} | Python {sys.version.split()[0]}")
    logger.info(f"Command: {' '.join(sys.argv)}")
    for line in session.header_lines():
        logger.info(line)
    logger.info("=" * 80)

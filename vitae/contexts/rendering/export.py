"""
Export collaborators: filename generation, artifact sinks and notifications.

The assembler never touches the filesystem or the user; it hands the finished
artifact to an ExportSink and the outcome to a NotificationSink.
"""

import os
from datetime import date
from pathlib import Path
from typing import Callable, Dict, Optional, Protocol

from dotenv import load_dotenv

from vitae.contexts.rendering.logger import _log_error, _log_info, _log_success
from vitae.utils.text_processing import sanitize_filename_component
from vitae.utils.timestamp import today

load_dotenv()
RESULTS_PATH = Path(os.getenv("RESULTS_PATH", "outs/results"))


def build_filename(
    name: str,
    category_tag: str,
    language: str,
    on_date: Optional[date] = None,
    extension: str = "pdf",
) -> str:
    """
    Build the export filename: sanitized name, category tag, language, date.

    Example:
        >>> build_filename("Ângelo Spanó", "Resume_ATS", "pt", date(2025, 1, 31))
        'Angelo_Spano_Resume_ATS_pt_2025-01-31.pdf'
    """
    stem = f"{sanitize_filename_component(name) or 'CV'}_{category_tag}_{language}_{today(on_date)}"
    return f"{stem}.{extension}" if extension else stem


class ExportSink(Protocol):
    def save(self, filename: str, content: bytes) -> Optional[Path]: ...


class FileExportSink:
    """Writes artifacts into a directory (default: RESULTS_PATH/<today>)."""

    def __init__(self, output_dir: Optional[Path] = None):
        self.output_dir = Path(output_dir) if output_dir is not None else RESULTS_PATH / today()

    def save(self, filename: str, content: bytes) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / filename
        path.write_bytes(content)
        _log_info(f"Artifact saved to: {path}")
        return path


class MemoryExportSink:
    """Keeps artifacts in memory, keyed by filename."""

    def __init__(self):
        self.saved: Dict[str, bytes] = {}

    def save(self, filename: str, content: bytes) -> None:
        self.saved[filename] = content
        return None


class NotificationSink(Protocol):
    def notify(self, outcome: str, message: str) -> None: ...


class LogNotifier:
    """Reports outcomes through the rendering logger."""

    def notify(self, outcome: str, message: str) -> None:
        if outcome == "success":
            _log_success(message)
        else:
            _log_error(message)


class CallbackNotifier:
    """Forwards outcomes to a callable, e.g. a UI toast or a test recorder."""

    def __init__(self, callback: Callable[[str, str], None]):
        self.callback = callback

    def notify(self, outcome: str, message: str) -> None:
        self.callback(outcome, message)

"""
Pipeline event logging utilities for VITAE (Tier 2 logging).

Appends export lifecycle events to a JSON Lines file so that exports can be
audited after the fact, independently of the per-session loguru log.

For detailed within-context logging (Tier 1), use vitae.utils.logger instead.

Usage:
    from vitae.utils.event_logging import log_pipeline_event

    log_pipeline_event(
        event_type="export_completed",
        cv_name="Jane Doe",
        source="rendering",
        page_count=2,
    )
"""

import json
import os
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv

from vitae.utils.timestamp import now_exact

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
PIPELINE_EVENTS_FILE = Path(os.getenv("PIPELINE_EVENTS_FILE", str(LOGS_PATH / "export_events.log")))


def log_pipeline_event(
    event_type: str,
    cv_name: str,
    source: str,
    events_file: Optional[Path] = None,
    **extra_fields,
) -> None:
    """
    Log an event to the pipeline event log.

    Events are appended in JSON Lines format (one JSON object per line),
    which keeps the file streamable and easy to filter by event_type,
    cv_name or source.

    Args:
        event_type: Type of event (e.g., "export_started", "export_failed")
        cv_name: Name on the exported résumé
        source: Event source (e.g., "rendering", "cli")
        events_file: Override for the events file (default: PIPELINE_EVENTS_FILE)
        **extra_fields: Additional event-specific fields
    """
    path = Path(events_file) if events_file is not None else PIPELINE_EVENTS_FILE
    path.parent.mkdir(parents=True, exist_ok=True)

    event = {
        "timestamp": now_exact(),
        "event_type": event_type,
        "cv_name": cv_name,
        "source": source,
        **extra_fields,
    }

    with open(path, "a", encoding="utf-8") as f:
        f.write(json.dumps(event, ensure_ascii=False, default=str) + "\n")


def get_recent_events(
    n: int = 10,
    cv_name: Optional[str] = None,
    event_type: Optional[str] = None,
    events_file: Optional[Path] = None,
) -> List[Dict]:
    """
    Get the last n events from the pipeline log, optionally filtered.

    Args:
        n: Number of recent events to return (default: 10)
        cv_name: Filter to only events for this résumé (optional)
        event_type: Filter to only events of this type (optional)
        events_file: Override for the events file (default: PIPELINE_EVENTS_FILE)

    Returns:
        List of event dicts (most recent last)
    """
    path = Path(events_file) if events_file is not None else PIPELINE_EVENTS_FILE
    if not path.exists():
        return []

    events = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            try:
                events.append(json.loads(line.strip()))
            except json.JSONDecodeError:
                # Skip malformed lines
                continue

    if cv_name:
        events = [e for e in events if e.get("cv_name") == cv_name]

    if event_type:
        events = [e for e in events if e.get("event_type") == event_type]

    return events[-n:] if len(events) > n else events

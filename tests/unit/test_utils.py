"""Unit tests for shared utilities."""

from datetime import date

import pytest

from vitae.utils.event_logging import get_recent_events, log_pipeline_event
from vitae.utils.logger import ExportSession
from vitae.utils.text_processing import (
    clean_text,
    fold_to_ascii,
    sanitize_filename_component,
)
from vitae.utils.timestamp import format_timestamp, today


@pytest.mark.unit
@pytest.mark.parametrize(
    "value, expected",
    [(None, None), ("", None), ("   ", None), ("  text ", "text"), (2024, "2024")],
)
def test_clean_text(value, expected):
    assert clean_text(value) == expected


@pytest.mark.unit
def test_fold_to_ascii():
    assert fold_to_ascii("Formação Acadêmica") == "Formacao Academica"


@pytest.mark.unit
def test_sanitize_filename_component():
    assert sanitize_filename_component("  Ângelo F. Imon-Spanó ") == "Angelo_F_ImonSpano"


@pytest.mark.unit
def test_today_and_format_timestamp():
    assert today(date(2025, 11, 14)) == "2025-11-14"
    assert format_timestamp("2025-11-13T18:45:40.572549") == "2025-11-13 18:45:40"
    assert format_timestamp("not a timestamp") == "not a timestamp"


@pytest.mark.unit
def test_pipeline_events_filtering(tmp_path):
    events_file = tmp_path / "logs" / "events.log"
    log_pipeline_event("export_started", "Jane Doe", "rendering", events_file=events_file)
    log_pipeline_event("export_started", "Ana Souza", "rendering", events_file=events_file)
    log_pipeline_event("export_completed", "Jane Doe", "rendering", events_file=events_file, page_count=2)

    assert len(get_recent_events(events_file=events_file)) == 3
    jane = get_recent_events(cv_name="Jane Doe", events_file=events_file)
    assert [e["event_type"] for e in jane] == ["export_started", "export_completed"]
    completed = get_recent_events(event_type="export_completed", events_file=events_file)
    assert completed[0]["page_count"] == 2
    assert len(get_recent_events(n=1, events_file=events_file)) == 1


@pytest.mark.unit
def test_missing_events_file(tmp_path):
    assert get_recent_events(events_file=tmp_path / "missing.log") == []


@pytest.mark.unit
def test_export_session_header_lines():
    session = ExportSession(
        session_id="export_20251114_120000",
        profile="Ana Souza",
        language="pt",
        output_format="pdf",
        details={"Font": "Vera"},
    )

    assert session.header_lines() == [
        "Session: export_20251114_120000",
        "Profile: Ana Souza (pt)",
        "Format: pdf",
        "Presets: (defaults)",
        "Font: Vera",
    ]

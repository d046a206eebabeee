"""Shared fixtures for unit and integration tests."""

from pathlib import Path

import pytest

from vitae.contexts.profile import CVDocument, ExperienceEntry, Language
from vitae.contexts.rendering import TextSurface, build_layout_config

PROJECT_ROOT = Path(__file__).resolve().parent.parent
PRESETS_PATH = PROJECT_ROOT / "configs" / "layout_presets.yaml"
PROFILES_PATH = PROJECT_ROOT / "data" / "profiles"


@pytest.fixture
def presets_path() -> Path:
    return PRESETS_PATH


@pytest.fixture
def profiles_path() -> Path:
    return PROFILES_PATH


@pytest.fixture
def layout_config():
    return build_layout_config()


@pytest.fixture
def jane_doe() -> CVDocument:
    return CVDocument(name="Jane Doe", language=Language.EN, summary="ok", certifications=[])


@pytest.fixture
def long_task_cv() -> CVDocument:
    """One experience entry with 20 one-line tasks."""
    return CVDocument(
        name="Jane Doe",
        language=Language.EN,
        experience=[
            ExperienceEntry(
                role="Developer",
                company="ACME",
                period="2020 - 2024",
                tasks=[f"Task {i:02d}" for i in range(1, 21)],
            )
        ],
    )


@pytest.fixture
def ready_text_surface():
    """A READY A4 text surface with a document started."""
    surface = TextSurface(page_width=210.0, page_height=297.0)
    surface.ensure_ready()
    surface.new_document()
    return surface

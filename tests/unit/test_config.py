"""Unit tests for layout configuration and preset resolution."""

from dataclasses import FrozenInstanceError

import pytest

from vitae.contexts.rendering.config import (
    LayoutConfig,
    build_layout_config,
    load_layout_presets,
    normalize_section_order,
)
from vitae.contexts.rendering.defaults import DEFAULT_SECTION_ORDER, get_default_layout


@pytest.mark.unit
def test_defaults(layout_config):
    assert layout_config.page_width == 210.0
    assert layout_config.page_height == 297.0
    assert layout_config.margins.top == 20.0
    assert layout_config.content_width == pytest.approx(170.0)
    assert layout_config.font_sizes.name == 20.0
    assert layout_config.spacing.line_height == 5.0
    assert layout_config.colors.primary == (44, 62, 80)
    assert layout_config.section_order == tuple(DEFAULT_SECTION_ORDER)
    assert layout_config.max_load_attempts == 50
    assert layout_config.font_family == "Vera"
    assert layout_config.font_files == {}
    assert layout_config.preset_names == ()


@pytest.mark.unit
def test_config_is_immutable(layout_config):
    with pytest.raises(FrozenInstanceError):
        layout_config.page_width = 100.0


@pytest.mark.unit
def test_load_presets_flattens_categories(presets_path):
    presets = load_layout_presets(presets_path)

    assert "spacing_compact" in presets
    assert "page_letter" in presets
    assert presets["page_letter"]["page"]["height"] == pytest.approx(279.4)


@pytest.mark.unit
def test_preset_overrides_only_its_keys(presets_path):
    config = build_layout_config(["spacing_compact"], config_path=presets_path)

    assert config.spacing.line_height == 4.5
    assert config.spacing.header_block == 20.0
    assert config.margins.top == 20.0


@pytest.mark.unit
def test_later_presets_win(presets_path):
    config = build_layout_config(["spacing_compact", "spacing_relaxed"], config_path=presets_path)

    assert config.spacing.line_height == 5.5
    assert config.preset_names == ("spacing_compact", "spacing_relaxed")


@pytest.mark.unit
def test_unknown_preset_lists_available(presets_path):
    with pytest.raises(ValueError, match="Available presets"):
        build_layout_config(["spacing_nonexistent"], config_path=presets_path)


@pytest.mark.unit
def test_overrides_apply_after_presets(presets_path):
    config = build_layout_config(
        ["page_letter"], overrides={"page": {"height": 120}}, config_path=presets_path
    )

    assert config.page_width == pytest.approx(215.9)
    assert config.page_height == 120.0


@pytest.mark.unit
def test_invalid_configuration_raises_value_error():
    with pytest.raises(ValueError, match="Invalid layout configuration") as exc_info:
        build_layout_config(overrides={"spacing": {"no_such_spacing": 1}})

    assert isinstance(exc_info.value.__cause__, TypeError)


@pytest.mark.unit
def test_from_dict_round_trip_of_defaults():
    config = LayoutConfig.from_dict(get_default_layout())

    assert config.category_tag == "Resume_ATS"
    assert config.document_properties["title"] == "Resume - Curriculum Vitae"


@pytest.mark.unit
def test_normalize_section_order():
    """Unknown keys are dropped, duplicates removed, omitted keys stay omitted."""
    assert normalize_section_order(["skills", "bogus", "skills", " SUMMARY "]) == ("skills", "summary")
    assert normalize_section_order(None) == tuple(DEFAULT_SECTION_ORDER)
    assert normalize_section_order([]) == ()


@pytest.mark.unit
def test_section_preset_hides_objective(presets_path):
    config = build_layout_config(["sections_no_objective"], config_path=presets_path)

    assert "objective" not in config.section_order
    assert config.section_order[0] == "summary"


@pytest.mark.unit
def test_footer_text_is_localized(layout_config):
    texts = layout_config.texts

    assert texts.footer_text("Jane Doe", 1, 2, "en") == "Jane Doe – Page 1 of 2"
    assert texts.footer_text("Jane Doe", 2, 2, "pt") == "Jane Doe – Página 2 de 2"


@pytest.mark.unit
def test_section_titles(layout_config):
    texts = layout_config.texts

    assert texts.section_title("summary", "en") == "PROFESSIONAL SUMMARY"
    assert texts.section_title("summary", "pt") == "RESUMO PROFISSIONAL"
    assert texts.section_title("summary", "pt", {"summary": "SOBRE MIM"}) == "SOBRE MIM"


@pytest.mark.unit
def test_skill_category_labels(layout_config):
    texts = layout_config.texts

    assert texts.skill_category("database", "pt") == "Banco de Dados"
    assert texts.skill_category("tools", "en") == "Tools"
    assert texts.skill_category("machine_learning", "en") == "Machine Learning"
    assert texts.skill_category("DevOps Tools", "en") == "DevOps Tools"


@pytest.mark.unit
def test_notifications(layout_config):
    texts = layout_config.texts

    assert texts.notification("success", "en") == "ATS-optimized PDF generated successfully!"
    assert texts.notification("failure", "pt") == "Erro ao gerar PDF. Tente novamente."

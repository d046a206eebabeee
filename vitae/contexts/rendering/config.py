"""
Layout Configuration and Preset Resolution

LayoutConfig is an immutable value built once and passed into the Document
Assembler. It starts from the defaults in defaults.py; named presets from a
YAML file can be layered on top, later presets overriding earlier ones.

Examples:
    >>> config = build_layout_config()
    >>> config.margins.top
    20.0

    # Apply multiple presets (later overrides earlier)
    >>> config = build_layout_config(["spacing_compact", "page_letter"])
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from dotenv import load_dotenv
from omegaconf import OmegaConf

from vitae.contexts.rendering.defaults import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_SECTION_ORDER,
    get_default_layout,
)

load_dotenv()
LAYOUT_PRESETS_PATH = Path(os.getenv("LAYOUT_PRESETS_PATH", "configs/layout_presets.yaml"))

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class Margins:
    top: float
    bottom: float
    left: float
    right: float


@dataclass(frozen=True)
class FontSizes:
    name: float
    section: float
    subsection: float
    body: float
    small: float


@dataclass(frozen=True)
class Spacing:
    """
    Vertical and horizontal spacing constants (mm).

    Attributes:
        section_margin: Space before each section title and after plain sections
        item_margin: Space after each experience/project entry
        line_height: Advance per wrapped body line
        paragraph_spacing: Space after an education description
        header_spacing: Advance after the name, subtitle and section titles
        compact_line: Advance after compact header lines (contact, entry headers)
        bullet_indent: Left indent for bulleted sub-lists
        skill_indent: Left indent for skill lines under a category label
        header_block: Space required before starting a section title
        project_block: Space required before starting a project entry
        experience_block: Space required before starting an experience entry
        footer_offset: Distance of the footer baseline from the page bottom
        separator_inset: Horizontal inset of the header separator
        rule_offset: Distance of the section underline above the cursor
    """

    section_margin: float
    item_margin: float
    line_height: float
    paragraph_spacing: float
    header_spacing: float
    compact_line: float
    bullet_indent: float
    skill_indent: float
    header_block: float
    project_block: float
    experience_block: float
    footer_offset: float
    separator_inset: float
    rule_offset: float


@dataclass(frozen=True)
class Colors:
    primary: RGB
    text: RGB
    muted: RGB
    rule: RGB


@dataclass(frozen=True)
class LocalizedTexts:
    """Per-language labels. Every mapping is keyed by language code first."""

    section_titles: Dict[str, Dict[str, str]]
    footer: Dict[str, str]
    contact_labels: Dict[str, Dict[str, str]]
    skill_categories: Dict[str, Dict[str, str]]
    link_label: Dict[str, str]
    notifications: Dict[str, Dict[str, str]]

    def section_title(self, key: str, language: str, overrides: Optional[Dict[str, str]] = None) -> str:
        """Profile-supplied title, else the default for the language, else the upper-cased key."""
        if overrides and overrides.get(key):
            return overrides[key]
        return self.section_titles.get(language, {}).get(key, key.replace("_", " ").upper())

    def footer_text(self, name: str, page: int, total: int, language: str) -> str:
        template = self.footer.get(language) or self.footer.get("en", "{name} - {page}/{total}")
        return template.format(name=name, page=page, total=total)

    def contact_label(self, key: str, language: str) -> str:
        return self.contact_labels.get(language, {}).get(key, key.capitalize())

    def skill_category(self, key: str, language: str) -> str:
        """Localized label for a skill category; unknown keys are title-cased."""
        labels = self.skill_categories.get(language, {})
        normalized = key.strip().lower().replace(" ", "_").replace("-", "_")
        if normalized in labels:
            return labels[normalized]
        return key.replace("_", " ").strip().title() if key.islower() else key

    def link(self, language: str) -> str:
        return self.link_label.get(language, "Link")

    def notification(self, outcome: str, language: str) -> str:
        return self.notifications.get(language, {}).get(outcome, outcome)


@dataclass(frozen=True)
class LayoutConfig:
    """
    Immutable layout configuration for one export.

    Attributes:
        page_width: Page width (mm)
        page_height: Page height (mm)
        margins: Page margins (mm)
        font_sizes: Font sizes (pt) per text role
        spacing: Spacing constants (mm)
        colors: RGB colors per text role
        font_family: Base font family (a bundled TTF family, a standard Type 1
            family, or a family whose files are given in font_files)
        font_files: TrueType files by style ("normal", "bold"); bundled
            families resolve their own files when this is empty
        category_tag: Tag embedded in generated filenames
        section_order: Order in which content sections are rendered
        draw_section_rules: Draw an underline below section titles
        max_load_attempts: Readiness polls before the surface is declared failed
        load_check_interval_s: Delay between readiness polls
        document_properties: PDF metadata (title, subject, creator)
        preset_names: Presets the configuration was built from, in order
        texts: Localized labels
    """

    page_width: float
    page_height: float
    margins: Margins
    font_sizes: FontSizes
    spacing: Spacing
    colors: Colors
    texts: LocalizedTexts
    font_family: str = DEFAULT_FONT_FAMILY
    font_files: Dict[str, str] = field(default_factory=dict)
    category_tag: str = "Resume_ATS"
    section_order: Tuple[str, ...] = tuple(DEFAULT_SECTION_ORDER)
    draw_section_rules: bool = True
    max_load_attempts: int = 50
    load_check_interval_s: float = 0.2
    document_properties: Dict[str, str] = field(default_factory=dict)
    preset_names: Tuple[str, ...] = ()

    @property
    def content_width(self) -> float:
        return self.page_width - self.margins.left - self.margins.right

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LayoutConfig":
        """
        Build a LayoutConfig from a nested dict shaped like get_default_layout().

        Raises:
            ValueError: If a key is unknown or a required key is missing
        """
        data = dict(data)
        try:
            page = data.pop("page")
            colors = data.pop("colors")
            return cls(
                page_width=float(page["width"]),
                page_height=float(page["height"]),
                margins=Margins(**{k: float(v) for k, v in data.pop("margins").items()}),
                font_sizes=FontSizes(**{k: float(v) for k, v in data.pop("font_sizes").items()}),
                spacing=Spacing(**{k: float(v) for k, v in data.pop("spacing").items()}),
                colors=Colors(**{k: tuple(int(c) for c in v) for k, v in colors.items()}),
                texts=LocalizedTexts(**data.pop("texts")),
                section_order=normalize_section_order(data.pop("section_order", None)),
                preset_names=tuple(data.pop("preset_names", ())),
                **data,
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"Invalid layout configuration: {e}") from e


def normalize_section_order(raw_order: Optional[List[Any]]) -> Tuple[str, ...]:
    """
    Return a de-duplicated section order containing only known section keys.

    Unknown keys are dropped. Known keys left out of raw_order are NOT
    appended, so a preset can hide sections. None yields the canonical order.
    """
    if raw_order is None:
        return tuple(DEFAULT_SECTION_ORDER)
    seen = set()
    order: List[str] = []
    for key in raw_order:
        if not isinstance(key, str):
            continue
        cleaned = key.strip().lower()
        if cleaned in DEFAULT_SECTION_ORDER and cleaned not in seen:
            order.append(cleaned)
            seen.add(cleaned)
    return tuple(order)


def load_layout_presets(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load layout_presets.yaml and flatten to a single-level dict.

    Collapses nested structure: spacing.compact -> spacing_compact

    Args:
        config_path: Optional path to config file (defaults to LAYOUT_PRESETS_PATH)

    Returns:
        Flattened dict mapping preset names to configs
        Example: {"spacing_compact": {...}, "page_letter": {...}}
    """
    if config_path is None:
        config_path = LAYOUT_PRESETS_PATH

    nested = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)

    flattened = {}
    for category, presets in (nested or {}).items():
        for name, preset in (presets or {}).items():
            flattened[f"{category}_{name}"] = preset

    return flattened


def build_layout_config(
    preset_names: Optional[List[str]] = None,
    overrides: Optional[Dict[str, Any]] = None,
    config_path: Optional[Path] = None,
) -> LayoutConfig:
    """
    Build an immutable LayoutConfig from defaults, named presets and overrides.

    Presets are deep-merged in order, later ones overriding earlier ones;
    ``overrides`` is merged last.

    Args:
        preset_names: Preset names to apply (e.g., ["spacing_compact"])
        overrides: Nested dict merged after presets
        config_path: Optional path to layout_presets.yaml

    Raises:
        ValueError: If a preset is not found or the merged configuration is invalid
    """
    merged = OmegaConf.create(get_default_layout())

    if preset_names:
        presets = load_layout_presets(config_path)
        for preset_name in preset_names:
            if preset_name not in presets:
                available = sorted(presets.keys())
                raise ValueError(f"Preset '{preset_name}' not found. Available presets: {available}")
            merged = OmegaConf.merge(merged, presets[preset_name])

    if overrides:
        merged = OmegaConf.merge(merged, overrides)

    layout = OmegaConf.to_container(merged, resolve=True)
    layout["preset_names"] = list(preset_names or [])
    return LayoutConfig.from_dict(layout)

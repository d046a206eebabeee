"""
Section rendering.

One method per content shape (plain paragraph, bulleted list, skills,
experience, projects, education). Every section follows the same skeleton:

1. reserve room for a title block (page break if needed)
2. section spacing, title, header spacing, optional underline
3. body lines, each preceded by its own page-break check

Sections with nothing to show are skipped entirely: no title, no spacing.
"""

from typing import Callable, Dict, List, Optional

from vitae.contexts.profile.cv_data_structure import (
    CVDocument,
    EducationEntry,
    ExperienceEntry,
    ProjectEntry,
    SectionKey,
    Skills,
    SkillsKind,
)
from vitae.contexts.rendering.config import LayoutConfig
from vitae.contexts.rendering.cursor import LayoutCursor, ensure_space
from vitae.contexts.rendering.logger import _log_debug
from vitae.contexts.rendering.surface import DisplayListSurface
from vitae.contexts.rendering.wrapping import WrappedLine, paragraphs, single_line, wrap_lines

BULLET = "• "
COMPACT_SEPARATOR = " | "


def _join_present(parts: List[Optional[str]], separator: str = COMPACT_SEPARATOR) -> str:
    return separator.join(part for part in parts if part)


class SectionRenderer:
    """
    Renders résumé sections onto a surface, driving a shared layout cursor.

    Args:
        surface: Drawing target (must be READY with a document started)
        cursor: Layout cursor shared with the assembler
        config: Layout configuration
        cv: Document being rendered (for language and title overrides)
    """

    def __init__(
        self,
        surface: DisplayListSurface,
        cursor: LayoutCursor,
        config: LayoutConfig,
        cv: CVDocument,
    ):
        self.surface = surface
        self.cursor = cursor
        self.config = config
        self.cv = cv
        self.language = cv.language.value
        self._renderers: Dict[SectionKey, Callable[[SectionKey], None]] = {
            SectionKey.OBJECTIVE: lambda key: self.render_plain(key, cv.objective),
            SectionKey.SUMMARY: lambda key: self.render_plain(key, cv.summary),
            SectionKey.PROJECTS: lambda key: self.render_projects(key, cv.projects),
            SectionKey.SKILLS: lambda key: self.render_skills(key, cv.skills),
            SectionKey.EDUCATION: lambda key: self.render_education(key, cv.education),
            SectionKey.CERTIFICATIONS: lambda key: self.render_list(key, cv.certifications),
            SectionKey.EXPERIENCE: lambda key: self.render_experience(key, cv.experience),
        }

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    @property
    def _left(self) -> float:
        return self.cursor.margins.left

    def ensure_space(self, required_space: float) -> bool:
        return ensure_space(self.cursor, required_space, on_new_page=self.surface.add_page)

    def _use_font(self, role: str, bold: bool = False) -> None:
        self.surface.set_font(
            style="bold" if bold else "normal", size=getattr(self.config.font_sizes, role)
        )
        self.surface.set_text_color(self.config.colors.text)

    def _wrap(self, text: str, width: float, left: float, hanging: float = 0.0) -> List[WrappedLine]:
        return wrap_lines(single_line(text), width, self.surface.measure, left, hanging_indent=hanging)

    def _draw_lines(self, lines: List[WrappedLine], step: float) -> None:
        for line in lines:
            self.ensure_space(step)
            self.surface.text(line.text, line.left_margin, self.cursor.y)
            self.cursor.advance(step)

    def _draw_bullet(self, item: str, left: float, width: float) -> None:
        hanging = self.surface.measure(BULLET)
        lines = self._wrap(f"{BULLET}{item}", width, left, hanging=hanging)
        self._draw_lines(lines, self.config.spacing.line_height)

    def title_for(self, key: SectionKey) -> str:
        return self.config.texts.section_title(key.value, self.language, self.cv.section_titles)

    def render_section_header(self, title: str) -> None:
        spacing = self.config.spacing
        self.ensure_space(spacing.header_block)
        self.cursor.advance(spacing.section_margin)

        self.surface.set_font(style="bold", size=self.config.font_sizes.section)
        self.surface.set_text_color(self.config.colors.text)
        self.surface.text(title, self._left, self.cursor.y)
        self.cursor.advance(spacing.header_spacing)

        if self.config.draw_section_rules:
            rule_y = self.cursor.y - spacing.rule_offset
            self.surface.set_line_width(0.2)
            self.surface.set_draw_color(self.config.colors.text)
            self.surface.line(self._left, rule_y, self._left + self.cursor.content_width, rule_y)

    # ------------------------------------------------------------------
    # Section shapes
    # ------------------------------------------------------------------

    def render_plain(self, key: SectionKey, text: Optional[str]) -> bool:
        if not text or not text.strip():
            return False
        self.render_section_header(self.title_for(key))
        self._use_font("body")
        width = self.cursor.content_width
        # Line breaks in the source start new paragraphs
        for paragraph in paragraphs(text):
            self._draw_lines(
                self._wrap(paragraph, width, self._left), self.config.spacing.line_height
            )
        self.cursor.advance(self.config.spacing.section_margin)
        return True

    def render_list(self, key: SectionKey, items: List[str]) -> bool:
        items = [item for item in items or [] if item]
        if not items:
            return False
        self.render_section_header(self.title_for(key))
        self._use_font("body")
        for item in items:
            self._draw_bullet(item, self._left, self.cursor.content_width)
        self.cursor.advance(self.config.spacing.section_margin)
        return True

    def render_skills(self, key: SectionKey, skills: Optional[Skills]) -> bool:
        if skills is None or skills.is_empty():
            return False
        spacing = self.config.spacing
        self.render_section_header(self.title_for(key))

        if skills.kind == SkillsKind.FLAT:
            self._use_font("body")
            text = ", ".join(skills.items)
            self._draw_lines(
                self._wrap(text, self.cursor.content_width, self._left), spacing.line_height
            )
        elif skills.kind == SkillsKind.CATEGORIZED:
            indent = spacing.skill_indent
            for category, values in skills.categories.items():
                if not values:
                    continue
                label = self.config.texts.skill_category(category, self.language)
                self._use_font("body", bold=True)
                self._draw_lines(
                    self._wrap(f"{label}:", self.cursor.content_width, self._left),
                    spacing.line_height,
                )
                self._use_font("body")
                self._draw_lines(
                    self._wrap(
                        ", ".join(values), self.cursor.content_width - indent, self._left + indent
                    ),
                    spacing.line_height,
                )

        self.cursor.advance(spacing.section_margin)
        return True

    def render_experience(self, key: SectionKey, entries: List[ExperienceEntry]) -> bool:
        if not entries:
            return False
        spacing = self.config.spacing
        self.render_section_header(self.title_for(key))

        for entry in entries:
            self.ensure_space(spacing.experience_block)

            header = _join_present([entry.role, entry.company, entry.period])
            if header:
                self._use_font("subsection", bold=True)
                self._draw_lines(
                    self._wrap(header, self.cursor.content_width, self._left), spacing.compact_line
                )

            if entry.tasks:
                self._use_font("body")
                indent = spacing.bullet_indent
                for task in entry.tasks:
                    self._draw_bullet(task, self._left + indent, self.cursor.content_width - indent)

            self.cursor.advance(spacing.item_margin)
        return True

    def render_projects(self, key: SectionKey, entries: List[ProjectEntry]) -> bool:
        if not entries:
            return False
        spacing = self.config.spacing
        width = self.cursor.content_width
        self.render_section_header(self.title_for(key))

        for project in entries:
            self.ensure_space(spacing.project_block)

            self._use_font("subsection", bold=True)
            self._draw_lines(self._wrap(project.name, width, self._left), spacing.compact_line)

            self._use_font("body")
            if project.description:
                self._draw_lines(
                    self._wrap(project.description, width, self._left), spacing.line_height
                )
            if project.link:
                link_text = f"{self.config.texts.link(self.language)}: {project.link}"
                self._draw_lines(self._wrap(link_text, width, self._left), spacing.compact_line)

            self.cursor.advance(spacing.item_margin)
        return True

    def render_education(self, key: SectionKey, entries: List[EducationEntry]) -> bool:
        if not entries:
            return False
        spacing = self.config.spacing
        width = self.cursor.content_width
        self.render_section_header(self.title_for(key))

        for entry in entries:
            self.ensure_space(spacing.project_block)

            if entry.course:
                self._use_font("subsection", bold=True)
                self._draw_lines(self._wrap(entry.course, width, self._left), spacing.compact_line)

            details = _join_present([entry.institution, entry.period, entry.status])
            if details:
                self._use_font("body")
                self._draw_lines(self._wrap(details, width, self._left), spacing.compact_line)

            if entry.description:
                self._use_font("body")
                self._draw_lines(
                    self._wrap(entry.description, width, self._left), spacing.line_height
                )
                self.cursor.advance(spacing.paragraph_spacing)

            self.cursor.advance(spacing.item_margin)
        return True

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def render(self, key: SectionKey) -> bool:
        """Render one section by key. Returns False if it was skipped as empty."""
        rendered = self._renderers[key](key)
        _log_debug(
            f"Section '{key.value}' {'rendered' if rendered else 'skipped'} "
            f"(page {self.cursor.page}, y={self.cursor.y:.1f})"
        )
        return rendered

    def render_all(self, order) -> List[SectionKey]:
        """Render sections in order; returns the keys that produced output."""
        rendered = []
        for raw_key in order:
            key = SectionKey(raw_key)
            if self.render(key):
                rendered.append(key)
        return rendered

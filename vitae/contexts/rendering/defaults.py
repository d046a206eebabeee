"""
Default values for VITAE document layout.

All lengths are in millimetres on an A4 portrait page. These tables are the
starting point for LayoutConfig; presets in configs/layout_presets.yaml
override them key by key.
"""

from typing import Any, Dict

# TrueType family bundled with ReportLab. Embedded TTF subsets carry a
# ToUnicode map, so bullets and accents survive text extraction.
DEFAULT_FONT_FAMILY = "Vera"

BUNDLED_FONT_FILES = {
    "Vera": {"normal": "Vera.ttf", "bold": "VeraBd.ttf"},
}

DEFAULT_PAGE = {
    "width": 210.0,
    "height": 297.0,
}

DEFAULT_MARGINS = {
    "top": 20.0,
    "bottom": 20.0,
    "left": 20.0,
    "right": 20.0,
}

DEFAULT_FONT_SIZES = {
    "name": 20.0,
    "section": 14.0,
    "subsection": 12.0,
    "body": 11.0,
    "small": 10.0,
}

DEFAULT_SPACING = {
    "section_margin": 12.0,
    "item_margin": 6.0,
    "line_height": 5.0,
    "paragraph_spacing": 4.0,
    "header_spacing": 8.0,
    "compact_line": 6.0,
    "bullet_indent": 3.0,
    "skill_indent": 5.0,
    "header_block": 20.0,
    "project_block": 15.0,
    "experience_block": 25.0,
    "footer_offset": 10.0,
    "separator_inset": 30.0,
    "rule_offset": 3.0,
}

# RGB triplets
DEFAULT_COLORS = {
    "primary": [44, 62, 80],
    "text": [0, 0, 0],
    "muted": [100, 100, 100],
    "rule": [150, 150, 150],
}

DEFAULT_SECTION_ORDER = [
    "objective",
    "summary",
    "projects",
    "skills",
    "education",
    "certifications",
    "experience",
]

SECTION_TITLES = {
    "pt": {
        "objective": "OBJETIVO PROFISSIONAL",
        "summary": "RESUMO PROFISSIONAL",
        "projects": "PROJETOS DESTACADOS",
        "skills": "HABILIDADES TÉCNICAS",
        "education": "FORMAÇÃO ACADÊMICA",
        "certifications": "CERTIFICAÇÕES",
        "experience": "EXPERIÊNCIA PROFISSIONAL",
    },
    "en": {
        "objective": "CAREER OBJECTIVE",
        "summary": "PROFESSIONAL SUMMARY",
        "projects": "FEATURED PROJECTS",
        "skills": "TECHNICAL SKILLS",
        "education": "EDUCATION",
        "certifications": "CERTIFICATIONS",
        "experience": "PROFESSIONAL EXPERIENCE",
    },
}

FOOTER_TEMPLATES = {
    "pt": "{name} – Página {page} de {total}",
    "en": "{name} – Page {page} of {total}",
}

CONTACT_LABELS = {
    "pt": {"email": "Email", "github": "GitHub", "linkedin": "LinkedIn", "phone": "Telefone"},
    "en": {"email": "Email", "github": "GitHub", "linkedin": "LinkedIn", "phone": "Phone"},
}

SKILL_CATEGORY_LABELS = {
    "pt": {
        "frontend": "Frontend",
        "backend": "Backend",
        "database": "Banco de Dados",
        "databases": "Banco de Dados",
        "cloud": "Cloud",
        "devops": "DevOps",
        "tools": "Ferramentas",
        "languages": "Linguagens",
        "frameworks": "Frameworks",
        "soft_skills": "Competências Comportamentais",
        "other": "Outros",
    },
    "en": {
        "frontend": "Frontend",
        "backend": "Backend",
        "database": "Databases",
        "databases": "Databases",
        "cloud": "Cloud",
        "devops": "DevOps",
        "tools": "Tools",
        "languages": "Languages",
        "frameworks": "Frameworks",
        "soft_skills": "Soft Skills",
        "other": "Other",
    },
}

LINK_LABELS = {
    "pt": "Link",
    "en": "Link",
}

NOTIFICATION_MESSAGES = {
    "pt": {
        "success": "PDF otimizado para ATS gerado com sucesso!",
        "failure": "Erro ao gerar PDF. Tente novamente.",
    },
    "en": {
        "success": "ATS-optimized PDF generated successfully!",
        "failure": "Error generating PDF. Please try again.",
    },
}

DEFAULT_DOCUMENT_PROPERTIES = {
    "title": "Resume - Curriculum Vitae",
    "subject": "Professional Resume",
    "creator": "VITAE ATS-Optimized CV Generator",
}


def get_default_layout() -> Dict[str, Any]:
    """
    Get the complete default layout structure as plain nested dicts.

    Used as the base that presets are merged onto before LayoutConfig is built.
    """
    return {
        "page": dict(DEFAULT_PAGE),
        "margins": dict(DEFAULT_MARGINS),
        "font_sizes": dict(DEFAULT_FONT_SIZES),
        "spacing": dict(DEFAULT_SPACING),
        "colors": {key: list(value) for key, value in DEFAULT_COLORS.items()},
        "font_family": DEFAULT_FONT_FAMILY,
        "font_files": {},
        "category_tag": "Resume_ATS",
        "section_order": list(DEFAULT_SECTION_ORDER),
        "draw_section_rules": True,
        "max_load_attempts": 50,
        "load_check_interval_s": 0.2,
        "document_properties": dict(DEFAULT_DOCUMENT_PROPERTIES),
        "texts": {
            "section_titles": {lang: dict(t) for lang, t in SECTION_TITLES.items()},
            "footer": dict(FOOTER_TEMPLATES),
            "contact_labels": {lang: dict(t) for lang, t in CONTACT_LABELS.items()},
            "skill_categories": {lang: dict(t) for lang, t in SKILL_CATEGORY_LABELS.items()},
            "link_label": dict(LINK_LABELS),
            "notifications": {lang: dict(t) for lang, t in NOTIFICATION_MESSAGES.items()},
        },
    }

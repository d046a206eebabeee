"""Small text helpers shared by the profile and rendering contexts."""

import re
import unicodedata
from typing import Any, Optional

_NON_ALNUM = re.compile(r"[^A-Za-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def clean_text(value: Any) -> Optional[str]:
    """Trim a JSON value to text; None, non-strings and blank strings become None."""
    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)
    value = value.strip()
    return value or None


def fold_to_ascii(text: str) -> str:
    """Drop diacritics ("Spanó" -> "Spano") and any remaining non-ASCII characters."""
    decomposed = unicodedata.normalize("NFKD", text)
    return decomposed.encode("ascii", "ignore").decode("ascii")


def sanitize_filename_component(text: str) -> str:
    """
    Reduce text to a filename-safe token.

    Accents are folded, everything except letters, digits and whitespace is
    removed, and whitespace runs collapse to a single underscore.

    Example:
        >>> sanitize_filename_component("  Ângelo F. Imon-Spanó ")
        'Angelo_F_ImonSpano'
    """
    ascii_text = fold_to_ascii(text)
    stripped = _NON_ALNUM.sub("", ascii_text).strip()
    return _WHITESPACE.sub("_", stripped)


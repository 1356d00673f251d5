"""
Recipe Book Text Utilities
Slug generation and lenient parsing of free-text form values
"""

import re
import unicodedata
from typing import Iterable, List, Optional

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHEN_RUNS = re.compile(r"-{2,}")
_DIGITS = re.compile(r"\d+")


def strip_accents(value: str) -> str:
    normalized = unicodedata.normalize("NFD", value)
    return "".join(ch for ch in normalized if unicodedata.category(ch) != "Mn")


def slugify(name: str) -> str:
    """
    URL-safe lowercase identifier for a display name

    "Pratos Principais" -> "pratos-principais", "Café da Manhã" -> "cafe-da-manha"
    """
    if not name:
        return ""
    slug = strip_accents(name.strip().lower())
    slug = _WHITESPACE.sub("-", slug)
    slug = _NON_SLUG_CHARS.sub("", slug)
    slug = _HYPHEN_RUNS.sub("-", slug)
    return slug.strip("-")


def only_digits(value: Optional[str]) -> str:
    """Keep the digits of a value such as "20 min" -> "20" """
    if not value:
        return ""
    return "".join(_DIGITS.findall(str(value)))


def minutes(value: Optional[str]) -> int:
    """Minutes in a free-text time field; unparsable values count as 0"""
    digits = only_digits(value)
    return int(digits) if digits else 0


def total_minutes(prep_time: Optional[str], cook_time: Optional[str]) -> int:
    return minutes(prep_time) + minutes(cook_time)


def unique_stripped(values: Iterable[str]) -> List[str]:
    """Trim values, drop blanks and case-insensitive duplicates, keep first spelling"""
    seen = set()
    result = []
    for value in values:
        if not isinstance(value, str):
            continue
        cleaned = value.strip()
        key = cleaned.lower()
        if not cleaned or key in seen:
            continue
        seen.add(key)
        result.append(cleaned)
    return result

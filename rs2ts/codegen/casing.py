"""
Casing directives for field and variant names.

Implements the serde rename_all policies. They only ever apply to field
and variant names; declaration identifiers are emitted verbatim.
"""

import re
from enum import Enum
from typing import List, Optional


class Casing(Enum):
    """The rename_all policies understood by serde."""
    LOWER = 'lowercase'
    UPPER = 'UPPERCASE'
    PASCAL = 'PascalCase'
    CAMEL = 'camelCase'
    SNAKE = 'snake_case'
    SCREAMING_SNAKE = 'SCREAMING_SNAKE_CASE'
    KEBAB = 'kebab-case'
    SCREAMING_KEBAB = 'SCREAMING-KEBAB-CASE'


# Lower->upper boundaries (userReviews) and acronym boundaries (HTTPServer)
_WORD_BOUNDARY = re.compile(r'(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])')


def parse_serde_case(value: Optional[str]) -> Optional[Casing]:
    """Parse a rename_all value; unrecognized values yield None (no-op)."""
    if value is None:
        return None
    for casing in Casing:
        if casing.value == value:
            return casing
    return None


def split_words(name: str) -> List[str]:
    """Split an identifier into words on '_', '-', spaces and case changes."""
    words = []
    for chunk in re.split(r'[_\-\s]+', name):
        if chunk:
            words.extend(w for w in _WORD_BOUNDARY.split(chunk) if w)
    return words


def to_case(name: str, casing: Optional[Casing]) -> str:
    """Apply a casing policy to a field or variant name."""
    if casing is None:
        return name
    if casing == Casing.LOWER:
        return name.lower()
    if casing == Casing.UPPER:
        return name.upper()

    words = split_words(name)
    if not words:
        return name

    lower = [w.lower() for w in words]
    if casing == Casing.PASCAL:
        return ''.join(w.capitalize() for w in lower)
    if casing == Casing.CAMEL:
        return lower[0] + ''.join(w.capitalize() for w in lower[1:])
    if casing == Casing.SNAKE:
        return '_'.join(lower)
    if casing == Casing.SCREAMING_SNAKE:
        return '_'.join(lower).upper()
    if casing == Casing.KEBAB:
        return '-'.join(lower)
    return '-'.join(lower).upper()

"""Slug generation matching the Simple Icons naming convention."""

from __future__ import annotations

import re

_DISALLOWED = re.compile(r"[^a-z0-9]")

# Applied in order, after lowercasing.
_REPLACEMENTS = (
    ("+", "plus"),
    (".", "dot"),
    ("&", "and"),
)


def slugify(title: str) -> str:
    """Derive the upstream slug for ``title``.

    The result doubles as the SVG filename stem, so it has to match what
    Simple Icons itself generates: ``"C++"`` → ``"cplusplus"``,
    ``".NET"`` → ``"dotnet"``, ``"AT&T"`` → ``"atandt"``. Words are
    concatenated without separators.
    """
    slug = title.lower()
    for char, word in _REPLACEMENTS:
        slug = slug.replace(char, word)
    return _DISALLOWED.sub("", slug)

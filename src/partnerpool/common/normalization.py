"""Text normalization for searchable business partner fields.

The same function fills the precomputed ``*_normalized`` columns at write
time and prepares filter values at query time, so both sides agree on
case, whitespace and German umlaut spelling.

Rules, in order:
    1. lower-case
    2. trim and collapse internal whitespace runs to a single space
    3. fold ``ä -> ae``, ``ö -> oe``, ``ü -> ue``, ``ß -> ss``
"""

import re

_WHITESPACE = re.compile(r"\s+")

# Applied after lower-casing, so "Ä" and "ä" fold the same way.
UMLAUT_FOLDS: tuple[tuple[str, str], ...] = (
    ("ä", "ae"),
    ("ö", "oe"),
    ("ü", "ue"),
    ("ß", "ss"),
)


def normalize(text: str) -> str:
    """Normalize a text value for comparison against normalized columns.

    Idempotent: ``normalize(normalize(s)) == normalize(s)``.

    Example:
        >>> normalize("  Müller   Straße ")
        'mueller strasse'
    """
    normalized = _WHITESPACE.sub(" ", text.lower().strip())
    for umlaut, replacement in UMLAUT_FOLDS:
        normalized = normalized.replace(umlaut, replacement)
    return normalized


def normalize_or_none(text: str | None) -> str | None:
    """Normalize ``text``, passing ``None`` through."""
    if text is None:
        return None
    return normalize(text)


def umlaut_variants(text: str) -> list[str]:
    """Expand a filter value into its umlaut spelling variants.

    Returns the lower-cased input followed by one variant per reverse fold
    (``ae -> ä``, ``oe -> ö``, ``ue -> ü``, ``ss -> ß``), without duplicates
    and in that order. A stored value matches when it contains any variant.

    Example:
        >>> umlaut_variants("Muelle")
        ['muelle', 'mülle']
    """
    base = text.lower()
    variants = [base]
    for umlaut, replacement in UMLAUT_FOLDS:
        variant = base.replace(replacement, umlaut)
        if variant not in variants:
            variants.append(variant)
    return variants

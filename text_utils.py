"""Text canonicalization shared by grading and deduplication."""

import unicodedata

# Applied before accent stripping so that "ü" and "ue" compare equal.
GERMAN_SUBSTITUTIONS: tuple[tuple[str, str], ...] = (
    ("ä", "ae"),
    ("ö", "oe"),
    ("ü", "ue"),
    ("ß", "ss"),
)


def fold_case(text: str) -> str:
    """Lowercase and trim, nothing else."""
    return str(text).strip().lower()


def strip_diacritics(text: str) -> str:
    """Remove combining marks, e.g. 'café' -> 'cafe'."""
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return unicodedata.normalize("NFC", stripped)


def fold_diacritics(text: str) -> str:
    """Canonicalize text for tolerant comparison.

    Lowercases, spells out German umlauts and sharp s (ä->ae, ö->oe,
    ü->ue, ß->ss), strips any remaining accents and trims whitespace.
    The result is a fixed point: folding it again returns it unchanged.

    Examples:
        >>> fold_diacritics("Müller") == fold_diacritics("mueller")
        True
        >>> fold_diacritics("  Straße ")
        'strasse'
    """
    folded = unicodedata.normalize("NFC", str(text)).lower()
    for source, target in GERMAN_SUBSTITUTIONS:
        folded = folded.replace(source, target)
    return strip_diacritics(folded).strip()

"""ASCII-only case folding.

Cookie attribute names and the values compared against them are ASCII.
``str.lower`` folds non-ASCII letters too (``"İ".lower()`` grows a combining
dot), so comparisons go through an explicit A-Z table instead.
"""

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ",
    "abcdefghijklmnopqrstuvwxyz",
)


def ascii_lower(text: str) -> str:
    """Lowercase A-Z only; every other character passes through."""
    return text.translate(_ASCII_LOWER)


def ascii_equal(left: str, right: str) -> bool:
    """Case-insensitive equality over ASCII letters."""
    return len(left) == len(right) and ascii_lower(left) == ascii_lower(right)

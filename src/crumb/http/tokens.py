"""Attribute-list tokenizing.

A ``Set-Cookie`` value is a ``;``-separated list of parameters, each either
``name=value`` or a bare flag such as ``Secure``.

Quoting is not honoured across separators: ``a="x;y"`` splits into ``a="x``
and ``y"``.
"""

from collections.abc import Iterator

PARAMETER_SEPARATOR = ";"


def next_parameter(text: str, separator: str, cursor: int) -> tuple[bool, str, int]:
    """Return ``(found, parameter, new_cursor)`` for the parameter at *cursor*.

    The parameter runs up to the next *separator* (exclusive) and the cursor
    moves past it. When no separator remains the rest of the string is
    returned and the cursor lands on ``len(text)``, so the following call
    reports not-found.
    """
    if cursor >= len(text):
        return False, "", cursor
    end = text.find(separator, cursor)
    if end == -1:
        return True, text[cursor:], len(text)
    return True, text[cursor:end], end + len(separator)


def iter_parameters(text: str, separator: str = PARAMETER_SEPARATOR) -> Iterator[str]:
    """Yield raw parameters of *text* in order."""
    cursor = 0
    while True:
        found, parameter, cursor = next_parameter(text, separator, cursor)
        if not found:
            return
        yield parameter


def strip_quotes(text: str) -> str:
    """Remove one layer of surrounding double quotes, if present."""
    if len(text) >= 2 and text[0] == '"' and text[-1] == '"':
        return text[1:-1]
    return text


def split_name_value(parameter: str) -> tuple[str, str]:
    """Split a raw parameter into ``(name, value)``.

    Splits on the first ``=``; flag attributes get an empty value. Leading
    spaces are dropped from the name, and both halves lose one layer of
    surrounding quotes.
    """
    name, _, value = parameter.partition("=")
    return strip_quotes(name.lstrip(" ")), strip_quotes(value)

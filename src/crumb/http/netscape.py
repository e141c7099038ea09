"""Netscape cookie-jar conventions.

Flat-file cookie jars (Netscape, and curl's ``CURLINFO_COOKIELIST``) encode
a few cookie attributes with sentinel strings rather than ``Set-Cookie``
syntax:

- a domain prefixed with ``#HttpOnly_`` marks an HttpOnly cookie,
- the path ``unknown`` means no path was recorded,
- the secure column holds ``TRUE`` or ``FALSE``.

All interpretation of those sentinels lives here.
"""

from dataclasses import dataclass

from crumb._internal.ascii import ascii_equal
from crumb.errors import JarEntryError

HTTPONLY_PREFIX = "#HttpOnly_"
UNKNOWN_PATH = "unknown"
SECURE_FLAG_VALUES = ("TRUE", "Secure")

JAR_FIELD_SEPARATOR = "\t"
_JAR_MIN_FIELDS = 6


def normalize_domain(domain: str) -> tuple[str, bool]:
    """Strip a leading ``#HttpOnly_`` marker.

    Returns ``(domain, implies_httponly)``.
    """
    if domain.startswith(HTTPONLY_PREFIX):
        return domain[len(HTTPONLY_PREFIX) :], True
    return domain, False


def resolve_path(path: str) -> str:
    """Map the ``unknown`` sentinel to an empty path."""
    return "" if path == UNKNOWN_PATH else path


def is_secure_flag(text: str) -> bool:
    """True for the textual secure markers ``TRUE`` and ``Secure``."""
    return any(ascii_equal(text, flag) for flag in SECURE_FLAG_VALUES)


@dataclass(frozen=True, slots=True)
class JarEntry:
    """One tab-separated cookie-jar line, split into its columns.

    ``include_subdomains`` is a domain-matching hint for jar owners; a
    :class:`~crumb.http.cookies.Cookie` built from the line does not keep it.
    """

    domain: str
    include_subdomains: bool
    path: str
    secure: str
    expires: int
    name: str
    value: str = ""


def split_jar_entry(line: str) -> JarEntry:
    """Split a cookie-jar line into a :class:`JarEntry`.

    Columns: domain, include-subdomains, path, secure, expires, name and an
    optional value. Raises :class:`JarEntryError` when columns are missing or
    the expiry is not an integer.
    """
    fields = line.rstrip("\r\n").split(JAR_FIELD_SEPARATOR)
    if len(fields) < _JAR_MIN_FIELDS:
        raise JarEntryError(line, f"expected at least {_JAR_MIN_FIELDS} tab-separated fields, got {len(fields)}")
    domain, subdomains, path, secure, expires, name = fields[:_JAR_MIN_FIELDS]
    value = JAR_FIELD_SEPARATOR.join(fields[_JAR_MIN_FIELDS:])
    try:
        expires_at = int(expires)
    except ValueError:
        raise JarEntryError(line, f"expiry {expires!r} is not an integer timestamp") from None
    return JarEntry(
        domain=domain,
        include_subdomains=ascii_equal(subdomains, "TRUE"),
        path=path,
        secure=secure,
        expires=expires_at,
        name=name,
        value=value,
    )

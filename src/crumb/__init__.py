"""Crumb: a single HTTP cookie, parsed and serialized.

Reads ``Set-Cookie`` attribute lists and Netscape cookie-jar lines, applies
the cross-attribute rules (Partitioned and SameSite=None imply Secure,
Max-Age beats Expires), and renders a canonical ``Set-Cookie`` value.

Basic usage::

    from crumb import Cookie

    cookie = Cookie()
    cookie.parse("sid=abc; Domain=example.com; Path=/; Secure; HttpOnly")
    cookie.to_header_value()

Strict parsing raises instead of returning ``False``::

    from crumb import CookieParseError, parse_set_cookie

    try:
        cookie = parse_set_cookie(header)
    except CookieParseError:
        ...
"""

# Declare free-threading support (PEP 703)
_Py_mod_gil = 0

__version__ = "0.1.0-dev"
__all__ = [
    "ConfigurationError",
    "Cookie",
    "CookieConfig",
    "CookieParseError",
    "CrumbError",
    "JarEntryError",
    "format_expires",
    "parse_set_cookie",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import crumb`` fast while providing a clean top-level API.
    """
    if name in ("Cookie", "parse_set_cookie"):
        from crumb.http import cookies as _cookies

        return getattr(_cookies, name)

    if name == "CookieConfig":
        from crumb.config import CookieConfig

        return CookieConfig

    if name == "format_expires":
        from crumb.http.dates import format_expires

        return format_expires

    if name in ("ConfigurationError", "CookieParseError", "CrumbError", "JarEntryError"):
        from crumb import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)

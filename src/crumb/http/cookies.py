"""Cookie: a single HTTP cookie as stored in a client cookie jar.

Parses ``Set-Cookie`` attribute lists and Netscape cookie-jar lines, and
serializes back to a canonical ``Set-Cookie`` value::

    from crumb import Cookie

    cookie = Cookie()
    if cookie.parse("sid=abc; Path=/; Max-Age=3600; SameSite=None"):
        cookie.secure               # True, forced by SameSite=None
        cookie.to_header_value()    # "sid=abc; Expires=...; Path=/; SameSite=None; Secure"

The serialized header is cached. Every mutation clears the cache and the
next ``to_header_value()`` rebuilds it; both happen under the cookie's lock,
so a cookie may be shared between threads.
"""

from __future__ import annotations

import threading

from crumb.config import DEFAULT_CONFIG, CookieConfig
from crumb.errors import CookieParseError
from crumb.http.attributes import apply_attribute_list
from crumb.http.netscape import split_jar_entry
from crumb.http.record import CookieFields, render_set_cookie


class Cookie:
    """A mutable cookie record with a cached ``Set-Cookie`` rendering.

    Created empty, then filled by :meth:`parse`, :meth:`create` or
    :meth:`from_jar_entry`. Parsing again overwrites only the attributes the
    new string mentions.
    """

    __slots__ = ("_config", "_fields", "_header", "_lock")

    def __init__(self, config: CookieConfig | None = None) -> None:
        self._config = config or DEFAULT_CONFIG
        self._fields = CookieFields()
        self._lock = threading.Lock()
        # None marks the cached header as stale
        self._header: str | None = None

    @classmethod
    def create(
        cls,
        name: str,
        value: str,
        domain: str = "",
        path: str = "",
        secure: str | bool = False,
        expires: float = 0,
        samesite: str = "",
        *,
        config: CookieConfig | None = None,
    ) -> Cookie:
        """Build a cookie field by field.

        *expires* is an absolute timestamp; ``0`` makes a session cookie.
        *secure* also accepts the textual markers ``TRUE`` and ``Secure``.
        """
        cookie = cls(config)
        fields = cookie._fields
        fields.name = name
        fields.value = value
        fields.set_domain(domain)
        fields.set_path(path)
        fields.set_expires_at(expires)
        fields.set_secure_flag(secure)
        fields.set_samesite(samesite)
        return cookie

    @classmethod
    def from_jar_entry(cls, line: str, *, config: CookieConfig | None = None) -> Cookie:
        """Build a cookie from one Netscape/curl cookie-jar line.

        Raises :class:`~crumb.errors.JarEntryError` for malformed lines.
        """
        entry = split_jar_entry(line)
        return cls.create(
            entry.name,
            entry.value,
            domain=entry.domain,
            path=entry.path,
            secure=entry.secure,
            expires=entry.expires,
            config=config,
        )

    # -- Parsing / serialization --

    def parse(self, text: str, domain: str = "") -> bool:
        """Apply a ``Set-Cookie`` attribute list to this cookie.

        *domain* overrides the domain before the string is read and may carry
        the ``#HttpOnly_`` marker. Returns whether a Name/Value pair was
        found; on failure, attributes already applied are kept.
        """
        with self._lock:
            try:
                return apply_attribute_list(
                    self._fields,
                    text,
                    domain,
                    now=self._config.clock(),
                    config=self._config,
                )
            finally:
                self._header = None

    def to_header_value(self) -> str:
        """Serialize to a ``Set-Cookie`` header value string."""
        with self._lock:
            if self._header is None:
                self._header = render_set_cookie(self._fields)
            return self._header

    def __str__(self) -> str:
        return self.to_header_value()

    def __repr__(self) -> str:
        return f"Cookie({self.to_header_value()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cookie):
            return NotImplemented
        return self.snapshot() == other.snapshot()

    __hash__ = None  # type: ignore[assignment]

    def snapshot(self) -> CookieFields:
        """Return a detached copy of the current fields."""
        with self._lock:
            f = self._fields
            return CookieFields(
                name=f.name,
                value=f.value,
                domain=f.domain,
                path=f.path,
                expires=f.expires,
                secure=f.secure,
                httponly=f.httponly,
                partitioned=f.partitioned,
                samesite=f.samesite,
            )

    # -- Accessors --

    @property
    def name(self) -> str:
        return self._fields.name

    @name.setter
    def name(self, name: str) -> None:
        with self._lock:
            self._fields.name = name
            self._header = None

    @property
    def value(self) -> str:
        return self._fields.value

    @value.setter
    def value(self, value: str) -> None:
        with self._lock:
            self._fields.value = value
            self._header = None

    @property
    def domain(self) -> str:
        """The cookie domain, without any ``#HttpOnly_`` marker."""
        return self._fields.domain

    @domain.setter
    def domain(self, domain: str) -> None:
        with self._lock:
            self._fields.set_domain(domain)
            self._header = None

    @property
    def path(self) -> str:
        """The cookie path; assigning ``unknown`` clears it."""
        return self._fields.path

    @path.setter
    def path(self, path: str) -> None:
        with self._lock:
            self._fields.set_path(path)
            self._header = None

    @property
    def expires(self) -> str:
        """The ``Expires`` date text; empty for a session cookie."""
        return self._fields.expires

    @expires.setter
    def expires(self, expires: str) -> None:
        with self._lock:
            self._fields.expires = expires
            self._header = None

    def set_expires_at(self, timestamp: float) -> None:
        """Set ``expires`` from an absolute time; ``0`` leaves it unchanged."""
        with self._lock:
            self._fields.set_expires_at(timestamp)
            self._header = None

    @property
    def secure(self) -> bool:
        return self._fields.secure

    @secure.setter
    def secure(self, secure: str | bool) -> None:
        with self._lock:
            self._fields.set_secure_flag(secure)
            self._header = None

    @property
    def httponly(self) -> bool:
        return self._fields.httponly

    @httponly.setter
    def httponly(self, httponly: bool) -> None:
        with self._lock:
            self._fields.httponly = httponly
            self._header = None

    @property
    def partitioned(self) -> bool:
        """Partitioned storage; setting it also forces ``secure``."""
        return self._fields.partitioned

    @partitioned.setter
    def partitioned(self, partitioned: bool) -> None:
        with self._lock:
            self._fields.set_partitioned(partitioned)
            self._header = None

    @property
    def samesite(self) -> str:
        """SameSite value; ``None`` (any case) also forces ``secure``."""
        return self._fields.samesite

    @samesite.setter
    def samesite(self, samesite: str) -> None:
        with self._lock:
            self._fields.set_samesite(samesite)
            self._header = None

    @property
    def is_session(self) -> bool:
        """True when the cookie has no expiry."""
        return self._fields.is_session


def parse_set_cookie(text: str, domain: str = "", *, config: CookieConfig | None = None) -> Cookie:
    """Parse a ``Set-Cookie`` value into a new :class:`Cookie`.

    Raises :class:`~crumb.errors.CookieParseError` when *text* has no
    Name/Value pair.
    """
    cookie = Cookie(config)
    if not cookie.parse(text, domain):
        raise CookieParseError(text)
    return cookie

"""Cookie field state and its ``Set-Cookie`` rendering.

``CookieFields`` holds the resolved attributes of one cookie. Its setters
apply the cross-attribute rules:

- ``Partitioned`` implies ``Secure``,
- ``SameSite=None`` implies ``Secure``,
- the ``#HttpOnly_`` domain prefix implies ``HttpOnly``,
- the ``unknown`` path clears the path.

The implications fire when the implying field is set; clearing ``secure``
afterwards is not prevented.
"""

from dataclasses import dataclass

from crumb._internal.ascii import ascii_equal
from crumb.http.dates import format_expires
from crumb.http.netscape import is_secure_flag, normalize_domain, resolve_path

SAMESITE_NONE = "None"


@dataclass(slots=True)
class CookieFields:
    """Mutable attribute state of a single cookie.

    Not synchronized; :class:`crumb.http.cookies.Cookie` guards it.
    """

    name: str = ""
    value: str = ""
    domain: str = ""
    path: str = ""
    expires: str = ""
    secure: bool = False
    httponly: bool = False
    partitioned: bool = False
    samesite: str = ""

    @property
    def is_session(self) -> bool:
        return not self.expires

    def set_domain(self, domain: str) -> None:
        self.domain, implies_httponly = normalize_domain(domain)
        if implies_httponly:
            self.httponly = True

    def set_path(self, path: str) -> None:
        self.path = resolve_path(path)

    def set_expires_at(self, timestamp: float) -> bool:
        """Set ``expires`` from an absolute time; 0 or unconvertible leaves it as is.

        Returns whether ``expires`` was written.
        """
        rendered = format_expires(timestamp)
        if rendered is None:
            return False
        self.expires = rendered
        return True

    def set_secure_flag(self, secure: str | bool) -> None:
        if isinstance(secure, str):
            secure = is_secure_flag(secure)
        self.secure = secure

    def set_partitioned(self, partitioned: bool) -> None:
        self.partitioned = partitioned
        if partitioned:
            self.secure = True

    def set_samesite(self, samesite: str) -> None:
        self.samesite = samesite
        if ascii_equal(samesite, SAMESITE_NONE):
            self.secure = True


def render_set_cookie(fields: CookieFields) -> str:
    """Render *fields* as ``Name=Value`` plus the non-default attributes.

    Attribute order is fixed: Expires, Domain, Path, SameSite, Secure,
    Partitioned, HttpOnly.
    """
    parts = [f"{fields.name}={fields.value}"]
    if fields.expires:
        parts.append(f"Expires={fields.expires}")
    if fields.domain:
        parts.append(f"Domain={fields.domain}")
    if fields.path:
        parts.append(f"Path={fields.path}")
    if fields.samesite:
        parts.append(f"SameSite={fields.samesite}")
    if fields.secure:
        parts.append("Secure")
    if fields.partitioned:
        parts.append("Partitioned")
    if fields.httponly:
        parts.append("HttpOnly")
    return "; ".join(parts)

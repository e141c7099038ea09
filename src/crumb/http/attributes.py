"""``Set-Cookie`` attribute dispatch.

The first non-empty parameter of an attribute list is the cookie's own
Name/Value pair. Every later parameter is looked up, ASCII
case-insensitively, in :data:`ATTRIBUTE_HANDLERS`; unknown attributes are
skipped so newer attributes do not break older parsers.

``Max-Age`` beats ``Expires`` whatever their order: a Max-Age overwrites an
earlier Expires, and an Expires after a Max-Age is ignored.
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeAlias

from crumb._internal.ascii import ascii_lower
from crumb.config import DEFAULT_CONFIG, CookieConfig
from crumb.http.record import CookieFields
from crumb.http.tokens import iter_parameters, split_name_value

logger = logging.getLogger("crumb.attributes")

_MAX_AGE_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(slots=True)
class _ParseState:
    fields: CookieFields
    now: float
    config: CookieConfig
    max_age_applied: bool = False


def _apply_domain(state: _ParseState, value: str) -> None:
    state.fields.set_domain(value)


def _apply_path(state: _ParseState, value: str) -> None:
    state.fields.set_path(value)


def _apply_expires(state: _ParseState, value: str) -> None:
    if state.max_age_applied:
        logger.debug("Ignoring Expires=%r: Max-Age takes precedence", value)
        return
    state.fields.expires = value


def _apply_max_age(state: _ParseState, value: str) -> None:
    text = value.strip(" ")
    if not _MAX_AGE_RE.fullmatch(text):
        logger.debug("Ignoring non-numeric Max-Age=%r", value)
        return
    try:
        seconds = state.config.clamp_max_age(int(text))
        expires_at = state.now + seconds
    except (ValueError, OverflowError) as exc:
        logger.debug("Ignoring out-of-range Max-Age=%r: %s", value[:40], exc)
        return
    # Only a Max-Age that produced a date outranks a later Expires.
    if state.fields.set_expires_at(expires_at):
        state.max_age_applied = True


def _apply_secure(state: _ParseState, _value: str) -> None:
    state.fields.secure = True


def _apply_httponly(state: _ParseState, _value: str) -> None:
    state.fields.httponly = True


def _apply_partitioned(state: _ParseState, _value: str) -> None:
    state.fields.set_partitioned(True)


def _apply_samesite(state: _ParseState, value: str) -> None:
    state.fields.set_samesite(value)


AttributeHandler: TypeAlias = Callable[[_ParseState, str], None]

# Keys are ASCII-lowercased attribute names.
ATTRIBUTE_HANDLERS: dict[str, AttributeHandler] = {
    "domain": _apply_domain,
    "expires": _apply_expires,
    "httponly": _apply_httponly,
    "max-age": _apply_max_age,
    "path": _apply_path,
    "secure": _apply_secure,
    "samesite": _apply_samesite,
    "partitioned": _apply_partitioned,
}


def apply_attribute_list(
    fields: CookieFields,
    text: str,
    domain: str = "",
    *,
    now: float,
    config: CookieConfig = DEFAULT_CONFIG,
) -> bool:
    """Apply the ``Set-Cookie`` attribute list *text* to *fields*.

    *domain*, when given, is applied before anything else and may carry the
    ``#HttpOnly_`` marker. *now* anchors ``Max-Age``.

    Returns whether a Name/Value pair was found. The update is not
    transactional: on failure, anything already applied (such as *domain*)
    stays in *fields*.
    """
    if domain:
        fields.set_domain(domain)

    state = _ParseState(fields=fields, now=now, config=config)
    name_resolved = False
    for parameter in iter_parameters(text):
        name, value = split_name_value(parameter)
        if not name:
            continue

        if not name_resolved:
            if "=" not in parameter:
                logger.debug("No name/value pair in %r", text[:80])
                return False
            fields.name = name
            fields.value = value
            name_resolved = True
            continue

        handler = ATTRIBUTE_HANDLERS.get(ascii_lower(name))
        if handler is None:
            logger.debug("Ignoring unknown cookie attribute %r", name)
            continue
        handler(state, value)

    if not name_resolved:
        logger.debug("No name/value pair in %r", text[:80])
    return name_resolved

"""Cookie parsing configuration.

CookieConfig is a frozen dataclass, shared freely between cookies and
threads.
"""

from collections.abc import Callable
from dataclasses import dataclass
from time import time

from crumb.errors import ConfigurationError

# RFC 6265bis: user agents cap Max-Age at 400 days.
RECOMMENDED_MAX_AGE_LIMIT = 400 * 24 * 60 * 60


@dataclass(frozen=True, slots=True)
class CookieConfig:
    """Parsing configuration. Immutable after creation.

    Override what you need::

        config = CookieConfig(clock=lambda: 1_700_000_000.0)
    """

    # Source of "now" for Max-Age, in seconds since the epoch
    clock: Callable[[], float] = time

    # Upper bound on Max-Age seconds; None leaves it unbounded
    max_age_limit: int | None = None

    def __post_init__(self) -> None:
        if not callable(self.clock):
            msg = f"clock must be callable, got {type(self.clock).__name__}"
            raise ConfigurationError(msg)
        if self.max_age_limit is not None and self.max_age_limit < 0:
            msg = f"max_age_limit must be non-negative, got {self.max_age_limit}"
            raise ConfigurationError(msg)

    def clamp_max_age(self, seconds: int) -> int:
        """Clamp *seconds* into ``[0, max_age_limit]``."""
        seconds = max(0, seconds)
        if self.max_age_limit is not None:
            seconds = min(seconds, self.max_age_limit)
        return seconds


DEFAULT_CONFIG = CookieConfig()

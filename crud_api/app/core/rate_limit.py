"""
Per‑client rate limiting on top of slowapi.

Two tiers are configured from ``Settings``: ``general`` for read
endpoints and ``strict`` for create/update/delete.  Endpoints opt in by
stacking ``@general_limit`` or ``@strict_limit`` under the route
decorator.  Every endpoint of a tier shares one counter per client
address, and it has to accept ``request`` and ``response`` arguments so
slowapi can find the client and attach the ``X-RateLimit-*`` headers.

Counters live in the limiter's in‑memory storage, which drops a
client's window once it expires.  ``init_rate_limiting`` installs the
limiter on an application, applies the tier limits from its settings
and starts it with empty counters.
"""

import math
from typing import Callable, Dict

from fastapi import FastAPI
from slowapi import Limiter
from slowapi.util import get_remote_address

from .config import Settings


RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."

limiter = Limiter(
    key_func=get_remote_address,
    headers_enabled=True,
    strategy="fixed-window",
    storage_uri="memory://",
)

# Limit strings per tier, e.g. "100 per 900 seconds".  Read on every
# request, so the last configured application wins.
_tier_limits: Dict[str, str] = {}


def limit_string(max_requests: int, window_seconds: int) -> str:
    return f"{max_requests} per {window_seconds} seconds"


def _tier(name: str) -> Callable[[], str]:
    def provider() -> str:
        return _tier_limits[name]

    return provider


general_limit = limiter.shared_limit(_tier("general"), scope="general")
strict_limit = limiter.shared_limit(_tier("strict"), scope="strict")


def retry_after(window_seconds: int) -> str:
    """Human readable wait, rounded up to whole minutes."""
    return f"{math.ceil(window_seconds / 60)} minutes"


def init_rate_limiting(app: FastAPI, settings: Settings) -> Limiter:
    window = settings.rate_limit_window_seconds
    _tier_limits["general"] = limit_string(settings.rate_limit_max, window)
    _tier_limits["strict"] = limit_string(settings.rate_limit_strict_max, window)
    limiter.reset()
    app.state.limiter = limiter
    return limiter

from __future__ import annotations

from limits import parse
from slowapi import Limiter
from slowapi.util import get_remote_address

from cvscore.core.config import settings


def _validated_limit(value: str) -> str:
    try:
        parse(value)
    except ValueError as exc:
        raise RuntimeError(f"RATE_LIMIT '{value}' is not a valid rate limit, e.g. '60/minute'.") from exc
    return value


ANALYSIS_RATE_LIMIT = _validated_limit(settings.rate_limit)

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def rate_limit():
    if settings.rate_limit_enabled:
        return limiter.limit(ANALYSIS_RATE_LIMIT)

    def decorator(func):
        return func

    return decorator

from __future__ import annotations

import re

from cvscore.core.config import settings


def cors_allowed_origins() -> list[str]:
    origins: list[str] = []
    for origin in settings.cors_allowed_origins:
        normalized = origin.strip().rstrip("/")
        if normalized and normalized not in origins:
            origins.append(normalized)
    return origins


def cors_allow_origin_regex() -> str | None:
    regex = (settings.cors_allow_origin_regex or "").strip()
    if not regex:
        return None
    try:
        re.compile(regex)
    except re.error as exc:
        raise RuntimeError(f"CORS_ALLOW_ORIGIN_REGEX is not a valid regular expression: {exc}") from exc
    return regex


def cors_allow_credentials() -> bool:
    # Credentials are never combined with a wildcard origin.
    return settings.cors_allow_credentials and "*" not in cors_allowed_origins()

"""Header helpers shared by the fetcher and the built-in interceptors."""

from collections.abc import Mapping


def find_header(headers: Mapping[str, str] | None, name: str) -> str | None:
    """Look up a header value case-insensitively."""
    if not headers:
        return None
    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered:
            return value
    return None


def has_header(headers: Mapping[str, str] | None, name: str) -> bool:
    """Return True if a header with a non-empty value is present."""
    return bool(find_header(headers, name))


def merge_headers(*sources: Mapping[str, str] | None) -> dict[str, str]:
    """Merge header mappings, later sources winning on key collision.

    Keys are compared case-insensitively; the spelling of the winning key is
    kept so ``{"content-type": ...}`` replaces a default ``Content-Type``.
    """
    merged: dict[str, str] = {}
    for source in sources:
        if not source:
            continue
        for key, value in source.items():
            for existing in [k for k in merged if k.lower() == key.lower()]:
                del merged[existing]
            merged[key] = value
    return merged


def redact_headers(
    headers: Mapping[str, str] | None,
    sensitive: tuple[str, ...] = ("authorization", "cookie", "x-api-key"),
) -> dict[str, str]:
    """Return a copy of headers safe for logging."""
    if not headers:
        return {}
    return {
        key: "[REDACTED]" if key.lower() in sensitive else value
        for key, value in headers.items()
    }

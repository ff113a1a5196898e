# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL helpers for probe targets."""

from __future__ import annotations

from urllib.parse import urljoin, urlparse

from ..errors import ConfigurationError

ALLOWED_SCHEMES = frozenset({"http", "https"})


def parse_base_url(base_url: str) -> str:
    """
    Check that ``base_url`` is an absolute http(s) URL and return it unchanged.

    Raises ConfigurationError otherwise.
    """
    raw = str(base_url or "").strip()
    try:
        parsed = urlparse(raw)
        # Accessing .port validates the port component.
        parsed.port  # noqa: B018
    except ValueError as exc:
        raise ConfigurationError(f"invalid base URL {base_url!r}: {exc}") from exc
    if parsed.scheme.lower() not in ALLOWED_SCHEMES:
        raise ConfigurationError(f"invalid base URL {base_url!r}: scheme must be http or https")
    if not parsed.hostname:
        raise ConfigurationError(f"invalid base URL {base_url!r}: missing host")
    return raw


def resolve_probe_url(base_url: str, identifier: str) -> str:
    """
    Resolve ``identifier`` as a relative reference against ``base_url`` (RFC 3986).

    The identifier replaces the last path segment of the base, so bases meant to
    keep their path should end in ``/``:
      https://host/api/  + abc -> https://host/api/abc
      https://host/api   + abc -> https://host/abc
    An empty identifier resolves to the base itself (an empty path becomes ``/``)
    minus any fragment.
    """
    base = parse_base_url(base_url)
    parsed = urlparse(base)
    if not parsed.path:
        base = parsed._replace(path="/").geturl()
    resolved = urljoin(base, identifier)
    return resolved.split("#", 1)[0]


__all__ = ["parse_base_url", "resolve_probe_url"]

# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""The client seam probes talk to, plus the default factory."""

from typing import Any, Protocol

from ..config import ProbeSettings, load_probe_settings
from .models import HttpRequest, HttpResponse


class HttpClient(Protocol):
    """
    Sends one request and reports the outcome as data.

    Implementations return ``HttpResponse(ok=False, ...)`` for transport
    failures instead of raising, and must be callable from several threads.
    """

    def request(self, request: HttpRequest) -> HttpResponse: ...

    def close(self) -> None: ...


def create_default_http_client(settings: ProbeSettings | None = None, **overrides: Any) -> HttpClient:
    """Build the httpx-backed client; keyword overrides replace individual settings."""
    from .httpx_client import HttpxClient

    base = settings or load_probe_settings()
    return HttpxClient(base.with_overrides(**overrides) if overrides else base)

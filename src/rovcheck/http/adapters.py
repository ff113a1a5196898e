# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-memory HttpClient implementations."""

from __future__ import annotations

import threading

from .client import HttpClient
from .models import HttpRequest, HttpResponse


class StubHttpClient(HttpClient):
    """Deterministic, programmable HttpClient for tests and dry runs."""

    def __init__(self, responses: dict[str, HttpResponse] | None = None):
        self._responses = responses or {}
        self._lock = threading.Lock()
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(self, url: str, response: HttpResponse) -> None:
        self._responses[url] = response

    def add_prefix(self, prefix: str, response: HttpResponse) -> None:
        """Answer every URL starting with ``prefix`` (useful with random identifiers)."""
        self._responses[f"{prefix}*"] = response

    def _lookup(self, url: str) -> HttpResponse | None:
        if url in self._responses:
            return self._responses[url]
        for key, response in self._responses.items():
            if key.endswith("*") and url.startswith(key[:-1]):
                return response
        return None

    def request(self, request: HttpRequest) -> HttpResponse:
        with self._lock:
            self.requests.append(request)
        response = self._lookup(request.url)
        if response is not None:
            return response
        return HttpResponse(ok=False, status_code=None, error_message="No stubbed response configured")

    def close(self) -> None:
        self.closed = True

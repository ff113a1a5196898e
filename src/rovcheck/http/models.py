# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used across rovcheck."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

Headers = dict[str, str]


@dataclass
class HttpRequest:
    """Normalized request representation consumed by HttpClient implementations.

    ``timeout`` and ``allow_redirects`` fall back to the client settings when None.
    """

    url: str
    method: str = "GET"
    headers: Headers | None = None
    timeout: float | None = None
    allow_redirects: bool | None = None


@dataclass
class HttpResponse:
    """
    Normalized HTTP response.

    ``ok`` reports transport success only: any received response, whatever its
    status code, has ``ok=True``. Transport failures carry the original
    exception in ``error`` so callers can categorize it.
    """

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    text: str = ""
    content: bytes = b""
    url: str | None = None
    error_message: str | None = None
    error_type: str | None = None
    error: BaseException | None = field(default=None, repr=False, compare=False)
    elapsed: float | None = None
    meta: dict[str, Any] = field(default_factory=dict)

# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for rovcheck."""

from ..http.models import Headers, HttpRequest, HttpResponse
from .probe import (
    CheckReport,
    Endpoint,
    IsBgpSafeYetPayload,
    ProbeOutcome,
    ProbeTarget,
    Verdict,
)

__all__ = [
    "CheckReport",
    "Endpoint",
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "IsBgpSafeYetPayload",
    "ProbeOutcome",
    "ProbeTarget",
    "Verdict",
]

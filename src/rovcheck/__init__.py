# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
rovcheck package entrypoint.

rovcheck probes a pair of endpoints published by a route origin validation
test service: one reachable only over RPKI-valid routes and one announced
from an RPKI-invalid prefix. A network that drops invalid routes answers the
first and never the second, which yields an ``OK`` verdict.
"""

from .config import ProbeSettings, load_probe_settings
from .errors import ConfigurationError, ErrorCategory, RovCheckError
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    StubHttpClient,
    create_default_http_client,
)
from .log import setup_logging
from .models import CheckReport, Endpoint, IsBgpSafeYetPayload, ProbeOutcome, ProbeTarget, Verdict
from .probe import combine, generate_identifier, probe_endpoint
from .runtime import RovCheck, run_check
from .version import __version__

__all__ = [
    "CheckReport",
    "ConfigurationError",
    "Endpoint",
    "ErrorCategory",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "IsBgpSafeYetPayload",
    "ProbeOutcome",
    "ProbeSettings",
    "ProbeTarget",
    "RovCheck",
    "RovCheckError",
    "StubHttpClient",
    "Verdict",
    "combine",
    "create_default_http_client",
    "generate_identifier",
    "load_probe_settings",
    "probe_endpoint",
    "run_check",
    "setup_logging",
    "__version__",
]

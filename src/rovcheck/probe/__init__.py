# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Identifier generation, endpoint probing and verdict combination."""

from .identifier import generate_identifier
from .prober import build_target, classify_response, probe_endpoint
from .verdict import combine

__all__ = [
    "build_target",
    "classify_response",
    "combine",
    "generate_identifier",
    "probe_endpoint",
]

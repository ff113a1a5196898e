# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Random request identifiers used to keep probe paths unique per run."""

from __future__ import annotations

import random
import secrets
from collections.abc import Sequence

from ..config import IDENTIFIER_LENGTH

_system_random = secrets.SystemRandom()


def generate_identifier(
    alphabet: Sequence[str],
    size: int = IDENTIFIER_LENGTH,
    *,
    rng: random.Random | None = None,
) -> str:
    """
    Draw ``size`` characters uniformly and independently from ``alphabet``.

    Repeated characters in the alphabet are kept and weight the draw. An empty
    alphabet yields an empty identifier rather than an error.
    """
    symbols = list(alphabet)
    if not symbols:
        return ""
    source = rng or _system_random
    return "".join(source.choice(symbols) for _ in range(size))

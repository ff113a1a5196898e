# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Verdict combination over the two probe outcomes."""

from ..models.probe import Verdict


def combine(valid_succeeded: bool, invalid_succeeded: bool) -> Verdict:
    """OK only when the valid route answers and the invalid one does not."""
    if valid_succeeded and not invalid_succeeded:
        return Verdict.OK
    return Verdict.NOK

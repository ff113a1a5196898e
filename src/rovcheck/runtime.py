# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level rovcheck facade: generate an identifier, probe both routes, combine."""

from __future__ import annotations

import logging
import random
from concurrent.futures import ThreadPoolExecutor

from .config import ProbeSettings, load_probe_settings
from .http.client import HttpClient, create_default_http_client
from .models import CheckReport, Endpoint, Verdict
from .probe import build_target, combine, generate_identifier, probe_endpoint

logger = logging.getLogger(__name__)


class RovCheck:
    """
    Runs the valid/invalid probe pair against one shared HTTP client.

    Both probes are submitted to a two-worker pool and joined before the
    verdict is computed; neither probe cancels the other.
    """

    def __init__(
        self,
        settings: ProbeSettings | None = None,
        http_client: HttpClient | None = None,
        *,
        rng: random.Random | None = None,
        log: logging.Logger | None = None,
    ):
        self.settings = (settings or load_probe_settings()).validate()
        self.http_client = http_client or create_default_http_client(self.settings)
        self.rng = rng
        self.log = log or logger

    def check(self, identifier: str | None = None) -> CheckReport:
        if identifier is None:
            identifier = generate_identifier(self.settings.alphabet, rng=self.rng)
        self.log.debug("Using request identifier %r", identifier)

        valid_target = build_target(Endpoint.VALID, self.settings.valid_url, identifier)
        invalid_target = build_target(Endpoint.INVALID, self.settings.invalid_url, identifier)

        timeout = float(self.settings.timeout)
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="rovcheck-probe") as pool:
            valid_future = pool.submit(probe_endpoint, self.http_client, valid_target, timeout, log=self.log)
            invalid_future = pool.submit(probe_endpoint, self.http_client, invalid_target, timeout, log=self.log)
            valid = valid_future.result()
            invalid = invalid_future.result()

        verdict = combine(valid.succeeded, invalid.succeeded)
        return CheckReport(identifier=identifier, valid=valid, invalid=invalid, verdict=verdict)

    def run(self, identifier: str | None = None) -> CheckReport:
        """Run a check and log the verdict line."""
        report = self.check(identifier)
        self.log.info(report.verdict.value)
        return report

    def close(self) -> None:
        """Release the HTTP client; a failing close is logged, not raised."""
        closer = getattr(self.http_client, "close", None)
        if closer is None:
            return
        try:
            closer()
        except Exception:  # noqa: BLE001
            self.log.debug("Closing HTTP client failed", exc_info=True)

    def __enter__(self) -> RovCheck:
        return self

    def __exit__(self, *_exc_info) -> None:
        self.close()


def run_check(settings: ProbeSettings | None = None, http_client: HttpClient | None = None) -> Verdict:
    """One-shot helper: run a check with a fresh client and return the verdict."""
    with RovCheck(settings, http_client) as checker:
        return checker.run().verdict

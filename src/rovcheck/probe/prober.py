# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Single-endpoint probe: fetch ``{base}/{identifier}`` and classify the result."""

from __future__ import annotations

import json
import logging

from ..errors import ErrorCategory, PayloadSchemaError, categorize_exception, error_category_to_reason
from ..http.client import HttpClient
from ..http.models import HttpRequest, HttpResponse
from ..http.url import resolve_probe_url
from ..models.probe import Endpoint, IsBgpSafeYetPayload, ProbeOutcome, ProbeTarget

logger = logging.getLogger(__name__)

EXPECTED_STATUS = 200


def build_target(endpoint: Endpoint, base_url: str, identifier: str) -> ProbeTarget:
    return ProbeTarget(endpoint=endpoint, base_url=base_url, url=resolve_probe_url(base_url, identifier))


def _failure(
    target: ProbeTarget,
    category: ErrorCategory,
    message: str,
    response: HttpResponse,
) -> ProbeOutcome:
    return ProbeOutcome(
        target=target,
        succeeded=False,
        status_code=response.status_code,
        error_category=category,
        error_message=message,
        elapsed=response.elapsed,
    )


def classify_response(target: ProbeTarget, response: HttpResponse) -> ProbeOutcome:
    """Turn an HttpResponse into a ProbeOutcome without raising."""
    if not response.ok:
        category = categorize_exception(response.error) if response.error is not None else ErrorCategory.UNKNOWN_ERROR
        message = response.error_message or error_category_to_reason(category)
        return _failure(target, category, message, response)

    # Only a 200 carries the service payload; other 2xx codes count as failures.
    if response.status_code != EXPECTED_STATUS:
        return _failure(target, ErrorCategory.HTTP_STATUS, f"HTTP status {response.status_code}", response)

    if response.meta.get("body_truncated"):
        return _failure(target, ErrorCategory.DECODE_ERROR, "Response body exceeded size limit", response)

    try:
        data = json.loads(response.content)
    except ValueError as exc:
        return _failure(target, ErrorCategory.DECODE_ERROR, f"Invalid JSON: {exc}", response)

    try:
        payload = IsBgpSafeYetPayload.from_mapping(data)
    except PayloadSchemaError as exc:
        return _failure(target, ErrorCategory.SCHEMA_ERROR, f"Unexpected payload: {exc}", response)

    return ProbeOutcome(
        target=target,
        succeeded=True,
        payload=payload,
        status_code=response.status_code,
        elapsed=response.elapsed,
    )


def probe_endpoint(
    client: HttpClient,
    target: ProbeTarget,
    timeout: float,
    *,
    log: logging.Logger | None = None,
) -> ProbeOutcome:
    """
    Issue one GET against ``target`` and classify it.

    Transport errors, timeouts and undecodable bodies all come back as a failed
    outcome; the category is kept for diagnostics only.
    """
    log = log or logger
    try:
        response = client.request(HttpRequest(url=target.url, timeout=timeout))
    except Exception as exc:  # noqa: BLE001
        response = HttpResponse(
            ok=False,
            url=target.url,
            error_message=str(exc) or type(exc).__name__,
            error_type=type(exc).__name__,
            error=exc,
        )

    outcome = classify_response(target, response)
    if outcome.succeeded:
        log.debug("Response from %s (%s): %r", target.endpoint.value, target.url, outcome.payload)
    else:
        log.debug(
            "Error from %s (%s): [%s] %s",
            target.endpoint.value,
            target.url,
            outcome.error_category.value,
            outcome.error_message,
        )
    return outcome

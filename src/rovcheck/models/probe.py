# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe targets, outcomes and the validation service payload."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

from ..errors import ErrorCategory, PayloadSchemaError


class Endpoint(str, Enum):
    VALID = "valid"
    INVALID = "invalid"


class Verdict(str, Enum):
    OK = "OK"
    NOK = "NOK"


@dataclass(frozen=True)
class IsBgpSafeYetPayload:
    """Body returned by the validation service for a successful probe."""

    status: str
    asn: int
    name: str
    blackholed: bool

    @classmethod
    def from_mapping(cls, data: Any) -> IsBgpSafeYetPayload:
        """Validate decoded JSON; extra keys are ignored, missing or mistyped ones are not."""
        if not isinstance(data, Mapping):
            raise PayloadSchemaError(f"expected a JSON object, got {type(data).__name__}")

        def _field(name: str, kind: type) -> Any:
            if name not in data:
                raise PayloadSchemaError(f"missing field {name!r}")
            value = data[name]
            # bool is an int subclass; only accept it where a bool is expected.
            if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
                raise PayloadSchemaError(f"field {name!r} must be {kind.__name__}, got {type(value).__name__}")
            return value

        asn = _field("asn", int)
        if asn < 0 or asn > 0xFFFFFFFF:
            raise PayloadSchemaError(f"field 'asn' out of range: {asn}")
        return cls(
            status=_field("status", str),
            asn=asn,
            name=_field("name", str),
            blackholed=_field("blackholed", bool),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ProbeTarget:
    endpoint: Endpoint
    base_url: str
    url: str


@dataclass(frozen=True)
class ProbeOutcome:
    """Result of a single probe; ``succeeded`` is the only input to the verdict."""

    target: ProbeTarget
    succeeded: bool
    payload: IsBgpSafeYetPayload | None = None
    status_code: int | None = None
    error_category: ErrorCategory = ErrorCategory.NONE
    error_message: str | None = None
    elapsed: float | None = None

    @property
    def diagnostic(self) -> str:
        if self.succeeded and self.payload is not None:
            return repr(self.payload)
        return self.error_message or ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "endpoint": self.target.endpoint.value,
            "url": self.target.url,
            "succeeded": self.succeeded,
            "status_code": self.status_code,
            "payload": self.payload.to_dict() if self.payload else None,
            "error_category": self.error_category.value,
            "error_message": self.error_message,
            "elapsed": self.elapsed,
        }


@dataclass(frozen=True)
class CheckReport:
    identifier: str
    valid: ProbeOutcome
    invalid: ProbeOutcome
    verdict: Verdict
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.verdict is Verdict.OK

    def to_dict(self) -> dict[str, Any]:
        return {
            "verdict": self.verdict.value,
            "identifier": self.identifier,
            "valid": self.valid.to_dict(),
            "invalid": self.invalid.to_dict(),
            **({"metadata": dict(self.metadata)} if self.metadata else {}),
        }

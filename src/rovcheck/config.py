# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for rovcheck."""

import os
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import TypeVar

from .errors import ConfigurationError
from .version import __version__

DEFAULT_VALID_URL = "https://valid.rpki.isbgpsafeyet.com"
DEFAULT_INVALID_URL = "https://invalid.rpki.isbgpsafeyet.com"
DEFAULT_ALPHABET = "1234567890abcdef"
DEFAULT_TIMEOUT = 3
DEFAULT_USER_AGENT = f"rovcheck/{__version__}"
IDENTIFIER_LENGTH = 10

T = TypeVar("T")


def _parse_bool(raw: str) -> bool:
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env(name: str, default: T, convert: Callable[[str], T]) -> T:
    """Read ``name`` through ``convert``; unset or unparseable values give ``default``."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return convert(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class ProbeSettings:
    """Everything a single check needs; immutable once built."""

    valid_url: str = DEFAULT_VALID_URL
    invalid_url: str = DEFAULT_INVALID_URL
    alphabet: str = DEFAULT_ALPHABET
    timeout: int = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    verify_ssl: bool = True
    max_body_bytes: int = 64 * 1024

    @classmethod
    def from_env(cls) -> "ProbeSettings":
        """Create settings from environment variables (evaluated at call time)."""
        max_body_bytes = _env("ROVCHECK_HTTP_MAX_BODY_BYTES", cls.max_body_bytes, int)
        if max_body_bytes <= 0:
            max_body_bytes = cls.max_body_bytes
        return cls(
            valid_url=os.getenv("ROVCHECK_VALID_URL", cls.valid_url),
            invalid_url=os.getenv("ROVCHECK_INVALID_URL", cls.invalid_url),
            alphabet=os.getenv("ROVCHECK_ALPHABET", cls.alphabet),
            timeout=_env("ROVCHECK_TIMEOUT", cls.timeout, int),
            user_agent=os.getenv("ROVCHECK_USER_AGENT", cls.user_agent),
            allow_redirects=_env("ROVCHECK_HTTP_REDIRECTS", cls.allow_redirects, _parse_bool),
            verify_ssl=_env("ROVCHECK_HTTP_VERIFY_SSL", cls.verify_ssl, _parse_bool),
            max_body_bytes=max_body_bytes,
        )

    def with_overrides(self, **overrides) -> "ProbeSettings":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def validate(self) -> "ProbeSettings":
        """Raise ConfigurationError for settings no probe could run with."""
        from .http.url import parse_base_url

        parse_base_url(self.valid_url)
        parse_base_url(self.invalid_url)
        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be a positive number of seconds, got {self.timeout}")
        return self


def load_probe_settings() -> ProbeSettings:
    """Load probe settings from environment with sensible defaults."""
    return ProbeSettings.from_env()

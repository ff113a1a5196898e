# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""rovcheck CLI."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from ..config import ProbeSettings, load_probe_settings
from ..errors import ConfigurationError
from ..http import create_default_http_client
from ..log import level_from_verbosity, setup_logging
from ..runtime import RovCheck
from ..version import __version__

EXIT_OK = 0
EXIT_NOK = 1
EXIT_USAGE = 2


def build_parser(defaults: ProbeSettings | None = None) -> argparse.ArgumentParser:
    defaults = defaults or ProbeSettings()
    parser = argparse.ArgumentParser(
        prog="rovcheck",
        description="Check whether the network path enforces RPKI route origin validation",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--valid-url",
        default=defaults.valid_url,
        help="The URL to use for valid requests (default: %(default)s)",
    )
    parser.add_argument(
        "--invalid-url",
        default=defaults.invalid_url,
        help="The URL to use for invalid requests (default: %(default)s)",
    )
    parser.add_argument(
        "--alphabet",
        default=defaults.alphabet,
        help="Alphabet to use for generating the ID (default: %(default)s)",
    )
    parser.add_argument(
        "-t",
        "--timeout",
        type=int,
        default=defaults.timeout,
        help="Requests timeout in seconds (default: %(default)s)",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase logging verbosity")
    parser.add_argument("-q", "--quiet", action="count", default=0, help="Decrease logging verbosity")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print a JSON report of both probes and the verdict",
    )
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for lab/self-signed endpoints)",
    )
    parser.add_argument(
        "--fail-on-nok",
        action="store_true",
        help="Exit with status 1 when the verdict is NOK",
    )
    return parser


def _print_json(data: dict[str, Any] | Any) -> None:
    payload = data.to_dict() if hasattr(data, "to_dict") else data
    json.dump(payload, sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write("\n")


def main(argv: list[str] | None = None) -> int:
    env_settings = load_probe_settings()
    parser = build_parser(env_settings)
    args = parser.parse_args(argv)
    setup_logging(level_from_verbosity(args.verbose, args.quiet))

    settings = env_settings.with_overrides(
        valid_url=args.valid_url,
        invalid_url=args.invalid_url,
        alphabet=args.alphabet,
        timeout=args.timeout,
        verify_ssl=False if args.ignore_ssl_errors else None,
    )
    try:
        settings.validate()
    except ConfigurationError as exc:
        parser.error(str(exc))

    http_client = create_default_http_client(settings)
    with RovCheck(settings, http_client=http_client) as checker:
        report = checker.run()

    if args.json:
        _print_json(report)

    if args.fail_on_nok and not report.ok:
        return EXIT_NOK
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())

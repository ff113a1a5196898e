# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from rovcheck.errors import ConfigurationError
from rovcheck.http.url import parse_base_url, resolve_probe_url


@pytest.mark.parametrize(
    ("base", "identifier", "expected"),
    [
        ("https://valid.rpki.isbgpsafeyet.com", "0a1b2c3d4e", "https://valid.rpki.isbgpsafeyet.com/0a1b2c3d4e"),
        ("https://valid.rpki.isbgpsafeyet.com/", "0a1b2c3d4e", "https://valid.rpki.isbgpsafeyet.com/0a1b2c3d4e"),
        ("http://host:8080/api/", "abc", "http://host:8080/api/abc"),
        ("http://host/api", "abc", "http://host/abc"),
        ("http://host/api/v1?x=1", "abc", "http://host/api/abc"),
    ],
)
def test_resolve_probe_url_follows_relative_resolution(base, identifier, expected):
    assert resolve_probe_url(base, identifier) == expected


@pytest.mark.parametrize(
    ("base", "base_dir"),
    [
        ("https://host", "https://host/"),
        ("https://host/", "https://host/"),
        ("http://host/a/b/", "http://host/a/b/"),
        ("http://host:81/x/y", "http://host:81/x/"),
    ],
)
def test_resolved_url_strips_back_to_base_directory(base, base_dir):
    identifier = "feedc0ffee"
    resolved = resolve_probe_url(base, identifier)
    assert resolved.endswith(identifier)
    assert resolved[: -len(identifier)] == base_dir


def test_empty_identifier_resolves_to_base():
    assert resolve_probe_url("https://host/path/", "") == "https://host/path/"
    assert resolve_probe_url("https://host", "") == "https://host/"
    assert resolve_probe_url("https://host/path/#frag", "") == "https://host/path/"


@pytest.mark.parametrize("bad", ["", "not a url", "ftp://host/", "https://", "//host/path", "http://host:99999/"])
def test_parse_base_url_rejects_malformed(bad):
    with pytest.raises(ConfigurationError):
        parse_base_url(bad)


def test_parse_base_url_accepts_http_and_https():
    assert parse_base_url("http://example.com") == "http://example.com"
    assert parse_base_url(" https://example.com/x/ ") == "https://example.com/x/"

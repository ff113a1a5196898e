# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import random

import pytest

from rovcheck.config import DEFAULT_ALPHABET, IDENTIFIER_LENGTH
from rovcheck.probe.identifier import generate_identifier


@pytest.mark.parametrize("alphabet", [DEFAULT_ALPHABET, "a", "xyz", "aab", "éü€"])
def test_identifier_has_fixed_length_and_uses_alphabet(alphabet):
    for _ in range(50):
        identifier = generate_identifier(alphabet)
        assert len(identifier) == IDENTIFIER_LENGTH
        assert set(identifier) <= set(alphabet)


def test_empty_alphabet_yields_empty_identifier():
    assert generate_identifier("") == ""
    assert generate_identifier([]) == ""


def test_seeded_source_is_deterministic():
    first = generate_identifier(DEFAULT_ALPHABET, rng=random.Random(1234))
    second = generate_identifier(DEFAULT_ALPHABET, rng=random.Random(1234))
    assert first == second


def test_custom_size_and_injected_source():
    class FirstChoice(random.Random):
        def choice(self, seq):
            return seq[0]

    assert generate_identifier("zyx", size=4, rng=FirstChoice()) == "zzzz"
    assert generate_identifier("zyx", size=0) == ""


def test_draws_cover_whole_alphabet():
    rng = random.Random(7)
    seen = set()
    for _ in range(200):
        seen.update(generate_identifier("abcd", rng=rng))
    assert seen == set("abcd")

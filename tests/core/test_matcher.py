import itertools
import re

import pytest

from wildemit.core.matcher import ALL_EVENTS, is_glob, match, pattern_matches


@pytest.mark.parametrize(
    "event, pattern, expected",
    [
        ("testing", "test*", True),
        ("test", "test*", True),
        ("tes", "test*", False),
        ("", "", True),
        ("", "*", True),
        ("a", "", False),
        ("", "a", False),
        ("abc", "a*c", True),
        ("ac", "a*c", True),
        ("abd", "a*c", False),
        ("a.b.c", "a.*", True),
        ("a.b.c", "*.c", True),
        ("a.b.c", "*b*", True),
        ("a.b.c", "*x*", False),
        ("0x021f…400f:Tick", "0x021f…400f:*", True),
        ("0x021f…400f:Tick", "t*", False),
    ],
)
def test_glob_match(event, pattern, expected):
    assert match(event, pattern) is expected


def _reference(event: str, pattern: str) -> bool:
    regex = ".*".join(re.escape(part) for part in pattern.split("*"))
    return re.fullmatch(regex, event, re.DOTALL) is not None


def test_glob_match_agrees_with_star_substitution():
    names = ["".join(p) for n in range(4) for p in itertools.product("ab", repeat=n)]
    patterns = ["".join(p) for n in range(5) for p in itertools.product("ab*", repeat=n)]

    for pattern in patterns:
        for name in names:
            assert match(name, pattern) == _reference(name, pattern), (name, pattern)


def test_all_events_matches_everything():
    for name in ("", "a", "a.b.c", "newListener", "**"):
        assert pattern_matches(ALL_EVENTS, name)


def test_exact_pattern_only_matches_itself():
    assert pattern_matches("a.b", "a.b")
    assert not pattern_matches("a.b", "a.c")
    assert not pattern_matches("a.b", "a.bc")


def test_glob_pattern_goes_through_matcher():
    assert is_glob("a.*")
    assert not is_glob("a.b")
    assert pattern_matches("a.*", "a.c")
    assert not pattern_matches("a.*", "b.c")


def test_long_event_name_does_not_exhaust_the_stack():
    name = "a" * 5000

    assert match(name, "a*")
    assert match(name, "*a")
    assert match(name + "b", "a*a*b")
    assert not match(name, "*b")
    assert pattern_matches("evt.*", "evt." + "x" * 5000)

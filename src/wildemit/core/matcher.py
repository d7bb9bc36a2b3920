from __future__ import annotations

ALL_EVENTS = "**"
WILDCARD = "*"


def match(event: str, pattern: str) -> bool:
    """Return ``True`` if *event* is matched by the glob *pattern*.

    ``*`` stands for zero or more characters; every other character must match
    literally. Plain backtracking without memoization: fine for event names,
    exponential on long patterns with many ``*``. Recursion depth grows with
    the number of ``*`` only, never with the length of *event*.
    """
    while pattern:
        if pattern[0] == WILDCARD:
            rest = pattern[1:]
            return any(match(event[i:], rest) for i in range(len(event) + 1))
        if not event or event[0] != pattern[0]:
            return False
        event = event[1:]
        pattern = pattern[1:]

    return not event


def is_glob(pattern: str) -> bool:
    return WILDCARD in pattern


def pattern_matches(pattern: str, event: str) -> bool:
    """Registry rule: ``**`` always, then exact name, then glob expansion."""
    if pattern == ALL_EVENTS or pattern == event:
        return True
    return is_glob(pattern) and match(event, pattern)

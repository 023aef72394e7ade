"""
Literal-or-pattern member lists shared by OneOfRule and NoneOfRule.

A member written as a delimited regular expression ("/^ab+c$/i") is a
pattern; every other member, including a delimited one that does not
compile, is a literal compared with type-strict equality.
"""

import re
from enum import Enum
from re import Pattern
from typing import Any

_DELIMITED = re.compile(r"^/(?P<body>.*)/(?P<flags>[imsx]*)$", re.DOTALL)

_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
}


def compile_pattern(member: Any) -> Pattern | None:
    """Compile a delimited pattern member, or return None if it is a literal."""
    if not isinstance(member, str):
        return None
    match = _DELIMITED.match(member)
    if match is None:
        return None

    flags = 0
    for flag in match.group("flags"):
        flags |= _FLAGS[flag]

    try:
        return re.compile(match.group("body"), flags)
    except re.error:
        return None


def strict_equals(left: Any, right: Any) -> bool:
    """Equality that also requires identical types (1 != True != "1")."""
    return type(left) is type(right) and left == right


def searchable_text(value: Any) -> str | None:
    """String form a pattern is matched against; None for values patterns never match."""
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


class MemberList:
    """
    Ordered members split into literals and compiled patterns.

    Args:
        members: Configured members, in order
    """

    def __init__(self, members: list | tuple):
        self.members = list(members)
        self.entries: list[tuple[Any, Pattern | None]] = [
            (member, compile_pattern(member)) for member in self.members
        ]

    def find_match(self, value: Any) -> tuple[Any, bool] | None:
        """
        First member the value equals or matches.

        Returns:
            (member, is_pattern) or None when nothing matches
        """
        text = searchable_text(value)
        for member, pattern in self.entries:
            if pattern is not None:
                if text is not None and pattern.search(text):
                    return member, True
            elif strict_equals(value, member):
                return member, False
        return None

    @property
    def patterns(self) -> list[str]:
        return [member for member, pattern in self.entries if pattern is not None]

    @property
    def literals(self) -> list[Any]:
        return [member for member, pattern in self.entries if pattern is None]

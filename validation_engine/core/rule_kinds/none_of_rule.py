"""
NoneOfRule - validates that a value is none of a list of literals or patterns.
"""

from typing import Any

from ..errors import InvalidRuleConfiguration
from ._patterns import MemberList
from .base_rule import BaseRule, ParamSpec, ValidationOutcome


class NoneOfRule(BaseRule):
    """
    Fails on the first literal member the value equals or pattern member it matches.

    Parameters:
    - disallowedValues: Non-empty list of literals and "/regex/flags" patterns
    """

    kind = "NoneOf"
    PARAMETERS = (ParamSpec("disallowedValues", "disallowed_values"),)

    def __init__(self, disallowed_values: list | tuple):
        if isinstance(disallowed_values, (str, bytes)) or not isinstance(disallowed_values, (list, tuple)):
            raise InvalidRuleConfiguration(self.kind, "disallowedValues must be a list")
        if not disallowed_values:
            raise InvalidRuleConfiguration(self.kind, "The disallowed values array cannot be empty.")

        self.disallowed = MemberList(disallowed_values)

    def validate(self, attribute: str, value: Any) -> ValidationOutcome:
        match = self.disallowed.find_match(value)
        if match is None:
            return ValidationOutcome.ok()

        member, is_pattern = match
        if is_pattern:
            return ValidationOutcome.fail(f"The {attribute} must not match the disallowed pattern: {member}.")
        return ValidationOutcome.fail(f"The {attribute} must not be one of the disallowed values: {member!r}.")

    def snapshot(self) -> dict[str, Any]:
        return {"disallowedValues": list(self.disallowed.members)}

"""
OneOfRule - validates that a value is one of a list of literals or patterns.
"""

from typing import Any

from ..errors import InvalidRuleConfiguration
from ._patterns import MemberList
from .base_rule import BaseRule, ParamSpec, ValidationOutcome


class OneOfRule(BaseRule):
    """
    Passes when the value equals a literal member or matches a pattern member.

    Parameters:
    - allowedValues: Non-empty list of literals and "/regex/flags" patterns
    """

    kind = "OneOf"
    PARAMETERS = (ParamSpec("allowedValues", "allowed_values"),)

    def __init__(self, allowed_values: list | tuple):
        if isinstance(allowed_values, (str, bytes)) or not isinstance(allowed_values, (list, tuple)):
            raise InvalidRuleConfiguration(self.kind, "allowedValues must be a list")
        if not allowed_values:
            raise InvalidRuleConfiguration(self.kind, "The allowed values array cannot be empty.")

        self.allowed = MemberList(allowed_values)

    def validate(self, attribute: str, value: Any) -> ValidationOutcome:
        if self.allowed.find_match(value) is not None:
            return ValidationOutcome.ok()

        listing = ", ".join(str(member) for member in self.allowed.members)
        return ValidationOutcome.fail(f"The {attribute} must be one of the allowed values: {listing}.")

    def snapshot(self) -> dict[str, Any]:
        return {"allowedValues": list(self.allowed.members)}

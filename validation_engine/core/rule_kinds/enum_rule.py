"""
EnumRule - validates that a value resolves to a member of an enum class.
"""

from enum import Enum
from typing import Any

from ..errors import InvalidRuleConfiguration
from ..models.enums import ActiveStatus, DayOfWeek, TimeOfDay
from .base_rule import BaseRule, ParamSpec, ValidationOutcome

# Enum classes a stored rule may name in its "enumClass" parameter
_ENUM_REGISTRY: dict[str, type[Enum]] = {
    "ActiveStatus": ActiveStatus,
    "DayOfWeek": DayOfWeek,
    "TimeOfDay": TimeOfDay,
}


def register_enum(enum_class: type[Enum], name: str | None = None) -> None:
    """
    Make an enum class available to stored Enum rules.

    Args:
        enum_class: The Enum subclass
        name: Registry key; defaults to the class name
    """
    if not (isinstance(enum_class, type) and issubclass(enum_class, Enum)):
        raise TypeError(f"{enum_class!r} is not an Enum class")
    _ENUM_REGISTRY[name or enum_class.__name__] = enum_class


def registered_enums() -> dict[str, type[Enum]]:
    return dict(_ENUM_REGISTRY)


def _enum_name(enum_class: type[Enum]) -> str:
    for name, registered in _ENUM_REGISTRY.items():
        if registered is enum_class:
            return name
    return enum_class.__name__


def resolve_enum_class(reference: Any) -> type[Enum]:
    """
    Resolve an enum class from a class object or a registered name.

    Namespaced names ("App\\Enums\\DayOfWeek", "pkg.enums.DayOfWeek") resolve
    by their last segment.

    Raises:
        InvalidRuleConfiguration: If the reference is not a known enum
    """
    if isinstance(reference, type) and issubclass(reference, Enum):
        return reference

    if isinstance(reference, str) and reference.strip():
        name = reference.strip()
        if name in _ENUM_REGISTRY:
            return _ENUM_REGISTRY[name]
        short_name = name.replace("\\", ".").rsplit(".", 1)[-1]
        if short_name in _ENUM_REGISTRY:
            return _ENUM_REGISTRY[short_name]

    raise InvalidRuleConfiguration(EnumRule.kind, f"The class {reference} is not a valid enum.")


class EnumRule(BaseRule):
    """
    Validates that a value is a member of ``enum_class``.

    A value resolves to a member by exact value first, then by member name
    ignoring case. When ``allowed_values`` is given the resolved member must
    also be one of them.

    Parameters:
    - enumClass: Registered enum class name (or the class itself)
    - allowedValues: Optional subset of members, by value or name
    """

    kind = "Enum"
    PARAMETERS = (
        ParamSpec("enumClass", "enum_class"),
        ParamSpec("allowedValues", "allowed_values", default=()),
    )

    def __init__(self, enum_class: type[Enum] | str, allowed_values: list | tuple | None = ()):
        self.enum_class = resolve_enum_class(enum_class)
        self.enum_name = _enum_name(self.enum_class)

        if allowed_values is None:
            allowed_values = ()
        if isinstance(allowed_values, (str, bytes)) or not isinstance(allowed_values, (list, tuple, set)):
            raise InvalidRuleConfiguration(self.kind, "allowedValues must be a list")

        allowed: list[Enum] = []
        invalid: list[str] = []
        for candidate in allowed_values:
            member = self.resolve_member(candidate)
            if member is None:
                invalid.append(str(candidate))
            elif member not in allowed:
                allowed.append(member)

        if invalid:
            raise InvalidRuleConfiguration(
                self.kind,
                f"At least one of [{', '.join(invalid)}] is not a valid instance of {self.enum_name}.",
            )

        self.allowed_values: tuple[Enum, ...] = tuple(allowed)

    def resolve_member(self, value: Any) -> Enum | None:
        """
        Convert a value to a member of the enum, or None if it does not resolve.

        Args:
            value: A member, a member value, or a member name (any case)
        """
        if isinstance(value, self.enum_class):
            return value
        if isinstance(value, Enum):
            return None

        try:
            return self.enum_class(value)
        except (ValueError, TypeError):
            pass

        if isinstance(value, str):
            needle = value.strip().casefold()
            for name, member in self.enum_class.__members__.items():
                if name.casefold() == needle:
                    return member
        return None

    def validate(self, attribute: str, value: Any) -> ValidationOutcome:
        member = self.resolve_member(value)

        if member is None:
            return ValidationOutcome.fail(f"The {attribute} is not a valid instance of {self.enum_name}.")

        if self.allowed_values and member not in self.allowed_values:
            return ValidationOutcome.fail(f"The {attribute} must be one of the allowed values.")

        return ValidationOutcome.ok()

    def snapshot(self) -> dict[str, Any]:
        return {
            "enumClass": self.enum_name,
            "allowedValues": [member.value for member in self.allowed_values],
        }

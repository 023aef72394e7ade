"""
Rule kind registry.

Maps a stored rule-kind identifier to the rule class that builds it. The set
of kinds is closed: it is fixed when the registry is created.
"""

from ..errors import UnknownRuleKind
from ..rule_kinds import (
    BaseRule,
    DayOfWeekRule,
    DaysOfWeekRule,
    DayTimeRule,
    EnumRule,
    NoneOfRule,
    OneOfRule,
    TimeOfDayRule,
    TimesOfDayRule,
)

BUILTIN_RULE_KINDS: tuple[type[BaseRule], ...] = (
    EnumRule,
    OneOfRule,
    NoneOfRule,
    DayOfWeekRule,
    DaysOfWeekRule,
    TimeOfDayRule,
    TimesOfDayRule,
    DayTimeRule,
)


class RuleKindRegistry:
    """
    Resolves rule-kind identifiers.

    A kind resolves by its short name ("Enum"), by its class name
    ("EnumRule"), or by a namespaced class name whose last segment is one of
    those ("App\\Rules\\EnumRule", "rules.EnumRule").

    Args:
        kinds: Rule classes to register; defaults to the built-in kinds
    """

    def __init__(self, kinds: tuple[type[BaseRule], ...] | None = None):
        self._kinds: dict[str, type[BaseRule]] = {}
        for rule_class in kinds or BUILTIN_RULE_KINDS:
            if rule_class.kind in self._kinds:
                raise ValueError(f"Duplicate rule kind: {rule_class.kind}")
            self._kinds[rule_class.kind] = rule_class

    def resolve(self, kind: str) -> type[BaseRule]:
        """
        Find the rule class for a kind identifier.

        Raises:
            UnknownRuleKind: If the identifier does not resolve
        """
        if isinstance(kind, str):
            name = kind.strip().replace("\\", ".").rsplit(".", 1)[-1]
            if name in self._kinds:
                return self._kinds[name]
            if name.endswith("Rule") and name[: -len("Rule")] in self._kinds:
                return self._kinds[name[: -len("Rule")]]
        raise UnknownRuleKind(str(kind))

    def kinds(self) -> list[str]:
        return list(self._kinds)

    def __contains__(self, kind: str) -> bool:
        try:
            self.resolve(kind)
        except UnknownRuleKind:
            return False
        return True

    def __len__(self) -> int:
        return len(self._kinds)


_default_registry = RuleKindRegistry()


def get_default_registry() -> RuleKindRegistry:
    return _default_registry

"""
Rule store interface and in-memory implementation.

The engine reads rules and validators through the RuleStore protocol:
validator lookup by id-or-name, the ordered active rules of a validator,
and single rule lookup. The write side is used by the YAML loader and the
admin CLI.
"""

import threading
from typing import Protocol, runtime_checkable

from ..core.models import ActiveStatus, RuleDefinition, ValidatorDefinition, ValidatorRule


@runtime_checkable
class RuleStore(Protocol):
    """Storage collaborator consumed by the validation engine."""

    def get_validator(self, id_or_name: str, active_only: bool = True) -> ValidatorDefinition | None:
        """Validator whose id (preferred) or name matches, or None."""
        ...

    def get_active_rules_for_validator(self, validator_id: str) -> list[tuple[RuleDefinition, int]]:
        """Rules with an active association, ordered by association order_number."""
        ...

    def get_rule(self, rule_id: str) -> RuleDefinition | None:
        ...

    def list_validators(self, active_only: bool = False) -> list[ValidatorDefinition]:
        ...


def pick_validator(
    candidates: list[ValidatorDefinition], id_or_name: str, active_only: bool
) -> ValidatorDefinition | None:
    """
    Choose the validator a reference points at.

    An id match beats a name match; ties go to the lowest order_number.
    """
    if active_only:
        candidates = [v for v in candidates if v.active_status is ActiveStatus.ACTIVE]
    matches = [v for v in candidates if v.validator_id == id_or_name or v.name == id_or_name]
    if not matches:
        return None
    matches.sort(key=lambda v: (v.validator_id != id_or_name, v.order_number, v.name))
    return matches[0]


class InMemoryRuleStore:
    """
    Dictionary-backed rule store.

    Mutations are serialized with a lock; reads return copies so callers
    never share mutable state with the store.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._rules: dict[str, RuleDefinition] = {}
        self._validators: dict[str, ValidatorDefinition] = {}
        self._associations: dict[tuple[str, str], ValidatorRule] = {}

    # -----------------------
    # Read side
    # -----------------------

    def get_validator(self, id_or_name: str, active_only: bool = True) -> ValidatorDefinition | None:
        with self._lock:
            validator = pick_validator(list(self._validators.values()), id_or_name, active_only)
            return validator.model_copy() if validator else None

    def get_active_rules_for_validator(self, validator_id: str) -> list[tuple[RuleDefinition, int]]:
        with self._lock:
            associations = [
                a
                for a in self._associations.values()
                if a.validator_id == validator_id and a.active_status is ActiveStatus.ACTIVE
            ]
            associations.sort(key=lambda a: (a.order_number, a.rule_id))
            return [
                (self._rules[a.rule_id].model_copy(deep=True), a.order_number)
                for a in associations
                if a.rule_id in self._rules
            ]

    def get_rule(self, rule_id: str) -> RuleDefinition | None:
        with self._lock:
            rule = self._rules.get(rule_id)
            return rule.model_copy(deep=True) if rule else None

    def list_validators(self, active_only: bool = False) -> list[ValidatorDefinition]:
        with self._lock:
            validators = [
                v.model_copy()
                for v in self._validators.values()
                if not active_only or v.active_status is ActiveStatus.ACTIVE
            ]
        return sorted(validators, key=lambda v: (v.order_number, v.name))

    def list_rules(self) -> list[RuleDefinition]:
        with self._lock:
            return [rule.model_copy(deep=True) for rule in self._rules.values()]

    def get_associations(self, validator_id: str) -> list[ValidatorRule]:
        """All associations of a validator, active or not, in order."""
        with self._lock:
            associations = [a.model_copy() for a in self._associations.values() if a.validator_id == validator_id]
        return sorted(associations, key=lambda a: (a.order_number, a.rule_id))

    # -----------------------
    # Write side
    # -----------------------

    def save_rule(self, rule: RuleDefinition) -> RuleDefinition:
        with self._lock:
            self._rules[rule.rule_id] = rule.model_copy(deep=True)
        return rule

    def save_validator(self, validator: ValidatorDefinition) -> ValidatorDefinition:
        with self._lock:
            for existing in self._validators.values():
                if existing.name == validator.name and existing.validator_id != validator.validator_id:
                    raise ValueError(f"Validator name '{validator.name}' is already in use")
            self._validators[validator.validator_id] = validator.model_copy()
        return validator

    def attach_rule(self, association: ValidatorRule) -> ValidatorRule:
        """
        Associate a rule with a validator, replacing an existing association
        for the same pair.

        Raises:
            KeyError: If the validator or the rule does not exist
            ValueError: If the order_number is already used in the validator
        """
        with self._lock:
            if association.validator_id not in self._validators:
                raise KeyError(f"Validator not found: {association.validator_id}")
            if association.rule_id not in self._rules:
                raise KeyError(f"Rule not found: {association.rule_id}")
            for key, existing in self._associations.items():
                if (
                    key != association.key
                    and existing.validator_id == association.validator_id
                    and existing.order_number == association.order_number
                ):
                    raise ValueError(
                        f"order_number {association.order_number} is already used in validator "
                        f"{association.validator_id}"
                    )
            self._associations[association.key] = association.model_copy()
        return association

    def detach_rule(self, validator_id: str, rule_id: str) -> bool:
        with self._lock:
            return self._associations.pop((validator_id, rule_id), None) is not None

    def delete_rule(self, rule_id: str) -> bool:
        """Delete a rule and, by cascade, its associations."""
        with self._lock:
            self._drop_associations(lambda a: a.rule_id == rule_id)
            return self._rules.pop(rule_id, None) is not None

    def delete_validator(self, validator_id: str) -> bool:
        """Delete a validator and, by cascade, its associations."""
        with self._lock:
            self._drop_associations(lambda a: a.validator_id == validator_id)
            return self._validators.pop(validator_id, None) is not None

    def _drop_associations(self, predicate) -> None:
        for key in [key for key, a in self._associations.items() if predicate(a)]:
            del self._associations[key]

"""
Unit tests for the in-memory rule store.
"""

import pytest

from validation_engine.core.models import ActiveStatus, RuleDefinition, ValidatorDefinition, ValidatorRule
from validation_engine.storage import InMemoryRuleStore, RuleStore
from validation_engine.storage.rule_store import pick_validator


@pytest.fixture
def store() -> InMemoryRuleStore:
    store = InMemoryRuleStore()
    store.save_validator(ValidatorDefinition(validator_id="v1", name="First"))
    for rule_id, attribute in (("r1", "a"), ("r2", "b"), ("r3", "c")):
        store.save_rule(RuleDefinition(rule_id=rule_id, attribute=attribute, kind="OneOf",
                                       parameters={"allowedValues": [attribute]}))
    return store


@pytest.mark.unit
class TestInMemoryRuleStore:
    """Tests for InMemoryRuleStore"""

    def test_satisfies_protocol(self, store):
        assert isinstance(store, RuleStore)

    def test_rules_ordered_by_association(self, store):
        store.attach_rule(ValidatorRule(validator_id="v1", rule_id="r1", order_number=3))
        store.attach_rule(ValidatorRule(validator_id="v1", rule_id="r2", order_number=1))
        store.attach_rule(ValidatorRule(validator_id="v1", rule_id="r3", order_number=2))

        rules = store.get_active_rules_for_validator("v1")

        assert [(rule.rule_id, order) for rule, order in rules] == [("r2", 1), ("r3", 2), ("r1", 3)]

    def test_inactive_association_excluded(self, store):
        store.attach_rule(ValidatorRule(validator_id="v1", rule_id="r1", order_number=1))
        store.attach_rule(
            ValidatorRule(validator_id="v1", rule_id="r2", order_number=2, active_status=ActiveStatus.INACTIVE)
        )

        assert [rule.rule_id for rule, _ in store.get_active_rules_for_validator("v1")] == ["r1"]
        assert len(store.get_associations("v1")) == 2

    def test_duplicate_order_number_rejected(self, store):
        store.attach_rule(ValidatorRule(validator_id="v1", rule_id="r1", order_number=1))

        with pytest.raises(ValueError):
            store.attach_rule(ValidatorRule(validator_id="v1", rule_id="r2", order_number=1))

    def test_reattach_same_pair_replaces(self, store):
        store.attach_rule(ValidatorRule(validator_id="v1", rule_id="r1", order_number=1))
        store.attach_rule(ValidatorRule(validator_id="v1", rule_id="r1", order_number=5))

        assert [a.order_number for a in store.get_associations("v1")] == [5]

    def test_attach_requires_existing_rows(self, store):
        with pytest.raises(KeyError):
            store.attach_rule(ValidatorRule(validator_id="nope", rule_id="r1"))
        with pytest.raises(KeyError):
            store.attach_rule(ValidatorRule(validator_id="v1", rule_id="nope"))

    def test_duplicate_validator_name_rejected(self, store):
        with pytest.raises(ValueError):
            store.save_validator(ValidatorDefinition(validator_id="v2", name="First"))

    def test_delete_rule_cascades(self, store):
        store.attach_rule(ValidatorRule(validator_id="v1", rule_id="r1", order_number=1))

        assert store.delete_rule("r1") is True

        assert store.get_rule("r1") is None
        assert store.get_associations("v1") == []
        assert store.delete_rule("r1") is False

    def test_delete_validator_cascades(self, store):
        store.attach_rule(ValidatorRule(validator_id="v1", rule_id="r1", order_number=1))

        assert store.delete_validator("v1") is True

        assert store.get_validator("v1") is None
        assert store.get_associations("v1") == []
        assert store.get_rule("r1") is not None

    def test_detach_rule(self, store):
        store.attach_rule(ValidatorRule(validator_id="v1", rule_id="r1", order_number=1))

        assert store.detach_rule("v1", "r1") is True
        assert store.detach_rule("v1", "r1") is False

    def test_reads_return_copies(self, store):
        rule = store.get_rule("r1")
        rule.parameters["allowedValues"].append("mutated")

        assert store.get_rule("r1").parameters == {"allowedValues": ["a"]}

    def test_get_validator_respects_active_only(self, store):
        store.save_validator(ValidatorDefinition(validator_id="v2", name="Old", active_status=ActiveStatus.INACTIVE))

        assert store.get_validator("Old") is None
        assert store.get_validator("Old", active_only=False).validator_id == "v2"
        assert [v.name for v in store.list_validators(active_only=True)] == ["First"]


@pytest.mark.unit
class TestPickValidator:
    """Tests for validator reference resolution"""

    def test_lowest_order_number_wins(self):
        candidates = [
            ValidatorDefinition(validator_id="a", name="Shared", order_number=5),
            ValidatorDefinition(validator_id="b", name="Shared", order_number=1),
        ]
        assert pick_validator(candidates, "Shared", active_only=True).validator_id == "b"

    def test_id_beats_name(self):
        candidates = [
            ValidatorDefinition(validator_id="x", name="ref", order_number=0),
            ValidatorDefinition(validator_id="ref", name="Other", order_number=9),
        ]
        assert pick_validator(candidates, "ref", active_only=True).validator_id == "ref"

    def test_no_match(self):
        assert pick_validator([], "ref", active_only=False) is None

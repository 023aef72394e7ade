"""
Integration tests for the PostgreSQL rule store

Requires Docker for the PostgreSQL testcontainer.
"""
import os

import psycopg
import pytest

from validation_engine.core.models import ActiveStatus, RuleDefinition, ValidatorDefinition, ValidatorRule
from validation_engine.core.rules import RuleConfigLoader, ValidatorService
from validation_engine.storage import RuleStore
from validation_engine.storage.connection import DatabaseConnectionPool
from validation_engine.storage.postgres_store import PostgresRuleStore
from validation_engine.storage.schema import create_schema, drop_schema


@pytest.fixture
def pool(postgres_container):
    pool = DatabaseConnectionPool(
        host=postgres_container.get_container_host_ip(),
        port=int(postgres_container.get_exposed_port(5432)),
        database="test_validation_engine",
        user="test_validation",
        password="test_password",
        min_size=1,
        max_size=3,
    )
    pool.open()
    drop_schema(pool)
    create_schema(pool)
    yield pool
    pool.close()


@pytest.fixture
def store(pool) -> PostgresRuleStore:
    store = PostgresRuleStore(pool)
    store.save_rule(
        RuleDefinition(
            rule_id="state-enum",
            attribute="active_status",
            kind="Enum",
            parameters={"enumClass": "ActiveStatus", "allowedValues": ["Active"]},
        )
    )
    store.save_validator(ValidatorDefinition(validator_id="v-state", name="StateValidator"))
    store.attach_rule(ValidatorRule(validator_id="v-state", rule_id="state-enum", order_number=1))
    return store


@pytest.mark.integration
def test_satisfies_protocol(store):
    assert isinstance(store, RuleStore)


@pytest.mark.integration
def test_parameters_round_trip_as_jsonb(store):
    rule = store.get_rule("state-enum")

    assert rule.kind == "Enum"
    assert rule.parameters == {"enumClass": "ActiveStatus", "allowedValues": ["Active"]}


@pytest.mark.integration
def test_state_validator_runs_against_database(store):
    service = ValidatorService(store)

    assert service.run_validator("StateValidator", {"active_status": "Active"}).success is True
    assert service.run_validator("StateValidator", {"active_status": "Banana"}).success is False
    assert service.run_validator("Missing", {"active_status": "Active"}).success is False


@pytest.mark.integration
def test_inactive_validator_not_resolved(store):
    validator = store.get_validator("v-state")
    store.save_validator(validator.model_copy(update={"active_status": ActiveStatus.INACTIVE}))

    assert store.get_validator("StateValidator") is None
    assert store.get_validator("StateValidator", active_only=False).validator_id == "v-state"


@pytest.mark.integration
def test_id_match_preferred(store):
    store.save_validator(ValidatorDefinition(validator_id="v-other", name="v-state", order_number=-5))

    assert store.get_validator("v-state").validator_id == "v-state"


@pytest.mark.integration
def test_rule_order_and_inactive_associations(store):
    store.save_rule(RuleDefinition(rule_id="first", attribute="a", kind="OneOf", parameters={"allowedValues": [1]}))
    store.save_rule(RuleDefinition(rule_id="hidden", attribute="b", kind="OneOf", parameters={"allowedValues": [2]}))
    store.attach_rule(ValidatorRule(validator_id="v-state", rule_id="first", order_number=0))
    store.attach_rule(
        ValidatorRule(validator_id="v-state", rule_id="hidden", order_number=2, active_status=ActiveStatus.INACTIVE)
    )

    rules = store.get_active_rules_for_validator("v-state")

    assert [(rule.rule_id, order) for rule, order in rules] == [("first", 0), ("state-enum", 1)]
    assert len(store.get_associations("v-state")) == 3


@pytest.mark.integration
def test_duplicate_order_number_rejected(store):
    store.save_rule(RuleDefinition(rule_id="other", attribute="a", kind="OneOf", parameters={"allowedValues": [1]}))

    with pytest.raises(psycopg.errors.UniqueViolation):
        store.attach_rule(ValidatorRule(validator_id="v-state", rule_id="other", order_number=1))


@pytest.mark.integration
def test_delete_cascades(store):
    assert store.delete_rule("state-enum") is True
    assert store.get_active_rules_for_validator("v-state") == []
    assert store.get_associations("v-state") == []

    assert store.delete_validator("v-state") is True
    assert store.list_validators() == []


@pytest.mark.integration
def test_detach_rule(store):
    assert store.detach_rule("v-state", "state-enum") is True
    assert store.detach_rule("v-state", "state-enum") is False


@pytest.mark.integration
def test_import_yaml_config(pool, test_data_dir):
    source = RuleConfigLoader(os.path.join(test_data_dir, "validators.yaml")).load_store()
    target = PostgresRuleStore(pool)
    for rule in source.list_rules():
        target.save_rule(rule)
    for validator in source.list_validators():
        target.save_validator(validator)
        for association in source.get_associations(validator.validator_id):
            target.attach_rule(association)

    service = ValidatorService(target)

    assert service.run_validator("BusinessHours", {"requested_at": "2024-10-14T13:00:00Z"}).success
    assert len(service.check_validator("BrokenValidator")) == 2

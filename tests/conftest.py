"""
Pytest configuration and fixtures for validation-engine tests

This module provides shared fixtures for unit and integration tests.
"""
import os
from datetime import datetime, timezone
from typing import Generator

import pytest

from validation_engine.config import reset_settings
from validation_engine.core.models import RuleDefinition, ValidatorDefinition, ValidatorRule
from validation_engine.core.rule_kinds import _temporal
from validation_engine.observability.logger import DEFAULT_LOGGER_NAME, setup_logger
from validation_engine.storage import InMemoryRuleStore


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external services"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that require Docker containers"
    )


# =======================
# SETTINGS FIXTURES
# =======================

@pytest.fixture(autouse=True)
def clean_settings(monkeypatch) -> Generator[None, None, None]:
    """
    Isolate every test from the developer's environment and cached settings
    """
    for var in (
        "LOG_LEVEL",
        "LOG_FORMAT",
        "VALIDATION_FAIL_FAST",
        "DEFAULT_TIMEZONE",
        "METRICS_PORT",
        "DB_HOST",
        "DB_PORT",
        "DB_NAME",
        "DB_USER",
        "DB_PASSWORD",
    ):
        monkeypatch.delenv(var, raising=False)
    # Keep a stray .env in the working directory out of the tests
    monkeypatch.setattr("validation_engine.config.load_dotenv", lambda *args, **kwargs: False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture(autouse=True)
def package_logger() -> Generator[None, None, None]:
    """
    Reset the package logger after tests that reconfigure it (the CLI does)
    """
    yield
    setup_logger(DEFAULT_LOGGER_NAME, level="INFO", format_type="json")


# =======================
# CLOCK FIXTURES
# =======================

@pytest.fixture
def frozen_now(monkeypatch):
    """
    Freeze the clock used for empty date/time values

    Returns:
        Callable that sets the frozen UTC moment
    """
    state = {"moment": datetime(2024, 10, 14, 13, 0, tzinfo=timezone.utc)}

    def fake_now(tz):
        return state["moment"].astimezone(tz)

    monkeypatch.setattr(_temporal, "now", fake_now)

    def freeze(moment: datetime) -> None:
        state["moment"] = moment

    return freeze


# =======================
# STORE FIXTURES
# =======================

@pytest.fixture
def state_store() -> InMemoryRuleStore:
    """
    In-memory store holding "StateValidator": one Enum rule on active_status
    allowing only Active
    """
    store = InMemoryRuleStore()
    rule = store.save_rule(
        RuleDefinition(
            rule_id="state-enum",
            attribute="active_status",
            kind="Enum",
            parameters={"enumClass": "ActiveStatus", "allowedValues": ["Active"]},
        )
    )
    validator = store.save_validator(ValidatorDefinition(validator_id="v-state", name="StateValidator"))
    store.attach_rule(ValidatorRule(validator_id=validator.validator_id, rule_id=rule.rule_id, order_number=1))
    return store


@pytest.fixture(scope="session")
def test_data_dir() -> str:
    """
    Get path to test data fixtures directory

    Returns:
        Path to tests/fixtures directory
    """
    return os.path.join(os.path.dirname(__file__), "fixtures")


# =======================
# DATABASE FIXTURES (Testcontainers)
# =======================

@pytest.fixture(scope="session")
def postgres_container():
    """
    Start PostgreSQL container for integration tests

    Yields:
        PostgresContainer instance
    """
    from testcontainers.postgres import PostgresContainer

    with PostgresContainer(
        image="postgres:16.2-alpine",
        username="test_validation",
        password="test_password",
        dbname="test_validation_engine",
    ) as postgres:
        # Wait for container to be ready
        postgres.get_connection_url()
        yield postgres

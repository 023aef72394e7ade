"""
Database schema for the PostgreSQL rule store.

Rules, validators and their associations. Deleting a rule or a validator
cascades to its associations.
"""

from ..observability.logger import get_logger
from .connection import DatabaseConnectionPool

logger = get_logger(__name__)

TABLE_PREFIX = "ve_"
RULES_TABLE = f"{TABLE_PREFIX}rules"
VALIDATORS_TABLE = f"{TABLE_PREFIX}validators"
VALIDATOR_RULES_TABLE = f"{TABLE_PREFIX}validator_rules"

SCHEMA_DDL = f"""
CREATE TABLE IF NOT EXISTS {RULES_TABLE} (
    rule_id     TEXT PRIMARY KEY,
    attribute   TEXT NOT NULL CHECK (attribute <> ''),
    kind        TEXT NOT NULL CHECK (kind <> ''),
    parameters  JSONB NOT NULL DEFAULT '{{}}'::jsonb,
    created_at  TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at  TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

CREATE TABLE IF NOT EXISTS {VALIDATORS_TABLE} (
    validator_id  TEXT PRIMARY KEY,
    name          TEXT NOT NULL UNIQUE,
    description   TEXT,
    context       TEXT,
    active_status TEXT NOT NULL DEFAULT 'Active' CHECK (active_status IN ('Active', 'Inactive')),
    order_number  INTEGER NOT NULL DEFAULT 0,
    created_at    TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at    TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

CREATE TABLE IF NOT EXISTS {VALIDATOR_RULES_TABLE} (
    validator_id  TEXT NOT NULL REFERENCES {VALIDATORS_TABLE} (validator_id) ON DELETE CASCADE,
    rule_id       TEXT NOT NULL REFERENCES {RULES_TABLE} (rule_id) ON DELETE CASCADE,
    order_number  INTEGER NOT NULL DEFAULT 0,
    active_status TEXT NOT NULL DEFAULT 'Active' CHECK (active_status IN ('Active', 'Inactive')),
    created_at    TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    PRIMARY KEY (validator_id, rule_id),
    UNIQUE (validator_id, order_number)
);

CREATE INDEX IF NOT EXISTS idx_{VALIDATOR_RULES_TABLE}_rule ON {VALIDATOR_RULES_TABLE} (rule_id);
"""

DROP_DDL = f"""
DROP TABLE IF EXISTS {VALIDATOR_RULES_TABLE};
DROP TABLE IF EXISTS {VALIDATORS_TABLE};
DROP TABLE IF EXISTS {RULES_TABLE};
"""


def create_schema(pool: DatabaseConnectionPool) -> None:
    """Create the rule store tables if they do not exist."""
    with pool.get_connection() as conn:
        conn.execute(SCHEMA_DDL)
        conn.commit()
    logger.info("Rule store schema is in place", extra={"tables": [RULES_TABLE, VALIDATORS_TABLE, VALIDATOR_RULES_TABLE]})


def drop_schema(pool: DatabaseConnectionPool) -> None:
    """Drop the rule store tables."""
    with pool.get_connection() as conn:
        conn.execute(DROP_DDL)
        conn.commit()
    logger.info("Rule store schema dropped")

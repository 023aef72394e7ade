"""
PostgreSQL rule store.

Implements the RuleStore protocol on top of DatabaseConnectionPool. No
retries are attempted here: database errors propagate to the caller.
"""

from typing import Any

from psycopg.types.json import Jsonb

from ..core.models import ActiveStatus, RuleDefinition, ValidatorDefinition, ValidatorRule
from ..observability.logger import get_logger
from .connection import DatabaseConnectionPool
from .schema import RULES_TABLE, VALIDATOR_RULES_TABLE, VALIDATORS_TABLE

logger = get_logger(__name__)

_VALIDATOR_COLUMNS = "validator_id, name, description, context, active_status, order_number, created_at, updated_at"
_RULE_COLUMNS = "rule_id, attribute, kind, parameters, created_at, updated_at"


class PostgresRuleStore:
    """
    Rule store backed by the ve_rules / ve_validators / ve_validator_rules tables.

    Args:
        pool: An open database connection pool
    """

    def __init__(self, pool: DatabaseConnectionPool):
        self.pool = pool

    # -----------------------
    # Read side
    # -----------------------

    def get_validator(self, id_or_name: str, active_only: bool = True) -> ValidatorDefinition | None:
        """
        Look up a validator by id or name; an id match is preferred.

        Args:
            id_or_name: Validator id or unique name
            active_only: Only consider validators whose status is Active

        Returns:
            The validator, or None if nothing matches
        """
        query = f"""
            SELECT {_VALIDATOR_COLUMNS}
            FROM {VALIDATORS_TABLE}
            WHERE (validator_id = %(ref)s OR name = %(ref)s)
              AND (NOT %(active_only)s OR active_status = %(active)s)
            ORDER BY (validator_id = %(ref)s) DESC, order_number ASC
            LIMIT 1
        """
        rows = self.pool.execute_query(
            query,
            {"ref": id_or_name, "active_only": active_only, "active": ActiveStatus.ACTIVE.value},
        )
        return ValidatorDefinition(**rows[0]) if rows else None

    def get_active_rules_for_validator(self, validator_id: str) -> list[tuple[RuleDefinition, int]]:
        """
        Rules of a validator whose association is Active, in evaluation order.

        Returns:
            List of (RuleDefinition, order_number)
        """
        query = f"""
            SELECT r.rule_id, r.attribute, r.kind, r.parameters, r.created_at, r.updated_at,
                   vr.order_number
            FROM {VALIDATOR_RULES_TABLE} vr
            JOIN {RULES_TABLE} r ON r.rule_id = vr.rule_id
            WHERE vr.validator_id = %(validator_id)s
              AND vr.active_status = %(active)s
            ORDER BY vr.order_number ASC, r.rule_id ASC
        """
        rows = self.pool.execute_query(
            query, {"validator_id": validator_id, "active": ActiveStatus.ACTIVE.value}
        )
        return [(self._to_rule(row), row["order_number"]) for row in rows]

    def get_rule(self, rule_id: str) -> RuleDefinition | None:
        rows = self.pool.execute_query(
            f"SELECT {_RULE_COLUMNS} FROM {RULES_TABLE} WHERE rule_id = %s", (rule_id,)
        )
        return self._to_rule(rows[0]) if rows else None

    def list_validators(self, active_only: bool = False) -> list[ValidatorDefinition]:
        query = f"""
            SELECT {_VALIDATOR_COLUMNS}
            FROM {VALIDATORS_TABLE}
            WHERE NOT %(active_only)s OR active_status = %(active)s
            ORDER BY order_number ASC, name ASC
        """
        rows = self.pool.execute_query(query, {"active_only": active_only, "active": ActiveStatus.ACTIVE.value})
        return [ValidatorDefinition(**row) for row in rows]

    def get_associations(self, validator_id: str) -> list[ValidatorRule]:
        rows = self.pool.execute_query(
            f"""
            SELECT validator_id, rule_id, order_number, active_status, created_at
            FROM {VALIDATOR_RULES_TABLE}
            WHERE validator_id = %s
            ORDER BY order_number ASC, rule_id ASC
            """,
            (validator_id,),
        )
        return [ValidatorRule(**row) for row in rows]

    # -----------------------
    # Write side
    # -----------------------

    def save_rule(self, rule: RuleDefinition) -> RuleDefinition:
        """Insert or update a rule."""
        self.pool.execute_command(
            f"""
            INSERT INTO {RULES_TABLE} (rule_id, attribute, kind, parameters, created_at, updated_at)
            VALUES (%(rule_id)s, %(attribute)s, %(kind)s, %(parameters)s, %(created_at)s, %(updated_at)s)
            ON CONFLICT (rule_id) DO UPDATE SET
                attribute = EXCLUDED.attribute,
                kind = EXCLUDED.kind,
                parameters = EXCLUDED.parameters,
                updated_at = NOW()
            """,
            {
                "rule_id": rule.rule_id,
                "attribute": rule.attribute,
                "kind": rule.kind,
                "parameters": Jsonb(rule.parameters),
                "created_at": rule.created_at,
                "updated_at": rule.updated_at,
            },
        )
        logger.debug(f"Saved rule {rule.rule_id}", extra={"rule_id": rule.rule_id, "kind": rule.kind})
        return rule

    def save_validator(self, validator: ValidatorDefinition) -> ValidatorDefinition:
        """Insert or update a validator."""
        self.pool.execute_command(
            f"""
            INSERT INTO {VALIDATORS_TABLE}
                (validator_id, name, description, context, active_status, order_number, created_at, updated_at)
            VALUES (%(validator_id)s, %(name)s, %(description)s, %(context)s, %(active_status)s,
                    %(order_number)s, %(created_at)s, %(updated_at)s)
            ON CONFLICT (validator_id) DO UPDATE SET
                name = EXCLUDED.name,
                description = EXCLUDED.description,
                context = EXCLUDED.context,
                active_status = EXCLUDED.active_status,
                order_number = EXCLUDED.order_number,
                updated_at = NOW()
            """,
            {**validator.model_dump(), "active_status": validator.active_status.value},
        )
        logger.debug(f"Saved validator {validator.name}", extra={"validator_id": validator.validator_id})
        return validator

    def attach_rule(self, association: ValidatorRule) -> ValidatorRule:
        """Insert or update the association of a rule with a validator."""
        self.pool.execute_command(
            f"""
            INSERT INTO {VALIDATOR_RULES_TABLE} (validator_id, rule_id, order_number, active_status)
            VALUES (%(validator_id)s, %(rule_id)s, %(order_number)s, %(active_status)s)
            ON CONFLICT (validator_id, rule_id) DO UPDATE SET
                order_number = EXCLUDED.order_number,
                active_status = EXCLUDED.active_status
            """,
            {
                "validator_id": association.validator_id,
                "rule_id": association.rule_id,
                "order_number": association.order_number,
                "active_status": association.active_status.value,
            },
        )
        return association

    def detach_rule(self, validator_id: str, rule_id: str) -> bool:
        return self.pool.execute_command(
            f"DELETE FROM {VALIDATOR_RULES_TABLE} WHERE validator_id = %s AND rule_id = %s",
            (validator_id, rule_id),
        ) > 0

    def delete_rule(self, rule_id: str) -> bool:
        """Delete a rule; its associations go with it (ON DELETE CASCADE)."""
        return self.pool.execute_command(f"DELETE FROM {RULES_TABLE} WHERE rule_id = %s", (rule_id,)) > 0

    def delete_validator(self, validator_id: str) -> bool:
        """Delete a validator; its associations go with it (ON DELETE CASCADE)."""
        return self.pool.execute_command(
            f"DELETE FROM {VALIDATORS_TABLE} WHERE validator_id = %s", (validator_id,)
        ) > 0

    @staticmethod
    def _to_rule(row: dict[str, Any]) -> RuleDefinition:
        return RuleDefinition(
            rule_id=row["rule_id"],
            attribute=row["attribute"],
            kind=row["kind"],
            parameters=row["parameters"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

"""
Validator service: resolves a validator from the rule store and runs its
active rules against an input record.
"""

import time
from collections.abc import Mapping
from typing import Any

from ...observability.logger import get_logger
from ...observability.metrics import record_resolution_failure, record_validation_run
from ...storage.rule_store import RuleStore
from ..models import ValidationResult, ValidatorDefinition
from .compiler import RuleCompiler
from .rule_engine import RuleEngine

logger = get_logger(__name__)


class ValidatorService:
    """
    Runs stored validators.

    Args:
        store: Rule store the validators and rules are read from
        compiler: Rule compiler; defaults to the built-in kinds
        fail_fast: Default run mode passed to the rule engine (None = settings)
    """

    def __init__(self, store: RuleStore, compiler: RuleCompiler | None = None, fail_fast: bool | None = None):
        self.store = store
        self.compiler = compiler or RuleCompiler()
        self.fail_fast = fail_fast

    def resolve(self, id_or_name: str) -> ValidatorDefinition | None:
        """
        Find the active validator a reference points at.

        Returns:
            The validator, or None when it is missing or inactive
        """
        validator = self.store.get_validator(id_or_name, active_only=True)
        if validator is None:
            logger.warning(
                f"Validator '{id_or_name}' not found or inactive",
                extra={"validator": id_or_name},
            )
            record_resolution_failure()
        return validator

    def build_engine(self, validator: ValidatorDefinition, fail_fast: bool | None = None) -> RuleEngine:
        """Compile the active rules of a validator into a rule engine."""
        rules = self.store.get_active_rules_for_validator(validator.validator_id)
        return RuleEngine(
            rules,
            fail_fast=self.fail_fast if fail_fast is None else fail_fast,
            compiler=self.compiler,
        )

    def run_validator(
        self, id_or_name: str, data: Mapping[str, Any], fail_fast: bool | None = None
    ) -> ValidationResult:
        """
        Validate a record against a stored validator.

        Args:
            id_or_name: Validator id (preferred) or name
            data: Input record (attribute name -> value)
            fail_fast: True stops at the first failure; False collects every failure

        Returns:
            ValidationResult; success is False when the validator does not resolve
        """
        validator = self.resolve(id_or_name)
        if validator is None:
            return ValidationResult.unresolved(id_or_name)

        start = time.perf_counter()
        engine = self.build_engine(validator, fail_fast)
        result = engine.validate(data)
        result = result.model_copy(
            update={"validator_id": validator.validator_id, "validator_name": validator.name}
        )

        record_validation_run(validator.name, result.success)
        logger.info(
            f"Validator '{validator.name}' finished: success={result.success}",
            extra={
                "validator": validator.name,
                "validator_id": validator.validator_id,
                "success": result.success,
                "rules_evaluated": result.rules_evaluated,
                "rules_failed_to_compile": result.rules_failed_to_compile,
                "duration_seconds": round(time.perf_counter() - start, 6),
            },
        )
        return result

    def run_validator_by_id(self, id_or_name: str, data: Mapping[str, Any]) -> bool:
        """Short-circuit boolean run of a stored validator."""
        return self.run_validator(id_or_name, data, fail_fast=True).success

    def check_validator(self, id_or_name: str) -> list[tuple[str, str, str]]:
        """
        Compile every active rule of a validator without evaluating data.

        Returns:
            (rule_id, attribute, error) for each rule that fails to compile;
            a single ("", "", message) entry when the validator does not resolve
        """
        validator = self.resolve(id_or_name)
        if validator is None:
            return [("", "", f"Validator '{id_or_name}' not found or inactive")]

        problems = []
        for definition, _ in self.store.get_active_rules_for_validator(validator.validator_id):
            _, error = self.compiler.try_compile(definition)
            if error is not None:
                problems.append((definition.rule_id, definition.attribute, str(error)))
        return problems

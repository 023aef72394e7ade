"""
Rule engine for evaluating an ordered rule set against an input record.

The engine compiles rule definitions, evaluates them in ascending order
number against the record's attributes, and aggregates a ValidationResult.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from ...config import get_settings
from ...observability.logger import get_logger
from ...observability.metrics import (
    record_compile_error,
    record_rule_error,
    record_rule_outcome,
    track_duration,
    validation_duration_seconds,
)
from ..errors import RuleConfigurationError
from ..models import RuleDefinition, ValidationResult
from ..rule_kinds import BaseRule, ValidationOutcome
from .compiler import RuleCompiler

logger = get_logger(__name__)

RuleInput = RuleDefinition | tuple[RuleDefinition, int] | dict[str, Any]


class CompiledRule:
    """An executable rule bound to the attribute it checks (call-scoped, never persisted)."""

    __slots__ = ("rule_id", "attribute", "order_number", "rule")

    def __init__(self, rule_id: str, attribute: str, order_number: int, rule: BaseRule):
        self.rule_id = rule_id
        self.attribute = attribute
        self.order_number = order_number
        self.rule = rule

    @property
    def kind(self) -> str:
        return self.rule.kind

    def validate(self, value: Any) -> ValidationOutcome:
        return self.rule.validate(self.attribute, value)

    def __repr__(self) -> str:
        return f"CompiledRule(attribute={self.attribute!r}, order={self.order_number}, rule={self.rule!r})"


class CompileFailure:
    """A rule definition the compiler rejected."""

    __slots__ = ("rule_id", "attribute", "kind", "order_number", "error")

    def __init__(self, definition: RuleDefinition, order_number: int, error: RuleConfigurationError):
        self.rule_id = definition.rule_id
        self.attribute = definition.attribute
        self.kind = definition.kind
        self.order_number = order_number
        self.error = error

    @property
    def message(self) -> str:
        return f"The rule for {self.attribute} could not be compiled: {self.error}"

    def __repr__(self) -> str:
        return f"CompileFailure(rule_id={self.rule_id!r}, kind={self.kind!r}, error={str(self.error)!r})"


def _as_ordered_definition(rule: RuleInput, position: int) -> tuple[RuleDefinition, int]:
    if isinstance(rule, tuple):
        definition, order_number = rule
    elif isinstance(rule, dict):
        rule = dict(rule)
        order_number = rule.pop("order_number", position)
        definition = RuleDefinition(**rule)
    else:
        definition, order_number = rule, position
    return definition, int(order_number)


class RuleEngine:
    """
    Evaluates an ordered rule set against input records.

    Two modes:
    - fail_fast=True (short-circuit): stop at the first failing rule; the
      result carries that single failure
    - fail_fast=False (collect): evaluate every rule and report every
      failure message per attribute

    A rule that fails to compile never passes silently: it is logged,
    reported against its attribute and makes the overall result a failure.
    In short-circuit mode no rule is evaluated when any rule failed to compile.

    Args:
        rules: RuleDefinition objects (ordered by position), (definition,
               order_number) pairs, or rule dicts with an optional "order_number"
        fail_fast: Default mode; None takes VALIDATION_FAIL_FAST from settings
        compiler: Rule compiler; defaults to the built-in kinds
    """

    def __init__(
        self,
        rules: Iterable[RuleInput],
        fail_fast: bool | None = None,
        compiler: RuleCompiler | None = None,
    ):
        self.fail_fast = get_settings().fail_fast if fail_fast is None else fail_fast
        self.compiler = compiler or RuleCompiler()
        self.definitions = sorted(
            (_as_ordered_definition(rule, position) for position, rule in enumerate(rules)),
            key=lambda pair: pair[1],
        )
        self.compiled: list[CompiledRule] = []
        self.compile_failures: list[CompileFailure] = []
        self._build_rules()

    def _build_rules(self) -> None:
        """Compile every definition, keeping failures for reporting."""
        for definition, order_number in self.definitions:
            rule, error = self.compiler.try_compile(definition)
            if error is not None:
                record_compile_error(definition.kind, type(error).__name__)
                self.compile_failures.append(CompileFailure(definition, order_number, error))
                continue
            self.compiled.append(CompiledRule(definition.rule_id, definition.attribute, order_number, rule))

    def validate(self, data: Mapping[str, Any], fail_fast: bool | None = None) -> ValidationResult:
        """
        Validate one record against all rules.

        Args:
            data: The input record (attribute name -> value); absent attributes read as None
            fail_fast: Override the engine's mode for this call

        Returns:
            ValidationResult with the overall status and failure messages
        """
        fail_fast = self.fail_fast if fail_fast is None else fail_fast
        mode = "short_circuit" if fail_fast else "collect"
        errors: dict[str, list[str]] = {}
        evaluated = 0

        with track_duration(validation_duration_seconds, mode=mode):
            for failure in self.compile_failures:
                errors.setdefault(failure.attribute, []).append(failure.message)

            if not (fail_fast and errors):
                for compiled in self.compiled:
                    outcome = self._evaluate(compiled, data.get(compiled.attribute))
                    evaluated += 1
                    if not outcome.passed:
                        errors.setdefault(compiled.attribute, []).extend(outcome.messages)
                        if fail_fast:
                            break

        result = ValidationResult(
            success=not errors,
            errors=errors,
            rules_evaluated=evaluated,
            rules_failed_to_compile=len(self.compile_failures),
        )
        logger.debug(
            f"Validated record against {len(self.definitions)} rules: success={result.success}",
            extra={"mode": mode, "rules_evaluated": evaluated, "success": result.success},
        )
        return result

    def _evaluate(self, compiled: CompiledRule, value: Any) -> ValidationOutcome:
        try:
            outcome = compiled.validate(value)
        except Exception as e:
            logger.exception(
                f"Rule '{compiled.rule_id}' raised while validating '{compiled.attribute}'",
                extra={"rule_id": compiled.rule_id, "kind": compiled.kind, "attribute": compiled.attribute},
            )
            record_rule_error(compiled.kind)
            return ValidationOutcome.fail(f"The {compiled.attribute} could not be validated: {e}")

        record_rule_outcome(compiled.kind, outcome.passed)
        return outcome

    def passes(self, data: Mapping[str, Any]) -> bool:
        """Short-circuit boolean check."""
        return self.validate(data, fail_fast=True).success

    def validate_batch(self, records: list[Mapping[str, Any]], fail_fast: bool | None = None) -> list[ValidationResult]:
        """
        Validate a batch of records.

        Returns:
            List of ValidationResult objects, one per record
        """
        return [self.validate(record, fail_fast=fail_fast) for record in records]

    def get_rule_summary(self) -> dict[str, Any]:
        """
        Summary of the loaded rule set.

        Returns:
            Dictionary with rule counts by kind and compile failures
        """
        counts: dict[str, int] = {}
        for compiled in self.compiled:
            counts[compiled.kind] = counts.get(compiled.kind, 0) + 1
        return {
            "total_rules": len(self.definitions),
            "compiled_rules": len(self.compiled),
            "rules_by_kind": counts,
            "compile_failures": [
                {"rule_id": f.rule_id, "attribute": f.attribute, "kind": f.kind, "error": str(f.error)}
                for f in self.compile_failures
            ],
        }


def validate_rules(rules: Iterable[RuleInput], data: Mapping[str, Any], fail_fast: bool = True) -> bool:
    """
    Validate data against a rule set.

    Returns:
        True if the data is valid
    """
    return RuleEngine(rules, fail_fast=fail_fast).validate(data).success

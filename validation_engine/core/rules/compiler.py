"""
Rule compiler.

Turns a stored RuleDefinition (kind + loosely-typed parameter map) into an
executable rule, or raises a RuleConfigurationError describing why the rule
itself is malformed.
"""

from typing import Any

from ...observability.logger import get_logger
from ..errors import InvalidRuleConfiguration, MissingRequiredParameter, RuleConfigurationError
from ..models import RuleDefinition
from ..rule_kinds import BaseRule
from .registry import RuleKindRegistry, get_default_registry

logger = get_logger(__name__)


class RuleCompiler:
    """
    Builds rule instances from stored definitions.

    For each input a rule kind declares, the compiler takes the stored value
    by name (or alias), else the declared default, else fails with
    MissingRequiredParameter. Keys the kind does not declare are ignored.

    Args:
        registry: Rule kind registry; defaults to the built-in kinds
    """

    def __init__(self, registry: RuleKindRegistry | None = None):
        self.registry = registry or get_default_registry()

    def compile(self, definition: RuleDefinition) -> BaseRule:
        """
        Compile a stored rule definition.

        Raises:
            UnknownRuleKind: If the kind is not registered
            MissingRequiredParameter: If a required input is absent
            InvalidRuleConfiguration: If an input is semantically invalid
        """
        return self.compile_parameters(definition.kind, definition.parameters)

    def compile_parameters(self, kind: str, parameters: dict[str, Any] | None) -> BaseRule:
        """Compile a kind identifier and its parameter map."""
        rule_class = self.registry.resolve(kind)

        if parameters is None:
            parameters = {}
        if not isinstance(parameters, dict):
            raise InvalidRuleConfiguration(rule_class.kind, "parameters must be a JSON object")

        arguments: dict[str, Any] = {}
        for spec in rule_class.PARAMETERS:
            found, value = spec.lookup(parameters)
            if found:
                arguments[spec.arg] = value
            elif not spec.required:
                arguments[spec.arg] = spec.get_default()
            else:
                raise MissingRequiredParameter(rule_class.kind, spec.name)

        try:
            return rule_class(**arguments)
        except RuleConfigurationError:
            raise
        except (TypeError, ValueError) as e:
            raise InvalidRuleConfiguration(rule_class.kind, str(e)) from e

    def recompile(self, rule: BaseRule) -> BaseRule:
        """Rebuild an equivalent rule from another rule's configuration snapshot."""
        return self.compile_parameters(rule.kind, rule.snapshot())

    def try_compile(self, definition: RuleDefinition) -> tuple[BaseRule | None, RuleConfigurationError | None]:
        """
        Compile without raising.

        Returns:
            (rule, None) on success, (None, error) when the definition is malformed
        """
        try:
            return self.compile(definition), None
        except RuleConfigurationError as e:
            logger.error(
                f"Error compiling rule '{definition.rule_id}' of kind '{definition.kind}': {e}",
                extra={
                    "rule_id": definition.rule_id,
                    "kind": definition.kind,
                    "attribute": definition.attribute,
                    "parameters": definition.parameters,
                    "error_type": type(e).__name__,
                },
            )
            return None, e

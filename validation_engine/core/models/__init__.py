"""
Core data models for the validation engine.

All models use Pydantic for runtime validation and type safety.
"""

from .enums import ActiveStatus, DayOfWeek, TimeOfDay
from .rule_definition import RuleDefinition
from .validation_result import ValidationResult
from .validator_definition import ValidatorDefinition
from .validator_rule import ValidatorRule

__all__ = [
    "ActiveStatus",
    "DayOfWeek",
    "TimeOfDay",
    "RuleDefinition",
    "ValidatorDefinition",
    "ValidatorRule",
    "ValidationResult",
]

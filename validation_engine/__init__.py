"""
Validation engine: stored, named validators made of ordered rules.
"""

from .core.errors import (
    InvalidRuleConfiguration,
    MissingRequiredParameter,
    RuleConfigurationError,
    UnknownRuleKind,
)
from .core.models import RuleDefinition, ValidationResult, ValidatorDefinition, ValidatorRule
from .core.rules import RuleCompiler, RuleConfigBuilder, RuleConfigLoader, RuleEngine, ValidatorService, validate_rules
from .storage import InMemoryRuleStore, RuleStore

__version__ = "0.1.0"

__all__ = [
    "RuleConfigurationError",
    "UnknownRuleKind",
    "MissingRequiredParameter",
    "InvalidRuleConfiguration",
    "RuleDefinition",
    "ValidatorDefinition",
    "ValidatorRule",
    "ValidationResult",
    "RuleCompiler",
    "RuleEngine",
    "validate_rules",
    "ValidatorService",
    "RuleConfigLoader",
    "RuleConfigBuilder",
    "RuleStore",
    "InMemoryRuleStore",
]

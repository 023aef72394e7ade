"""
Rule compilation, evaluation and configuration.
"""

from .compiler import RuleCompiler
from .registry import BUILTIN_RULE_KINDS, RuleKindRegistry, get_default_registry
from .rule_config import RuleConfigBuilder, RuleConfigLoader
from .rule_engine import CompiledRule, CompileFailure, RuleEngine, validate_rules
from .validator_service import ValidatorService

__all__ = [
    "BUILTIN_RULE_KINDS",
    "RuleKindRegistry",
    "get_default_registry",
    "RuleCompiler",
    "CompiledRule",
    "CompileFailure",
    "RuleEngine",
    "validate_rules",
    "ValidatorService",
    "RuleConfigLoader",
    "RuleConfigBuilder",
]

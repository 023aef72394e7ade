"""
Storage collaborators for rule and validator definitions.

The PostgreSQL store is imported lazily by callers that need it, so the
in-memory store works without a database driver configured.
"""

from .rule_store import InMemoryRuleStore, RuleStore

__all__ = [
    "RuleStore",
    "InMemoryRuleStore",
]

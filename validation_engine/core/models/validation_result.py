"""
ValidationResult model representing the outcome of one validator run (ephemeral).
"""

from typing import Any

from pydantic import BaseModel, Field, model_validator


class ValidationResult(BaseModel):
    """
    Outcome of running a rule set against an input record (never persisted).

    Attributes:
        validator_id: Resolved validator, None for ad-hoc rule sets or a failed resolution
        validator_name: Resolved validator name
        success: Overall result; True only when every rule passed
        errors: Failure messages keyed by attribute, in evaluation order
        rules_evaluated: Number of rules whose validate() ran
        rules_failed_to_compile: Number of rules rejected by the compiler
        resolved: False when the validator was missing or inactive
    """

    validator_id: str | None = None
    validator_name: str | None = None
    success: bool
    errors: dict[str, list[str]] = Field(default_factory=dict)
    rules_evaluated: int = 0
    rules_failed_to_compile: int = 0
    resolved: bool = True

    @model_validator(mode="after")
    def check_success_consistency(self) -> "ValidationResult":
        """success=True implies there are no recorded errors."""
        if self.success and self.errors:
            raise ValueError("success=True but errors is not empty")
        return self

    @property
    def failures(self) -> list[tuple[str, str]]:
        """Flat (attribute, message) pairs."""
        return [(attribute, message) for attribute, messages in self.errors.items() for message in messages]

    def to_response(self, include_errors: bool = False) -> dict[str, Any]:
        """Render the caller-facing payload: {success} or {success, errors}."""
        if include_errors:
            return {"success": self.success, "errors": {k: list(v) for k, v in self.errors.items()}}
        return {"success": self.success}

    @classmethod
    def unresolved(cls, validator_ref: str) -> "ValidationResult":
        """Result for a validator that does not exist or is inactive."""
        return cls(validator_name=validator_ref, success=False, resolved=False)

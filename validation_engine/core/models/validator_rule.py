"""
ValidatorRule model: association of a rule with a validator.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field

from .enums import ActiveStatus


class ValidatorRule(BaseModel):
    """
    Links a validator to a rule. Keyed by (validator_id, rule_id).

    Attributes:
        validator_id: Owning validator
        rule_id: Associated rule
        order_number: Evaluation order within the validator (unique per validator)
        active_status: Inactive associations are skipped at run time
    """

    validator_id: str = Field(..., min_length=1)
    rule_id: str = Field(..., min_length=1)
    order_number: int = 0
    active_status: ActiveStatus = ActiveStatus.ACTIVE
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def key(self) -> tuple[str, str]:
        return (self.validator_id, self.rule_id)

    @property
    def is_active(self) -> bool:
        return self.active_status is ActiveStatus.ACTIVE

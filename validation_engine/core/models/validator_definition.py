"""
ValidatorDefinition model: a named, ordered set of rules.
"""

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, Field

from .enums import ActiveStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ValidatorDefinition(BaseModel):
    """
    A named validator.

    Attributes:
        validator_id: Unique identifier (UUID string generated when omitted)
        name: Globally unique name ("StateValidator")
        description: Free-text description
        context: Free-text context the validator applies to
        active_status: Inactive validators never resolve for a run
        order_number: Sort order among validators
    """

    validator_id: str = Field(default_factory=lambda: str(uuid.uuid4()), min_length=1)
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    context: str | None = None
    active_status: ActiveStatus = ActiveStatus.ACTIVE
    order_number: int = 0
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @property
    def is_active(self) -> bool:
        return self.active_status is ActiveStatus.ACTIVE

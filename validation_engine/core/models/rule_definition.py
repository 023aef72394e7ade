"""
RuleDefinition model: a stored, loosely-typed rule awaiting compilation.
"""

import json
import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RuleDefinition(BaseModel):
    """
    A single stored rule.

    Attributes:
        rule_id: Unique identifier (UUID string generated when omitted)
        attribute: Name of the input field the rule checks ("active_status")
        kind: Rule-kind identifier resolved by the rule kind registry ("Enum")
        parameters: Opaque JSON-shaped parameter map handed to the compiler
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "rule_id": "3f0e8a4e-5d3c-4b8e-9a57-6f1f0d7c2b11",
                "attribute": "active_status",
                "kind": "Enum",
                "parameters": {"enumClass": "ActiveStatus", "allowedValues": ["Active"]},
            }
        },
    )

    rule_id: str = Field(default_factory=lambda: str(uuid.uuid4()), min_length=1)
    attribute: str = Field(..., min_length=1)
    # "rule_type" is the column name used by older stored records
    kind: str = Field(..., min_length=1, alias="rule_type")
    parameters: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @field_validator("parameters", mode="before")
    @classmethod
    def decode_parameters(cls, v: Any) -> Any:
        """Accept the JSON text form stored by some backends; treat null as empty."""
        if v is None or v == "":
            return {}
        if isinstance(v, (str, bytes)):
            try:
                v = json.loads(v)
            except json.JSONDecodeError as e:
                raise ValueError(f"parameters is not valid JSON: {e}") from e
        return v

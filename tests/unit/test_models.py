"""
Unit tests for the pydantic models.
"""

import pytest
from pydantic import ValidationError

from validation_engine.core.models import (
    ActiveStatus,
    RuleDefinition,
    ValidationResult,
    ValidatorDefinition,
    ValidatorRule,
)


@pytest.mark.unit
class TestRuleDefinition:
    """Tests for RuleDefinition"""

    def test_generated_id(self):
        first = RuleDefinition(attribute="a", kind="Enum")
        second = RuleDefinition(attribute="a", kind="Enum")
        assert first.rule_id != second.rule_id

    def test_rule_type_alias(self):
        definition = RuleDefinition(attribute="a", rule_type="OneOf")
        assert definition.kind == "OneOf"

    def test_json_text_parameters_decoded(self):
        definition = RuleDefinition(attribute="a", kind="OneOf", parameters='{"allowedValues": ["x"]}')
        assert definition.parameters == {"allowedValues": ["x"]}

    @pytest.mark.parametrize("empty", [None, ""])
    def test_empty_parameters(self, empty):
        assert RuleDefinition(attribute="a", kind="OneOf", parameters=empty).parameters == {}

    def test_invalid_json_rejected(self):
        with pytest.raises(ValidationError):
            RuleDefinition(attribute="a", kind="OneOf", parameters="{not json")

    def test_attribute_required(self):
        with pytest.raises(ValidationError):
            RuleDefinition(attribute="", kind="OneOf")


@pytest.mark.unit
class TestValidatorModels:
    """Tests for ValidatorDefinition and ValidatorRule"""

    def test_validator_defaults(self):
        validator = ValidatorDefinition(name="StateValidator")
        assert validator.active_status is ActiveStatus.ACTIVE
        assert validator.is_active
        assert validator.order_number == 0

    def test_status_from_string(self):
        assert ValidatorDefinition(name="v", active_status="Inactive").is_active is False

    def test_name_length(self):
        with pytest.raises(ValidationError):
            ValidatorDefinition(name="x" * 256)

    def test_association_key(self):
        association = ValidatorRule(validator_id="v", rule_id="r", order_number=2)
        assert association.key == ("v", "r")
        assert association.is_active


@pytest.mark.unit
class TestValidationResult:
    """Tests for ValidationResult"""

    def test_success_with_errors_rejected(self):
        with pytest.raises(ValidationError):
            ValidationResult(success=True, errors={"a": ["bad"]})

    def test_response_shapes(self):
        result = ValidationResult(success=False, errors={"a": ["bad", "worse"]})

        assert result.to_response() == {"success": False}
        assert result.to_response(include_errors=True) == {"success": False, "errors": {"a": ["bad", "worse"]}}
        assert result.failures == [("a", "bad"), ("a", "worse")]

    def test_unresolved(self):
        result = ValidationResult.unresolved("Missing")
        assert result.success is False
        assert result.resolved is False
        assert result.validator_name == "Missing"

"""
Unit tests for YAML rule configuration and the rule builder.
"""

import os

import pytest

from validation_engine.core.models import DayOfWeek
from validation_engine.core.rules import RuleConfigBuilder, RuleConfigLoader, RuleEngine, ValidatorService


@pytest.fixture
def config_path(test_data_dir) -> str:
    return os.path.join(test_data_dir, "validators.yaml")


@pytest.mark.unit
class TestRuleConfigLoader:
    """Tests for RuleConfigLoader"""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RuleConfigLoader(tmp_path / "nope.yaml")

    def test_load_rules(self, config_path):
        rules = RuleConfigLoader(config_path).load_rules()

        assert [rule.rule_id for rule in rules] == ["status-enum", "state-one-of"]
        assert rules[1].parameters["allowedValues"][2] == "/^C[AT]$/"

    def test_load_store(self, config_path):
        store = RuleConfigLoader(config_path).load_store()

        assert {v.name for v in store.list_validators()} == {
            "StateValidator",
            "BusinessHours",
            "RetiredValidator",
            "BrokenValidator",
        }
        rules = store.get_active_rules_for_validator("v-state")
        assert [(rule.rule_id, order) for rule, order in rules] == [("status-enum", 1), ("state-one-of", 2)]

    def test_loaded_validators_run(self, config_path):
        service = ValidatorService(RuleConfigLoader(config_path).load_store(), fail_fast=False)

        assert service.run_validator("StateValidator", {"active_status": "Active", "state": "CT"}).success
        assert not service.run_validator("StateValidator", {"active_status": "Active", "state": "TX"}).success
        assert service.run_validator("BusinessHours", {"requested_at": "2024-10-14T13:00:00Z"}).success
        assert not service.run_validator("BusinessHours", {"requested_at": "2024-10-13T13:00:00Z"}).success
        assert not service.run_validator("RetiredValidator", {"active_status": "Active"}).resolved

    def test_broken_validator_reports_compile_errors(self, config_path):
        service = ValidatorService(RuleConfigLoader(config_path).load_store())

        problems = service.check_validator("BrokenValidator")

        assert len(problems) == 2
        assert not service.run_validator("BrokenValidator", {"state": "NY"}).success

    def test_attribute_mapping_format(self, tmp_path):
        path = tmp_path / "rules.yaml"
        path.write_text(
            "rules:\n"
            "  state:\n"
            "    - type: OneOf\n"
            "      params:\n"
            "        allowedValues: [NY]\n"
        )

        rules = RuleConfigLoader(path).load_rules()

        assert len(rules) == 1
        assert rules[0].attribute == "state"
        assert rules[0].kind == "OneOf"
        assert RuleEngine(rules).validate({"state": "NY"}).success

    @pytest.mark.parametrize(
        "document,message",
        [
            ("validators: []\n", "'rules' section"),
            ("rules:\n  - attribute: state\n", "missing 'kind'"),
            ("rules:\n  - kind: OneOf\n", "missing 'attribute'"),
            ("rules:\n  - attribute: a\n    kind: OneOf\n    parameters: [1]\n", "must be a mapping"),
            ("rules: 5\n", "must be a list or a mapping"),
            ("- just\n- a list\n", "mapping at the top level"),
        ],
    )
    def test_malformed_rules(self, tmp_path, document, message):
        path = tmp_path / "rules.yaml"
        path.write_text(document)

        with pytest.raises(ValueError) as exc_info:
            RuleConfigLoader(path).load_rules()

        assert message in str(exc_info.value)

    @pytest.mark.parametrize(
        "document,message",
        [
            ("validators:\n  - description: no name\n", "missing 'name'"),
            ("validators:\n  - name: V\n    rules:\n      - ghost\n", "unknown rule 'ghost'"),
            (
                "rules:\n  - {rule_id: r1, attribute: a, kind: OneOf}\n"
                "  - {rule_id: r2, attribute: b, kind: OneOf}\n"
                "validators:\n  - name: V\n    rules:\n"
                "      - {rule_id: r1, order_number: 1}\n"
                "      - {rule_id: r2, order_number: 1}\n",
                "already used",
            ),
            ("validators:\n  - name: V\n  - name: V\n", "already in use"),
            ("{}\n", "'rules' or 'validators'"),
        ],
    )
    def test_malformed_validators(self, tmp_path, document, message):
        path = tmp_path / "validators.yaml"
        path.write_text(document)

        with pytest.raises(ValueError) as exc_info:
            RuleConfigLoader(path).load_store()

        assert message in str(exc_info.value)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("rules: [unclosed\n")

        with pytest.raises(ValueError):
            RuleConfigLoader(path).load_rules()


@pytest.mark.unit
class TestRuleConfigBuilder:
    """Tests for RuleConfigBuilder"""

    def test_build_preserves_order(self):
        rules = RuleConfigBuilder() \
            .add_enum("status", "ActiveStatus") \
            .add_one_of("state", ["NY"]) \
            .add_none_of("state", ["CA"]) \
            .add_day_of_week("at", DayOfWeek.MONDAY) \
            .add_days_of_week("at", ["Saturday", DayOfWeek.SUNDAY]) \
            .add_time_of_day("at", "09:00", "17:00", "Europe/Paris") \
            .add_times_of_day("at", [("09:00", "12:00")]) \
            .add_day_time("at") \
            .add_rule("other", "Enum", {"enumClass": "DayOfWeek"}, rule_id="custom") \
            .build()

        assert [rule.kind for rule in rules] == [
            "Enum",
            "OneOf",
            "NoneOf",
            "DayOfWeek",
            "DaysOfWeek",
            "TimeOfDay",
            "TimesOfDay",
            "DayTime",
            "Enum",
        ]
        assert rules[3].parameters == {"day": "Monday"}
        assert rules[4].parameters == {"days": ["Saturday", "Sunday"]}
        assert rules[5].parameters["timezone"] == "Europe/Paris"
        assert rules[6].parameters == {"timeRanges": [["09:00", "12:00"]]}
        assert rules[7].parameters == {"day": "All", "start": "00:00", "end": "23:59"}
        assert rules[8].rule_id == "custom"

    def test_built_rules_compile(self):
        rules = RuleConfigBuilder() \
            .add_days_of_week("at", ["Weekday"]) \
            .add_times_of_day("at", [("00:00", "23:59")]) \
            .build()

        engine = RuleEngine(rules)

        assert engine.compile_failures == []
        assert engine.validate({"at": "2024-10-14T13:00:00Z"}).success

"""
Rule configuration management.

Loads rules and validators from YAML files into a rule store and provides
a builder for assembling rule sets in code.
"""

from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from ...observability.logger import get_logger
from ...storage.rule_store import InMemoryRuleStore
from ..models import ActiveStatus, DayOfWeek, RuleDefinition, ValidatorDefinition, ValidatorRule

logger = get_logger(__name__)


class RuleConfigLoader:
    """
    Loads rules and validators from YAML configuration files.

    Expected YAML format:
    ```yaml
    rules:
      - rule_id: status-enum
        attribute: active_status
        kind: Enum
        parameters:
          enumClass: ActiveStatus
          allowedValues: [Active]

    validators:
      - name: StateValidator
        description: Only active records
        rules:
          - rule_id: status-enum
            order_number: 1
          - attribute: state
            kind: OneOf
            parameters:
              allowedValues: [NY, NJ]
            order_number: 2
    ```

    The ``rules`` section may also map an attribute to a list of rules:
    ```yaml
    rules:
      state:
        - type: OneOf
          params:
            allowedValues: [NY, NJ]
    ```
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the rule config loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Rule configuration file not found: {config_path}")

    def _read(self) -> dict[str, Any]:
        with open(self.config_path) as f:
            try:
                config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {self.config_path}: {e}") from e

        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise ValueError("Configuration file must contain a mapping at the top level")
        return config

    def load_rules(self) -> list[RuleDefinition]:
        """
        Load the ``rules`` section.

        Returns:
            List of RuleDefinition objects in file order

        Raises:
            ValueError: If the section is missing or an entry is invalid
        """
        config = self._read()
        if "rules" not in config:
            raise ValueError("Configuration file must contain 'rules' section")
        return self._parse_rules_section(config["rules"])

    def load_store(self, store: InMemoryRuleStore | None = None) -> InMemoryRuleStore:
        """
        Load rules, validators and their associations into a store.

        Args:
            store: Store to populate; a new InMemoryRuleStore when omitted

        Returns:
            The populated store

        Raises:
            ValueError: If the document or one of its entries is invalid
        """
        config = self._read()
        if "rules" not in config and "validators" not in config:
            raise ValueError("Configuration file must contain 'rules' or 'validators' section")

        store = store if store is not None else InMemoryRuleStore()

        for rule in self._parse_rules_section(config.get("rules") or []):
            store.save_rule(rule)

        validators = config.get("validators") or []
        if not isinstance(validators, list):
            raise ValueError("'validators' section must be a list")

        for idx, validator_def in enumerate(validators):
            self._load_validator(store, validator_def, idx)

        logger.info(
            f"Loaded rule configuration from {self.config_path}",
            extra={"rules": len(store.list_rules()), "validators": len(store.list_validators())},
        )
        return store

    def _parse_rules_section(self, section: Any) -> list[RuleDefinition]:
        rules: list[RuleDefinition] = []

        if isinstance(section, dict):
            for attribute, rule_list in section.items():
                if not isinstance(rule_list, list):
                    raise ValueError(f"Rules for attribute '{attribute}' must be a list")
                for idx, rule_def in enumerate(rule_list):
                    if not isinstance(rule_def, dict):
                        raise ValueError(f"Rule {idx} for attribute '{attribute}' must be a mapping")
                    rules.append(self._parse_rule({"attribute": attribute, **rule_def}, f"{attribute}[{idx}]"))
        elif isinstance(section, list):
            for idx, rule_def in enumerate(section):
                rules.append(self._parse_rule(rule_def, f"rules[{idx}]"))
        else:
            raise ValueError("'rules' section must be a list or a mapping of attribute to rules")

        return rules

    def _parse_rule(self, rule_def: Any, where: str) -> RuleDefinition:
        """
        Parse a single rule definition.

        Args:
            rule_def: The rule definition from YAML
            where: Location of the entry, for error messages

        Raises:
            ValueError: If rule definition is invalid
        """
        if not isinstance(rule_def, dict):
            raise ValueError(f"Rule {where} must be a mapping")

        kind = rule_def.get("kind", rule_def.get("type"))
        if not kind:
            raise ValueError(f"Rule {where} is missing 'kind'")
        if not rule_def.get("attribute"):
            raise ValueError(f"Rule {where} is missing 'attribute'")

        parameters = rule_def.get("parameters", rule_def.get("params")) or {}
        if not isinstance(parameters, dict):
            raise ValueError(f"Parameters of rule {where} must be a mapping")

        fields: dict[str, Any] = {"attribute": rule_def["attribute"], "kind": kind, "parameters": parameters}
        if rule_def.get("rule_id"):
            fields["rule_id"] = str(rule_def["rule_id"])

        try:
            return RuleDefinition(**fields)
        except ValueError as e:
            raise ValueError(f"Invalid rule {where}: {e}") from e

    def _load_validator(self, store: InMemoryRuleStore, validator_def: Any, idx: int) -> None:
        if not isinstance(validator_def, dict):
            raise ValueError(f"Validator {idx} must be a mapping")
        if not validator_def.get("name"):
            raise ValueError(f"Validator {idx} is missing 'name'")

        name = validator_def["name"]
        fields = {
            key: validator_def[key]
            for key in ("validator_id", "name", "description", "context", "active_status", "order_number")
            if key in validator_def
        }
        try:
            validator = store.save_validator(ValidatorDefinition(**fields))
        except ValueError as e:
            raise ValueError(f"Invalid validator '{name}': {e}") from e

        entries = validator_def.get("rules") or []
        if not isinstance(entries, list):
            raise ValueError(f"Rules of validator '{name}' must be a list")

        for position, entry in enumerate(entries, start=1):
            where = f"{name}.rules[{position - 1}]"
            if isinstance(entry, str):
                entry = {"rule_id": entry}
            if not isinstance(entry, dict):
                raise ValueError(f"Rule entry {where} must be a rule id or a mapping")

            if "kind" in entry or "type" in entry:
                rule = store.save_rule(self._parse_rule(entry, where))
            else:
                rule = store.get_rule(str(entry.get("rule_id", "")))
                if rule is None:
                    raise ValueError(f"Rule entry {where} references unknown rule '{entry.get('rule_id')}'")

            try:
                store.attach_rule(
                    ValidatorRule(
                        validator_id=validator.validator_id,
                        rule_id=rule.rule_id,
                        order_number=entry.get("order_number", position),
                        active_status=entry.get("active_status", ActiveStatus.ACTIVE),
                    )
                )
            except (KeyError, ValueError) as e:
                raise ValueError(f"Invalid rule entry {where}: {e}") from e


class RuleConfigBuilder:
    """
    Programmatically build rule definitions (for testing or dynamic rules).

    Rules are returned in the order they were added.
    """

    def __init__(self):
        """Initialize empty rule configuration."""
        self.rules: list[RuleDefinition] = []

    def add_rule(
        self, attribute: str, kind: str, parameters: dict[str, Any] | None = None, rule_id: str | None = None
    ) -> "RuleConfigBuilder":
        """Add a rule of any kind."""
        fields: dict[str, Any] = {"attribute": attribute, "kind": kind, "parameters": parameters or {}}
        if rule_id:
            fields["rule_id"] = rule_id
        self.rules.append(RuleDefinition(**fields))
        return self

    def add_enum(
        self, attribute: str, enum_class: type[Enum] | str, allowed_values: list[Any] | None = None
    ) -> "RuleConfigBuilder":
        """Add an enum membership rule."""
        params: dict[str, Any] = {"enumClass": enum_class}
        if allowed_values:
            params["allowedValues"] = list(allowed_values)
        return self.add_rule(attribute, "Enum", params)

    def add_one_of(self, attribute: str, allowed_values: list[Any]) -> "RuleConfigBuilder":
        """Add an allow-list rule; "/regex/" members are patterns."""
        return self.add_rule(attribute, "OneOf", {"allowedValues": list(allowed_values)})

    def add_none_of(self, attribute: str, disallowed_values: list[Any]) -> "RuleConfigBuilder":
        """Add a deny-list rule; "/regex/" members are patterns."""
        return self.add_rule(attribute, "NoneOf", {"disallowedValues": list(disallowed_values)})

    def add_day_of_week(
        self, attribute: str, day: DayOfWeek | str, timezone: str | None = None
    ) -> "RuleConfigBuilder":
        params: dict[str, Any] = {"day": day.value if isinstance(day, DayOfWeek) else day}
        if timezone:
            params["timezone"] = timezone
        return self.add_rule(attribute, "DayOfWeek", params)

    def add_days_of_week(
        self, attribute: str, days: list[DayOfWeek | str], timezone: str | None = None
    ) -> "RuleConfigBuilder":
        params: dict[str, Any] = {"days": [d.value if isinstance(d, DayOfWeek) else d for d in days]}
        if timezone:
            params["timezone"] = timezone
        return self.add_rule(attribute, "DaysOfWeek", params)

    def add_time_of_day(
        self,
        attribute: str,
        start: str = "00:00",
        end: str = "23:59",
        timezone: str | None = None,
    ) -> "RuleConfigBuilder":
        params: dict[str, Any] = {"start": start, "end": end}
        if timezone:
            params["timezone"] = timezone
        return self.add_rule(attribute, "TimeOfDay", params)

    def add_times_of_day(
        self, attribute: str, time_ranges: list[tuple[str, str]], timezone: str | None = None
    ) -> "RuleConfigBuilder":
        params: dict[str, Any] = {"timeRanges": [[start, end] for start, end in time_ranges]}
        if timezone:
            params["timezone"] = timezone
        return self.add_rule(attribute, "TimesOfDay", params)

    def add_day_time(
        self,
        attribute: str,
        day: DayOfWeek | str = DayOfWeek.ALL,
        start: str = "00:00",
        end: str = "23:59",
        timezone: str | None = None,
    ) -> "RuleConfigBuilder":
        """Add a combined day-of-week and time window rule."""
        params: dict[str, Any] = {
            "day": day.value if isinstance(day, DayOfWeek) else day,
            "start": start,
            "end": end,
        }
        if timezone:
            params["timezone"] = timezone
        return self.add_rule(attribute, "DayTime", params)

    def build(self) -> list[RuleDefinition]:
        """Build and return the rule definitions."""
        return list(self.rules)

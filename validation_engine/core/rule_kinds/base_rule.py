"""
Base rule interface for all rule kinds.

Every rule kind inherits from BaseRule, declares the named inputs its
constructor takes (``PARAMETERS``) and implements ``validate()`` and
``snapshot()``.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar

_REQUIRED = object()


class ParamSpec:
    """
    One declared constructor input of a rule kind.

    Args:
        name: Canonical key in the stored parameter map ("allowedValues")
        arg: Keyword argument of the rule constructor ("allowed_values");
             defaults to ``name``
        default: Value used when the key is absent; omit for a required input
        default_factory: Callable producing the default at compile time
        aliases: Older keys accepted in place of ``name``
    """

    def __init__(
        self,
        name: str,
        arg: str | None = None,
        default: Any = _REQUIRED,
        default_factory: Callable[[], Any] | None = None,
        aliases: tuple[str, ...] = (),
    ):
        self.name = name
        self.arg = arg or name
        self.default = default
        self.default_factory = default_factory
        self.aliases = aliases

    @property
    def required(self) -> bool:
        return self.default is _REQUIRED and self.default_factory is None

    def lookup(self, parameters: dict[str, Any]) -> tuple[bool, Any]:
        """Return (found, value) for this input from a stored parameter map."""
        for key in (self.name, *self.aliases):
            if key in parameters:
                return True, parameters[key]
        return False, None

    def get_default(self) -> Any:
        if self.default_factory is not None:
            return self.default_factory()
        return self.default

    def __repr__(self) -> str:
        default = "<required>" if self.required else repr(self.default)
        return f"ParamSpec({self.name!r}, default={default})"


class ValidationOutcome:
    """
    Result of one rule evaluation: Pass, or Fail with one or more messages.
    """

    __slots__ = ("passed", "messages")

    def __init__(self, passed: bool, messages: tuple[str, ...] = ()):
        self.passed = passed
        self.messages = tuple(messages)

    @classmethod
    def ok(cls) -> "ValidationOutcome":
        return _PASS

    @classmethod
    def fail(cls, *messages: str) -> "ValidationOutcome":
        return cls(False, messages)

    @classmethod
    def combine(cls, *outcomes: "ValidationOutcome") -> "ValidationOutcome":
        """Logical AND of several outcomes, keeping every failure message."""
        messages = [m for outcome in outcomes if not outcome.passed for m in outcome.messages]
        if all(outcome.passed for outcome in outcomes):
            return _PASS
        return cls(False, tuple(messages))

    @property
    def message(self) -> str | None:
        """First failure message, if any."""
        return self.messages[0] if self.messages else None

    def __bool__(self) -> bool:
        return self.passed

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationOutcome):
            return NotImplemented
        return self.passed == other.passed and self.messages == other.messages

    def __hash__(self) -> int:
        return hash((self.passed, self.messages))

    def __repr__(self) -> str:
        if self.passed:
            return "ValidationOutcome(Pass)"
        return f"ValidationOutcome(Fail, messages={list(self.messages)})"


_PASS = ValidationOutcome(True)


class BaseRule(ABC):
    """
    Abstract base class for all rule kinds.

    A rule is built once from concrete parameters and then evaluated as a
    pure predicate: ``validate()`` depends only on the value, the rule's own
    configuration and, for empty date/time values, the current time.
    """

    kind: ClassVar[str]
    PARAMETERS: ClassVar[tuple[ParamSpec, ...]] = ()

    @abstractmethod
    def validate(self, attribute: str, value: Any) -> ValidationOutcome:
        """
        Validate a value against this rule.

        Args:
            attribute: Name of the attribute being validated (used in messages)
            value: The attribute's value; None when the attribute is absent

        Returns:
            ValidationOutcome.ok() or ValidationOutcome.fail(message, ...)
        """

    @abstractmethod
    def snapshot(self) -> dict[str, Any]:
        """
        Flat, JSON-safe map of this rule's configuration.

        Keys are the canonical parameter names, so the snapshot compiles back
        into an equivalent rule of the same kind.
        """

    def is_valid_for(self, value: Any) -> bool:
        """Boolean shortcut for ``validate()`` with a generic attribute name."""
        return self.validate("attribute", value).passed

    def to_json(self) -> str:
        return json.dumps({"kind": self.kind, "parameters": self.snapshot()})

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BaseRule):
            return NotImplemented
        return self.kind == other.kind and self.snapshot() == other.snapshot()

    def __hash__(self) -> int:
        return hash((self.kind, json.dumps(self.snapshot(), sort_keys=True, default=str)))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.snapshot()})"

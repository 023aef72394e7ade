"""
Rule configuration errors.

These describe a malformed *rule*, never a failing input value: input that
fails a well-formed rule is reported through ``ValidationOutcome``.
"""


class RuleConfigurationError(ValueError):
    """Base class for errors raised while compiling a rule definition."""

    def __init__(self, kind: str | None, message: str):
        self.kind = kind
        self.message = message
        super().__init__(f"[{kind}] {message}" if kind else message)


class UnknownRuleKind(RuleConfigurationError):
    """The rule-kind identifier does not resolve in the registry."""

    def __init__(self, kind: str):
        super().__init__(kind, f"Unknown rule kind: {kind}")


class MissingRequiredParameter(RuleConfigurationError):
    """A constructor input has neither a stored value nor a default."""

    def __init__(self, kind: str, name: str):
        self.name = name
        super().__init__(kind, f"Missing required parameter: {name}")


class InvalidRuleConfiguration(RuleConfigurationError):
    """A parameter is present but semantically invalid."""

    def __init__(self, kind: str | None, detail: str):
        self.detail = detail
        super().__init__(kind, detail)

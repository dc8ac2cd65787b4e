"""Domain-level exceptions."""


class RuleError(ValueError):
    """Raised when a game rule refuses an operation."""

"""Domain exceptions for the task board.

Handlers translate these into OperationResult failures; anything that
escapes a handler is rendered by the API error boundary.
"""


class TaskValidationError(ValueError):
    """Raised when task input violates a required-field or enum rule.

    Attributes:
        errors: One human-readable message per offending field
    """

    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


class DuplicateTaskError(Exception):
    """Raised by a task store when a write violates a uniqueness constraint."""

    def __init__(self, field: str, message: str = "Duplicate field value entered"):
        super().__init__(message)
        self.field = field
        self.message = message

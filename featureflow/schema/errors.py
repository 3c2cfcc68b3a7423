"""Graph import exceptions."""


class GraphLoadError(Exception):
    """Raised when a graph or context file cannot be read or parsed."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)


class GraphValidationError(Exception):
    """Raised when a graph document is structurally incomplete."""

    def __init__(self, message: str, errors: list[dict] | None = None):
        self.errors = errors or []
        super().__init__(message)

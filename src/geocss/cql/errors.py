"""CQL engine error types."""


class CQLError(ValueError):
    """Raised when text is not accepted by the requested CQL grammar."""

    def __init__(self, message: str, text: str = "", column: int | None = None):
        self.text = text
        self.column = column
        super().__init__(message)

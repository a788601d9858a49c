"""Error types raised while parsing rule text and query specs."""


class StyleSyntaxError(SyntaxError):
    """Raised when rule text or a filter spec cannot be parsed."""

    def __init__(self, message: str, position: int | None = None):
        self.position = position
        super().__init__(message)

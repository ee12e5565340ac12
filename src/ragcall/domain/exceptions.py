"""Domain exceptions."""


class RagCallError(Exception):
    """Base exception for ragcall."""

    retryable = False


class InvalidConfiguration(RagCallError):
    """Startup-time configuration is invalid (chunk parameters, dimensions, tools)."""

    pass


class DimensionMismatch(InvalidConfiguration):
    """Vector length differs from the index dimensionality."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Expected vector of dimension {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class ProviderUnavailable(RagCallError):
    """Embedding or completion provider is unreachable or returned 5xx."""

    retryable = True


class ProviderTimeout(ProviderUnavailable):
    """Provider did not answer in time."""

    pass


class RateLimited(RagCallError):
    """Provider rejected the request because of rate limits."""

    retryable = True


class InvalidInput(RagCallError):
    """Caller supplied invalid input (empty document, malformed tool arguments)."""

    pass


class NotFound(RagCallError):
    """Requested resource was not found."""

    pass


class UnreadableFormat(NotFound):
    """Document exists but its format cannot be read."""

    pass


class RetrievalUnavailable(RagCallError):
    """Vector index cannot be reached or restored."""

    pass


class ToolProtocolError(RagCallError):
    """Model violated the tool-calling protocol."""

    pass

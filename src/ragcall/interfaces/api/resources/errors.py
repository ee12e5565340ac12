"""Mapping of domain errors to HTTP responses."""

import falcon
import falcon.asgi

from ragcall.domain.exceptions import (
    InvalidConfiguration,
    InvalidInput,
    NotFound,
    ProviderTimeout,
    ProviderUnavailable,
    RagCallError,
    RateLimited,
    RetrievalUnavailable,
    ToolProtocolError,
)

# Most specific first.
_STATUS_BY_ERROR: tuple[tuple[type[RagCallError], str], ...] = (
    (InvalidInput, falcon.HTTP_400),
    (NotFound, falcon.HTTP_404),
    (RateLimited, falcon.HTTP_429),
    (ProviderTimeout, falcon.HTTP_504),
    (ProviderUnavailable, falcon.HTTP_503),
    (RetrievalUnavailable, falcon.HTTP_503),
    (ToolProtocolError, falcon.HTTP_502),
    (InvalidConfiguration, falcon.HTTP_500),
)


def status_for(error: RagCallError) -> str:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return falcon.HTTP_500


def respond_with_error(resp: falcon.asgi.Response, error: RagCallError) -> None:
    """Set status and body for a domain error."""
    resp.status = status_for(error)
    resp.media = {"error": str(error), "type": type(error).__name__, "retryable": error.retryable}

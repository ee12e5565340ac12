"""Unit tests for domain exceptions."""

import pytest

from ragcall.domain.exceptions import (
    DimensionMismatch,
    InvalidConfiguration,
    InvalidInput,
    NotFound,
    ProviderTimeout,
    ProviderUnavailable,
    RagCallError,
    RateLimited,
    RetrievalUnavailable,
    ToolProtocolError,
    UnreadableFormat,
)


@pytest.mark.parametrize(
    "exc",
    [
        InvalidConfiguration,
        InvalidInput,
        NotFound,
        ProviderUnavailable,
        RateLimited,
        RetrievalUnavailable,
        ToolProtocolError,
    ],
)
def test_inherits_ragcall_error(exc) -> None:
    assert issubclass(exc, RagCallError)


def test_retryable_flags() -> None:
    assert ProviderUnavailable.retryable
    assert ProviderTimeout.retryable
    assert RateLimited.retryable
    assert not InvalidInput.retryable
    assert not RetrievalUnavailable.retryable


def test_specialisations() -> None:
    assert issubclass(ProviderTimeout, ProviderUnavailable)
    assert issubclass(UnreadableFormat, NotFound)
    assert issubclass(DimensionMismatch, InvalidConfiguration)


def test_dimension_mismatch_carries_sizes() -> None:
    with pytest.raises(RagCallError, match="dimension 768, got 384") as info:
        raise DimensionMismatch(768, 384)
    assert info.value.expected == 768
    assert info.value.actual == 384


def test_exception_message_preserved() -> None:
    msg = "Tool 'launch_rocket' is not registered"
    with pytest.raises(NotFound, match=msg):
        raise NotFound(msg)

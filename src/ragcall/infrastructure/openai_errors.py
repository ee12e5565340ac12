"""Mapping of OpenAI SDK errors to domain errors, and the shared retry policy."""

import logging

import openai
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from ragcall.domain.exceptions import (
    InvalidInput,
    ProviderTimeout,
    ProviderUnavailable,
    RagCallError,
    RateLimited,
)

logger = logging.getLogger(__name__)


def map_openai_error(error: openai.OpenAIError) -> RagCallError:
    """Translate an SDK exception into the domain taxonomy."""
    if isinstance(error, openai.RateLimitError):
        return RateLimited(str(error))
    if isinstance(error, openai.APITimeoutError):
        return ProviderTimeout(str(error))
    if isinstance(error, (openai.APIConnectionError, openai.InternalServerError)):
        return ProviderUnavailable(str(error))
    if isinstance(error, (openai.BadRequestError, openai.UnprocessableEntityError)):
        return InvalidInput(str(error))
    if isinstance(error, openai.APIStatusError) and error.status_code >= 500:
        return ProviderUnavailable(str(error))
    return ProviderUnavailable(f"Unexpected provider error: {error}")


def _is_retryable(error: BaseException) -> bool:
    return isinstance(error, RagCallError) and error.retryable


def provider_retrying(max_attempts: int, max_wait: float = 20.0) -> AsyncRetrying:
    """Bounded exponential backoff for retryable provider errors."""
    return AsyncRetrying(
        retry=retry_if_exception(_is_retryable),
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=max_wait),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )

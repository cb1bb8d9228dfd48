# ABOUTME: Dependency container for weather queries using Pydantic BaseModel.
# ABOUTME: Holds the httpx.AsyncClient and API base URLs used by the weather service.

import httpx
from pydantic import BaseModel, ConfigDict
from pydantic_ai.retries import AsyncTenacityTransport, RetryConfig, wait_retry_after
from tenacity import retry_if_exception, stop_after_attempt

DEFAULT_BASE_URL = "https://api.open-meteo.com/v1"
DEFAULT_GEO_BASE_URL = "https://geocoding-api.open-meteo.com/v1"
DEFAULT_TIMEOUT = 10.0

RETRYABLE_STATUS = frozenset({429, 500, 502, 503, 504})


class WeatherDeps(BaseModel):
    """Everything the weather service needs to reach the APIs."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    http_client: httpx.AsyncClient
    base_url: str = DEFAULT_BASE_URL
    geo_base_url: str = DEFAULT_GEO_BASE_URL


def create_http_client(timeout: float = DEFAULT_TIMEOUT, retries: int = 0) -> httpx.AsyncClient:
    """Create an httpx client, optionally retrying transient HTTP errors.

    With retries > 0, connection errors, read timeouts, and 429/5xx responses are
    retried with Retry-After aware backoff. Other statuses pass straight through.
    """
    if retries <= 0:
        return httpx.AsyncClient(timeout=timeout)

    transport = AsyncTenacityTransport(
        RetryConfig(
            retry=retry_if_exception(_is_transient),
            wait=wait_retry_after(max_wait=30),
            stop=stop_after_attempt(retries + 1),
            reraise=True,
        ),
        validate_response=_raise_for_retryable_status,
    )
    return httpx.AsyncClient(transport=transport, timeout=timeout)


def _is_transient(exc: BaseException) -> bool:
    if isinstance(exc, (httpx.ConnectError, httpx.ReadTimeout)):
        return True
    return isinstance(exc, httpx.HTTPStatusError) and exc.response.status_code in RETRYABLE_STATUS


def _raise_for_retryable_status(response: httpx.Response) -> None:
    if response.status_code in RETRYABLE_STATUS:
        response.raise_for_status()

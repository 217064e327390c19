"""Transport helpers shared by the provider clients.

Both providers speak bearer-authenticated JSON. Transport failures are
turned into transient ProviderErrors here; HTTP error bodies are handed
back to the client, which knows its provider's error vocabulary.
"""

from __future__ import annotations

from typing import Any

import httpx

from custom_domains.domain.enums import ProviderName
from custom_domains.domain.exceptions import ProviderError
from custom_domains.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

NETWORK_ERROR_CODE = "network_error"
TIMEOUT_CODE = "timeout"
INVALID_RESPONSE_CODE = "invalid_response"


def bearer_headers(token: str) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
    }


async def send(
    client: httpx.AsyncClient,
    provider: ProviderName,
    method: str,
    url: str,
    *,
    headers: dict[str, str],
    params: dict[str, str] | None = None,
    json: dict[str, Any] | None = None,
    timeout: float | None = None,
) -> httpx.Response:
    """Send one request; network failures and timeouts raise transient ProviderError."""
    try:
        return await client.request(
            method,
            url,
            headers=headers,
            params=params,
            json=json,
            timeout=timeout,
        )
    except httpx.TimeoutException as e:
        logger.warning("%s %s %s timed out", provider.value, method, url)
        raise ProviderError(provider, TIMEOUT_CODE, str(e) or "Request timed out") from e
    except httpx.TransportError as e:
        logger.warning("%s %s %s failed: %s", provider.value, method, url, e)
        raise ProviderError(provider, NETWORK_ERROR_CODE, str(e) or type(e).__name__) from e


def json_body(response: httpx.Response) -> Any:
    """Decoded JSON body, or {} for an empty or non-JSON body."""
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError:
        return {}


def json_object(response: httpx.Response, provider: ProviderName) -> dict[str, Any]:
    """Body of a successful response, which must be a JSON object.

    Raises:
        ProviderError: Transient invalid_response for a list, scalar or other shape.
    """
    body = json_body(response)
    if not isinstance(body, dict):
        logger.warning(
            "%s returned a %s body for %s %s",
            provider.value,
            type(body).__name__,
            response.request.method,
            response.request.url,
        )
        raise ProviderError(
            provider,
            INVALID_RESPONSE_CODE,
            f"Unexpected response body from {provider.value} provider",
            status_code=response.status_code,
        )
    return body

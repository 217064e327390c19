"""Tests for VercelDomainClient against httpx.MockTransport."""

import json

import httpx
import pytest

from custom_domains.domain.enums import ProviderName
from custom_domains.domain.exceptions import ProviderError
from custom_domains.infrastructure.external.hosting import (
    HostingProviderConfig,
    VercelDomainClient,
)

CONFIG = HostingProviderConfig(
    api_token="vercel-token", project_id="prj_123", team_id="team_9"
)


def _client(handler) -> VercelDomainClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return VercelDomainClient(CONFIG, http_client=http)


def _error(status: int, code: str, message: str = "failed") -> httpx.Response:
    return httpx.Response(status, json={"error": {"code": code, "message": message}})


async def test_register_posts_domain_with_team_and_bearer_token() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "name": "example.com",
                "verified": False,
                "verification": [
                    {
                        "type": "TXT",
                        "domain": "_vercel.example.com",
                        "value": "vc-domain-verify=example.com,abc",
                        "reason": "pending_domain_verification",
                    }
                ],
            },
        )

    result = await _client(handler).register("example.com")

    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/v10/projects/prj_123/domains"
    assert request.url.params["teamId"] == "team_9"
    assert request.headers["Authorization"] == "Bearer vercel-token"
    assert json.loads(request.content) == {"name": "example.com"}
    assert result.provider_id == "example.com"
    assert result.verified is False
    assert result.challenge_records[0].domain == "_vercel.example.com"


@pytest.mark.parametrize("code", ["domain_already_in_use", "domain_already_exists"])
async def test_register_already_attached_is_success(code: str) -> None:
    """Registration is idempotent: "already exists" returns the same id, unverified."""
    result = await _client(lambda r: _error(409, code)).register("example.com")
    assert result.provider_id == "example.com"
    assert result.verified is False
    assert result.already_registered is True


async def test_register_invalid_domain_is_fatal() -> None:
    with pytest.raises(ProviderError) as exc_info:
        await _client(lambda r: _error(400, "invalid_domain", "Invalid domain")).register("x.com")
    err = exc_info.value
    assert err.provider == ProviderName.HOSTING
    assert err.fatal is True
    assert err.is_invalid_domain is True
    assert err.status_code == 400


@pytest.mark.parametrize(
    ("status", "code", "fatal"),
    [
        (500, "internal_server_error", False),
        (429, "rate_limited", False),
        (401, "unauthorized", False),
        (403, "forbidden", True),
        (403, "not_allowed", True),
        (400, "some_new_code", False),
    ],
)
async def test_error_classification(status: int, code: str, fatal: bool) -> None:
    with pytest.raises(ProviderError) as exc_info:
        await _client(lambda r: _error(status, code)).register("example.com")
    assert exc_info.value.fatal is fatal
    assert exc_info.value.code == code


async def test_error_without_body_uses_http_status_code() -> None:
    with pytest.raises(ProviderError) as exc_info:
        await _client(lambda r: httpx.Response(502)).register("example.com")
    assert exc_info.value.code == "http_502"
    assert exc_info.value.fatal is False


async def test_network_error_is_transient() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ProviderError) as exc_info:
        await _client(handler).check_status("example.com")
    assert exc_info.value.code == "network_error"
    assert exc_info.value.fatal is False


async def test_timeout_is_transient() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(ProviderError) as exc_info:
        await _client(handler).check_status("example.com")
    assert exc_info.value.code == "timeout"
    assert exc_info.value.fatal is False


async def test_check_status_combines_domain_and_config() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/v9/projects/prj_123/domains/example.com":
            return httpx.Response(200, json={"name": "example.com", "verified": True})
        if request.url.path == "/v6/domains/example.com/config":
            return httpx.Response(200, json={"misconfigured": False, "configuredBy": "A"})
        return httpx.Response(404)

    status = await _client(handler).check_status("example.com")
    assert status.verified is True
    assert status.dns_configured is True
    assert status.configured_by == "A"


async def test_check_status_misconfigured() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if "/config" in request.url.path:
            return httpx.Response(200, json={"misconfigured": True, "configuredBy": None})
        return httpx.Response(200, json={"verified": True})

    status = await _client(handler).check_status("example.com")
    assert status.dns_configured is False
    assert status.configured_by is None


async def test_check_status_unknown_domain_is_fatal_not_found() -> None:
    with pytest.raises(ProviderError) as exc_info:
        await _client(lambda r: _error(404, "not_found")).check_status("example.com")
    assert exc_info.value.code == "not_found"
    assert exc_info.value.fatal is True


async def test_check_status_config_server_error_is_transient() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if "/config" in request.url.path:
            return httpx.Response(503)
        return httpx.Response(200, json={"verified": True})

    with pytest.raises(ProviderError) as exc_info:
        await _client(handler).check_status("example.com")
    assert exc_info.value.fatal is False


@pytest.mark.parametrize("body", [[{"name": "example.com"}], "ok", 42])
async def test_register_non_object_body_is_transient_invalid_response(body) -> None:
    with pytest.raises(ProviderError) as exc_info:
        await _client(lambda r: httpx.Response(200, json=body)).register("example.com")
    assert exc_info.value.code == "invalid_response"
    assert exc_info.value.fatal is False
    assert exc_info.value.provider == ProviderName.HOSTING


async def test_check_status_non_object_config_body_is_transient() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if "/config" in request.url.path:
            return httpx.Response(200, json=[])
        return httpx.Response(200, json={"verified": True})

    with pytest.raises(ProviderError) as exc_info:
        await _client(handler).check_status("example.com")
    assert exc_info.value.code == "invalid_response"
    assert exc_info.value.fatal is False


@pytest.mark.parametrize("status", [200, 204, 404])
async def test_deregister_success_and_missing(status: int) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(status)

    await _client(handler).deregister("example.com")
    assert seen[0].method == "DELETE"
    assert seen[0].url.path == "/v9/projects/prj_123/domains/example.com"


async def test_no_team_id_means_no_query_param() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client = VercelDomainClient(
        HostingProviderConfig(api_token="t", project_id="p"), http_client=http
    )
    await client.deregister("example.com")
    assert "teamId" not in seen[0].url.params

import asyncio
import dataclasses
import json
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from adapters.google.mock_data import MOCK_ROWS, mock_rows
from adapters.google.search_term import GoogleSearchTermAdapter, map_search_term_row
from config.settings import GoogleAdsSettings
from core.models.search_terms import Row
from core.services.query_builder import build_search_term_query
from exceptions.custom_exceptions import GoogleAdsAuthException

QUERY = build_search_term_query("2024-06-01", "2024-06-30")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _google_ads_transport(stream_payload, requests: list, stream_status: int = 200):
    """MockTransport answering the OAuth token exchange and searchStream."""

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.host == "oauth2.googleapis.com":
            return httpx.Response(200, json={"access_token": "access-123", "expires_in": 3600})
        return httpx.Response(stream_status, json=stream_payload)

    return httpx.MockTransport(handler)


# ---------------------------------------------------------------------------
# Mock fallback
# ---------------------------------------------------------------------------


def test_mock_dataset_is_fixed():
    rows = mock_rows()

    assert len(rows) == 5
    assert rows[0] == Row(
        search_term="free resume template",
        date="2024-05-01",
        campaign_id="1234567890",
        ad_group_id="1111111111",
        impressions=120,
        clicks=25,
        cost_micros=1_750_000,
        conversions=0,
    )
    assert [r.search_term for r in rows] == [
        "free resume template",
        "how to write a resume",
        "executive recruiting services",
        "job board for developers",
        "resume review service",
    ]
    # Callers get a fresh list each time
    rows.clear()
    assert len(mock_rows()) == 5


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "missing",
    ["developer_token", "client_id", "client_secret", "refresh_token"],
)
@pytest.mark.parametrize("blank", ["", "   "])
async def test_missing_credential_returns_mock_rows_without_network(
    live_settings, missing, blank
):
    settings = dataclasses.replace(live_settings, **{missing: blank})
    adapter = GoogleSearchTermAdapter(settings)

    with patch.object(adapter.client, "search_stream", new_callable=AsyncMock) as mock_search:
        rows = await adapter.resolve_rows(QUERY, "1234567890")

    assert rows == list(MOCK_ROWS)
    mock_search.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("customer_id", [None, ""])
async def test_missing_customer_id_returns_mock_rows(live_settings, customer_id):
    adapter = GoogleSearchTermAdapter(live_settings)

    with patch.object(adapter.client, "search_stream", new_callable=AsyncMock) as mock_search:
        rows = await adapter.resolve_rows(QUERY, customer_id)

    assert rows == list(MOCK_ROWS)
    mock_search.assert_not_called()


@pytest.mark.asyncio
async def test_upstream_exception_falls_back_to_mock_rows(live_settings):
    adapter = GoogleSearchTermAdapter(live_settings)

    with patch.object(
        adapter.client,
        "search_stream",
        new_callable=AsyncMock,
        side_effect=GoogleAdsAuthException("token revoked"),
    ):
        rows = await adapter.resolve_rows(QUERY, "1234567890")

    assert rows == list(MOCK_ROWS)


@pytest.mark.asyncio
async def test_upstream_http_error_falls_back_to_mock_rows(live_settings):
    requests = []
    error_body = [{"error": {"code": 500, "message": "Internal error encountered."}}]
    async with httpx.AsyncClient(
        transport=_google_ads_transport(error_body, requests, stream_status=500)
    ) as http_client:
        adapter = GoogleSearchTermAdapter(live_settings, http_client=http_client)
        rows = await adapter.resolve_rows(QUERY, "1234567890")

    assert rows == list(MOCK_ROWS)
    assert len(requests) == 2


@pytest.mark.asyncio
async def test_oauth_failure_falls_back_to_mock_rows(live_settings):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": "invalid_grant"})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
        adapter = GoogleSearchTermAdapter(live_settings, http_client=http_client)
        rows = await adapter.resolve_rows(QUERY, "1234567890")

    assert rows == list(MOCK_ROWS)


@pytest.mark.asyncio
async def test_malformed_upstream_response_falls_back_to_mock_rows(live_settings):
    requests = []
    payload = [{"results": [{
        "searchTermView": {"searchTerm": "crm"},
        "segments": {"date": "2024-06-01"},
        "metrics": {"clicks": "not-a-number"},
    }]}]
    async with httpx.AsyncClient(transport=_google_ads_transport(payload, requests)) as http_client:
        adapter = GoogleSearchTermAdapter(live_settings, http_client=http_client)
        rows = await adapter.resolve_rows(QUERY, "1234567890")

    assert rows == list(MOCK_ROWS)


@pytest.mark.asyncio
async def test_slow_upstream_times_out_to_mock_rows(live_settings):
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(5)
        return httpx.Response(200, json={})

    settings = dataclasses.replace(live_settings, timeout_seconds=0.05)
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
        adapter = GoogleSearchTermAdapter(settings, http_client=http_client)
        rows = await adapter.resolve_rows(QUERY, "1234567890")

    assert rows == list(MOCK_ROWS)


# ---------------------------------------------------------------------------
# Live path
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_live_rows_are_mapped_from_search_stream(live_settings, search_stream_payload):
    requests = []
    async with httpx.AsyncClient(
        transport=_google_ads_transport(search_stream_payload, requests)
    ) as http_client:
        adapter = GoogleSearchTermAdapter(live_settings, http_client=http_client)
        rows = await adapter.resolve_rows(QUERY, "123-456-7890")

    assert rows == [
        Row(
            search_term="free crm software",
            date="2024-06-01",
            campaign_id="555",
            ad_group_id="777",
            impressions=300,
            clicks=12,
            cost_micros=4_560_000,
            conversions=0.5,
        ),
        Row(
            search_term="crm for recruiters",
            date="2024-06-02",
            campaign_id="555",
            ad_group_id=None,
            impressions=0,
            clicks=0,
            cost_micros=None,
            conversions=0,
        ),
    ]

    token_request, stream_request = requests
    assert token_request.url == "https://oauth2.googleapis.com/token"
    assert b"grant_type=refresh_token" in token_request.content

    assert stream_request.url.path == "/v21/customers/1234567890/googleAds:searchStream"
    assert stream_request.headers["authorization"] == "Bearer access-123"
    assert stream_request.headers["developer-token"] == "dev-token"
    assert stream_request.headers["login-customer-id"] == "9998887777"
    assert json.loads(stream_request.content) == {"query": QUERY}


@pytest.mark.asyncio
async def test_access_token_is_reused_between_calls(live_settings, search_stream_payload):
    requests = []
    async with httpx.AsyncClient(
        transport=_google_ads_transport(search_stream_payload, requests)
    ) as http_client:
        adapter = GoogleSearchTermAdapter(live_settings, http_client=http_client)
        await adapter.resolve_rows(QUERY, "1234567890")
        await adapter.resolve_rows(QUERY, "1234567890")

    token_requests = [r for r in requests if r.url.host == "oauth2.googleapis.com"]
    assert len(token_requests) == 1
    assert len(requests) == 3


@pytest.mark.asyncio
async def test_login_customer_header_omitted_when_not_configured(
    live_settings, search_stream_payload
):
    requests = []
    settings = dataclasses.replace(live_settings, login_customer_id=None)
    async with httpx.AsyncClient(
        transport=_google_ads_transport(search_stream_payload, requests)
    ) as http_client:
        adapter = GoogleSearchTermAdapter(settings, http_client=http_client)
        await adapter.resolve_rows(QUERY, "1234567890")

    assert "login-customer-id" not in requests[-1].headers


def test_map_search_term_row_skips_entries_without_search_term():
    assert map_search_term_row({"segments": {"date": "2024-06-01"}}) is None
    assert map_search_term_row({"searchTermView": {"searchTerm": "crm"}}) is None


def test_map_search_term_row_stringifies_numeric_ids():
    row = map_search_term_row({
        "searchTermView": {"searchTerm": "crm"},
        "segments": {"date": "2024-06-01"},
        "campaign": {"id": 42},
        "adGroup": {"id": 7},
        "metrics": {"impressions": 5, "clicks": 1, "costMicros": 0, "conversions": 1},
    })

    assert row.campaign_id == "42"
    assert row.ad_group_id == "7"
    assert row.cost_micros == 0


def test_settings_without_credentials_report_missing():
    assert GoogleAdsSettings().has_credentials is False

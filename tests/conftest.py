"""
Shared fixtures: Google Ads settings, sample rows and upstream payloads.
"""

import pytest

from config.settings import GoogleAdsSettings, REQUIRED_CREDENTIAL_VARS
from core.models.search_terms import Row


@pytest.fixture(autouse=True)
def clear_google_ads_env(monkeypatch):
    """Keep real credentials from a developer shell or .env out of the tests."""
    for name in REQUIRED_CREDENTIAL_VARS + (
        "GOOGLE_ADS_LOGIN_CUSTOMER_ID",
        "GOOGLE_ADS_API_VERSION",
        "GOOGLE_ADS_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def live_settings() -> GoogleAdsSettings:
    return GoogleAdsSettings(
        developer_token="dev-token",
        client_id="client-id.apps.googleusercontent.com",
        client_secret="client-secret",
        refresh_token="refresh-token",
        login_customer_id="999-888-7777",
        timeout_seconds=5,
    )


@pytest.fixture
def make_row():
    def _make_row(search_term: str = "executive recruiting services", **overrides) -> Row:
        fields = {
            "search_term": search_term,
            "date": "2024-05-01",
            "campaign_id": "1234567890",
            "ad_group_id": "1111111111",
            "impressions": 100,
            "clicks": 10,
            "cost_micros": 1_000_000,
            "conversions": 2,
            **overrides,
        }
        return Row(**fields)

    return _make_row


@pytest.fixture
def search_stream_payload() -> list:
    """googleAds:searchStream REST response: one batch, int64 values as strings."""
    return [
        {
            "results": [
                {
                    "searchTermView": {"searchTerm": "free crm software"},
                    "segments": {"date": "2024-06-01"},
                    "campaign": {"id": "555"},
                    "adGroup": {"id": "777"},
                    "metrics": {
                        "impressions": "300",
                        "clicks": "12",
                        "costMicros": "4560000",
                        "conversions": 0.5,
                    },
                },
                {
                    "searchTermView": {"searchTerm": "crm for recruiters"},
                    "segments": {"date": "2024-06-02"},
                    "campaign": {"id": "555"},
                    "metrics": {},
                },
                {
                    "segments": {"date": "2024-06-02"},
                    "metrics": {"clicks": "3"},
                },
            ],
            "fieldMask": "searchTermView.searchTerm,segments.date",
        }
    ]

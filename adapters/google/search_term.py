import asyncio
from typing import Any, Optional

import httpx
from structlog import get_logger

from adapters.google.client import GoogleAdsClient
from adapters.google.mock_data import mock_rows
from config.settings import GoogleAdsSettings
from core.models.search_terms import Row
from utils.helpers import normalize_customer_id

logger = get_logger(__name__)


def _to_int(value: Any) -> int:
    # int64 metrics arrive as JSON strings in the REST API
    if value is None or value == "":
        return 0
    return int(value)


def _to_float(value: Any) -> float:
    if value is None or value == "":
        return 0.0
    return float(value)


def _to_identifier(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def map_search_term_row(entry: dict) -> Optional[Row]:
    """REST searchStream result -> Row. None when the entry has no search term or date."""
    search_term = (entry.get("searchTermView") or {}).get("searchTerm")
    date = (entry.get("segments") or {}).get("date")
    if not search_term or not date:
        return None

    metrics = entry.get("metrics") or {}
    cost_micros = metrics.get("costMicros")
    return Row(
        search_term=search_term,
        date=date,
        campaign_id=_to_identifier((entry.get("campaign") or {}).get("id")),
        ad_group_id=_to_identifier((entry.get("adGroup") or {}).get("id")),
        impressions=_to_int(metrics.get("impressions")),
        clicks=_to_int(metrics.get("clicks")),
        cost_micros=None if cost_micros is None else _to_int(cost_micros),
        conversions=_to_float(metrics.get("conversions")),
    )


class GoogleSearchTermAdapter:
    """Resolves search term rows from Google Ads, or the mock dataset.

    Mock rows are returned when credentials are incomplete, when no customer
    id is given, or when the live call fails or times out. resolve_rows never
    raises for upstream problems.
    """

    def __init__(
        self,
        settings: GoogleAdsSettings,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.settings = settings
        self.client = GoogleAdsClient(settings, http_client=http_client)

    async def resolve_rows(self, query: str, customer_id: Optional[str] = None) -> list[Row]:
        if not self.settings.has_credentials:
            logger.info("Using mock search term data (missing Google Ads credentials)")
            return mock_rows()

        if not customer_id:
            logger.info("Using mock search term data (no customerId provided)")
            return mock_rows()

        account_id = normalize_customer_id(customer_id)
        try:
            rows = await asyncio.wait_for(
                self._fetch_live(query, account_id),
                timeout=self.settings.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.error(
                "Google Ads query timed out, falling back to mock data",
                account_id=account_id,
                timeout_seconds=self.settings.timeout_seconds,
            )
            return mock_rows()
        except Exception as e:
            logger.error(
                "Failed to query Google Ads API, falling back to mock data",
                account_id=account_id,
                error=str(e),
                exc_info=True,
            )
            return mock_rows()

        logger.info("Search terms fetched", account_id=account_id, total=len(rows))
        return rows

    async def _fetch_live(self, query: str, account_id: str) -> list[Row]:
        login_customer_id = (
            normalize_customer_id(self.settings.login_customer_id)
            if self.settings.login_customer_id
            else None
        )
        results = await self.client.search_stream(
            query=query,
            customer_id=account_id,
            login_customer_id=login_customer_id,
        )

        rows = []
        dropped = 0
        for entry in results:
            row = map_search_term_row(entry)
            if row is None:
                dropped += 1
                continue
            rows.append(row)

        if dropped:
            logger.warning(
                "Dropped search term records without search term or date",
                account_id=account_id,
                dropped=dropped,
            )
        return rows

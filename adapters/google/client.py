import time

import httpx
import structlog

from config.settings import GoogleAdsSettings
from core.infrastructure.http_client import http_request
from exceptions.custom_exceptions import (
    GoogleAPIException,
    GoogleAdsAuthException,
    GoogleAdsValidationException,
)

logger = structlog.get_logger(__name__)

GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"


class GoogleAdsClient:
    BASE_URL = "https://googleads.googleapis.com"

    def __init__(
        self,
        settings: GoogleAdsSettings,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings
        self.http_client = http_client
        self._access_token: str | None = None
        self._access_token_expiry: float = 0

    async def search_stream(
        self, query: str, customer_id: str, login_customer_id: str | None = None
    ) -> list:
        """Execute GAQL via googleAds:searchStream and flatten the batches."""
        token = await self._get_access_token()
        url = (
            f"{self.BASE_URL}/{self.settings.api_version}"
            f"/customers/{customer_id}/googleAds:searchStream"
        )
        response = await http_request(
            "POST",
            url,
            client=self.http_client,
            headers=self._build_auth_headers(token, login_customer_id),
            json={"query": query},
            error_handler=_raise_google_error,
        )
        return self._parse_stream(response.json())

    async def _get_access_token(self) -> str:
        if self._access_token and time.time() < self._access_token_expiry:
            return self._access_token

        response = await http_request(
            "POST",
            GOOGLE_TOKEN_URL,
            client=self.http_client,
            data={
                "grant_type": "refresh_token",
                "refresh_token": self.settings.refresh_token,
                "client_id": self.settings.client_id,
                "client_secret": self.settings.client_secret,
            },
            error_handler=_raise_oauth_error,
        )
        token_data = response.json()
        access_token = token_data.get("access_token")
        if not access_token:
            raise GoogleAdsAuthException(
                message="Google OAuth response did not include an access token",
            )

        self._access_token = access_token
        self._access_token_expiry = time.time() + token_data.get("expires_in", 3600) - 60
        logger.info("Google OAuth token refreshed", component="google-auth")
        return access_token

    def _build_auth_headers(
        self, access_token: str, login_customer_id: str | None = None
    ) -> dict:
        headers = {
            "Authorization": f"Bearer {access_token}",
            "developer-token": self.settings.developer_token,
            "Content-Type": "application/json",
        }
        if login_customer_id:
            headers["login-customer-id"] = login_customer_id
        return headers

    def _parse_stream(self, response_json) -> list:
        if isinstance(response_json, list):
            results = []
            for batch in response_json:
                results.extend(batch.get("results", []))
            return results
        logger.warning("SearchStream returned non-list response")
        return response_json.get("results", [])


def _raise_oauth_error(response: httpx.Response) -> None:
    logger.error(
        "OAuth token refresh failed",
        component="google-auth",
        status=response.status_code,
        error=response.text,
    )
    raise GoogleAdsAuthException(
        message="Google OAuth token refresh failed. Check GOOGLE_ADS_REFRESH_TOKEN, CLIENT_ID, and CLIENT_SECRET",
        details={"status": response.status_code, "error": response.text},
    )


def _raise_google_error(response: httpx.Response) -> None:
    """Parse Google Ads API error response and raise structured exception."""
    error_message = f"Google Ads API failed: {response.status_code}"
    error_context = {"status_code": response.status_code}

    try:
        # searchStream wraps the error object in a list
        payload = response.json()
        if isinstance(payload, list) and payload:
            payload = payload[0]
        error_payload = payload.get("error", {}) if isinstance(payload, dict) else {}
        if error_payload:
            error_message = error_payload.get("message", error_message)

            details_list = error_payload.get("details", [])
            if details_list and isinstance(details_list, list):
                # First detail carries the GoogleAdsFailure
                failure_info = details_list[0]
                error_context["errors"] = failure_info.get("errors", [])
                if "requestId" in failure_info:
                    error_context["google_request_id"] = failure_info["requestId"]
    except ValueError:
        error_context["response_text"] = response.text

    if response.status_code in (401, 403):
        raise GoogleAdsAuthException(
            message=f"Google Ads API authentication failed: {error_message}",
            details=error_context,
        )
    if response.status_code == 400:
        raise GoogleAdsValidationException(
            message=f"Google Ads API validation failed: {error_message}",
            details=error_context,
        )
    raise GoogleAPIException(
        message=f"{error_message}",
        details=error_context,
    )

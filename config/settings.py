import os
from collections.abc import Mapping
from dataclasses import dataclass

import structlog

logger = structlog.get_logger(__name__)

REQUIRED_CREDENTIAL_VARS = (
    "GOOGLE_ADS_DEVELOPER_TOKEN",
    "GOOGLE_ADS_CLIENT_ID",
    "GOOGLE_ADS_CLIENT_SECRET",
    "GOOGLE_ADS_REFRESH_TOKEN",
)

DEFAULT_API_VERSION = "v21"
DEFAULT_TIMEOUT_SECONDS = 30.0


def _parse_timeout(raw: str | None) -> float:
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError:
        value = 0.0
    if value <= 0:
        logger.warning(
            "Invalid GOOGLE_ADS_TIMEOUT_SECONDS, using default",
            value=raw,
            default=DEFAULT_TIMEOUT_SECONDS,
        )
        return DEFAULT_TIMEOUT_SECONDS
    return value


@dataclass(frozen=True)
class GoogleAdsSettings:
    developer_token: str = ""
    client_id: str = ""
    client_secret: str = ""
    refresh_token: str = ""
    login_customer_id: str | None = None
    api_version: str = DEFAULT_API_VERSION
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "GoogleAdsSettings":
        env = os.environ if environ is None else environ
        return cls(
            developer_token=env.get("GOOGLE_ADS_DEVELOPER_TOKEN", ""),
            client_id=env.get("GOOGLE_ADS_CLIENT_ID", ""),
            client_secret=env.get("GOOGLE_ADS_CLIENT_SECRET", ""),
            refresh_token=env.get("GOOGLE_ADS_REFRESH_TOKEN", ""),
            login_customer_id=(env.get("GOOGLE_ADS_LOGIN_CUSTOMER_ID") or "").strip() or None,
            api_version=env.get("GOOGLE_ADS_API_VERSION") or DEFAULT_API_VERSION,
            timeout_seconds=_parse_timeout(env.get("GOOGLE_ADS_TIMEOUT_SECONDS")),
        )

    @property
    def has_credentials(self) -> bool:
        """True when all four OAuth/developer secrets are present and non-blank."""
        return all(
            value and value.strip()
            for value in (
                self.developer_token,
                self.client_id,
                self.client_secret,
                self.refresh_token,
            )
        )

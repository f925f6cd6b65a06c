from fastapi import status

class BaseAppException(Exception):
    """Base class for all app-specific exceptions."""
    def __init__(self, message: str, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.message = message
        self.status_code = status_code
        super().__init__(message)

class GoogleAPIException(BaseAppException):
    """Google Ads API call failed."""
    def __init__(
        self,
        message: str = "Google Ads API request failed",
        details: dict = None,
        status_code: int = status.HTTP_502_BAD_GATEWAY,
    ):
        super().__init__(message, status_code)
        self.details = details or {}

class GoogleAdsAuthException(GoogleAPIException):
    """OAuth token exchange or Google Ads authentication failed."""
    def __init__(self, message: str = "Google Ads authentication failed", details: dict = None):
        super().__init__(message, details, status.HTTP_401_UNAUTHORIZED)

class GoogleAdsValidationException(GoogleAPIException):
    """Google Ads rejected the query or its parameters."""
    def __init__(self, message: str = "Google Ads API validation failed", details: dict = None):
        super().__init__(message, details, status.HTTP_400_BAD_REQUEST)


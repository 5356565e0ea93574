"""Application-layer exceptions for use case error handling.

These exceptions represent business logic and dependency errors that can
occur during use case execution. The presentation layer maps them to HTTP
responses; the evaluation pass catches all but AlertStoreUnavailableError.
"""


class ApplicationError(Exception):
    """Base class for all application-layer exceptions."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class InvalidAlertError(ApplicationError):
    """Raised when an alert request fails validation."""

    def __init__(self, reason: str) -> None:
        super().__init__(message=reason, code="INVALID_ALERT")
        self.reason = reason


class AlertNotFoundError(ApplicationError):
    """Raised when no alert exists for a user and symbol."""

    def __init__(self, symbol: str) -> None:
        super().__init__(
            message=f"Alert not found for symbol '{symbol}'",
            code="ALERT_NOT_FOUND",
        )
        self.symbol = symbol


class AlertStoreUnavailableError(ApplicationError):
    """Raised when an evaluation pass cannot even load the active alerts."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            message=f"Could not load active alerts: {reason}",
            code="ALERT_STORE_UNAVAILABLE",
        )
        self.reason = reason


class MarketDataError(ApplicationError):
    """Raised when a quote cannot be fetched for a symbol."""

    def __init__(self, symbol: str, reason: str) -> None:
        super().__init__(
            message=f"Market data unavailable for '{symbol}': {reason}",
            code="MARKET_DATA_ERROR",
        )
        self.symbol = symbol
        self.reason = reason


class EmailDeliveryError(ApplicationError):
    """Raised when the email transport rejects or fails to send a message."""

    def __init__(self, recipient: str, reason: str) -> None:
        super().__init__(
            message=f"Failed to send email to {recipient}: {reason}",
            code="EMAIL_DELIVERY_ERROR",
        )
        self.recipient = recipient
        self.reason = reason

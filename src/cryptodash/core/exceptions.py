"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    status_code = 400

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    status_code = 404

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class MarketDataError(AppError):
    """Raised by providers when the upstream market-data API fails."""

    status_code = 502

    def __init__(self, message: str, code: str = "MARKET_DATA_ERROR"):
        super().__init__(message, code=code)


class RateLimitedError(MarketDataError):
    """Raised when the upstream API rejects a call for exceeding its rate limit."""

    status_code = 429

    def __init__(self, provider: str):
        super().__init__(f"{provider} rate limit exceeded", code="RATE_LIMITED")


class MarketDataUnavailableError(AppError):
    """Raised when neither fresh nor cached market data exists for a request."""

    status_code = 503

    def __init__(self, symbols: list[str]):
        super().__init__(
            f"Market data unavailable for: {', '.join(symbols)}",
            code="MARKET_DATA_UNAVAILABLE",
        )

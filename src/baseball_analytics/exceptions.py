class BaseballAnalyticsException(Exception):
    """Base class for exceptions raised by baseball_analytics."""


class UnknownEraError(BaseballAnalyticsException):
    """Raised when an era name or year range cannot be interpreted."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Unknown era {value!r}: expected a named era, a season (2019) or a range (1990-2010)")
        self.value = value

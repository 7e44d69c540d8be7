"""Domain errors raised by the service layer and translated to HTTP responses in main."""

from typing import Optional


class MarketplaceError(Exception):
    """Base error with an optional underlying cause (usually a SQLAlchemy error)."""
    def __init__(self, message: str, cause: Optional[Exception] = None):
        self.message = message
        self.cause = cause
        super().__init__(message)


class ValidationError(MarketplaceError):
    """Caller-supplied input violates a precondition. Raised before any query is issued."""


class PermissionDenied(MarketplaceError):
    pass


class NotFoundError(MarketplaceError):
    pass


class DuplicateReviewError(MarketplaceError):
    """The consumer has already reviewed this provider."""


class SearchFailed(MarketplaceError):
    pass


class SaveFailed(MarketplaceError):
    pass


class ReviewFailed(MarketplaceError):
    pass

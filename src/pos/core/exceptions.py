"""Domain error taxonomy.

Services raise these; the HTTP layer maps each class to a status code in
``pos.api.errors``.
"""


class POSError(Exception):
    """Base class for all domain errors."""

    message = "internal error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class InternalError(POSError):
    """Serialization, cache or unclassified storage failure."""

    message = "internal error"


class DataNotFoundError(POSError):
    """Referenced entity does not exist."""

    message = "data not found"


class ConflictingDataError(POSError):
    """Unique constraint violation."""

    message = "data conflicts with existing data in unique column"


class NoUpdatedDataError(POSError):
    """Update request is empty or identical to the stored record."""

    message = "no data to update"


class InsufficientStockError(POSError):
    """Requested quantity exceeds product stock."""

    message = "product stock is not enough"


class InsufficientPaymentError(POSError):
    """Amount tendered is lower than the order total."""

    message = "total paid is less than total price"


class InvalidCredentialsError(POSError):
    message = "invalid email or password"


class TokenCreationError(POSError):
    message = "error creating token"


class EmptyAuthorizationHeaderError(POSError):
    message = "authorization header is not provided"


class InvalidAuthorizationHeaderError(POSError):
    message = "authorization header format is invalid"


class InvalidAuthorizationTypeError(POSError):
    message = "authorization type is not supported"


class InvalidTokenError(POSError):
    message = "access token is invalid"


class ExpiredTokenError(POSError):
    message = "access token has expired"


class ForbiddenError(POSError):
    message = "user is forbidden to access the resource"

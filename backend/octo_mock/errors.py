# backend/octo_mock/errors.py
"""
Error taxonomy of the booking API.

Every failure carries a stable `error` code next to its HTTP status so
callers can branch on the kind instead of the number. The HTTP layer turns
an OctoError into `{"error": ..., "errorMessage": ..., **extra}`.
"""

from enum import Enum
from typing import Any


class ErrorCode(Enum):
    BAD_REQUEST = "BAD_REQUEST"
    INVALID_PRODUCT_ID = "INVALID_PRODUCT_ID"
    INVALID_OPTION_ID = "INVALID_OPTION_ID"
    INVALID_UNIT_ID = "INVALID_UNIT_ID"
    INVALID_AVAILABILITY_ID = "INVALID_AVAILABILITY_ID"
    INVALID_BOOKING_UUID = "INVALID_BOOKING_UUID"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class OctoError(Exception):
    """Base error with HTTP status, stable code and user-safe message."""

    status_code = 400
    code = ErrorCode.BAD_REQUEST

    def __init__(self, message: str, **extra: Any) -> None:
        super().__init__(message)
        self.message = message
        self.extra = extra

    @property
    def body(self) -> dict[str, Any]:
        return {
            "error": self.code.value,
            "errorMessage": self.message,
            **self.extra,
        }

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class BadRequestError(OctoError):
    pass


class InvalidRangeError(BadRequestError):
    """Raised when a date range starts after it ends."""

    def __init__(self, start: str, end: str) -> None:
        super().__init__(
            "localDateStart must not be after localDateEnd",
            localDateStart=start,
            localDateEnd=end,
        )


class CapacityExceededError(BadRequestError):
    """Raised when a slot exists but has fewer vacancies than requested."""

    def __init__(self, availability_id: str, requested: int, remaining: int) -> None:
        super().__init__(
            f"not enough capacity: requested {requested}, remaining {remaining}",
            availabilityId=availability_id,
        )
        self.requested = requested
        self.remaining = remaining


class ProductNotFoundError(OctoError):
    code = ErrorCode.INVALID_PRODUCT_ID

    def __init__(self, product_id: str) -> None:
        super().__init__("The productId was missing or invalid", productId=product_id)
        self.product_id = product_id


class OptionNotFoundError(OctoError):
    code = ErrorCode.INVALID_OPTION_ID

    def __init__(self, option_id: str) -> None:
        super().__init__("The optionId was missing or invalid", optionId=option_id)
        self.option_id = option_id


class InvalidUnitIdError(OctoError):
    code = ErrorCode.INVALID_UNIT_ID

    def __init__(self, unit_id: str) -> None:
        super().__init__("The unitId was missing or invalid", unitId=unit_id)
        self.unit_id = unit_id


class InvalidAvailabilityIdError(OctoError):
    """Malformed availability id, or one that matches no generated slot."""

    code = ErrorCode.INVALID_AVAILABILITY_ID

    def __init__(self, availability_id: str) -> None:
        super().__init__(
            "The availabilityId was missing or invalid",
            availabilityId=availability_id,
        )
        self.availability_id = availability_id


class BookingNotFoundError(OctoError):
    code = ErrorCode.INVALID_BOOKING_UUID

    def __init__(self, uuid: str) -> None:
        super().__init__("The uuid was already used, missing or invalid", uuid=uuid)
        self.uuid = uuid


class InternalServerError(OctoError):
    status_code = 500
    code = ErrorCode.INTERNAL_SERVER_ERROR

"""Client-facing error taxonomy.

Every error raised while ingesting or scoring a receipt maps directly
to an HTTP status code and a one-line message. The API layer turns
these into ``{"error": message}`` responses (see
:mod:`receipt_points.api.error_handlers`). None of them are retryable
and none of them indicate a server fault.
"""

from __future__ import annotations

from typing import Optional

from starlette.status import HTTP_400_BAD_REQUEST, HTTP_404_NOT_FOUND


class ReceiptError(Exception):
    """Base class for errors reported back to the client."""

    status_code: int = HTTP_400_BAD_REQUEST
    message: str = "bad request"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MalformedRequest(ReceiptError):
    """The request body is not valid JSON of the expected shape."""

    message = "invalid JSON"


class InvalidField(ReceiptError):
    """A receipt field failed validation."""

    field: str = ""


class InvalidDate(InvalidField):
    field = "purchaseDate"
    message = "invalid purchaseDate format"


class InvalidTime(InvalidField):
    field = "purchaseTime"
    message = "invalid purchaseTime format"


class InvalidTotal(InvalidField):
    field = "total"
    message = "invalid total"


class EmptyItems(InvalidField):
    field = "items"
    message = "at least one item required"


class InvalidItemPrice(InvalidField):
    field = "items.price"
    message = "invalid item price"

    def __init__(self, index: int, message: Optional[str] = None):
        self.index = index
        super().__init__(message)


class ReceiptNotFound(ReceiptError):
    status_code = HTTP_404_NOT_FOUND
    message = "receipt not found"

    def __init__(self, receipt_id: str, message: Optional[str] = None):
        self.receipt_id = receipt_id
        super().__init__(message)

"""
Exceptions raised by the sales report layer.

All exceptions inherit from SalesReportError so callers can catch
any report failure in one place.
"""


class SalesReportError(Exception):
    """Base exception for the sales report layer."""

    pass


class DataAccessError(SalesReportError):
    """Raised when the sales store cannot be queried.

    Wraps the driver exception (connection failure, operation failure)
    so routes can answer with a 500 without leaking driver types.

    Args:
        operation: Name of the query that failed, e.g. "find_by_customer".
        cause: The underlying exception.
        message: User-facing message for the HTTP response body.
    """

    def __init__(self, operation: str, cause: Exception, message: str = "Error fetching sales data"):
        super().__init__(f"{operation} failed: {cause}")
        self.operation = operation
        self.cause = cause
        self.message = message

    def describe_cause(self) -> dict:
        """Serializable description of the underlying cause."""
        return {
            "type": type(self.cause).__name__,
            "detail": str(self.cause),
        }

from typing import Optional


class SyncError(Exception):
    """A pull or push against the table store did not complete."""

    def __init__(self, operation: str, message: str):
        super().__init__(f"{operation}: {message}")
        self.operation = operation
        self.message = message


class FetchFailure(SyncError):
    """The store answered, but not with a usable success response."""

    def __init__(self, operation: str, message: str,
                 status_code: Optional[int] = None):
        super().__init__(operation, message)
        self.status_code = status_code


class TransportFailure(SyncError):
    """The request could not be sent or its response could not be read."""

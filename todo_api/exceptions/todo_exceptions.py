class TodoError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigMissing(TodoError):
    """Raised when the todo table name is not configured."""


class InvalidIdentifier(TodoError):
    """Raised when an owner or item id is not a valid UUID."""

    status_code = 400


class MalformedStoreItem(TodoError):
    """Raised when an item read back from DynamoDB cannot be decoded."""


class StoreUnavailable(TodoError):
    """Raised when a DynamoDB call fails (network, throttling, permissions, deadline)."""

    status_code = 503

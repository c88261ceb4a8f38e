class DomainError(Exception):
    """Base exception class for all domain-specific exceptions."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class ResourceNotFoundError(DomainError):
    """Exception raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        self.resource_type = resource_type
        self.resource_id = resource_id
        message = f"{resource_type} with ID {resource_id} not found"
        super().__init__(message)


class ValidationError(DomainError):
    """Exception raised when validation fails."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class RemoteStoreError(DomainError):
    """A read or write against the remote data store failed.

    The engine treats these as transient: callers log them and keep their
    previous in-memory state.
    """

    def __init__(self, operation: str, table: str, cause: Exception | None = None) -> None:
        self.operation = operation
        self.table = table
        self.cause = cause
        message = f"{operation} on {table} failed"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)

"""Application errors that the app's exception handler turns into JSON responses."""


class OrderDeskError(Exception):
    status_code: int = 500
    error_type: str = "internal_error"

    def __init__(self, message: str = "An internal error occurred") -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(OrderDeskError):
    status_code = 404
    error_type = "not_found"


class CreateFailedError(OrderDeskError):
    """Persisting a new row failed; the message never carries the driver error."""

    status_code = 500
    error_type = "create_failed"


class StorageError(OrderDeskError):
    status_code = 503
    error_type = "storage_error"


class ConflictError(OrderDeskError):
    """A change collided with a unique or foreign-key constraint."""

    status_code = 409
    error_type = "conflict"

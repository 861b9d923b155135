class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

class NotFoundError(AppError):
    """Raised when a teacher, slot or leave id does not resolve."""
    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} with id {resource_id} not found",
            status_code=404,
            details={"resource_type": resource_type, "resource_id": resource_id},
        )

class ValidationError(AppError):
    """Raised for malformed input such as a non-numeric period."""
    def __init__(self, message: str, details: dict = None, status_code: int = 422):
        super().__init__(message, status_code=status_code, details=details)

class InvalidTransitionError(ValidationError):
    """Raised when a leave request has already left the pending state."""
    def __init__(self, leave_id: str, current_status: str, requested_status: str):
        super().__init__(
            f"Leave request {leave_id} is already {current_status}; cannot mark it {requested_status}",
            details={"leave_id": leave_id, "status": current_status, "requested": requested_status},
            status_code=409,
        )

class StorageError(AppError):
    """Raised when the database or export directory cannot be read or written."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=503, details=details)

"""
Marmoraria Control exception hierarchy

Every error raised by the services derives from MarmorariaException. The API
layer turns them into JSON responses of the form:

    {"error": "<ERROR_CODE>", "message": "...", "details": {...}}
"""
from typing import Any, Dict, Optional


class MarmorariaException(Exception):
    """Base class for all application errors"""

    status_code = 500
    error_code = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        if error_code is not None:
            self.error_code = error_code
        if status_code is not None:
            self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(MarmorariaException):
    """Input rejected by a business rule"""

    status_code = 400
    error_code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", None) or {}
        if field:
            details["field"] = field
        super().__init__(message, details=details, **kwargs)
        self.field = field


class CutValidationError(ValidationError):
    """A remnant draft could not be committed as a cut"""

    error_code = "CUT_VALIDATION_ERROR"


class MissingClientNameError(CutValidationError):
    error_code = "MISSING_CLIENT_NAME"

    def __init__(self):
        super().__init__("Client name is required", field="client_name")


class MissingProjectError(CutValidationError):
    error_code = "MISSING_PROJECT"

    def __init__(self):
        super().__init__("Project description is required", field="project")


class InsufficientVerticesError(CutValidationError):
    error_code = "INSUFFICIENT_VERTICES"

    def __init__(self, count: int):
        super().__init__(
            f"A remnant needs at least 3 points, got {count}",
            field="polygon",
            details={"vertex_count": count},
        )


class MissingOperatorError(CutValidationError):
    error_code = "MISSING_OPERATOR"

    def __init__(self):
        super().__init__("An authenticated operator is required to register a cut", field="operator")


class NotFoundError(MarmorariaException):
    status_code = 404
    error_code = "NOT_FOUND"

    def __init__(self, resource: str, resource_id: Any):
        super().__init__(
            f"{resource} not found: {resource_id}",
            details={"resource": resource, "id": resource_id},
        )


class AuthenticationError(MarmorariaException):
    status_code = 401
    error_code = "AUTHENTICATION_FAILED"


class PermissionDeniedError(MarmorariaException):
    status_code = 403
    error_code = "PERMISSION_DENIED"


class ConflictError(MarmorariaException):
    status_code = 409
    error_code = "CONFLICT"


class InsufficientStockError(MarmorariaException):
    status_code = 400
    error_code = "INSUFFICIENT_STOCK"

    def __init__(self, item_id: str, available: float, requested: float):
        super().__init__(
            f"Insufficient stock for {item_id}: {available} available, {requested} requested",
            details={"item_id": item_id, "available": available, "requested": requested},
        )


class SlabExhaustedError(MarmorariaException):
    status_code = 400
    error_code = "SLAB_EXHAUSTED"

    def __init__(self, slab_id: str):
        super().__init__(
            f"Slab {slab_id} is exhausted and cannot be cut",
            details={"slab_id": slab_id},
        )

"""
Custom exception hierarchy for Furniture Search.

Exceptions are categorized by how they surface to the caller:
- ClientError: the request itself is at fault (HTTP 4xx)
- EngineError: the external search engine failed (HTTP 500, opaque)

None of these are retried; the engine is deterministic for a given request.
"""
from typing import Any, Dict, List


class FurnitureSearchException(Exception):
    """Base exception for Furniture Search."""
    pass


# ============================================
# CLIENT ERRORS - Reported as 4xx
# ============================================
class ClientError(FurnitureSearchException):
    """
    Base class for errors caused by the request.

    Carries the HTTP status the error handler should use.
    """
    status_code: int = 400


class RequestValidationFailed(ClientError):
    """
    Request parameters failed schema validation.

    Raised before any engine call. ``details`` lists every failing field.
    """
    def __init__(self, details: List[Dict[str, Any]]):
        self.details = details
        fields = ", ".join(d.get("field", "?") for d in details)
        super().__init__(f"Validation failed: {fields}")


class EngineBusinessError(ClientError):
    """
    Business rule violated inside the engine (error code 51000).

    The engine message is user-facing and returned verbatim.
    """
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class PermissionDeniedError(ClientError):
    """Caller lacks the permission required for the securable."""
    status_code = 403

    def __init__(self, securable: str, permission: str):
        self.securable = securable
        self.permission = permission
        super().__init__(f"Permission {securable}:{permission} required")


# ============================================
# ENGINE ERRORS - Reported as opaque 500
# ============================================
class EngineError(FurnitureSearchException):
    """
    Any failure from the external engine other than a business error.

    Never exposed to the caller beyond a generic message.
    """
    def __init__(self, procedure: str, message: str):
        self.procedure = procedure
        super().__init__(f"Engine procedure {procedure} failed: {message}")


class EngineResultShapeError(EngineError):
    """
    Engine returned a result that does not match the expected shape.

    Raised when a multi-set procedure returns the wrong number of row sets,
    or a single-row procedure returns something other than one row.
    """
    pass

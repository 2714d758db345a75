"""Domain error classes.

Protocol-agnostic errors raised by the aggregation layer. The HTTP entrypoint
translates them to status codes; gateways translate backend failures into them.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain errors.

    Carries a stable error code plus free-form context so that protocol
    adapters can render a structured payload.
    """

    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, **context: Any) -> None:
        """Create a domain error.

        Args:
            message: Human-readable error message
            **context: Additional context (resource names, ids, statuses)
        """
        self.message = message
        self.context = context
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured format for protocol translation."""
        return {
            "message": self.message,
            "code": self.error_code,
            **self.context,
        }


class ValidationError(DomainError):
    """Business rule validation error.

    Examples:
        - page < 1 or limit <= 0
        - price_min > price_max
        - empresa client without CIF

    Protocol mappings:
        - REST: 422 Unprocessable Entity
    """

    error_code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, str]] | None = None,
        **context: Any,
    ) -> None:
        """Create a validation error.

        Args:
            message: Overall validation error message (optional if errors provided)
            errors: Field-level errors, each with 'field' and 'message'
            **context: Additional context
        """
        self.errors: list[dict[str, str]] | None
        if errors:
            self.errors = errors
            msg = message or "Validation failed"
        else:
            self.errors = None
            msg = message or "Validation error"

        super().__init__(msg, **context)

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured format."""
        if self.errors:
            return {
                "message": self.message,
                "code": self.error_code,
                "errors": self.errors,
                **self.context,
            }
        return super().to_dict()


class NotFoundError(DomainError):
    """Resource not found in the backend.

    Protocol mappings:
        - REST: 404 Not Found
    """

    error_code: str = "NOT_FOUND"

    def __init__(self, resource: str, identifier: str | None = None, **context: Any) -> None:
        """Create a not found error.

        Args:
            resource: Type of resource (e.g., "Vehiculo", "Pieza")
            identifier: Resource identifier
            **context: Additional context
        """
        if identifier:
            message = f"{resource} with identifier '{identifier}' not found"
        else:
            message = f"{resource} not found"

        super().__init__(message, resource=resource, identifier=identifier, **context)


class ConflictError(DomainError):
    """Business constraint conflict.

    Examples:
        - Deleting a vehicle that still has parts
        - Deleting a part referenced by an open order

    Protocol mappings:
        - REST: 409 Conflict
    """

    error_code: str = "CONFLICT"


class PartLockedError(ConflictError):
    """A part cannot be deleted while an open order references it.

    Raised before any delete request reaches the backend.
    """

    error_code: str = "PART_LOCKED"

    def __init__(self, part_id: int, order_ids: list[int]) -> None:
        if len(order_ids) == 1:
            message = f"Part {part_id} is included in order {order_ids[0]} and cannot be deleted"
        else:
            message = (
                f"Part {part_id} is included in {len(order_ids)} open orders "
                "and cannot be deleted"
            )
        super().__init__(message, part_id=part_id, order_ids=order_ids)


class BackendUnavailableError(DomainError):
    """The dismantling backend could not be reached or failed.

    Covers connection errors, the fixed request timeout and 5xx answers.

    Protocol mappings:
        - REST: 503 Service Unavailable
    """

    error_code: str = "BACKEND_UNAVAILABLE"


class InvalidResponseError(DomainError):
    """The backend answered with a payload that does not have the expected shape.

    Protocol mappings:
        - REST: 502 Bad Gateway
    """

    error_code: str = "INVALID_BACKEND_RESPONSE"


class BackendRejectedError(DomainError):
    """The backend rejected a request for a business reason (4xx other than 404/409).

    Protocol mappings:
        - REST: 422 Unprocessable Entity
    """

    error_code: str = "BACKEND_REJECTED"


class InternalError(DomainError):
    """Internal error (unexpected conditions).

    Protocol mappings:
        - REST: 500 Internal Server Error
    """

    error_code: str = "INTERNAL_ERROR"

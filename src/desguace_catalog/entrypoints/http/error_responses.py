"""REST API error response models.

Structured error responses that provide consistent format for all HTTP errors.
"""

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """Individual error detail for field-level errors."""

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "precio_min",
                "message": "precio_min cannot be greater than precio_max",
                "code": "INVALID_RANGE",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Structured error response format.

    Examples:
        Backend down:
            {
                "detail": "Could not connect to the backend",
                "code": "BACKEND_UNAVAILABLE"
            }

        Part locked by an order:
            {
                "detail": "Part 7 is included in order 31 and cannot be deleted",
                "code": "PART_LOCKED"
            }
    """

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"detail": "Pieza with identifier '7' not found", "code": "NOT_FOUND"},
                {"detail": "Could not connect to the backend", "code": "BACKEND_UNAVAILABLE"},
                {
                    "detail": "Validation failed",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "foto",
                            "message": "File is empty",
                            "code": "EMPTY_FILE",
                        },
                    ],
                },
            ]
        }
    )

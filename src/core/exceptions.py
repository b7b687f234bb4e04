"""
Domain exceptions for the Controlata warehouse.

Provides specific exception types for different error scenarios.
Negative stock is deliberately absent here: it is a warning carried on
results, not an error.
"""

from typing import Any


class ControlataError(Exception):
    """Base exception for all Controlata errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Storage Exceptions
class StorageError(ControlataError):
    """Base exception for storage operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


# Lookup Exceptions
class NotFoundError(ControlataError):
    """Base exception for unknown entities."""

    pass


class MaterialNotFoundError(NotFoundError):
    """Material not found in the catalog."""

    def __init__(self, material_id: str):
        super().__init__(
            f"Material not found: {material_id}",
            code="MATERIAL_NOT_FOUND",
            details={"material_id": material_id},
        )


class StockNotFoundError(NotFoundError):
    """Material has no stock record in the warehouse."""

    def __init__(self, material_id: str):
        super().__init__(
            f"No stock record for material: {material_id}",
            code="STOCK_NOT_FOUND",
            details={"material_id": material_id},
        )


class PictureNotFoundError(NotFoundError):
    """Picture not found."""

    def __init__(self, picture_id: str):
        super().__init__(
            f"Picture not found: {picture_id}",
            code="PICTURE_NOT_FOUND",
            details={"picture_id": picture_id},
        )


class PictureSizeNotFoundError(NotFoundError):
    """Picture size not found."""

    def __init__(self, picture_size_id: str):
        super().__init__(
            f"Picture size not found: {picture_size_id}",
            code="PICTURE_SIZE_NOT_FOUND",
            details={"picture_size_id": picture_size_id},
        )


# Integrity Exceptions
class DataIntegrityError(ControlataError):
    """Stored data violates a cross-entity expectation."""

    def __init__(self, picture_id: str, material_id: str, reason: str | None = None):
        reason = reason or "material has no stock record"
        super().__init__(
            f"Picture {picture_id} references material {material_id}: {reason}",
            code="DATA_INTEGRITY_ERROR",
            details={
                "picture_id": picture_id,
                "material_id": material_id,
                "reason": reason,
            },
        )


# Validation Exceptions
class ValidationError(ControlataError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class ConfigurationError(ControlataError):
    """Configuration error."""

    pass

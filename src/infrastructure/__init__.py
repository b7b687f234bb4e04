"""Infrastructure layer implementations."""

from src.infrastructure import storage

__all__ = ["storage"]

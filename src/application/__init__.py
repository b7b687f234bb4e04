"""
Application layer - Use cases, DTOs, and service wiring.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate core services
3. Wiring SQLite stores into core services for one connection pool
"""

from src.application.services import ServiceContainer, build_services

__all__ = [
    "ServiceContainer",
    "build_services",
]

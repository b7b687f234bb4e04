"""API route modules."""

from src.api.routes.health import router as health_router
from src.api.routes.materials import router as materials_router
from src.api.routes.pictures import router as pictures_router
from src.api.routes.warehouse import router as warehouse_router

__all__ = [
    "health_router",
    "materials_router",
    "warehouse_router",
    "pictures_router",
]

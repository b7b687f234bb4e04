"""Configuration module."""

from src.config.logging import configure_logging, get_logger
from src.config.settings import (
    BomSettings,
    CostingSettings,
    Settings,
    WarehouseSettings,
    get_settings,
    reset_settings,
)

__all__ = [
    "Settings",
    "BomSettings",
    "CostingSettings",
    "WarehouseSettings",
    "get_settings",
    "reset_settings",
    "configure_logging",
    "get_logger",
]

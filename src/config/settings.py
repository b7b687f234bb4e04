"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Storage configuration."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "controlata.db"

    # SQLite settings
    pool_size: int = 5
    busy_timeout: int = 30000  # ms

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]


class WarehouseSettings(BaseSettings):
    """Stock ledger and movement log configuration."""

    model_config = SettingsConfigDict(env_prefix="WAREHOUSE_")

    default_movement_limit: int = 50
    default_all_movements_limit: int = 100
    stats_window_days: int = 7
    critical_stock_ratio: float = Field(default=0.5, ge=0, le=1)  # share of min_level


class BomSettings(BaseSettings):
    """Bill-of-materials generation constants."""

    model_config = SettingsConfigDict(env_prefix="BOM_")

    canvas_waste_factor: float = 1.1  # 10% waste margin
    paint_per_m2: float = 0.5
    brush_set_size: int = 3


class CostingSettings(BaseSettings):
    """Cost, profit and pricing configuration."""

    model_config = SettingsConfigDict(env_prefix="COSTING_")

    hourly_rate: float = 15.0
    purchase_window: int = 10  # last N purchases for weighted average

    # Recommended price defaults
    markup_percentage: float = 200.0
    min_price: float = 50.0
    max_price: float = 1000.0


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Controlata Warehouse"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-settings
    storage: StorageSettings = Field(default_factory=StorageSettings)
    api: APISettings = Field(default_factory=APISettings)
    warehouse: WarehouseSettings = Field(default_factory=WarehouseSettings)
    bom: BomSettings = Field(default_factory=BomSettings)
    costing: CostingSettings = Field(default_factory=CostingSettings)

    @field_validator("storage", mode="before")
    @classmethod
    def ensure_data_dir(cls, v: Any) -> StorageSettings:
        if isinstance(v, dict):
            settings = StorageSettings(**v)
        else:
            settings = v or StorageSettings()
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        return settings


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None

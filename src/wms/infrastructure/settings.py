"""Runtime settings, read from ``WMS_*`` environment variables or ``.env``."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from wms.domain.model.value_objects import BOX_PRESETS, DEFAULT_BOX_MULTIPLIER


class Settings(BaseSettings):
    # Storage
    data_dir: Path = Field(default=Path(__file__).resolve().parents[3] / "data")

    # Logging
    log_level: str = "INFO"
    log_file: Path | None = None

    # Shipping
    delivery_provider: str = "internal"

    # Receiving station
    box_presets: list[int] = Field(default_factory=lambda: list(BOX_PRESETS))
    default_box_multiplier: int = DEFAULT_BOX_MULTIPLIER

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="WMS_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("box_presets")
    @classmethod
    def _positive_presets(cls, value: list[int]) -> list[int]:
        if any(n < 1 for n in value):
            raise ValueError("box presets must be positive")
        return value

    @field_validator("default_box_multiplier")
    @classmethod
    def _positive_multiplier(cls, value: int) -> int:
        if value < 1:
            raise ValueError("default box multiplier must be at least 1")
        return value

    @property
    def document_path(self) -> Path:
        return self.data_dir / "wms.json"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

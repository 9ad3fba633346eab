"""
Application configuration using pydantic-settings.
Loads from environment variables with .env file support.
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

from knowledge_tree.engines.roadmap.layout_engine import LayoutMode
from knowledge_tree.engines.roadmap.unlock_evaluator import UnlockPolicy


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    database_url: str = "sqlite+aiosqlite:///./knowledge_tree.db"

    # Application
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR

    # API Settings
    api_v1_prefix: str = "/api/v1"
    project_name: str = "Knowledge Tree"
    version: str = "0.1.0"
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Progression
    pass_threshold: int = 80
    unlock_policy: UnlockPolicy = UnlockPolicy.PREREQUISITES

    # Roadmap layout (abstract units, the client scales to pixels)
    layout_mode: LayoutMode = LayoutMode.LAYERED
    layout_horizontal_spacing: float = 400.0
    layout_vertical_spacing: float = 200.0
    layout_x_origin: float = 400.0
    layout_y_origin: float = 100.0
    layout_snake_columns: int = 3


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

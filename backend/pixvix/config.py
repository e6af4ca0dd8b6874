"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    pixvix_env: str = "development"
    pixvix_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:5173"]

    # Sampling
    default_grid_size: int = 10

    # PNG export limits (pixels)
    png_max_dimension: int = 8192
    png_default_scale: int = 10
    png_min_width: int = 100

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()

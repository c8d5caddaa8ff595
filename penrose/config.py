"""Library settings from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    log_level: str = "info"

    # Region and preset used when callers don't supply their own
    default_preset: str = "king"
    default_half_width: float = 40.0
    default_half_height: float = 20.0

    # Fixed-point loop cap
    max_iterations: int = 10_000

    model_config = {"env_prefix": "PENROSE_", "env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()

"""Application settings loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """vitalspan server configuration."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Server
    # Default to loopback so impact data is never exposed to the LAN by accident.
    vitalspan_host: str = "127.0.0.1"
    vitalspan_port: int = 8001
    vitalspan_log_level: str = "info"
    # Refuse non-loopback binds unless set (there is no auth layer).
    vitalspan_allow_insecure_bind: bool = False

    # Target cache storage; empty path keeps the cache in memory
    cache_db_path: str = "~/.vitalspan/targets.db"

    # Encryption of cached values at rest; empty disables encryption
    encryption_key: str = ""

    # Target solver
    solver_max_iterations: int = 25
    solver_tolerance_minutes: float = 0.5
    positive_improvement_factor: float = 0.2

    # Daily target cache
    target_drift_threshold: float = 0.01


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()

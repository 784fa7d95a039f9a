"""Application configuration from environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    env: str = "development"
    log_level: str = "info"

    # Output directories default to <output_root>/<target name>
    output_root: Path = Path("build/generated/icons")

    # Metadata files are shared with other icon processors (png, ico, ...).
    # When set, targets of an unknown type are kept and only fail on request.
    ignore_unknown_target_types: bool = False

    model_config = {
        "env_prefix": "ICONIMPORT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


settings = Settings()

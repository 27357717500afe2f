# noesisgen/config.py
"""
noesisgen configuration: single source of truth via Pydantic Settings.

Resolution order: CLI flags > env vars (NOESISGEN_*) > .env file > defaults.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class NoesisgenConfig(BaseSettings):
    """Central configuration for noesisgen."""

    model_config = SettingsConfigDict(
        env_prefix="NOESISGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Output formatting ---
    indent_level: int = Field(default=2, ge=0)
    verbose: bool = False
    types_only: bool = False

    # --- Project layout ---
    data_subdir: str = ".noesis/data"
    structures_dirname: str = "structures"
    sets_dirname: str = "sets"

    # --- Generated TypeScript ---
    types_module: str = "NoesisTypes"
    image_module: str = "horizon/ui"
    default_font: str = "Bangers"
    data_context_name: str = "dataContext"

    # --- Logging ---
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    home_dir: Path = Field(default_factory=lambda: Path.home() / ".noesisgen")

    @property
    def log_dir(self) -> Path:
        return self.home_dir / "logs"

    def data_dir(self, project_root: Path) -> Path:
        return Path(project_root) / self.data_subdir

    def structures_dir(self, project_root: Path) -> Path:
        return self.data_dir(project_root) / self.structures_dirname

    def sets_dir(self, project_root: Path) -> Path:
        return self.data_dir(project_root) / self.sets_dirname


@lru_cache(maxsize=1)
def get_config() -> NoesisgenConfig:
    """Return the global config singleton."""
    return NoesisgenConfig()

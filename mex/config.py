"""Run settings loaded from the environment and an optional .env file."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values, find_dotenv

from mex.exporters.export_pipeline import (
    DEFAULT_BOOK_TEMPLATE,
    DEFAULT_PAGE_TEMPLATE,
    DEFAULT_VOLUME_TEMPLATE,
    DEFAULT_WORKERS,
    ExportConfig,
)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def parse_bool(value: str) -> bool:
    """Parse a boolean flag value such as "true", "0" or "yes".

    Raises:
        ValueError: If the value is not a recognized boolean
    """
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"invalid boolean value: {value!r}")


@dataclass
class Settings:
    """Defaults for the command-line flags."""

    zip_book: bool = False
    zip_volume: bool = True
    label_page: str = DEFAULT_PAGE_TEMPLATE
    label_volume: str = DEFAULT_VOLUME_TEMPLATE
    label_book: str = DEFAULT_BOOK_TEMPLATE
    workers: int = DEFAULT_WORKERS
    temp_dir: Path | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, dotenv: bool = True) -> Settings:
        """Build settings from MEX_* environment variables.

        Args:
            environ: Variables to read. Defaults to os.environ.
            dotenv: Also read a .env file found from the working directory.
                Real environment variables take precedence over it.

        Returns:
            Settings with environment overrides applied

        Raises:
            ValueError: If a variable holds an invalid value
        """
        env = dict(os.environ if environ is None else environ)
        if dotenv:
            dotenv_path = find_dotenv(usecwd=True)
            if dotenv_path:
                file_values = {k: v for k, v in dotenv_values(dotenv_path).items() if v is not None}
                env = {**file_values, **env}
        settings = cls()

        for var, attr in (("MEX_ZIP_BOOK", "zip_book"), ("MEX_ZIP_VOLUME", "zip_volume")):
            if env.get(var):
                try:
                    setattr(settings, attr, parse_bool(env[var]))
                except ValueError as e:
                    raise ValueError(f"{var}: {e}") from e

        for var, attr in (
            ("MEX_LABEL_PAGE", "label_page"),
            ("MEX_LABEL_VOLUME", "label_volume"),
            ("MEX_LABEL_BOOK", "label_book"),
        ):
            if env.get(var):
                setattr(settings, attr, env[var])

        if env.get("MEX_WORKERS"):
            try:
                settings.workers = int(env["MEX_WORKERS"])
            except ValueError as e:
                raise ValueError(f"MEX_WORKERS: invalid integer {env['MEX_WORKERS']!r}") from e
            if settings.workers < 1:
                raise ValueError("MEX_WORKERS: must be at least 1")

        if env.get("MEX_TEMP_DIR"):
            settings.temp_dir = Path(env["MEX_TEMP_DIR"])

        return settings

    def export_config(self) -> ExportConfig:
        """Convert to the exporter's configuration."""
        return ExportConfig(
            compress_book=self.zip_book,
            compress_volumes=self.zip_volume,
            page_template=self.label_page,
            volume_template=self.label_volume,
            book_template=self.label_book,
            workers=self.workers,
        )

"""Reader settings and configuration."""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from loguru import logger
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Reader configuration settings.

    Settings can be configured via:

    1. Environment variables (e.g., AXD_ROTATION_SPLINE_ORDER=1)
    2. .env file in the working directory
    3. Default values defined below

    All settings use the AXD_ prefix for environment variables.

    .. rubric:: Examples

    Keep physical offsets on the un-rotated raster of an oblique scan::

        export AXD_OBLIQUE_OFFSET_SENTINEL=false
    """

    oblique_offset_sentinel: Annotated[
        bool,
        Field(
            default=True,
            description="If True, the un-rotated raster of an oblique scan gets the fixed "
            "offset (1.0, 1.0) as written by Analysis Studio importers. If False, its "
            "offset is computed from the scan position like any other raster.",
        ),
    ]

    rotation_spline_order: Annotated[
        int,
        Field(
            default=3,
            description="Spline order used when rotating oblique scans",
            ge=0,
            le=5,
        ),
    ]

    verbose_logging: Annotated[
        bool,
        Field(
            default=False,
            description="Log the signature of every railway function call",
        ),
    ]

    model_config = SettingsConfigDict(
        env_prefix="AXD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

    def log_config(self) -> None:
        logger.debug(
            f"Reader settings: oblique offset sentinel={self.oblique_offset_sentinel}, "
            f"rotation spline order={self.rotation_spline_order}"
        )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    :return: The reader settings instance.
    """
    return Settings()  # type: ignore

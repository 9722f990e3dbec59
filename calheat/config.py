from __future__ import annotations

import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and optional .env file.

    Attributes:
        debug_mode: Whether to show detailed log output. Defaults to False.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Ignored when debug_mode is True.
        renderer: Charting backend used to draw heatmaps ("plotly" or "matplotlib").
        title: Default chart title.
        low_color: Color for the most negative returns.
        mid_color: Color for zero returns.
        high_color: Color for the most positive returns.
        facet_columns: Number of month panels per row.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    debug_mode: bool = Field(default=False, alias="DEBUG_MODE")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    renderer: str = Field(default="plotly", alias="HEATMAP_RENDERER")
    title: str = Field(default="Calendar Heatmap of Returns", alias="HEATMAP_TITLE")
    low_color: str = Field(default="red", alias="HEATMAP_LOW_COLOR")
    mid_color: str = Field(default="white", alias="HEATMAP_MID_COLOR")
    high_color: str = Field(default="green", alias="HEATMAP_HIGH_COLOR")
    facet_columns: int = Field(default=3, ge=1, alias="HEATMAP_FACET_COLUMNS")


def get_settings() -> Settings:
    """Return settings populated from the environment.

    Returns:
        Settings: Settings populated from environment.
    """
    return Settings()  # type: ignore[call-arg]


def setup_logging(settings: Settings | None = None) -> None:
    """Setup logging configuration based on settings.

    Args:
        settings: Settings instance. If None, will load from get_settings().
    """
    if settings is None:
        settings = get_settings()

    if settings.debug_mode:
        level = logging.DEBUG
    else:
        level_str = settings.log_level.upper()
        level_map = {
            "DEBUG": logging.DEBUG,
            "INFO": logging.INFO,
            "WARNING": logging.WARNING,
            "ERROR": logging.ERROR,
            "CRITICAL": logging.CRITICAL,
        }
        level = level_map.get(level_str, logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # matplotlib's font manager is chatty at DEBUG
    if not settings.debug_mode:
        logging.getLogger("matplotlib").setLevel(logging.WARNING)
        logging.getLogger("PIL").setLevel(logging.WARNING)

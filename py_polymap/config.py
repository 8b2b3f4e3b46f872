"""Configuration management."""

import logging

import structlog
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings pulled from POLYMAP_* environment variables."""

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="console", description="Logging format (console or json)")

    # Map generation defaults
    default_map_width: float = Field(default=100.0, gt=0, description="Default map width")
    default_map_height: float = Field(default=100.0, gt=0, description="Default map height")
    default_num_sites: int = Field(default=500, ge=1, description="Default number of Voronoi sites")
    default_lloyd_iterations: int = Field(
        default=2, ge=0, description="Default number of Lloyd relaxation passes"
    )

    class Config:
        env_prefix = "POLYMAP_"
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()


def configure_logging(config: Settings = settings) -> None:
    """Route structlog through stdlib logging at the configured level."""
    logging.basicConfig(format="%(message)s", level=config.log_level.upper())

    if config.log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

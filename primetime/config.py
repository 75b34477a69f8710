from datetime import time
from typing import Annotated
import logging

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


logger = logging.getLogger(__name__)


DEFAULT_CHANNEL_WHITELIST: tuple[str, ...] = (
    "TF1",
    "France 2",
    "France 3",
    "Canal+",
    "France 5",
    "M6",
    "Arte",
    "C8",
    "W9",
    "TMC",
    "TFX",
    "NRJ 12",
    "France 4",
    "CSTAR",
    "L'Equipe",
    "6ter",
    "RMC Story",
    "RMC Découverte",
    "Chérie 25",
)


class CustomSettings(BaseSettings):
    """Application settings loaded from environment variables.

    Every default reproduces the fixed TNT prime-time guide, so the tool runs
    without any configuration.
    """

    feed_url: str = "https://xmltv.ch/xmltv/xmltv-tnt.xml"
    channel_whitelist: Annotated[tuple[str, ...], NoDecode] = DEFAULT_CHANNEL_WHITELIST
    window_start: time = time(20, 45)  # Exclusive
    window_end: time = time(21, 20)  # Exclusive
    min_duration_minutes: int = 35  # Strictly longer than this
    http_timeout_sec: float = 30.0  # 0 disables timeout
    check_http_status: bool = True
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(
        env_prefix="PRIMETIME_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @field_validator("channel_whitelist", mode="before")
    @classmethod
    def parse_channel_whitelist(cls, value):
        """Parse comma-separated channel names or a sequence."""
        if value is None:
            return DEFAULT_CHANNEL_WHITELIST
        if isinstance(value, str):
            return tuple(name.strip() for name in value.split(",") if name.strip())
        if isinstance(value, (list, tuple)):
            return tuple(value)
        return value

    @field_validator("channel_whitelist", mode="after")
    @classmethod
    def validate_channel_whitelist(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        """Reject an empty whitelist."""
        if not value:
            raise ValueError("channel_whitelist must name at least one channel")
        return value

    @field_validator("feed_url")
    @classmethod
    def validate_feed_url(cls, value: str) -> str:
        """Validate feed URL is HTTP/HTTPS."""
        if not value.lower().startswith(("http://", "https://")):
            raise ValueError(f"Feed URL must be HTTP/HTTPS: {value}")
        return value

    @field_validator("min_duration_minutes")
    @classmethod
    def validate_min_duration(cls, value: int) -> int:
        """Validate minimum program duration (minutes)."""
        if value < 0:
            raise ValueError("min_duration_minutes must be >= 0")
        return value

    @field_validator("http_timeout_sec")
    @classmethod
    def validate_http_timeout(cls, value: float) -> float:
        """Validate HTTP timeout (seconds)."""
        if value < 0:
            raise ValueError("http_timeout_sec must be >= 0")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate logging level name."""
        normalized = value.upper()
        allowed = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
        if normalized not in allowed:
            raise ValueError(f"log_level must be one of {sorted(allowed)}")
        return normalized

    @model_validator(mode="after")
    def validate_evening_window(self):
        """Validate cross-field configuration."""
        if self.window_start >= self.window_end:
            raise ValueError(
                f"window_start ({self.window_start}) must be before window_end ({self.window_end})"
            )
        return self

    def __init__(self, **data):
        """Initialize settings and log configuration."""
        super().__init__(**data)

        logger.debug("Configuration loaded:")
        logger.debug("  Feed URL: %s", self.feed_url)
        logger.debug("  Channels: %s whitelisted", len(self.channel_whitelist))
        logger.debug(
            "  Evening Window: %s -> %s (> %s min)",
            self.window_start,
            self.window_end,
            self.min_duration_minutes,
        )
        logger.debug(
            "  HTTP Timeout: %s",
            f"{self.http_timeout_sec}s" if self.http_timeout_sec else "disabled",
        )
        logger.debug("  HTTP Status Check: %s", self.check_http_status)


settings = CustomSettings()


def setup_logging(level: str | None = None) -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

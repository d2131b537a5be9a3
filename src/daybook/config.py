"""Configuration management for Daybook."""

import logging
import os
from dataclasses import dataclass
from datetime import tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

DAYBOOK_HOME = Path(os.environ.get("DAYBOOK_HOME", Path.home() / "daybook"))
CONFIG_FILE = DAYBOOK_HOME / "config" / "daybook.conf"
DATA_DIR = DAYBOOK_HOME / "data"
DEFAULT_DB_PATH = DATA_DIR / "daybook.sqlite3"


@dataclass
class Config:
    """Daybook configuration."""

    database_path: str = str(DEFAULT_DB_PATH)
    timezone: str = ""  # empty: host local time
    host: str = "127.0.0.1"
    port: int = 3000
    log_level: str = "INFO"
    # Shown on the index page when nothing was written today
    fallback_title: str = "Der var engang..."
    fallback_text: str = "Nu skal I høre en fantastisk fortælling: Der var engang to brødre..."

    def local_zone(self) -> tzinfo | None:
        """Resolve the configured timezone. None means host local time."""
        if not self.timezone:
            return None
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(f"Unknown timezone {self.timezone!r}, using local time")
            return None


def _unquote(value: str) -> str:
    """Strip surrounding quotes, or an inline comment from an unquoted value."""
    if value[:1] in ('"', "'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from daybook.conf, then apply environment overrides."""
    config = Config()
    config_file = config_file or CONFIG_FILE

    if config_file.exists():
        for line in config_file.read_text().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            if "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip().lower()
            value = _unquote(value.strip())

            match key:
                case "database_path":
                    config.database_path = value
                case "timezone":
                    config.timezone = value
                case "host":
                    config.host = value
                case "port":
                    try:
                        config.port = int(value)
                    except ValueError:
                        logger.warning(f"Invalid port {value!r} in {config_file}, using {config.port}")
                case "log_level":
                    config.log_level = value.upper()
                case "fallback_title":
                    config.fallback_title = value
                case "fallback_text":
                    config.fallback_text = value

    if db_override := os.environ.get("DAYBOOK_DB"):
        config.database_path = db_override

    return config

"""Configuration module for the Quake log parser."""
import os
import logging
from dataclasses import dataclass
from typing import Dict, Any, Optional
import dotenv

# Load environment variables from .env file if present
dotenv.load_dotenv()

PACKAGE_LOGGER = "quake_log_parser"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DISPLAY_LIMIT = 10

logger = logging.getLogger(PACKAGE_LOGGER)


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() == "true"


def _env_log_level(name: str, default: int) -> int:
    value = os.environ.get(name)
    if not value:
        return default
    level = logging.getLevelName(value.upper())
    if not isinstance(level, int):
        logger.warning(f"Unknown log level {name}={value!r}, using {logging.getLevelName(default)}")
        return default
    return level


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"{name}={value!r} is not a number, using {default}")
        return default


@dataclass
class ParserConfig:
    """Configuration for the parser."""
    # Output settings
    report_path: str = "quake_report.json"
    db_path: Optional[str] = None
    encoding: str = "utf-8"

    # Logging settings
    log_level: int = logging.INFO
    log_format: str = DEFAULT_LOG_FORMAT
    log_file: Optional[str] = None

    # Parser settings
    show_progress: bool = True

    # Display settings
    display_limit: int = DEFAULT_DISPLAY_LIMIT

    @classmethod
    def from_env(cls, report_path: Optional[str] = None) -> 'ParserConfig':
        """Create a configuration from environment variables."""
        return cls(
            report_path=report_path or os.environ.get("QUAKE_REPORT_PATH", "quake_report.json"),
            db_path=os.environ.get("QUAKE_DB_PATH"),
            encoding=os.environ.get("QUAKE_LOG_ENCODING", "utf-8"),
            log_level=_env_log_level("QUAKE_LOG_LEVEL", logging.INFO),
            log_format=os.environ.get("QUAKE_LOG_FORMAT", DEFAULT_LOG_FORMAT),
            log_file=os.environ.get("QUAKE_LOG_FILE"),
            show_progress=_env_flag("QUAKE_SHOW_PROGRESS", "True"),
            display_limit=_env_int("QUAKE_DISPLAY_LIMIT", DEFAULT_DISPLAY_LIMIT),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the configuration to a dictionary."""
        return {
            "report_path": self.report_path,
            "db_path": self.db_path,
            "encoding": self.encoding,
            "log_level": self.log_level,
            "log_format": self.log_format,
            "log_file": self.log_file,
            "show_progress": self.show_progress,
            "display_limit": self.display_limit,
        }


def configure_logging(config: ParserConfig) -> None:
    """Configure logging based on the configuration.

    Root handlers are only installed once per process; later calls just
    update the package logger level, so `-v` still takes effect.
    """
    logging.getLogger(PACKAGE_LOGGER).setLevel(config.log_level)

    root = logging.getLogger()
    if root.handlers:
        return

    formatter = logging.Formatter(config.log_format)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    # File handler if log file specified
    if config.log_file:
        file_handler = logging.FileHandler(config.log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    root.setLevel(config.log_level)

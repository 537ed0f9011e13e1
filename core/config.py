"""
Core Module - Application Configuration.

============================================================
RESPONSIBILITY
============================================================
Loads process configuration from the environment (and a local
``.env`` file, if present) into frozen dataclasses.

Invalid values fail at startup with InvalidConfigError.

============================================================
ENVIRONMENT VARIABLES
============================================================
DATABASE_URL                        sqlite+aiosqlite:///./brokerage.db
DATABASE_ECHO                       false
INSTRUMENT_CACHE_MAX_SIZE           1000
INSTRUMENT_CACHE_TTL_MIN            3
INSTRUMENT_SEARCH_LIMIT             10
PORTFOLIO_FAIL_ON_DATA_CORRUPTION   false
LOG_LEVEL                           INFO
LOG_FORMAT                          text
API_HOST                            0.0.0.0
API_PORT                            8080

============================================================
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from dotenv import load_dotenv

from core.exceptions import InvalidConfigError
from portfolio.config import PortfolioConfig
from reference_data.config import SearchCacheConfig
from storage.database import DatabaseConfig


logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_LOG_FORMATS = {"text", "json"}


@dataclass(frozen=True)
class AppConfig:
    """Complete application configuration."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    search: SearchCacheConfig = field(default_factory=SearchCacheConfig)
    portfolio: PortfolioConfig = field(default_factory=PortfolioConfig)

    log_level: str = "INFO"
    log_format: str = "text"

    host: str = "0.0.0.0"
    port: int = 8080

    @classmethod
    def for_testing(cls) -> "AppConfig":
        """In-memory SQLite, debug logging."""
        return cls(
            database=DatabaseConfig(url="sqlite+aiosqlite:///:memory:"),
            log_level="DEBUG",
        )


# ============================================================
# PARSING HELPERS
# ============================================================

def _parse_bool(key: str, raw: Optional[str], default: bool) -> bool:
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise InvalidConfigError(key, raw, "expected a boolean")


def _parse_positive_int(key: str, raw: Optional[str], default: int) -> int:
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise InvalidConfigError(key, raw, "expected an integer")
    if value <= 0:
        raise InvalidConfigError(key, raw, "must be > 0")
    return value


def _parse_choice(key: str, raw: Optional[str], default: str, choices: set, upper: bool) -> str:
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().upper() if upper else raw.strip().lower()
    if value not in choices:
        raise InvalidConfigError(key, raw, f"expected one of {sorted(choices)}")
    return value


# ============================================================
# LOADER
# ============================================================

def load_config(env: Optional[Mapping[str, str]] = None) -> AppConfig:
    """
    Build the application configuration.

    Args:
        env: Variables to read (defaults to os.environ after
            loading ``.env``)

    Raises:
        InvalidConfigError: If a value cannot be parsed
    """
    if env is None:
        load_dotenv()
        env = os.environ

    port = _parse_positive_int("API_PORT", env.get("API_PORT"), 8080)
    if port > 65535:
        raise InvalidConfigError("API_PORT", port, "must be <= 65535")

    config = AppConfig(
        database=DatabaseConfig(
            url=env.get("DATABASE_URL") or DatabaseConfig.url,
            echo=_parse_bool("DATABASE_ECHO", env.get("DATABASE_ECHO"), False),
        ),
        search=SearchCacheConfig(
            max_size=_parse_positive_int(
                "INSTRUMENT_CACHE_MAX_SIZE", env.get("INSTRUMENT_CACHE_MAX_SIZE"), 1000
            ),
            ttl_minutes=_parse_positive_int(
                "INSTRUMENT_CACHE_TTL_MIN", env.get("INSTRUMENT_CACHE_TTL_MIN"), 3
            ),
            limit=_parse_positive_int(
                "INSTRUMENT_SEARCH_LIMIT", env.get("INSTRUMENT_SEARCH_LIMIT"), 10
            ),
        ),
        portfolio=PortfolioConfig(
            fail_on_data_corruption=_parse_bool(
                "PORTFOLIO_FAIL_ON_DATA_CORRUPTION",
                env.get("PORTFOLIO_FAIL_ON_DATA_CORRUPTION"),
                False,
            ),
        ),
        log_level=_parse_choice("LOG_LEVEL", env.get("LOG_LEVEL"), "INFO", _LOG_LEVELS, upper=True),
        log_format=_parse_choice("LOG_FORMAT", env.get("LOG_FORMAT"), "text", _LOG_FORMATS, upper=False),
        host=env.get("API_HOST") or "0.0.0.0",
        port=port,
    )

    logger.debug(f"Configuration loaded: database={config.database.safe_url}")
    return config

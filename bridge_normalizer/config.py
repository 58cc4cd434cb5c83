# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate all configuration from environment
#   variables / .env file. Provides typed config objects
#   to all other modules.
#
# CLASSES:
# --------
# - FlattenConfig (dataclass)
#     default_max_depth: int     (default 10)
#     response_max_depth: int    (default 5)
#
# - AppConfig (dataclass)
#     flatten: FlattenConfig
#     array_keys_file: str | None        (default None)
#     include_default_array_keys: bool   (default True)
#     log_level: str                     (default "WARNING")
#
# FUNCTIONS:
# ----------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# - reset_config() -> None
#     Forget the singleton (tests, CLI overrides).
#
# - load_exception_table(config) -> ArrayKeyExceptionTable
#     Bundled known array keys merged with ARRAY_KEYS_FILE.
#
# ENVIRONMENT:
# ------------
#   FLATTEN_MAX_DEPTH, RESPONSE_MAX_DEPTH, ARRAY_KEYS_FILE,
#   INCLUDE_DEFAULT_ARRAY_KEYS, LOG_LEVEL
#
# USAGE:
# ------
#   from bridge_normalizer.config import get_config
#   config = get_config()
#   print(config.flatten.response_max_depth)
#
# ==============================================

import os
from dataclasses import dataclass, field
from typing import Optional
from pathlib import Path

from dotenv import load_dotenv

from bridge_normalizer.normalization.array_keys import ArrayKeyExceptionTable
from bridge_normalizer.normalization.known_array_keys import DEFAULT_ARRAY_KEYS


@dataclass
class FlattenConfig:
    """Depth limits for the flatten engine."""
    default_max_depth: int = 10
    response_max_depth: int = 5

    def __post_init__(self):
        if self.default_max_depth < 1:
            raise ValueError("default_max_depth must be at least 1")
        if self.response_max_depth < 1:
            raise ValueError("response_max_depth must be at least 1")


@dataclass
class AppConfig:
    """Main application configuration."""
    flatten: FlattenConfig = field(default_factory=FlattenConfig)
    array_keys_file: Optional[str] = None
    include_default_array_keys: bool = True
    log_level: str = "WARNING"


# Singleton instance
_config_instance: Optional[AppConfig] = None

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in _TRUE_VALUES


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.
    
    Returns:
        AppConfig: Application configuration
    """
    global _config_instance
    
    if _config_instance is not None:
        return _config_instance
    
    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)
    
    flatten_config = FlattenConfig(
        default_max_depth=int(os.getenv("FLATTEN_MAX_DEPTH", "10")),
        response_max_depth=int(os.getenv("RESPONSE_MAX_DEPTH", "5"))
    )
    
    _config_instance = AppConfig(
        flatten=flatten_config,
        array_keys_file=os.getenv("ARRAY_KEYS_FILE") or None,
        include_default_array_keys=_env_bool("INCLUDE_DEFAULT_ARRAY_KEYS", True),
        log_level=os.getenv("LOG_LEVEL", "WARNING").upper()
    )
    
    return _config_instance


def reset_config() -> None:
    global _config_instance
    _config_instance = None


def load_exception_table(config: Optional[AppConfig] = None) -> ArrayKeyExceptionTable:
    """
    Build the array key exception table the configuration asks for.
    
    Args:
        config: Application configuration. If None, loads from environment.
    
    Returns:
        ArrayKeyExceptionTable: bundled defaults (unless disabled) merged
        with the entries of ``array_keys_file`` (if set)
    """
    config = config or get_config()
    
    table = ArrayKeyExceptionTable(DEFAULT_ARRAY_KEYS if config.include_default_array_keys else None)
    
    if config.array_keys_file:
        table = table.merged_with(ArrayKeyExceptionTable.from_json_file(config.array_keys_file))
    
    return table

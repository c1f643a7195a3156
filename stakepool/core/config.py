"""Configuration and logging setup for Stake Pool."""
import os
import sys
from pathlib import Path
from typing import Dict, Optional, Union

import yaml
from loguru import logger
from pydantic import BaseModel, Field, field_validator

from .stake import UINT64_MAX

LOG_LEVEL_ENV = "STAKEPOOL_LOG_LEVEL"
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")

class PoolConfig(BaseModel):
    """Stake pool configuration."""
    total_reward: int = Field(default=1_000_000, ge=0, le=UINT64_MAX)
    log_level: str = "INFO"
    stakes: Dict[str, int] = {}  # Stakes placed before any command line ones

    @field_validator('log_level')
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got '{value}'")
        return level

def get_log_level(default: str = "INFO") -> str:
    """Get the log level, honouring the environment override."""
    return os.getenv(LOG_LEVEL_ENV, default).upper()

def load_config(config_path: Optional[Union[str, Path]] = None) -> PoolConfig:
    """Load and validate configuration.

    Args:
        config_path: Path to a YAML configuration file

    Returns:
        Validated configuration

    Raises:
        FileNotFoundError: If config_path does not exist
        pydantic.ValidationError: If the file holds invalid values or is
            not a mapping
    """
    config_dict = {}
    if config_path is not None:
        with open(config_path) as f:
            config_dict = yaml.safe_load(f)
        if config_dict is None:
            config_dict = {}
        logger.debug(f"Loaded configuration from {config_path}")

    if LOG_LEVEL_ENV in os.environ and isinstance(config_dict, dict):
        config_dict = {**config_dict, 'log_level': get_log_level()}
    return PoolConfig.model_validate(config_dict)

def configure_logging(level: str = "INFO") -> None:
    """Send loguru output to stderr at the given level.

    Raises:
        ValueError: If level is not a loguru level name
    """
    level = level.upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"Unknown log level '{level}'")
    logger.remove()
    logger.add(sys.stderr, level=level)

"""
Configuration Management for entityforge

🔧 Environment-aware configuration:
Dataclass-based settings for the entity store and for logging, loadable
from dictionaries, JSON/YAML files or ENTITYFORGE_* environment variables.
"""

import json
import logging
import logging.handlers
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union


class Environment(Enum):
    """Application environments"""
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


class StoreBackend(Enum):
    """Where committed entities are persisted besides the local mirror"""
    LOCAL = "local"
    MEMORY = "memory"
    SQL = "sql"


@dataclass
class StoreConfig:
    """Entity store configuration"""
    backend: StoreBackend = StoreBackend.LOCAL
    table_name: str = "entities"
    primary_key: Optional[str] = None
    pk_auto_generated: bool = False
    database_url: str = "sqlite+aiosqlite:///entityforge.db"
    echo: bool = False


@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5


@dataclass
class ForgeConfig:
    """Complete entityforge configuration"""
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False
    store: StoreConfig = field(default_factory=StoreConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def for_environment(cls, environment: Environment) -> 'ForgeConfig':
        """Create configuration for specific environment"""
        config = cls(environment=environment)

        if environment == Environment.DEVELOPMENT:
            config.debug = True
            config.logging.level = "DEBUG"
            config.store.echo = True

        elif environment == Environment.TESTING:
            config.store.database_url = "sqlite+aiosqlite:///:memory:"
            config.logging.level = "WARNING"

        elif environment == Environment.PRODUCTION:
            config.logging.level = "INFO"

        return config

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'ForgeConfig':
        """Create configuration from dictionary"""
        environment = Environment(config_dict.get("environment", Environment.DEVELOPMENT.value))
        config = cls.for_environment(environment)

        if "debug" in config_dict:
            config.debug = bool(config_dict["debug"])

        for key, value in config_dict.get("store", {}).items():
            if key == "backend":
                value = StoreBackend(value)
            if hasattr(config.store, key):
                setattr(config.store, key, value)

        for key, value in config_dict.get("logging", {}).items():
            if hasattr(config.logging, key):
                setattr(config.logging, key, value)

        return config

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> 'ForgeConfig':
        """Load configuration from a JSON or YAML file"""
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        if config_path.suffix == '.json':
            with open(config_path) as f:
                config_dict = json.load(f)
        elif config_path.suffix in ('.yml', '.yaml'):
            try:
                import yaml
            except ImportError:
                raise ImportError("PyYAML is required for YAML configuration files (pip install entityforge[yaml])")
            with open(config_path) as f:
                config_dict = yaml.safe_load(f) or {}
        else:
            raise ValueError(f"Unsupported configuration file format: {config_path.suffix}")

        return cls.from_dict(config_dict)

    @classmethod
    def from_environment(cls) -> 'ForgeConfig':
        """Create configuration from environment variables"""
        environment = Environment(os.getenv('ENTITYFORGE_ENV', 'development'))
        config = cls.for_environment(environment)

        if os.getenv('ENTITYFORGE_DEBUG'):
            config.debug = os.getenv('ENTITYFORGE_DEBUG').lower() == 'true'

        if os.getenv('ENTITYFORGE_BACKEND'):
            config.store.backend = StoreBackend(os.getenv('ENTITYFORGE_BACKEND'))

        if os.getenv('ENTITYFORGE_TABLE_NAME'):
            config.store.table_name = os.getenv('ENTITYFORGE_TABLE_NAME')

        if os.getenv('ENTITYFORGE_PRIMARY_KEY'):
            config.store.primary_key = os.getenv('ENTITYFORGE_PRIMARY_KEY')

        if os.getenv('ENTITYFORGE_PK_AUTO_GENERATED'):
            config.store.pk_auto_generated = os.getenv('ENTITYFORGE_PK_AUTO_GENERATED').lower() == 'true'

        if os.getenv('ENTITYFORGE_DATABASE_URL'):
            config.store.database_url = os.getenv('ENTITYFORGE_DATABASE_URL')

        if os.getenv('ENTITYFORGE_LOG_LEVEL'):
            config.logging.level = os.getenv('ENTITYFORGE_LOG_LEVEL').upper()

        if os.getenv('ENTITYFORGE_LOG_FILE'):
            config.logging.file_path = os.getenv('ENTITYFORGE_LOG_FILE')

        return config


def configure_logging(config: LoggingConfig) -> logging.Logger:
    """
    Install a handler on the entityforge logger.

    Args:
        config: Logging configuration

    Returns:
        The configured package logger
    """
    logger = logging.getLogger("entityforge")
    logger.setLevel(config.level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if config.file_path:
        Path(config.file_path).parent.mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            config.file_path,
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
        )
    else:
        handler = logging.StreamHandler()

    handler.setFormatter(logging.Formatter(config.format))
    logger.addHandler(handler)
    return logger


__all__ = [
    "Environment",
    "StoreBackend",
    "StoreConfig",
    "LoggingConfig",
    "ForgeConfig",
    "configure_logging",
]

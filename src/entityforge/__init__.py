"""
entityforge - Entity Lifecycle Management

Stage entities behind opaque handles, enforce primary key policy and
persist through any asynchronous storage connector, with a local mirror
of every committed entity.
"""

from .core import (
    Handle,
    Builder,
    Manager,
    EntityForgeError,
    DuplicateHandleError,
    MissingBuilderError,
    MissingEntityError,
    MissingPrimaryKeyError,
    CannotOverrideAutoKeyError,
    CannotOverrideExistingKeyError,
    DuplicateKeyError,
    InsertionFailedError,
    UnknownFieldError,
)
from .persistence import (
    AsyncStorageConnector,
    DatabaseTableInfo,
    LocalStoreInfo,
    MemoryConnector,
    SQLModelConnector,
)
from .config import ForgeConfig, StoreConfig, LoggingConfig, StoreBackend, Environment, configure_logging
from .configurator import configure_manager, create_manager

__version__ = "0.1.0"

__all__ = [
    # Core
    'Handle',
    'Builder',
    'Manager',

    # Errors
    'EntityForgeError',
    'DuplicateHandleError',
    'MissingBuilderError',
    'MissingEntityError',
    'MissingPrimaryKeyError',
    'CannotOverrideAutoKeyError',
    'CannotOverrideExistingKeyError',
    'DuplicateKeyError',
    'InsertionFailedError',
    'UnknownFieldError',

    # Persistence
    'AsyncStorageConnector',
    'DatabaseTableInfo',
    'LocalStoreInfo',
    'MemoryConnector',
    'SQLModelConnector',

    # Configuration
    'ForgeConfig',
    'StoreConfig',
    'LoggingConfig',
    'StoreBackend',
    'Environment',
    'configure_logging',
    'configure_manager',
    'create_manager',
]

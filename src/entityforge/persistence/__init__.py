"""
entityforge Persistence Module

Connector contract and the storage connectors shipped with entityforge.
"""

from .base import AsyncStorageConnector, DatabaseTableInfo, LocalStoreInfo
from .memory import MemoryConnector
from .sql import SQLConnectionConfig, SQLModelConnector

__all__ = [
    "AsyncStorageConnector",
    "DatabaseTableInfo",
    "LocalStoreInfo",
    "MemoryConnector",
    "SQLConnectionConfig",
    "SQLModelConnector",
]

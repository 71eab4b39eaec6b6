"""
entityforge Persistence Layer - Memory Connector

In-memory storage connector for development and testing.
Data is lost when the process exits.
"""

import copy
import logging
import uuid
from typing import Any, Dict, List, Optional

from ..core.types import Entity, KeyPair, Prototype

logger = logging.getLogger(__name__)


class MemoryConnector:
    """
    In-memory storage connector.

    Tables are lists of records created by get_connection(). With
    auto_generate set, insert() assigns a uuid4 string to the primary
    key field and returns it; otherwise records are stored as given and
    insert() returns None.
    """

    def __init__(self, auto_generate: bool = False, primary_key: str = "id"):
        self.auto_generate = auto_generate
        self.primary_key = primary_key
        self._tables: Dict[str, List[Dict[str, Any]]] = {}

    def _find(self, storage: List[Dict[str, Any]], key_pair: KeyPair) -> int:
        key, value = key_pair
        for index, record in enumerate(storage):
            if record.get(key) == value:
                return index
        return -1

    async def get_connection(self, table_name: str) -> bool:
        if table_name not in self._tables:
            self._tables[table_name] = []
            logger.info(f"Created in-memory table '{table_name}'")
        return True

    async def health_check(self, table_name: str) -> bool:
        return table_name in self._tables

    async def insert(self, prototype: Prototype, table_name: str) -> Optional[Any]:
        storage = self._tables.get(table_name)
        if storage is None:
            return None

        record = copy.deepcopy(dict(prototype))
        if not self.auto_generate:
            storage.append(record)
            return None

        identifier = str(uuid.uuid4())
        record[self.primary_key] = identifier
        storage.append(record)
        return identifier

    async def remove(self, key_pair: KeyPair, table_name: str) -> bool:
        storage = self._tables.get(table_name)
        if storage is None:
            return False

        index = self._find(storage, key_pair)
        if index == -1:
            return False
        del storage[index]
        return True

    async def get(self, key_pair: KeyPair, table_name: str) -> Optional[Entity]:
        storage = self._tables.get(table_name)
        if storage is None:
            return None

        index = self._find(storage, key_pair)
        if index == -1:
            return None
        return copy.deepcopy(storage[index])

    async def close_connection(self) -> None:
        logger.debug("Memory connector has no connection to close")

    def count(self, table_name: str) -> int:
        """Number of records in a table, 0 if it does not exist"""
        return len(self._tables.get(table_name, []))


__all__ = ["MemoryConnector"]

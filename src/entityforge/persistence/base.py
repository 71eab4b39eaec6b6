"""
entityforge Persistence Layer - Connector Contract

This module defines the capability interface a storage backend must offer
to be attached to a Manager, and the binding models that tie a connector
to a table.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from ..core.types import Entity, KeyPair, Prototype


@runtime_checkable
class AsyncStorageConnector(Protocol):
    """
    Asynchronous storage connector.

    Any object offering these six coroutines can back a Manager; no base
    class is required. The connection lifecycle is owned by the connector.
    """

    async def health_check(self, table_name: str) -> bool:
        """
        Report whether the store is reachable and the table exists.

        Args:
            table_name: The name of the table to query on

        Returns:
            True if the connector is connected and the table exists
        """
        ...

    async def insert(self, prototype: Prototype, table_name: str) -> Optional[Any]:
        """
        Insert an entity prototype into the table.

        Args:
            prototype: Entity fields to persist
            table_name: The name of the table to query on

        Returns:
            The identifier assigned by the store, or None if the store did
            not generate one
        """
        ...

    async def remove(self, key_pair: KeyPair, table_name: str) -> bool:
        """
        Delete the record matching a primary key pair.

        Returns:
            True if a matching record was deleted
        """
        ...

    async def get(self, key_pair: KeyPair, table_name: str) -> Optional[Entity]:
        """Fetch the record matching a primary key pair, or None."""
        ...

    async def get_connection(self, table_name: str) -> bool:
        """Open (or create) whatever session and table the connector needs. Idempotent."""
        ...

    async def close_connection(self) -> None:
        """Release the connection. Must not return before it is fully released."""
        ...


class DatabaseTableInfo(BaseModel):
    """Binding of a connector to a table and its primary key policy"""
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    connector: AsyncStorageConnector
    table_name: str
    primary_key: str
    pk_auto_generated: bool = False


class LocalStoreInfo(BaseModel):
    """Primary key policy for a Manager without a database"""
    model_config = ConfigDict(frozen=True)

    primary_key: Optional[str] = None


__all__ = [
    "AsyncStorageConnector",
    "DatabaseTableInfo",
    "LocalStoreInfo",
]

"""
Entity Manager - Lifecycle and Primary Key Policy

The Manager owns every builder and every committed entity of a process.
It decides, per call, whether a primary key is required, forbidden,
generated by the store or supplied by the caller, and routes persistence
through an optional asynchronous connector while always keeping a local
mirror of committed entities.

Modes:
- database mode: a DatabaseTableInfo binding is configured
- local primary key mode: only a primary key field name is configured
- unconstrained local mode: neither is configured

When the connector reports its table unhealthy, the call falls back to
local mirror semantics.
"""

import logging
from types import MappingProxyType
from typing import Dict, Optional, Type, Union

from ..persistence.base import DatabaseTableInfo, LocalStoreInfo
from .builder import Builder
from .errors import (
    CannotOverrideAutoKeyError,
    CannotOverrideExistingKeyError,
    DuplicateHandleError,
    DuplicateKeyError,
    InsertionFailedError,
    MissingBuilderError,
    MissingEntityError,
    MissingPrimaryKeyError,
)
from .types import DefaultsFactory, Entity, Handle, KeyPair

logger = logging.getLogger(__name__)


class Manager:
    """
    Coordinates create → save → get → remove → clean for one entity type.

    Example:
        ```python
        manager = Manager(LocalStoreInfo(primary_key="name"))

        user = Handle("user")
        manager.create(user, UserDefaults).set("age", 33)
        saved = await manager.save(user, ("name", "John"))
        ```
    """

    def __init__(
        self,
        store: Union[DatabaseTableInfo, LocalStoreInfo, None] = None,
        primary_key: Optional[str] = None,
        builder_class: Type[Builder] = Builder,
    ):
        """
        Args:
            store: Database binding, or local store policy
            primary_key: Local primary key field, overrides the one of a LocalStoreInfo
            builder_class: Builder implementation used by create()
        """
        self._builders: Dict[Handle, Builder] = {}
        self._local_repo: Dict[Handle, Entity] = {}
        self._database: Optional[DatabaseTableInfo] = None
        self._primary_key: Optional[str] = primary_key
        self._builder_class = builder_class

        if isinstance(store, DatabaseTableInfo):
            self._database = store
        elif isinstance(store, LocalStoreInfo) and self._primary_key is None:
            self._primary_key = store.primary_key

    @property
    def database(self) -> Optional[DatabaseTableInfo]:
        return self._database

    @property
    def primary_key(self) -> Optional[str]:
        """Primary key field builders must leave untouched"""
        if self._database is not None:
            return self._database.primary_key
        return self._primary_key

    # Internal helpers

    def _assert_builder_is_unique(self, handle: Handle) -> None:
        if handle in self._builders:
            raise DuplicateHandleError(handle)

    def _retrieve_builder(self, handle: Handle) -> Builder:
        builder = self._builders.get(handle)
        if builder is None:
            raise MissingBuilderError(handle)
        return builder

    def _retrieve_entity(self, handle: Handle) -> Entity:
        entity = self._local_repo.get(handle)
        if entity is None:
            raise MissingEntityError(handle)
        return entity

    def _assert_unique_pk(self, key_pair: Optional[KeyPair]) -> None:
        # Linear scan, not safe against concurrent mutation of the mirror
        if key_pair is None:
            return
        key, value = key_pair
        if key is None or value is None:
            return
        if any(entity.get(key) == value for entity in self._local_repo.values()):
            raise DuplicateKeyError(value)

    def _assert_pk_validity(self, key_pair: Optional[KeyPair]) -> None:
        if self._database is not None:
            if not self._database.pk_auto_generated and key_pair is None:
                raise MissingPrimaryKeyError()
            if self._database.pk_auto_generated and key_pair is not None:
                raise CannotOverrideAutoKeyError()
        elif self._primary_key is not None:
            if key_pair is None:
                raise MissingPrimaryKeyError()
            if key_pair[0] != self._primary_key:
                raise CannotOverrideExistingKeyError()

    async def _database_ready(self) -> bool:
        if self._database is None:
            return False

        ready = await self._database.connector.health_check(self._database.table_name)
        if not ready:
            logger.warning(
                f"Table '{self._database.table_name}' is not available, "
                f"falling back to the local mirror"
            )
        return ready

    # Public API

    async def connect(self) -> bool:
        """
        Ask the connector to open its connection and table.

        Returns:
            The connector's answer, or True when no database is configured
        """
        if self._database is None:
            return True

        logger.info(f"Connecting to table '{self._database.table_name}'")
        return await self._database.connector.get_connection(self._database.table_name)

    def create(self, handle: Handle, factory: DefaultsFactory) -> Builder:
        """
        Create and return a builder for an entity.

        Args:
            handle: Unique identifier to manage the entity
            factory: Callable producing the entity defaults, usually a class

        Returns:
            The registered builder

        Raises:
            DuplicateHandleError: If a builder already exists for the handle
        """
        self._assert_builder_is_unique(handle)
        self._builders[handle] = self._builder_class(factory, primary_key=self.primary_key)
        logger.debug(f"Created builder for {handle!r}")
        return self._retrieve_builder(handle)

    async def save(self, handle: Handle, key_pair: Optional[KeyPair] = None) -> Entity:
        """
        Compute the entity prototype into an entity, persist and mirror it.

        Args:
            handle: Unique identifier to manage the entity
            key_pair: Optional (primary key field, value), required when the
                primary key is not generated by the database

        Returns:
            Read-only view of the committed entity
        """
        self._assert_pk_validity(key_pair)

        proto = self._retrieve_builder(handle).compute()

        if self._database is not None and await self._database_ready():
            insertable = dict(proto)
            if key_pair is not None:
                insertable[key_pair[0]] = key_pair[1]

            created_identifier = await self._database.connector.insert(insertable, self._database.table_name)
            if self._database.pk_auto_generated:
                if created_identifier is None:
                    raise InsertionFailedError()
                key_pair = (self._database.primary_key, created_identifier)
        elif self._primary_key is not None:
            self._assert_unique_pk(key_pair)

        fields = dict(proto)
        if key_pair is not None:
            fields[key_pair[0]] = key_pair[1]

        entity = MappingProxyType(fields)
        self._local_repo[handle] = entity
        logger.debug(f"Saved entity for {handle!r}")
        return entity

    async def get(self, handle: Handle) -> Optional[Entity]:
        """
        Retrieve an entity from the database, or from the local mirror.

        Raises:
            MissingEntityError: In database mode, if nothing was saved for the handle
        """
        if self._database is not None and await self._database_ready():
            key = self._database.primary_key
            value = self._retrieve_entity(handle).get(key)
            return await self._database.connector.get((key, value), self._database.table_name)

        return self._local_repo.get(handle)

    async def remove(self, handle: Handle) -> bool:
        """
        Remove the entity identified by the handle from the database and the local mirror.

        Returns:
            Whether a removal occurred
        """
        if self._database is not None and await self._database_ready():
            key = self._database.primary_key
            value = self._retrieve_entity(handle).get(key)
            removed = await self._database.connector.remove((key, value), self._database.table_name)
            self._local_repo.pop(handle, None)
            logger.debug(f"Removed entity for {handle!r} from '{self._database.table_name}'")
            return removed

        removed = self._local_repo.pop(handle, None) is not None
        logger.debug(f"Removed entity for {handle!r}: {removed}")
        return removed

    async def clean(self) -> None:
        """Drop every builder and entity, remove them from the database and close it."""
        self._builders.clear()

        if self._database is not None and await self._database_ready():
            for handle in list(self._local_repo.keys()):
                await self.remove(handle)
            await self._database.connector.close_connection()
            logger.info(f"Closed connection to table '{self._database.table_name}'")

        self._local_repo.clear()
        logger.info("Manager cleaned")


__all__ = ["Manager"]

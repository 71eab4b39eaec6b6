"""
Manager Configurator

Builds a Manager, and the connector it needs, from a ForgeConfig.
"""

import logging
from typing import Optional, Type

from sqlmodel import SQLModel

from .config import ForgeConfig, StoreBackend, configure_logging
from .core.manager import Manager
from .persistence import DatabaseTableInfo, LocalStoreInfo, MemoryConnector, SQLModelConnector

logger = logging.getLogger(__name__)


def configure_manager(config: ForgeConfig, model: Optional[Type[SQLModel]] = None) -> Manager:
    """
    Configure a Manager for the configured store backend.

    Args:
        config: entityforge configuration
        model: SQLModel table model, required by the sql backend

    Returns:
        A Manager, not yet connected

    Example:
        ```python
        config = ForgeConfig.from_environment()
        manager = configure_manager(config, model=UserRow)
        await manager.connect()
        ```
    """
    store = config.store

    if store.backend == StoreBackend.LOCAL:
        logger.info(f"Configuring local manager (primary key: {store.primary_key})")
        return Manager(LocalStoreInfo(primary_key=store.primary_key))

    if store.primary_key is None:
        raise ValueError(f"The {store.backend.value} backend requires a primary key")

    if store.backend == StoreBackend.MEMORY:
        connector = MemoryConnector(auto_generate=store.pk_auto_generated, primary_key=store.primary_key)
        table_name = store.table_name
    elif store.backend == StoreBackend.SQL:
        if model is None:
            raise ValueError("The sql backend requires a SQLModel table model")
        connector = SQLModelConnector(model, database_url=store.database_url, echo=store.echo)
        table_name = connector.table_name
    else:
        raise ValueError(f"Unsupported store backend: {store.backend}")

    logger.info(f"Configuring {store.backend.value} manager for table '{table_name}'")
    return Manager(DatabaseTableInfo(
        connector=connector,
        table_name=table_name,
        primary_key=store.primary_key,
        pk_auto_generated=store.pk_auto_generated,
    ))


async def create_manager(
    config: Optional[ForgeConfig] = None,
    model: Optional[Type[SQLModel]] = None,
    auto_connect: bool = True,
) -> Manager:
    """Configure logging, create a Manager and optionally connect it"""
    config = config or ForgeConfig.from_environment()
    configure_logging(config.logging)

    manager = configure_manager(config, model)

    if auto_connect and not await manager.connect():
        logger.warning("Manager could not connect, entities will only be kept locally")

    return manager


__all__ = ["configure_manager", "create_manager"]

"""
entityforge Persistence Layer - SQL Connector

Storage connector for SQL databases using SQLModel table models on top
of an async SQLAlchemy engine.

Key Features:
- One SQLModel table model per connector
- Table creation on get_connection()
- Store-assigned primary keys returned from insert()
- Engine disposal on close_connection()
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Type

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..core.types import Entity, KeyPair, Prototype

logger = logging.getLogger(__name__)


@dataclass
class SQLConnectionConfig:
    """SQL database connection configuration"""
    database_url: str = "sqlite+aiosqlite:///entityforge.db"
    echo: bool = False
    connect_args: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_memory(self) -> bool:
        return ":memory:" in self.database_url


class SQLModelConnector:
    """
    SQL storage connector bound to one SQLModel table model.

    The model's table name is the only table this connector serves.
    """

    def __init__(self, model: Type[SQLModel], database_url: str = "sqlite+aiosqlite:///entityforge.db",
                 echo: bool = False, connect_args: Optional[Dict[str, Any]] = None):
        if getattr(model, '__table__', None) is None:
            raise ValueError(f"{model.__name__} is not a SQLModel table model (missing table=True)")

        self.model = model
        self.config = SQLConnectionConfig(database_url, echo, connect_args or {})
        self._engine: Optional[AsyncEngine] = None

    @property
    def table_name(self) -> str:
        return self.model.__table__.name

    @property
    def primary_key_column(self) -> str:
        return list(self.model.__table__.primary_key.columns)[0].name

    def _create_engine(self) -> AsyncEngine:
        options: Dict[str, Any] = {"echo": self.config.echo, "connect_args": dict(self.config.connect_args)}
        if self.config.is_memory:
            # A private in-memory database per connection otherwise
            options["poolclass"] = StaticPool
        return create_async_engine(self.config.database_url, **options)

    def _require_engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError(f"Connector for '{self.table_name}' is not connected")
        return self._engine

    async def get_connection(self, table_name: str) -> bool:
        if table_name != self.table_name:
            logger.error(f"Connector for '{self.table_name}' cannot serve table '{table_name}'")
            return False

        if self._engine is None:
            self._engine = self._create_engine()
            logger.info(f"Opened SQL engine for '{self.table_name}'")

        async with self._engine.begin() as conn:
            await conn.run_sync(self.model.__table__.create, checkfirst=True)
        return True

    async def health_check(self, table_name: str) -> bool:
        if self._engine is None or table_name != self.table_name:
            return False

        try:
            async with self._engine.connect() as conn:
                return await conn.run_sync(lambda sync_conn: inspect(sync_conn).has_table(table_name))
        except SQLAlchemyError as e:
            logger.warning(f"Health check failed for '{table_name}': {e}")
            return False

    async def insert(self, prototype: Prototype, table_name: str) -> Optional[Any]:
        engine = self._require_engine()
        pk = self.primary_key_column
        row = self.model(**prototype)

        async with AsyncSession(engine, expire_on_commit=False) as session:
            session.add(row)
            await session.commit()
            await session.refresh(row)

        if prototype.get(pk) is None:
            return getattr(row, pk)
        return None

    async def _load(self, session: AsyncSession, key_pair: KeyPair) -> Optional[SQLModel]:
        key, value = key_pair
        result = await session.exec(select(self.model).where(getattr(self.model, key) == value))
        return result.first()

    async def remove(self, key_pair: KeyPair, table_name: str) -> bool:
        engine = self._require_engine()

        async with AsyncSession(engine) as session:
            row = await self._load(session, key_pair)
            if row is None:
                return False
            await session.delete(row)
            await session.commit()
        return True

    async def get(self, key_pair: KeyPair, table_name: str) -> Optional[Entity]:
        engine = self._require_engine()

        async with AsyncSession(engine) as session:
            row = await self._load(session, key_pair)
            return row.model_dump() if row is not None else None

    async def close_connection(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        logger.info(f"Disposed SQL engine for '{self.table_name}'")


__all__ = ["SQLConnectionConfig", "SQLModelConnector"]

"""Shared fixtures and connector doubles for the entityforge test suite."""

from typing import Any, Optional

import pytest_asyncio
from pydantic import BaseModel
from sqlmodel import Field, SQLModel

from entityforge import DatabaseTableInfo, LocalStoreInfo, Manager, MemoryConnector


class UserDefaults(BaseModel):
    """User prototype: every field but the primary key"""
    name: Optional[str] = None
    age: Optional[int] = None
    status: str = "active"


class SqlUser(SQLModel, table=True):
    """User table row with a store-assigned integer key"""
    __tablename__ = "sql_users"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: Optional[str] = None
    age: Optional[int] = None
    status: str = "active"


class MemoryConnectorNotReady(MemoryConnector):
    async def health_check(self, table_name: str) -> bool:
        return False


class MemoryConnectorCreationFail(MemoryConnector):
    async def insert(self, prototype, table_name: str) -> Optional[Any]:
        return None


class MemoryConnectorBroken(MemoryConnector):
    async def insert(self, prototype, table_name: str) -> Optional[Any]:
        raise ConnectionError("storage unreachable")

    async def remove(self, key_pair, table_name: str) -> bool:
        raise ConnectionError("storage unreachable")


@pytest_asyncio.fixture
async def local_manager():
    manager = Manager(LocalStoreInfo(primary_key="name"))
    yield manager
    await manager.clean()


@pytest_asyncio.fixture
async def manual_connector():
    return MemoryConnector()


@pytest_asyncio.fixture
async def manual_manager(manual_connector):
    manager = Manager(DatabaseTableInfo(
        connector=manual_connector,
        table_name="users",
        primary_key="name",
        pk_auto_generated=False,
    ))
    await manager.connect()
    yield manager
    await manager.clean()


@pytest_asyncio.fixture
async def auto_connector():
    return MemoryConnector(auto_generate=True, primary_key="id")


@pytest_asyncio.fixture
async def auto_manager(auto_connector):
    manager = Manager(DatabaseTableInfo(
        connector=auto_connector,
        table_name="users",
        primary_key="id",
        pk_auto_generated=True,
    ))
    await manager.connect()
    yield manager
    await manager.clean()

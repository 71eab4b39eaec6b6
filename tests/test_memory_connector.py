"""Tests for the in-memory storage connector."""

import pytest

from entityforge import AsyncStorageConnector, MemoryConnector, SQLModelConnector


class TestProtocol:

    def test_connectors_satisfy_the_protocol(self):
        assert isinstance(MemoryConnector(), AsyncStorageConnector)
        assert issubclass(SQLModelConnector, AsyncStorageConnector)

    def test_other_objects_do_not(self):
        assert not isinstance(object(), AsyncStorageConnector)


class TestMemoryConnector:

    @pytest.mark.asyncio
    async def test_table_lifecycle(self):
        connector = MemoryConnector()

        assert await connector.health_check("users") is False
        assert await connector.get_connection("users") is True
        assert await connector.get_connection("users") is True
        assert await connector.health_check("users") is True

    @pytest.mark.asyncio
    async def test_missing_table(self):
        connector = MemoryConnector()

        assert await connector.insert({"name": "John"}, "users") is None
        assert await connector.get(("name", "John"), "users") is None
        assert await connector.remove(("name", "John"), "users") is False

    @pytest.mark.asyncio
    async def test_manual_keys(self):
        connector = MemoryConnector()
        await connector.get_connection("users")

        assert await connector.insert({"name": "John", "age": 33}, "users") is None
        assert await connector.get(("name", "John"), "users") == {"name": "John", "age": 33}
        assert await connector.remove(("name", "John"), "users") is True
        assert await connector.remove(("name", "John"), "users") is False
        assert connector.count("users") == 0

    @pytest.mark.asyncio
    async def test_generated_keys(self):
        connector = MemoryConnector(auto_generate=True, primary_key="uid")
        await connector.get_connection("users")

        first = await connector.insert({"name": "John"}, "users")
        second = await connector.insert({"name": "John"}, "users")

        assert first != second
        assert await connector.get(("uid", second), "users") == {"name": "John", "uid": second}

    @pytest.mark.asyncio
    async def test_records_are_copies(self):
        connector = MemoryConnector()
        await connector.get_connection("users")
        record = {"name": "John", "tags": ["a"]}

        await connector.insert(record, "users")
        record["tags"].append("b")
        fetched = await connector.get(("name", "John"), "users")
        fetched["tags"].append("c")

        assert await connector.get(("name", "John"), "users") == {"name": "John", "tags": ["a"]}

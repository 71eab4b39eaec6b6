"""Tests for the entity Builder."""

from dataclasses import dataclass
from typing import Optional

import pytest
from pydantic import BaseModel

from entityforge import Builder, CannotOverrideExistingKeyError, UnknownFieldError


class Settings:
    id: Optional[int]
    ok: Optional[bool]

    def __init__(self):
        self.timeout_in_seconds = 5


class ModelSettings(BaseModel):
    id: Optional[int] = None
    ok: Optional[bool] = None
    timeout_in_seconds: int = 5


@dataclass
class DataSettings:
    ok: Optional[bool] = None
    timeout_in_seconds: int = 5


class TestBuilder:
    """Builder construction, staging and computing"""

    def test_create_builder_from_class(self):
        builder = Builder(Settings, primary_key="id")

        assert hasattr(builder, "set")
        assert hasattr(builder, "compute")
        assert not hasattr(builder, "ok")
        assert not hasattr(builder, "timeout_in_seconds")

    def test_compute_uses_default_values(self):
        result = Builder(Settings, primary_key="id").compute()

        assert result == {"timeout_in_seconds": 5}
        assert "id" not in result

    def test_set_values_except_primary_key(self):
        builder = Builder(Settings, primary_key="id")

        result = builder.set("ok", True).set("timeout_in_seconds", 10).compute()

        assert result == {"ok": True, "timeout_in_seconds": 10}

    def test_set_primary_key_is_rejected(self):
        builder = Builder(ModelSettings, primary_key="id")

        with pytest.raises(CannotOverrideExistingKeyError, match="Can not override existing Primary Key"):
            builder.set("id", 3)

    def test_set_unknown_field_is_rejected(self):
        builder = Builder(ModelSettings, primary_key="id")

        with pytest.raises(UnknownFieldError):
            builder.set("colour", "blue")

    def test_factory_populating_primary_key_is_rejected(self):
        with pytest.raises(CannotOverrideExistingKeyError):
            Builder(lambda: ModelSettings(id=1), primary_key="id")

    def test_pydantic_prototype_excludes_primary_key(self):
        result = Builder(ModelSettings, primary_key="id").set("ok", False).compute()

        assert result == {"ok": False, "timeout_in_seconds": 5}

    def test_dataclass_prototype(self):
        result = Builder(DataSettings).set("timeout_in_seconds", 1).compute()

        assert result == {"ok": None, "timeout_in_seconds": 1}

    def test_mapping_prototype(self):
        builder = Builder(lambda: {"ok": None, "retries": 3})

        assert builder.set("retries", 4).compute() == {"ok": None, "retries": 4}
        with pytest.raises(UnknownFieldError):
            builder.set("timeout", 1)

    def test_compute_is_a_snapshot(self):
        builder = Builder(ModelSettings, primary_key="id")

        first = builder.compute()
        builder.set("timeout_in_seconds", 30)
        second = builder.compute()

        assert first["timeout_in_seconds"] == 5
        assert second["timeout_in_seconds"] == 30

        second["timeout_in_seconds"] = 99
        assert builder.compute()["timeout_in_seconds"] == 30

    def test_last_write_wins(self):
        builder = Builder(DataSettings)

        builder.set("ok", True).set("ok", False)

        assert builder.compute()["ok"] is False

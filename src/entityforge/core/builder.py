"""
Entity Builder

Staging area for the non-key fields of one entity. A Builder is seeded
by a defaults factory (a pydantic model, a dataclass, a plain class or
anything returning a mutable mapping) and computes dict snapshots of it.
"""

import copy
import dataclasses
from collections.abc import Mapping, MutableMapping
from typing import Any, Generic, Optional, Set

from pydantic import BaseModel

from .errors import CannotOverrideExistingKeyError, UnknownFieldError
from .types import DefaultsFactory, Prototype, ProtoType


def _declared_fields(proto: Any) -> Set[str]:
    """Names a prototype accepts through Builder.set"""
    if isinstance(proto, BaseModel):
        return set(type(proto).model_fields)
    if dataclasses.is_dataclass(proto):
        return {f.name for f in dataclasses.fields(proto)}
    if isinstance(proto, Mapping):
        return set(proto.keys())

    names = {name for name in getattr(proto, '__dict__', {}) if not name.startswith('_')}
    for klass in type(proto).__mro__:
        names.update(name for name in getattr(klass, '__annotations__', {}) if not name.startswith('_'))
    return names


def _read_fields(proto: Any) -> Prototype:
    """Current field values of a prototype as a new dict"""
    if isinstance(proto, BaseModel):
        return proto.model_dump()
    if dataclasses.is_dataclass(proto):
        return dataclasses.asdict(proto)
    if isinstance(proto, Mapping):
        return copy.deepcopy(dict(proto))
    return copy.deepcopy({
        name: value for name, value in vars(proto).items()
        if not name.startswith('_')
    })


class Builder(Generic[ProtoType]):
    """
    Builds one entity prototype from a defaults factory.

    The primary key field is never part of the prototype: it can neither
    be populated by the factory nor staged through set().
    """

    def __init__(self, factory: DefaultsFactory, primary_key: Optional[str] = None):
        self._primary_key = primary_key
        self._proto: ProtoType = factory()

        if primary_key is not None and _read_fields(self._proto).get(primary_key) is not None:
            raise CannotOverrideExistingKeyError()

    @property
    def primary_key(self) -> Optional[str]:
        return self._primary_key

    def set(self, field: str, value: Any) -> 'Builder[ProtoType]':
        """
        Stage a value on the prototype.

        Args:
            field: Name of a non primary key field declared by the prototype
            value: Value to assign, last write wins

        Returns:
            This builder, for chaining
        """
        if field == self._primary_key:
            raise CannotOverrideExistingKeyError()
        if field not in _declared_fields(self._proto):
            raise UnknownFieldError(field, type(self._proto))

        if isinstance(self._proto, MutableMapping):
            self._proto[field] = value
        else:
            setattr(self._proto, field, value)
        return self

    def compute(self) -> Prototype:
        """
        Snapshot the prototype.

        Each call returns a fresh dict; later set() calls are not reflected
        in snapshots already handed out.
        """
        fields = _read_fields(self._proto)
        if self._primary_key is not None:
            fields.pop(self._primary_key, None)
        return fields


__all__ = ["Builder"]

"""
Shared entity types.

Handles correlate a builder, its committed entity and the persisted record.
Prototypes and entities travel as plain mappings of field name to value.
"""

from typing import Any, Callable, Dict, Mapping, Tuple, TypeVar

ProtoType = TypeVar('ProtoType')

# (field name, value) of a primary key
KeyPair = Tuple[str, Any]

# Entity fields without the primary key, as computed by a Builder
Prototype = Dict[str, Any]

# Committed entity, read-only once mirrored
Entity = Mapping[str, Any]

# Zero-argument callable producing a prototype populated with defaults
DefaultsFactory = Callable[[], ProtoType]


class Handle:
    """
    Opaque per-process identity token.

    Handles compare and hash by identity: two handles created with the
    same description are still two different keys.
    """

    __slots__ = ("description",)

    def __init__(self, description: str = ""):
        self.description = description

    def __repr__(self) -> str:
        return f"Handle({self.description!r})"


__all__ = [
    "Handle",
    "KeyPair",
    "Prototype",
    "Entity",
    "DefaultsFactory",
    "ProtoType",
]

"""
entityforge Core Module

Entity lifecycle: handles, builders, the manager and its error taxonomy.
"""

from .types import Handle, KeyPair, Prototype, Entity, DefaultsFactory
from .errors import (
    EntityForgeError,
    DuplicateHandleError,
    MissingBuilderError,
    MissingEntityError,
    MissingPrimaryKeyError,
    CannotOverrideAutoKeyError,
    CannotOverrideExistingKeyError,
    DuplicateKeyError,
    InsertionFailedError,
    UnknownFieldError,
)
from .builder import Builder
from .manager import Manager

__all__ = [
    "Handle",
    "KeyPair",
    "Prototype",
    "Entity",
    "DefaultsFactory",
    "Builder",
    "Manager",
    "EntityForgeError",
    "DuplicateHandleError",
    "MissingBuilderError",
    "MissingEntityError",
    "MissingPrimaryKeyError",
    "CannotOverrideAutoKeyError",
    "CannotOverrideExistingKeyError",
    "DuplicateKeyError",
    "InsertionFailedError",
    "UnknownFieldError",
]

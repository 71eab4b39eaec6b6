"""
entityforge Errors

Every failure raised by the Manager or a Builder derives from
EntityForgeError and carries a stable, matchable message.
Connector exceptions are never wrapped.
"""

from typing import Any


class EntityForgeError(Exception):
    """Base exception for entity lifecycle operations"""
    pass


class DuplicateHandleError(EntityForgeError):
    """Raised when a builder already exists for a handle"""

    def __init__(self, handle: Any):
        super().__init__(f"Duplicate builder for handle: {handle!r}")
        self.handle = handle


class MissingBuilderError(EntityForgeError):
    """Raised when no builder was created for a handle"""

    def __init__(self, handle: Any):
        super().__init__(f"Missing builder for handle: {handle!r}")
        self.handle = handle


class MissingEntityError(EntityForgeError):
    """Raised when no committed entity is mirrored for a handle"""

    def __init__(self, handle: Any):
        super().__init__(f"Missing entity for handle: {handle!r}")
        self.handle = handle


class MissingPrimaryKeyError(EntityForgeError):
    """Raised when a save needs a primary key pair and none was given"""

    def __init__(self):
        super().__init__("Fatal Error: Missing Primary Key")


class CannotOverrideAutoKeyError(EntityForgeError):
    """Raised when a key pair is supplied for an auto-generated primary key"""

    def __init__(self):
        super().__init__("Fatal Error: Can not override Primary Key auto_generated")


class CannotOverrideExistingKeyError(EntityForgeError):
    """Raised when the configured primary key field would be replaced or written directly"""

    def __init__(self):
        super().__init__("Fatal Error: Can not override existing Primary Key")


class DuplicateKeyError(EntityForgeError):
    """Raised when a primary key value is already used by a mirrored entity"""

    def __init__(self, value: Any):
        super().__init__(f"Primary key constraint error: value {value} already exists")
        self.value = value


class InsertionFailedError(EntityForgeError):
    """Raised when an auto-generating store returned no identifier"""

    def __init__(self):
        super().__init__("Database Insertion Error: no new element created")


class UnknownFieldError(EntityForgeError, AttributeError):
    """Raised when a builder is asked to set a field the prototype does not declare"""

    def __init__(self, field: str, owner: type):
        super().__init__(f"Unknown field '{field}' on {owner.__name__}")
        self.field = field


__all__ = [
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

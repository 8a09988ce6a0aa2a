"""
Exception taxonomy for the similarity search core.
Absent collections on reads and dimension mismatches during search are not errors.
"""


class SimSearchError(Exception):
    """Base class for all simsearch errors."""


class CollectionNotFoundError(SimSearchError, KeyError):
    """Raised when a mutation targets a collection that was never registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Collection '{name}' is not registered")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class DuplicateCollectionError(SimSearchError):
    """Raised by add_collection under the 'reject' duplicate policy."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Collection '{name}' already exists")


class InvalidCollectionNameError(SimSearchError, ValueError):
    """Collection names must be non-empty strings."""


class DimensionMismatchError(SimSearchError, ValueError):
    """Raised when two vectors of different length are compared directly."""

    def __init__(self, left: int, right: int):
        self.left = left
        self.right = right
        super().__init__(f"Vector dimension {left} does not match dimension {right}")

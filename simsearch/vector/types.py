"""
Value types shared by the vector store, similarity engine and registry.
"""

import uuid
from dataclasses import dataclass
from typing import List, Sequence, Union

import numpy as np

# Caller-assigned 128-bit identifier; used only as a lookup key.
DocumentId = uuid.UUID

# Anything that can be read as a 1-D sequence of floats.
FeatureVector = Union[Sequence[float], np.ndarray]


@dataclass(frozen=True)
class ScoredResult:
    """A single search hit."""

    id: DocumentId
    """Identifier of the matching document"""

    score: float
    """Cosine similarity with the query, in [-1.0, 1.0]"""

    def __iter__(self):
        # Allows `doc_id, score = result`
        yield self.id
        yield self.score


SearchResult = List[ScoredResult]


def as_readonly_vector(vector: FeatureVector) -> np.ndarray:
    """Copy `vector` into an immutable 1-D float64 array without altering its values."""
    array = np.array(vector, dtype=np.float64)
    if array.ndim != 1:
        raise ValueError(f"Feature vectors must be one-dimensional, got shape {array.shape}")
    array.flags.writeable = False
    return array

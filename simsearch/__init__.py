"""
simsearch - in-memory collections of feature vectors with exact top-k cosine search.
"""

from .core.config import VERSION as __version__
from .core.errors import (
    CollectionNotFoundError,
    DimensionMismatchError,
    DuplicateCollectionError,
    InvalidCollectionNameError,
    SimSearchError,
)
from .vector import (
    CollectionRegistry,
    ScoredResult,
    SimilarityEngine,
    VectorStore,
    cosine_similarity,
)

__all__ = [
    'CollectionRegistry',
    'VectorStore',
    'SimilarityEngine',
    'ScoredResult',
    'cosine_similarity',
    'SimSearchError',
    'CollectionNotFoundError',
    'DuplicateCollectionError',
    'InvalidCollectionNameError',
    'DimensionMismatchError',
]

"""
Vector storage and exact cosine similarity search.
"""

# Package initialization for vector module
from .index import IVectorStore, VectorStore
from .registry import CollectionRegistry
from .similarity import SimilarityEngine, cosine_similarity, dot_product, magnitude, rank
from .types import DocumentId, FeatureVector, ScoredResult, SearchResult

__all__ = [
    'IVectorStore',
    'VectorStore',
    'CollectionRegistry',
    'SimilarityEngine',
    'cosine_similarity',
    'dot_product',
    'magnitude',
    'rank',
    'DocumentId',
    'FeatureVector',
    'ScoredResult',
    'SearchResult'
]

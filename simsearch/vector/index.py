"""
In-memory vector storage for a single collection.
Exact brute-force cosine search; no persistence, no approximate index.
"""

import time
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Tuple

import numpy as np

from util.logging import logger
from ..core.config import debug_enabled, get_default_top_k
from ..core.locks import ReadWriteLock
from .similarity import SimilarityEngine
from .types import DocumentId, FeatureVector, SearchResult, as_readonly_vector


class IVectorStore(ABC):
    """Abstract interface for vector storage operations."""

    @abstractmethod
    def add_or_update(self, doc_id: DocumentId, vector: FeatureVector) -> None:
        """Insert a vector, replacing any vector already stored under `doc_id`."""
        pass

    @abstractmethod
    def get(self, doc_id: DocumentId) -> Optional[np.ndarray]:
        """Return the stored vector, or None if `doc_id` is absent."""
        pass

    @abstractmethod
    def remove(self, doc_id: DocumentId) -> bool:
        """Delete the entry for `doc_id` if present."""
        pass

    @abstractmethod
    def search(self, query: FeatureVector, k: int) -> SearchResult:
        """Return the top-k entries by cosine similarity to `query`."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove all entries from the store."""
        pass


class VectorStore(IVectorStore):
    """
    In-memory store mapping document ids to feature vectors.

    Vectors of any dimension may live side by side; a search only scores the
    ones whose length matches the query. Stored vectors are read-only float64
    copies of what the caller passed in, so `get` returns exactly the values
    that were added.

    Mutations hold the store's write lock and reads hold its read lock, so a
    store can be shared between threads: one writer at a time, or any number
    of concurrent readers.
    """

    def __init__(self, name: Optional[str] = None, engine: Optional[SimilarityEngine] = None):
        self.name = name
        self.engine = engine if engine is not None else SimilarityEngine()
        self._vectors = {}  # doc_id -> read-only np.ndarray
        self._lock = ReadWriteLock()

    @property
    def lock(self) -> ReadWriteLock:
        return self._lock

    def add_or_update(self, doc_id: DocumentId, vector: FeatureVector) -> None:
        stored = as_readonly_vector(vector)
        with self._lock.write():
            replaced = doc_id in self._vectors
            self._vectors[doc_id] = stored

        if debug_enabled():
            logger.log_vector_operation(
                "update" if replaced else "add", doc_id,
                {"collection": self.name, "dimension": stored.shape[0]}
            )

    def batch_add_or_update(self, items: Iterable[Tuple[DocumentId, FeatureVector]]) -> int:
        """Insert or replace many entries under a single write lock. Returns the count written."""
        prepared = [(doc_id, as_readonly_vector(vector)) for doc_id, vector in items]
        with self._lock.write():
            for doc_id, stored in prepared:
                self._vectors[doc_id] = stored

        if debug_enabled():
            logger.log_operation("vector.batch_add", "success",
                                 {"collection": self.name, "count": len(prepared)})
        return len(prepared)

    def get(self, doc_id: DocumentId) -> Optional[np.ndarray]:
        with self._lock.read():
            return self._vectors.get(doc_id)

    def remove(self, doc_id: DocumentId) -> bool:
        with self._lock.write():
            removed = self._vectors.pop(doc_id, None) is not None

        if removed and debug_enabled():
            logger.log_vector_operation("remove", doc_id, {"collection": self.name})
        return removed

    def search(self, query: FeatureVector, k: Optional[int] = None) -> SearchResult:
        if k is None:
            k = get_default_top_k()

        # Stored arrays are immutable, so scoring can run on a snapshot
        with self._lock.read():
            entries = list(self._vectors.items())

        start_time = time.perf_counter()
        results = self.engine.search(query, entries, k)

        if debug_enabled():
            logger.log_search(self.name, len(query), k, len(results),
                              (time.perf_counter() - start_time) * 1000)
        return results

    def clear(self) -> None:
        with self._lock.write():
            count = len(self._vectors)
            self._vectors.clear()

        if debug_enabled():
            logger.log_operation("vector.clear", "success", {"collection": self.name, "count": count})

    def ids(self) -> List[DocumentId]:
        """Snapshot of the stored document ids."""
        with self._lock.read():
            return list(self._vectors.keys())

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._vectors)

    def __contains__(self, doc_id) -> bool:
        with self._lock.read():
            return doc_id in self._vectors

    def __repr__(self) -> str:
        return f"VectorStore(name={self.name!r}, size={len(self)})"

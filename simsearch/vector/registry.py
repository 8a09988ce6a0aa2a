"""
Named collections of vector stores.
Routes store operations and searches to the collection registered under a name.
"""

import logging
from typing import Dict, List, Optional

import numpy as np

from util.logging import logger
from ..core.config import get_duplicate_collection_policy
from ..core.errors import CollectionNotFoundError, DuplicateCollectionError, InvalidCollectionNameError
from ..core.locks import ReadWriteLock
from .index import VectorStore
from .similarity import SimilarityEngine
from .types import DocumentId, FeatureVector, SearchResult


class CollectionRegistry:
    """
    Registry of named VectorStores.

    Reads against a name that was never registered (get_collection, get,
    search_in_collection) return None, so callers can tell "no such
    collection" apart from "no matches". Mutations against an unknown name
    raise CollectionNotFoundError.
    """

    def __init__(self, engine: Optional[SimilarityEngine] = None):
        """
        Args:
            engine: Similarity engine shared by every store created here.
                A default SimilarityEngine is built if omitted.
        """
        self.engine = engine if engine is not None else SimilarityEngine()
        self._collections: Dict[str, VectorStore] = {}
        self._lock = ReadWriteLock()

    @property
    def lock(self) -> ReadWriteLock:
        return self._lock

    @staticmethod
    def _validate_name(name: str) -> None:
        # Names are matched exactly; whitespace is significant
        if not isinstance(name, str) or not name:
            raise InvalidCollectionNameError(f"Collection name must be a non-empty string: {name!r}")

    def add_collection(self, name: str, replace: Optional[bool] = None) -> VectorStore:
        """
        Register a new, empty collection under `name`.

        Args:
            name: Collection name
            replace: What to do if `name` is already registered. True drops
                the existing collection and every vector in it; False raises
                DuplicateCollectionError. None follows
                DUPLICATE_COLLECTION_POLICY (replace by default).

        Returns:
            The newly created store
        """
        self._validate_name(name)
        if replace is None:
            replace = get_duplicate_collection_policy() != "reject"

        store = VectorStore(name=name, engine=self.engine)
        with self._lock.write():
            previous = self._collections.get(name)
            if previous is not None and not replace:
                raise DuplicateCollectionError(name)
            self._collections[name] = store

        if previous is not None:
            logger.log_collection_operation(
                "replace", name, {"discarded_vectors": len(previous)}, status="destructive",
                level=logging.WARNING
            )
        else:
            logger.log_collection_operation("add", name)
        return store

    def drop_collection(self, name: str) -> bool:
        """Remove a collection and all its vectors. Returns False if it was not registered."""
        with self._lock.write():
            store = self._collections.pop(name, None)

        if store is None:
            return False
        logger.log_collection_operation("drop", name, {"discarded_vectors": len(store)})
        return True

    def get_collection(self, name: str) -> Optional[VectorStore]:
        """Return the store registered under `name`, or None."""
        with self._lock.read():
            return self._collections.get(name)

    def has_collection(self, name: str) -> bool:
        with self._lock.read():
            return name in self._collections

    def list_collections(self) -> List[str]:
        with self._lock.read():
            return sorted(self._collections.keys())

    def _require(self, name: str) -> VectorStore:
        store = self.get_collection(name)
        if store is None:
            raise CollectionNotFoundError(name)
        return store

    def add_or_update(self, name: str, doc_id: DocumentId, vector: FeatureVector) -> None:
        """Insert or replace a vector in the named collection."""
        self._require(name).add_or_update(doc_id, vector)

    def remove(self, name: str, doc_id: DocumentId) -> bool:
        """Delete a vector from the named collection; absent ids are a no-op."""
        return self._require(name).remove(doc_id)

    def get(self, name: str, doc_id: DocumentId) -> Optional[np.ndarray]:
        """Fetch a vector, or None if either the collection or the id is absent."""
        store = self.get_collection(name)
        if store is None:
            return None
        return store.get(doc_id)

    def search_in_collection(self, name: str, query: FeatureVector, k: Optional[int] = None) -> Optional[SearchResult]:
        """
        Top-k search inside one collection.

        Returns None if `name` is not registered, otherwise the (possibly
        empty) ranked results.
        `k` defaults to DEFAULT_TOP_K.
        """
        store = self.get_collection(name)
        if store is None:
            return None
        return store.search(query, k)

    def clear(self) -> None:
        """Drop every collection."""
        with self._lock.write():
            count = len(self._collections)
            self._collections.clear()
        logger.log_operation("registry.clear", "success", {"collections": count})

    def __contains__(self, name) -> bool:
        return self.has_collection(name)

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._collections)

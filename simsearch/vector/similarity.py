"""
Exact cosine similarity scoring and top-k ranking.

Each cosine computation is three independent reductions over the same pair
of vectors: the dot product and the two magnitudes. They can run inline or
be handed to a ReductionGroup as one fork-join batch; both paths produce the
same value because every reduction reads its own immutable input.
"""

import math
from typing import Iterable, List, Optional, Tuple

import numpy as np

from ..core.config import is_parallel_similarity_enabled
from ..core.errors import DimensionMismatchError
from ..core.reduction import ReductionGroup, get_default_group
from .types import DocumentId, FeatureVector, ScoredResult, SearchResult, as_readonly_vector


def dot_product(a: np.ndarray, b: np.ndarray) -> float:
    """Sum of element-wise products of two equal-length vectors."""
    return float(np.dot(a, b))


def magnitude(v: np.ndarray) -> float:
    """Euclidean norm of a vector."""
    return float(np.linalg.norm(v))


def _reduce(a: np.ndarray, b: np.ndarray, group: Optional[ReductionGroup]) -> Tuple[float, float, float]:
    tasks = (
        lambda: dot_product(a, b),
        lambda: magnitude(a),
        lambda: magnitude(b),
    )
    if group is None:
        return tuple(task() for task in tasks)
    return group.run(tasks)


def _is_readonly(v) -> bool:
    return isinstance(v, np.ndarray) and v.dtype == np.float64 and v.ndim == 1 and not v.flags.writeable


def _scaled(v: np.ndarray) -> np.ndarray:
    # Divide by the largest |component| so the squared sums cannot overflow or underflow
    peak = float(np.max(np.abs(v))) if v.shape[0] else 0.0
    if peak == 0.0 or not math.isfinite(peak):
        return v
    scaled = v / peak
    scaled.flags.writeable = False
    return scaled


def cosine_similarity(a: FeatureVector, b: FeatureVector,
                      reduction_group: Optional[ReductionGroup] = None) -> float:
    """
    Cosine of the angle between `a` and `b`.

    Returns exactly 0.0 when either vector has zero magnitude, including when
    both do. The result is clamped to [-1.0, 1.0] to absorb rounding.
    Each vector is scaled by its largest absolute component before the
    reductions; the scale cancels in the quotient and keeps very large or
    very small components finite.

    Raises:
        DimensionMismatchError: if the vectors differ in length
    """
    a = a if _is_readonly(a) else as_readonly_vector(a)
    b = b if _is_readonly(b) else as_readonly_vector(b)
    if a.shape[0] != b.shape[0]:
        raise DimensionMismatchError(a.shape[0], b.shape[0])

    dot, magnitude_a, magnitude_b = _reduce(_scaled(a), _scaled(b), reduction_group)

    if magnitude_a == 0.0 or magnitude_b == 0.0:
        return 0.0

    return float(np.clip(dot / (magnitude_a * magnitude_b), -1.0, 1.0))


def _rank_key(result: ScoredResult):
    # Descending by score, NaN after every number, then by id
    if math.isnan(result.score):
        return (1, 0.0, str(result.id))
    return (0, -result.score, str(result.id))


def rank(results: Iterable[ScoredResult]) -> SearchResult:
    """Order results by descending score, ties broken by identifier; NaN scores sort last."""
    return sorted(results, key=_rank_key)


class SimilarityEngine:
    """Brute-force cosine similarity search over (id, vector) entries."""

    def __init__(self, parallel: Optional[bool] = None, reduction_group: Optional[ReductionGroup] = None):
        """
        Args:
            parallel: Fan the per-pair reductions out to a reduction group.
                Defaults to SIMILARITY_PARALLEL, or True when a group is given.
            reduction_group: Group to use when parallel; the process-wide
                default group is used if omitted.
        """
        if parallel is None:
            parallel = reduction_group is not None or is_parallel_similarity_enabled()
        self.parallel = parallel
        self._reduction_group = reduction_group

    @property
    def reduction_group(self) -> Optional[ReductionGroup]:
        if not self.parallel:
            return None
        if self._reduction_group is not None:
            return self._reduction_group
        return get_default_group()

    def similarity(self, a: FeatureVector, b: FeatureVector) -> float:
        """Cosine similarity of two equal-length vectors."""
        return cosine_similarity(a, b, self.reduction_group)

    def score(self, query: FeatureVector, entries: Iterable[Tuple[DocumentId, FeatureVector]]) -> List[ScoredResult]:
        """Score every entry with the query's dimension; other entries are skipped."""
        query = as_readonly_vector(query)
        group = self.reduction_group
        scored = []
        for doc_id, vector in entries:
            if len(vector) != query.shape[0]:
                continue
            scored.append(ScoredResult(id=doc_id, score=cosine_similarity(query, vector, group)))
        return scored

    def search(self, query: FeatureVector, entries: Iterable[Tuple[DocumentId, FeatureVector]],
               k: int) -> SearchResult:
        """Return the `k` best-scoring entries, best first."""
        if k < 0:
            raise ValueError(f"k must be >= 0: {k}")
        if k == 0:
            return []
        return rank(self.score(query, entries))[:k]

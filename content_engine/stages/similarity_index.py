"""
Similarity index: top-K most similar catalog items per item.

Composite similarity for an ordered pair (A, B), A != B:

    same_type * [A.type == B.type]
  + categories * Jaccard(A.categories, B.categories)
  + tags * Jaccard(A.tags, B.tags)
  + same_difficulty * [both have a difficulty and they match]
  + title * Jaccard(title_tokens(A), title_tokens(B))

clamped to 1.0. Each row keeps the neighbors_per_item highest positive
scores, ties broken by content id. Rows are scored in blocks with sparse
incidence matrices so peak memory stays at block_size x catalog_size.

The public entry point is build_similarity_index. A SimilarityIndex is an
immutable snapshot; rebuilding always produces a new object.
"""

import logging
from datetime import datetime
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, NamedTuple, Optional, Sequence, Tuple

import numpy as np
import scipy.sparse as sp

from ..features import tokenize_title
from ..models.config import RecommendationConfig, resolve_config
from ..models.content import ContentItem
from ..utils.dates import utc_now
from ..utils.similarity import jaccard

logger = logging.getLogger(__name__)


class Neighbor(NamedTuple):
    content_id: str
    score: float


class SimilarityIndex:
    """
    Immutable content id -> ordered neighbors mapping, plus the catalog
    snapshot it was built from.

    Not symmetric: B may be in A's top-K without A being in B's.
    """

    __slots__ = ("_neighbors", "_items", "built_at", "weights_version")

    def __init__(
        self,
        neighbors: Dict[str, Tuple[Neighbor, ...]],
        items: Dict[str, ContentItem],
        built_at: datetime,
        weights_version: str,
    ):
        self._neighbors: Mapping[str, Tuple[Neighbor, ...]] = MappingProxyType(dict(neighbors))
        self._items: Mapping[str, ContentItem] = MappingProxyType(dict(items))
        self.built_at = built_at
        self.weights_version = weights_version

    @classmethod
    def empty(cls, weights_version: str = "", built_at: Optional[datetime] = None) -> "SimilarityIndex":
        return cls({}, {}, built_at or utc_now(), weights_version)

    def __contains__(self, content_id: object) -> bool:
        return content_id in self._neighbors

    def __len__(self) -> int:
        return len(self._neighbors)

    @property
    def items(self) -> Mapping[str, ContentItem]:
        """Catalog snapshot (content id -> item) the index was built from."""
        return self._items

    def get_item(self, content_id: str) -> Optional[ContentItem]:
        return self._items.get(content_id)

    def neighbors(self, content_id: str) -> Tuple[Neighbor, ...]:
        """Neighbors of content_id, best first. Unknown ids have none."""
        return self._neighbors.get(content_id, ())

    def similarity(self, a: str, b: str) -> float:
        """
        Indexed similarity between two items, looked up in both directions.

        Returns 0.0 when neither item retained the other as a neighbor.
        """
        for source, target in ((a, b), (b, a)):
            for neighbor in self._neighbors.get(source, ()):
                if neighbor.content_id == target:
                    return neighbor.score
        return 0.0

    def as_dict(self) -> Dict[str, List[Tuple[str, float]]]:
        """Plain-data view of the neighbor lists (for inspection and comparison)."""
        return {
            cid: [(n.content_id, n.score) for n in neighbors]
            for cid, neighbors in self._neighbors.items()
        }


def score_pair(a: ContentItem, b: ContentItem, config: Optional[RecommendationConfig] = None) -> float:
    """
    Composite similarity of one ordered pair, computed directly.

    Reference form of what build_similarity_index computes in blocks; used to
    explain a single score.
    """
    weights = resolve_config(config).similarity
    score = weights.same_type if a.type == b.type else 0.0
    score += weights.categories * jaccard(a.categories, b.categories)
    score += weights.tags * jaccard(a.tags, b.tags)
    if a.difficulty and a.difficulty == b.difficulty:
        score += weights.same_difficulty
    score += weights.title * jaccard(tokenize_title(a.title), tokenize_title(b.title))
    return min(score, 1.0)


def _dedupe_by_id(items: Iterable[ContentItem]) -> List[ContentItem]:
    """Sort items by id, keeping the first occurrence of each id."""
    seen: Dict[str, ContentItem] = {}
    duplicates = 0
    for item in items:
        if item.id in seen:
            duplicates += 1
            continue
        seen[item.id] = item
    if duplicates:
        logger.warning("[index] DUPLICATE_CONTENT_IDS dropped=%s", duplicates)
    return [seen[cid] for cid in sorted(seen)]


def _incidence_matrix(label_sets: Sequence[Iterable[str]]) -> sp.csr_matrix:
    """Binary item x label matrix."""
    vocabulary: Dict[str, int] = {}
    rows: List[int] = []
    cols: List[int] = []
    for row, labels in enumerate(label_sets):
        for label in labels:
            col = vocabulary.setdefault(label, len(vocabulary))
            rows.append(row)
            cols.append(col)
    data = np.ones(len(rows), dtype=np.float64)
    return sp.csr_matrix(
        (data, (np.array(rows, dtype=np.int64), np.array(cols, dtype=np.int64))),
        shape=(len(label_sets), max(len(vocabulary), 1)),
    )


def _codes(values: Sequence[Optional[str]]) -> np.ndarray:
    """Integer code per value; None maps to -1."""
    lookup: Dict[str, int] = {}
    return np.array(
        [-1 if v is None else lookup.setdefault(v, len(lookup)) for v in values],
        dtype=np.int64,
    )


class _JaccardBlock:
    """Row-block Jaccard similarity against all items for one feature."""

    def __init__(self, matrix: sp.csr_matrix):
        self._matrix = matrix
        self._matrix_t = matrix.T.tocsr()
        self._sizes = np.asarray(matrix.sum(axis=1)).ravel()

    def rows(self, start: int, stop: int) -> np.ndarray:
        intersection = (self._matrix[start:stop] @ self._matrix_t).toarray()
        union = self._sizes[start:stop, None] + self._sizes[None, :] - intersection
        out = np.zeros_like(intersection)
        np.divide(intersection, union, out=out, where=union > 0)
        return out


def _top_neighbors(row: np.ndarray, ids: Sequence[str], k: int) -> Tuple[Neighbor, ...]:
    """Best k positive scores in row; ids are sorted, so column order is id order."""
    candidates = np.flatnonzero(row > 0.0)
    if candidates.size == 0:
        return ()
    scores = row[candidates]
    # lexsort: last key is primary -> score descending, then column (id) ascending.
    order = np.lexsort((candidates, -scores))[:k]
    return tuple(Neighbor(ids[candidates[i]], float(scores[i])) for i in order)


def build_similarity_index(
    items: Iterable[ContentItem],
    config: Optional[RecommendationConfig] = None,
    built_at: Optional[datetime] = None,
) -> SimilarityIndex:
    """
    Build a SimilarityIndex over the full catalog snapshot.

    Deterministic: the same catalog and config always yield identical
    neighbor lists. Cost is O(n^2) in catalog size.
    """
    config = resolve_config(config)
    weights = config.similarity
    built_at = built_at or utc_now()
    catalog = _dedupe_by_id(items)
    n = len(catalog)
    if n == 0:
        logger.info("[index] EMPTY_CATALOG built empty index")
        return SimilarityIndex.empty(config.weights_version, built_at)

    ids = [item.id for item in catalog]
    categories = _JaccardBlock(_incidence_matrix([item.categories for item in catalog]))
    tags = _JaccardBlock(_incidence_matrix([item.tags for item in catalog]))
    titles = _JaccardBlock(_incidence_matrix([tokenize_title(item.title) for item in catalog]))
    type_codes = _codes([item.type for item in catalog])
    difficulty_codes = _codes([item.difficulty for item in catalog])

    neighbors: Dict[str, Tuple[Neighbor, ...]] = {}
    block = config.index_block_size
    k = config.neighbors_per_item
    for start in range(0, n, block):
        stop = min(start + block, n)
        scores = weights.same_type * (type_codes[start:stop, None] == type_codes[None, :])
        scores = scores + weights.categories * categories.rows(start, stop)
        scores += weights.tags * tags.rows(start, stop)
        row_difficulty = difficulty_codes[start:stop, None]
        scores += weights.same_difficulty * (
            (row_difficulty == difficulty_codes[None, :]) & (row_difficulty >= 0)
        )
        scores += weights.title * titles.rows(start, stop)
        np.minimum(scores, 1.0, out=scores)
        # An item is never its own neighbor.
        scores[np.arange(stop - start), np.arange(start, stop)] = -np.inf
        for offset in range(stop - start):
            neighbors[ids[start + offset]] = _top_neighbors(scores[offset], ids, k)

    logger.info(
        "[index] BUILT items=%s neighbors_per_item=%s weights_version=%s",
        n, k, config.weights_version,
    )
    return SimilarityIndex(
        neighbors,
        {item.id: item for item in catalog},
        built_at,
        config.weights_version,
    )

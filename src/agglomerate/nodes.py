"""
Data types of the dendrogram: input points, the per-node neighbour list and
the cluster node itself.
"""

from bisect import bisect_right
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterator, List, NamedTuple, Optional, Tuple

import numpy as np

__all__ = ["Point", "NodeKind", "Neighbour", "NeighbourList", "ClusterNode"]


class Point(NamedTuple):
    """One labelled input record."""

    label: str
    x: float
    y: float


class NodeKind(Enum):
    UNUSED = "unused"
    LEAF = "leaf"
    MERGE = "merge"


class Neighbour(NamedTuple):
    target: int
    distance: float


class NeighbourList:
    """
    Candidate merge partners of one node, ascending by distance.

    Entries are never removed. A target that stopped being a root is stale and
    is skipped by the readers that take an ``is_root`` predicate.
    """

    def __init__(self) -> None:
        self._distances: List[float] = []
        self._targets: List[int] = []

    def insert(self, target: int, distance: float) -> None:
        """
        Insert keeping ascending order; equal distances stay in insertion order.

        @param target: node index of the candidate
        @param distance: linkage distance to the candidate
        """
        pos = bisect_right(self._distances, distance)
        self._distances.insert(pos, distance)
        self._targets.insert(pos, target)

    def __len__(self) -> int:
        return len(self._targets)

    def __iter__(self) -> Iterator[Neighbour]:
        for target, distance in zip(self._targets, self._distances):
            yield Neighbour(target, distance)

    def live(self, is_root: Callable[[int], bool]) -> Iterator[Neighbour]:
        """Yield only entries whose target is still a root."""
        for entry in self:
            if is_root(entry.target):
                yield entry

    def first_live(self, is_root: Callable[[int], bool]) -> Optional[Neighbour]:
        """
        Closest candidate that is still a root.

        @param is_root: predicate on node indices
        @return: Neighbour, or None if every entry is stale
        """
        return next(self.live(is_root), None)


@dataclass(eq=False)
class ClusterNode:
    """
    One vertex of the dendrogram.

    Leaves carry a label, merges carry the indices of their two children.
    ``members`` lists the covered leaf indices in merge order.
    """

    index: int
    kind: NodeKind = NodeKind.UNUSED
    is_root: bool = False
    height: int = 0
    label: Optional[str] = None
    members: Tuple[int, ...] = ()
    centroid: Optional[np.ndarray] = None
    children: Optional[Tuple[int, int]] = None
    distance: float = 0.0
    neighbours: NeighbourList = field(default_factory=NeighbourList)

    @property
    def is_used(self) -> bool:
        return self.kind is not NodeKind.UNUSED

    @property
    def is_leaf(self) -> bool:
        return self.kind is NodeKind.LEAF

    @property
    def size(self) -> int:
        return len(self.members)

"""
Agglomerative clustering of labelled 2-D points into a dendrogram.

The Cluster object owns the read-only distance matrix and an arena of
2n - 1 nodes: n leaves followed by n - 1 merge nodes in creation order.
Every node keeps a list of candidate partners (older roots) sorted by
linkage distance; the list is built once, when the node becomes a root,
and entries whose target has since been merged are skipped on read.

Each round picks the globally closest pair of roots, appends the merge node
and indexes its candidates, until a single root remains. The finished tree
can then be cut into any number of groups.
"""

import heapq
from typing import Iterator, List, Optional, Sequence, Tuple
import numpy as np

from .distances import build_distance_matrix, points_to_array
from .errors import AllocationError, InvalidNodeError, NoMergeCandidateError
from .linkage import get_linkage, linkage_distance
from .logger import get_logger
from .nodes import ClusterNode, Neighbour, NodeKind, Point

__all__ = ["Cluster", "agglomerate", "agglomerative"]

logger = get_logger(__name__)


class Cluster:
    """
    Dendrogram under construction (and, after run(), finished).

    @param points: ordered sequence of n >= 1 Point records
    @param linkage: 'single' | 'complete' | 'average' | 'centroid', fixed for the run
    """

    def __init__(self, points: Sequence[Point], linkage: str = "single"):
        self.linkage = linkage
        self._linkage_fn = get_linkage(linkage)
        self.points: Tuple[Point, ...] = tuple(points)
        self.distances = build_distance_matrix(self.points)
        self._coords = points_to_array(self.points)

        self.num_items = len(self.points)
        self.num_nodes = 0
        self.num_clusters = 0
        try:
            self._nodes: List[ClusterNode] = [
                ClusterNode(index=i) for i in range(2 * self.num_items - 1)
            ]
        except MemoryError as exc:
            logger.error(f"Failed to allocate {2 * self.num_items - 1} cluster nodes")
            raise AllocationError("Failed to allocate cluster nodes.") from exc

    # ------------------------------------------------------------------
    # arena access

    def __len__(self) -> int:
        return self.num_nodes

    def __getitem__(self, index: int) -> ClusterNode:
        return self._nodes[index]

    def __iter__(self) -> Iterator[ClusterNode]:
        """Used nodes in creation order."""
        return iter(self._nodes[:self.num_nodes])

    def is_root(self, index: int) -> bool:
        return self._nodes[index].is_root

    def roots(self) -> Iterator[ClusterNode]:
        """Current roots, most recently created first."""
        for index in range(self.num_nodes - 1, -1, -1):
            node = self._nodes[index]
            if node.is_root:
                yield node

    @property
    def root(self) -> ClusterNode:
        """Root of the finished dendrogram."""
        if self.num_clusters != 1:
            raise InvalidNodeError(
                f"Dendrogram is not complete: {self.num_clusters} roots remain."
            )
        return self._nodes[self.num_nodes - 1]

    @property
    def is_complete(self) -> bool:
        return self.num_clusters == 1 and self.num_nodes == len(self._nodes)

    # ------------------------------------------------------------------
    # construction

    def add_leaf(self, point: Point) -> ClusterNode:
        """
        Turn the next input point into a root leaf and index its candidates.

        @param point: the Point at position num_nodes of the input
        @return: the new leaf node
        """
        index = self.num_nodes
        if index >= self.num_items:
            raise InvalidNodeError(f"Leaf index {index} is outside [0, {self.num_items}).")
        node = self._nodes[index]
        node.kind = NodeKind.LEAF
        node.label = point.label
        node.members = (index,)
        node.centroid = self._coords[index].copy()
        node.is_root = True
        self.num_nodes += 1
        self.num_clusters += 1
        self.update_neighbours(index)
        return node

    def add_leaves(self) -> None:
        for point in self.points:
            self.add_leaf(point)

    def update_neighbours(self, index: int) -> None:
        """
        Fill the neighbour list of a freshly created root.

        Every older root is measured once with the run's linkage; the list is
        kept sorted ascending and ties keep insertion order.

        @param index: node index, must be in use
        @raises InvalidNodeError: if the node or any older slot is Unused
        """
        node = self._nodes[index]
        if not node.is_used:
            logger.error(f"Supplied node with index {index} is invalid")
            raise InvalidNodeError(f"Supplied node with index {index} is invalid.")
        for target in range(index - 1, -1, -1):
            other = self._nodes[target]
            if not other.is_used:
                logger.error(f"Empty node found at {target} while indexing {index}")
                raise InvalidNodeError(f"Empty node found at {target}.")
            if other.is_root:
                node.neighbours.insert(
                    target, linkage_distance(self._linkage_fn, self.distances, node, other)
                )

    def find_clusters_to_merge(self) -> Tuple[float, int, int]:
        """
        Pick the closest pair of roots.

        Roots are scanned from the highest index down; each contributes its
        first neighbour that is still a root. On equal distances the pair found
        later in the scan wins.

        @return: tuple (distance, node, target)
        @raises NoMergeCandidateError: if no root has a live candidate
        """
        best: Optional[Tuple[float, int, int]] = None
        for node in self.roots():
            candidate: Optional[Neighbour] = node.neighbours.first_live(self.is_root)
            if candidate is None:
                continue
            # <= on purpose: on equal distances the older root wins
            if best is None or candidate.distance <= best[0]:
                best = (candidate.distance, node.index, candidate.target)
        if best is None:
            logger.error(f"No merge candidate among {self.num_clusters} roots")
            raise NoMergeCandidateError(
                f"No merge candidate found with {self.num_clusters} clusters left."
            )
        return best

    def merge(self, first: int, second: int, distance: Optional[float] = None) -> ClusterNode:
        """
        Create the parent of two roots and index its candidates.

        @param first: index of a root node
        @param second: index of another root node
        @param distance: linkage distance between them, recorded on the parent;
                         computed with the run's linkage when omitted
        @return: the new merge node
        """
        a = self._nodes[first]
        b = self._nodes[second]
        if first == second:
            raise ValueError("Cannot merge a cluster with itself.")
        if not (a.is_root and b.is_root):
            raise InvalidNodeError(f"Both clusters must be roots to merge ({first}, {second}).")
        index = self.num_nodes
        if index >= len(self._nodes):
            raise InvalidNodeError(f"Node arena is full ({len(self._nodes)} nodes).")
        if distance is None:
            distance = linkage_distance(self._linkage_fn, self.distances, a, b)

        node = self._nodes[index]
        node.kind = NodeKind.MERGE
        node.members = a.members + b.members
        node.children = (first, second)
        node.height = max(a.height, b.height) + 1
        node.centroid = self._coords[list(node.members)].mean(axis=0)
        node.distance = float(distance)
        a.is_root = False
        b.is_root = False
        node.is_root = True
        self.num_nodes += 1
        self.num_clusters -= 1

        logger.debug(
            f"Merged {first} and {second} into {index} at {distance:.6g} "
            f"({node.size} members, {self.num_clusters} clusters left)"
        )
        self.update_neighbours(index)
        return node

    def merge_clusters(self) -> None:
        while self.num_clusters > 1:
            distance, first, second = self.find_clusters_to_merge()
            self.merge(first, second, distance)

    def run(self) -> "Cluster":
        """
        Insert all leaves and merge until one root is left.

        @return: self, complete
        """
        if self.num_nodes:
            raise InvalidNodeError("Cluster has already been run.")
        self.add_leaves()
        self.merge_clusters()
        logger.info(
            f"Clustered {self.num_items} points with {self.linkage} linkage "
            f"into {self.num_nodes} nodes"
        )
        return self

    # ------------------------------------------------------------------
    # results

    def cut(self, k: int) -> List[Tuple[int, ...]]:
        """
        Split the dendrogram into k groups of leaf indices.

        Starting at the root, every merge node whose index is at least
        num_nodes - k + 1 is replaced by its children; the first node below
        that threshold on each branch becomes a group. Pending nodes are
        visited from the highest index down.

        @param k: number of groups; clamped to num_items, k < 1 gives []
        @return: list of k member tuples, disjoint, covering every leaf
        """
        if k < 1:
            return []
        k = min(k, self.num_items)
        root = self.root
        threshold = self.num_nodes - k + 1

        groups: List[Tuple[int, ...]] = []
        pending = [-root.index]  # max-heap
        while pending and len(groups) < k:
            node = self._nodes[-heapq.heappop(pending)]
            if node.index >= threshold and node.kind is NodeKind.MERGE:
                for child in node.children:
                    heapq.heappush(pending, -child)
            else:
                groups.append(node.members)
        return groups

    def labels(self, k: int) -> np.ndarray:
        """
        Per-leaf group labels for a cut at k.

        @param k: number of groups, 1 <= k (clamped to num_items)
        @return: integer array shape (num_items,) with labels 0..k-1
        """
        if k < 1:
            raise ValueError("k must be at least 1.")
        labels = np.empty(self.num_items, dtype=int)
        for label, members in enumerate(self.cut(k)):
            labels[list(members)] = label
        return labels

    def linkage_matrix(self) -> np.ndarray:
        """
        SciPy-style linkage matrix of the merges.

        @return: array shape (n-1, 4), rows [child_a, child_b, distance, size]
        """
        rows = [
            [float(node.children[0]), float(node.children[1]), node.distance, float(node.size)]
            for node in self._nodes[self.num_items:self.num_nodes]
        ]
        return np.array(rows, dtype=float).reshape(-1, 4)


def agglomerate(points: Sequence[Point], linkage: str = "single") -> Cluster:
    """
    Cluster the points and return the finished dendrogram.

    @param points: ordered sequence of n >= 1 Point records
    @param linkage: 'single' | 'complete' | 'average' | 'centroid'
    @return: complete Cluster
    """
    return Cluster(points, linkage).run()


def agglomerative(X: np.ndarray,
                  n_clusters: int = 1,
                  linkage: str = "single",
                  return_linkage: bool = False) -> Tuple[np.ndarray, Optional[np.ndarray]]:
    """
    Cluster the rows of an (n, 2) array and cut the result.

    Leaves are labelled by their row number.

    @param X: data matrix shape (n_samples, 2)
    @param n_clusters: desired number of clusters (1 <= n_clusters <= n_samples)
    @param linkage: 'single' | 'complete' | 'average' | 'centroid'
    @param return_linkage: if True, also return the SciPy-style linkage matrix

    @return: tuple (labels, linkage_matrix_or_None)
    """
    X = np.asarray(X, dtype=float)
    if X.ndim != 2 or X.shape[1] != 2:
        raise ValueError("X must be a 2D array of shape (n_samples, 2).")
    n = X.shape[0]
    if not (1 <= n_clusters <= n):
        raise ValueError("n_clusters must be between 1 and n_samples.")

    cluster = agglomerate([Point(str(i), float(x), float(y)) for i, (x, y) in enumerate(X)], linkage)
    labels = cluster.labels(n_clusters)
    if return_linkage:
        return labels, cluster.linkage_matrix()
    return labels, None

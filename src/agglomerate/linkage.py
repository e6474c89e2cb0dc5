"""
Cluster-to-cluster distance rules.

A linkage function takes the base distance matrix and two cluster nodes and
returns the distance between the clusters:
    - 'single'   : closest pair of members
    - 'complete' : farthest pair of members
    - 'average'  : mean over all member pairs
    - 'centroid' : distance between the two centroids

Two leaves are always compared through D directly, whatever the linkage.
"""

from typing import Callable, Dict
import numpy as np

from .nodes import ClusterNode

__all__ = [
    "SUPPORTED_LINKAGES",
    "LinkageFunction",
    "member_distances",
    "single_linkage",
    "complete_linkage",
    "average_linkage",
    "centroid_linkage",
    "get_linkage",
    "linkage_distance",
]

LinkageFunction = Callable[[np.ndarray, ClusterNode, ClusterNode], float]


def member_distances(D: np.ndarray, a: ClusterNode, b: ClusterNode) -> np.ndarray:
    """
    Sub-matrix of D between the members of a and the members of b.

    @param D: base distance matrix (n, n)
    @param a: first node
    @param b: second node
    @return: array shape (|a|, |b|)
    """
    return D[np.ix_(a.members, b.members)]


def single_linkage(D: np.ndarray, a: ClusterNode, b: ClusterNode) -> float:
    return float(member_distances(D, a, b).min())


def complete_linkage(D: np.ndarray, a: ClusterNode, b: ClusterNode) -> float:
    return float(member_distances(D, a, b).max())


def average_linkage(D: np.ndarray, a: ClusterNode, b: ClusterNode) -> float:
    return float(member_distances(D, a, b).sum() / (a.size * b.size))


def centroid_linkage(D: np.ndarray, a: ClusterNode, b: ClusterNode) -> float:
    # D is not consulted for composite clusters
    delta = a.centroid - b.centroid
    return float(np.sqrt(np.dot(delta, delta)))


_LINKAGES: Dict[str, LinkageFunction] = {
    "single": single_linkage,
    "complete": complete_linkage,
    "average": average_linkage,
    "centroid": centroid_linkage,
}

SUPPORTED_LINKAGES = tuple(_LINKAGES)


def get_linkage(name: str) -> LinkageFunction:
    """
    Look up a linkage function by name.

    @param name: 'single' | 'complete' | 'average' | 'centroid'
    @return: LinkageFunction
    @raises ValueError: for any other name
    """
    try:
        return _LINKAGES[name]
    except KeyError:
        raise ValueError(
            f"Unsupported linkage: {name!r}. Available: {', '.join(SUPPORTED_LINKAGES)}"
        ) from None


def linkage_distance(linkage: LinkageFunction, D: np.ndarray,
                     a: ClusterNode, b: ClusterNode) -> float:
    """
    Distance between two clusters under the given linkage.

    @param linkage: function returned by get_linkage
    @param D: base distance matrix (n, n)
    @param a: first node
    @param b: second node
    @return: float distance; exactly D[a, b] when both nodes are leaves
    """
    if a.is_leaf and b.is_leaf:
        return float(D[a.index, b.index])
    return linkage(D, a, b)

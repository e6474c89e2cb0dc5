"""
Agglomerative hierarchical clustering of labelled 2-D points.

    from agglomerate import Point, agglomerate

    cluster = agglomerate([Point("A", 0.5, 0.5), Point("B", 5.5, 0.5)], linkage="single")
    cluster.cut(2)
"""

from .cluster import Cluster, agglomerate, agglomerative
from .errors import (
    AgglomerateError,
    AllocationError,
    InputError,
    InvalidNodeError,
    NoMergeCandidateError,
)
from .linkage import SUPPORTED_LINKAGES
from .nodes import ClusterNode, NodeKind, Point
from .records import read_points

__all__ = [
    "Cluster",
    "ClusterNode",
    "NodeKind",
    "Point",
    "SUPPORTED_LINKAGES",
    "agglomerate",
    "agglomerative",
    "read_points",
    "AgglomerateError",
    "AllocationError",
    "InputError",
    "InvalidNodeError",
    "NoMergeCandidateError",
]

__version__ = "0.2.0"

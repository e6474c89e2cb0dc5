"""
Text rendering of a finished dendrogram and of its cuts.

Node lines look like::

    4 merge h=1 c=(3, 0.5) d=5 [B A] -> 3:5* 2:5*

Every neighbour entry is printed; a target that is no longer a root is marked
with a trailing ``*``. Pass ``live_only`` to drop those entries instead.
"""

from typing import Callable, Iterable, Iterator

from .cluster import Cluster
from .nodes import NodeKind

__all__ = ["format_node", "format_cluster", "format_cut", "emit"]


def _fmt(value: float) -> str:
    return f"{value:.6g}"


def format_node(cluster: Cluster, index: int, live_only: bool = False) -> str:
    """
    One line describing a node.

    @param cluster: Cluster holding the node
    @param index: node index
    @param live_only: drop neighbours that are no longer roots
    @return: str
    """
    node = cluster[index]
    labels = " ".join(cluster[i].label for i in node.members)
    cx, cy = node.centroid
    parts = [
        str(index),
        node.kind.value,
        f"h={node.height}",
        f"c=({_fmt(cx)}, {_fmt(cy)})",
    ]
    if node.kind is NodeKind.MERGE:
        parts.append(f"d={_fmt(node.distance)}")
    parts.append(f"[{labels}]")

    entries = []
    for target, distance in node.neighbours:
        live = cluster.is_root(target)
        if live or not live_only:
            entries.append(f"{target}:{_fmt(distance)}{'' if live else '*'}")
    if entries:
        parts.append("-> " + " ".join(entries))
    return " ".join(parts)


def format_cluster(cluster: Cluster, live_only: bool = False) -> Iterator[str]:
    """Node lines in creation order."""
    for node in cluster:
        yield format_node(cluster, node.index, live_only)


def format_cut(cluster: Cluster, k: int) -> Iterator[str]:
    """
    The k-cluster report: a header, then one line of member labels per group.

    @param cluster: complete Cluster
    @param k: number of groups
    """
    groups = cluster.cut(k)
    yield f"{len(groups)} clusters:"
    for number, members in enumerate(groups, start=1):
        yield f"  {number}: " + " ".join(cluster[i].label for i in members)


def emit(lines: Iterable[str], sink: Callable[[str], None] = print) -> None:
    for line in lines:
        sink(line)

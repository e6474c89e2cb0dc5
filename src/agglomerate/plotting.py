from typing import Optional, Sequence

import matplotlib.pyplot as plt
from matplotlib.axes import Axes
import numpy as np
from scipy.cluster.hierarchy import dendrogram

from .cluster import Cluster
from .distances import points_to_array
from .nodes import Point


def plot_clusters(axis: Axes, points: Sequence[Point], labels: np.ndarray) -> Axes:
    """
    Plots the clustered data points in 2D.

    Args:
        axis (Axes): Axes to draw on.
        points (Sequence[Point]): Input points.
        labels (np.ndarray): Cluster labels of shape (n_samples,), e.g. Cluster.labels(k).
    """
    X = points_to_array(points)
    labels = np.asarray(labels)
    for label in np.unique(labels):
        cluster_points = X[labels == label]
        axis.scatter(cluster_points[:, 0], cluster_points[:, 1], label=f'Cluster {label}')
    for point in points:
        axis.annotate(point.label, (point.x, point.y), textcoords="offset points", xytext=(3, 3))

    axis.set_title('Agglomerative Clustering Results')
    axis.set_xlabel('x')
    axis.set_ylabel('y')
    axis.legend()
    axis.grid(True)
    return axis


def plot_dendrogram(cluster: Cluster, axis: Optional[Axes] = None) -> Axes:
    """
    Plots the dendrogram of a finished clustering.

    Args:
        cluster (Cluster): Complete cluster, see Cluster.run().
        axis (Axes, optional): Axes to draw on; a new figure is created if omitted.
    """
    if axis is None:
        _, axis = plt.subplots(figsize=(10, 7))
    if cluster.num_items > 1:
        dendrogram(
            cluster.linkage_matrix(),
            labels=[p.label for p in cluster.points],
            ax=axis,
        )
    axis.set_title(f'Dendrogram ({cluster.linkage} linkage)')
    axis.set_xlabel('Label')
    axis.set_ylabel('Distance')
    return axis

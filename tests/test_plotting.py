import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest

from agglomerate import Point, agglomerate
from agglomerate.plotting import plot_clusters, plot_dendrogram


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


def test_plot_clusters(square):
    cluster = agglomerate(square)
    fig, ax = plt.subplots()
    out = plot_clusters(ax, square, cluster.labels(2))

    assert out is ax
    assert len(ax.collections) == 2
    assert ax.get_title() == 'Agglomerative Clustering Results'


def test_plot_dendrogram(random_points):
    cluster = agglomerate(random_points, "average")
    ax = plot_dendrogram(cluster)

    assert ax.get_title() == 'Dendrogram (average linkage)'
    assert [t.get_text() for t in ax.get_xticklabels()] != []


def test_plot_dendrogram_single_point():
    ax = plot_dendrogram(agglomerate([Point("only", 0.0, 0.0)]))
    assert ax.get_title() == 'Dendrogram (single linkage)'

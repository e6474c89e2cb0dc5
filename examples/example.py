from agglomerate import Point, agglomerate, agglomerative
from agglomerate.report import emit, format_cluster, format_cut

if __name__ == "__main__":
    # Example dataset
    X = [
        [1.0, 0.0],
        [9.0, 1.0],
        [1.0, 1.0],
        [6.0, 2.0],
        [5.0, 6.0],
    ]

    # Perform agglomerative clustering
    clusters, _ = agglomerative(X, n_clusters=3, linkage="average")

    for data, cluster in zip(X, clusters):
        print(f"Data point: {data}, Cluster: {cluster}")

    # The same, keeping the dendrogram around
    points = [Point("A", 0.5, 0.5), Point("B", 5.5, 0.5), Point("C", 5.5, 5.5), Point("D", 0.5, 5.5)]
    square = agglomerate(points, linkage="single")
    emit(format_cluster(square))
    emit(format_cut(square, 2))

"""
Command line entry point.

    agglomerate points.txt -l average -k 2 -k 3
"""

import argparse
import sys
from typing import List, Optional

from .cluster import agglomerate
from .config import ClusteringConfig, load_config
from .errors import AgglomerateError
from .linkage import SUPPORTED_LINKAGES
from .logger import get_logger, setup_logging
from .records import read_points
from .report import emit, format_cluster, format_cut

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="agglomerate",
        description="Agglomerative hierarchical clustering of labelled 2-D points.",
    )
    parser.add_argument("input", help="points file: record count, then 'label x y' lines")
    parser.add_argument("-l", "--linkage", choices=SUPPORTED_LINKAGES, default=None,
                        help="cluster distance rule (default: single)")
    parser.add_argument("-k", "--cut", dest="cuts", type=int, action="append", default=None,
                        metavar="K", help="print a K-cluster report; may be repeated")
    parser.add_argument("-c", "--config", default=None, help="YAML config file")
    parser.add_argument("--live-only", action="store_true", default=None,
                        help="omit neighbours that are no longer roots from the node dump")
    parser.add_argument("--plot", action="store_true", default=None,
                        help="show the dendrogram (and the first cut with k >= 1) with matplotlib")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="debug logging")
    return parser


def _show_plots(cluster, cuts: List[int]) -> None:
    import matplotlib.pyplot as plt

    from .plotting import plot_clusters, plot_dendrogram

    cuts = [k for k in cuts if k >= 1]
    if cuts:
        fig, (ax_points, ax_tree) = plt.subplots(1, 2, figsize=(14, 6))
        plot_clusters(ax_points, cluster.points, cluster.labels(cuts[0]))
    else:
        fig, ax_tree = plt.subplots(figsize=(10, 7))
    plot_dendrogram(cluster, ax_tree)
    fig.tight_layout()
    plt.show()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging("DEBUG" if args.verbose else "INFO")

    try:
        config = load_config(args.config) if args.config else ClusteringConfig()
        config = config.override(
            linkage=args.linkage,
            cuts=args.cuts,
            live_only=args.live_only,
            plot=args.plot,
            log_level="DEBUG" if args.verbose else None,
        )
        setup_logging(config.log_level)

        points = read_points(args.input)
        cluster = agglomerate(points, config.linkage)
    except (AgglomerateError, OSError) as exc:
        logger.debug("Run aborted", exc_info=True)
        print(f"agglomerate: {type(exc).__name__}: {exc}", file=sys.stderr)
        return 1

    emit(format_cluster(cluster, live_only=config.live_only))
    for k in config.cuts:
        emit(format_cut(cluster, k))
    if config.plot:
        _show_plots(cluster, config.cuts)
    return 0


if __name__ == "__main__":
    sys.exit(main())

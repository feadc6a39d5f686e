#!/usr/bin/env python3
"""End-to-end k-means demo.

Generates a synthetic 2-D dataset, runs k-means from several random
initializations, and reports the best run.

Usage:
    python experiments/run_kmeans_demo.py --k 4 --runs 9
    python experiments/run_kmeans_demo.py --criterion silhouette --plot
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import argparse
import time
from datetime import datetime

import numpy as np

from kmeans2d.config import ExperimentConfig, DatasetConfig, KMeansConfig
from kmeans2d.data.synthetic import generate_dataset
from kmeans2d.clustering.restarts import repeat_kmeans
from kmeans2d.visualization.plot_utils import (
    MPL_AVAILABLE,
    plot_clusters,
    result_to_dict,
    save_results_json,
)


def run_demo(config: ExperimentConfig, plot: bool = False, save: bool = False):
    """Generate data, run restarts, and print the best result."""
    print("=" * 60)
    print("K-Means over synthetic 2-D points")
    print("=" * 60)
    print()

    print("Configuration:")
    print(f"  Hidden clusters: {config.dataset.cluster_count}")
    print(f"  Samples: {config.dataset.sample_count}")
    print(f"  Spread: {config.dataset.spread}")
    print(f"  k: {config.kmeans.k}")
    print(f"  Runs: {config.kmeans.n_runs}")
    print(f"  Criterion: {config.kmeans.criterion}")
    print(f"  Max iterations: {config.kmeans.max_iter or 'unbounded'}")
    print()

    rng = np.random.default_rng(config.seed)

    print("Generating dataset...")
    dataset = generate_dataset(
        cluster_count=config.dataset.cluster_count,
        sample_count=config.dataset.sample_count,
        spread=config.dataset.spread,
        grid_size=config.dataset.grid_size,
        rng=rng,
    )
    print(f"  Generated {len(dataset)} points")
    print()

    print("Running k-means...")
    print("-" * 40)
    start = time.time()
    summary = repeat_kmeans(
        dataset,
        k=config.kmeans.k,
        n_runs=config.kmeans.n_runs,
        rng=rng,
        criterion=config.kmeans.criterion,
        compute_silhouette=config.kmeans.compute_silhouette,
        max_iter=config.kmeans.max_iter,
        verbose=True,
    )
    elapsed = time.time() - start
    print("-" * 40)
    print()

    best = summary.best
    print("Best run:")
    print(f"  Run: {summary.best_index + 1}/{summary.n_runs}")
    print(f"  SSE: {best.sse:.4f}")
    print(f"  Populated clusters: {best.k}")
    if best.silhouette is not None:
        print(f"  Silhouette: {best.silhouette:.4f}")
    print(f"  Iterations: {best.n_iterations}")
    print(f"  Converged: {best.converged}")
    print(f"  Runtime: {elapsed:.2f}s")
    print()

    output_dir = Path(config.output_dir)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    if save:
        out_path = output_dir / f"kmeans_results_{timestamp}.json"
        save_results_json(
            {
                "config": config.to_dict(),
                "best_index": summary.best_index,
                "runs": [result_to_dict(r) for r in summary.results],
                "runtime_seconds": elapsed,
                "timestamp": datetime.now().isoformat(),
            },
            out_path,
        )
        print(f"Results saved to: {out_path}")

    if plot:
        if not MPL_AVAILABLE:
            print("matplotlib not installed; skipping plot")
        else:
            plot_path = output_dir / f"kmeans_clusters_{timestamp}.png"
            plot_clusters(dataset, best, out_path=plot_path)
            print(f"Plot saved to: {plot_path}")

    print()
    print("=" * 60)
    print("Demo complete!")
    print("=" * 60)

    return summary


def build_parser() -> argparse.ArgumentParser:
    """Command-line options for the demo."""
    parser = argparse.ArgumentParser(description="K-Means demo on synthetic 2-D data")
    parser.add_argument("--clusters", type=int, default=10,
                        help="Hidden clusters in the generated dataset")
    parser.add_argument("--samples", type=int, default=100,
                        help="Total generated samples")
    parser.add_argument("--spread", type=float, default=0.8,
                        help="Maximum distance of a sample from its hidden centroid")
    parser.add_argument("--k", type=int, default=4, help="Clusters to fit")
    parser.add_argument("--runs", type=int, default=9, help="Independent restarts")
    parser.add_argument("--max-iter", type=int, default=None,
                        help="Cap on rounds per run (default: no cap)")
    parser.add_argument(
        "--criterion", type=str, default="sse", choices=["sse", "silhouette"],
        help="Best-run selection: minimum SSE or maximum silhouette"
    )
    parser.add_argument("--no-silhouette", action="store_true",
                        help="Skip silhouette scoring under the SSE criterion")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--plot", action="store_true", help="Save a scatter plot")
    parser.add_argument("--save", action="store_true", help="Save a JSON summary")
    parser.add_argument("--output-dir", type=str, default="./outputs",
                        help="Directory for plots and summaries")
    return parser


def config_from_args(args: argparse.Namespace) -> ExperimentConfig:
    """Build an ExperimentConfig from parsed options."""
    return ExperimentConfig(
        seed=args.seed,
        output_dir=args.output_dir,
        dataset=DatasetConfig(
            cluster_count=args.clusters,
            sample_count=args.samples,
            spread=args.spread,
        ),
        kmeans=KMeansConfig(
            k=args.k,
            n_runs=args.runs,
            max_iter=args.max_iter,
            criterion=args.criterion,
            compute_silhouette=not args.no_silhouette,
        ),
    )


def main(argv=None):
    args = build_parser().parse_args(argv)
    run_demo(config_from_args(args), plot=args.plot, save=args.save)


if __name__ == "__main__":
    main()

"""Statistics for B+-trees."""

import argparse
import logging
import math
import os
import time
from datetime import datetime
from statistics import mean

import numpy as np
from tqdm import trange

from bplus_index.bplus_tree_base import BPlusTreeBase
from bplus_index.factory import create_bplustree
from bplus_index.invariants import assert_tree_invariants_raise
from bplus_index.tree_stats import tree_stats_

logger = logging.getLogger(__name__)

ALPHABET = np.array(list("abcdefghijklmnopqrstuvwxyz"))


def random_words(n: int, length: int = 8, rng: np.random.Generator = None) -> list[str]:
    """Draw ``n`` random lowercase words of fixed length (duplicates possible)."""
    if rng is None:
        rng = np.random.default_rng()
    letters = rng.integers(0, len(ALPHABET), size=(n, length))
    return ["".join(row) for row in ALPHABET[letters]]


def create_tree(keys, max_keys: int = 4) -> BPlusTreeBase:
    """Build a tree by inserting each key in order."""
    tree = create_bplustree(max_keys)
    tree_insert = tree.insert
    for key in keys:
        tree_insert(key)
    return tree


def delete_fraction(tree: BPlusTreeBase, keys, fraction: float, rng: np.random.Generator) -> int:
    """Delete a random ``fraction`` of ``keys`` from ``tree``; returns the number removed."""
    if fraction <= 0 or not keys:
        return 0
    count = int(len(keys) * fraction)
    picks = rng.choice(len(keys), size=count, replace=False)
    removed = 0
    for idx in picks:
        removed += tree.delete(keys[int(idx)])
    return removed


def repeated_experiment(
    size: int,
    repetitions: int,
    max_keys: int,
    delete_ratio: float = 0.0,
    rng: np.random.Generator = None,
) -> None:
    """
    Repeatedly builds random B+-trees (with ``size`` keys), optionally deletes
    a fraction of them, and aggregates structure statistics and timings.
    """
    if rng is None:
        rng = np.random.default_rng()
    t_all_0 = time.perf_counter()

    results = []
    times_build = []
    times_delete = []
    times_stats = []

    for _ in trange(repetitions, desc=f"n={size} K={max_keys}", leave=False):
        keys = random_words(size, rng=rng)

        t0 = time.perf_counter()
        tree = create_tree(keys, max_keys)
        times_build.append(time.perf_counter() - t0)

        t0 = time.perf_counter()
        delete_fraction(tree, keys, delete_ratio, rng)
        times_delete.append(time.perf_counter() - t0)

        t0 = time.perf_counter()
        stats = tree_stats_(tree)
        times_stats.append(time.perf_counter() - t0)

        assert_tree_invariants_raise(tree, stats)
        results.append(stats)

    # Perfect height: smallest h with (K+1)^h >= n leaves' worth of keys
    perfect_height = max(1, math.ceil(math.log(size, max_keys + 1))) if size > 1 else 1

    heights = np.array([s.height for s in results], dtype=float)
    node_counts = np.array([s.node_count for s in results], dtype=float)
    leaf_counts = np.array([s.leaf_count for s in results], dtype=float)
    item_counts = np.array([s.item_count for s in results], dtype=float)
    routing = np.array([s.routing_key_count for s in results], dtype=float)
    fill = np.array(
        [s.item_count / (s.leaf_count * max_keys) if s.leaf_count else 0.0 for s in results],
        dtype=float,
    )
    underfull = np.array([0.0 if s.min_occupancy_met else 1.0 for s in results])

    rows = [
        ("Item count", item_counts.mean(), item_counts.var()),
        ("Node count", node_counts.mean(), node_counts.var()),
        ("Leaf count", leaf_counts.mean(), leaf_counts.var()),
        ("Routing keys", routing.mean(), routing.var()),
        ("Leaf fill factor", fill.mean(), fill.var()),
        ("Underfull trees", underfull.mean(), underfull.var()),
        ("Height", heights.mean(), heights.var()),
        ("Perfect height", perfect_height, None),
        ("Height amplification", heights.mean() / perfect_height, None),
    ]

    # Log table
    header = f"{'Metric':<22} {'Avg':>15} {'(Var)':>15}"
    sep_line = "-" * len(header)

    logger.info(header)
    logger.info(sep_line)
    for name, avg, var in rows:
        if var is None:
            logger.info(f"{name:<22} {avg:>15.2f}")
        else:
            var_str = f"({var:.2f})"
            logger.info(f"{name:<22} {avg:15.2f} {var_str:>15}")

    # Performance metrics
    sum_build = sum(times_build)
    sum_delete = sum(times_delete)
    sum_stats = sum(times_stats)
    total_sum = sum_build + sum_delete + sum_stats

    perf_rows = [
        ("Build time (s)", times_build, sum_build),
        ("Delete time (s)", times_delete, sum_delete),
        ("Stats time (s)", times_stats, sum_stats),
    ]

    header = f"{'Metric':<20}{'Avg(s)':>13}{'Var(s)':>13}{'Total(s)':>13}{'%Total':>10}"
    sep = "-" * len(header)

    logger.info("")
    logger.info("Performance summary:")
    logger.info(header)
    logger.info(sep)
    for name, times, total in perf_rows:
        avg = mean(times)
        var = mean((t - avg) ** 2 for t in times)
        pct = (total / total_sum * 100) if total_sum else 0
        logger.info(f"{name:<20}{avg:13.6f}{var:13.6f}{total:13.6f}{pct:10.2f}%")

    logger.info(sep)
    logger.info("Execution time: %.3f seconds", time.perf_counter() - t_all_0)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run statistics experiments for B+ trees.")
    parser.add_argument(
        "--sizes", type=int, nargs="+", default=[10, 100, 1000, 10_000], help="List of tree sizes to test."
    )
    parser.add_argument(
        "--ks", type=int, nargs="+", default=[2, 4, 16, 64], help="List of max_keys values to test."
    )
    parser.add_argument("--repetitions", type=int, default=10, help="Number of repetitions for each experiment.")
    parser.add_argument("--delete-ratio", type=float, default=0.0,
                        help="Fraction of inserted keys to delete before measuring (0.0-1.0).")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility.")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="INFO",
        help="Set the logging level (default: INFO)",
    )

    args = parser.parse_args()

    rng = np.random.default_rng(args.seed)

    log_dir = os.path.join(os.getcwd(), "stats/logs/bplus_tree_logs")
    os.makedirs(log_dir, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_path = os.path.join(log_dir, f"run_{ts}.log")

    log_level = getattr(logging, args.log_level)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.FileHandler(log_path, mode="w"),
            logging.StreamHandler(),
        ],
        force=True,
    )

    # Library records stay quiet unless explicitly asked for; delete logs at INFO
    logging.getLogger("bplus_index").setLevel(max(log_level, logging.WARNING))

    for n in args.sizes:
        for K in args.ks:
            logger.info("")
            logger.info(
                f"---------------- NOW RUNNING EXPERIMENT: n = {n}, K = {K}, "
                f"repetitions = {args.repetitions}, delete ratio = {args.delete_ratio} ----------------"
            )
            t0 = time.perf_counter()
            repeated_experiment(size=n, repetitions=args.repetitions, max_keys=K,
                                delete_ratio=args.delete_ratio, rng=rng)
            logger.info(f"Total experiment time: {time.perf_counter() - t0:.3f} seconds")

"""
Benchmarks package for B+ trees.

ASV benchmarks for BPlusTreeBase insert, search and delete. Data is
generated deterministically (see BENCHMARK_SEED) so runs are comparable.
"""

from .benchmark_utils import BaseBenchmark, BenchmarkUtils

__all__ = ["BaseBenchmark", "BenchmarkUtils"]

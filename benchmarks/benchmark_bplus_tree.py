"""
ASV benchmarks for BPlusTreeBase operations.

Covers batch construction through repeated ``insert``, point ``search``
with a configurable hit ratio, and ``delete`` of every inserted key.
"""

import gc

from bplus_index.factory import create_bplustree
from benchmarks.benchmark_utils import BaseBenchmark, BenchmarkUtils


def _build(max_keys, keys):
    tree = create_bplustree(max_keys)
    for key in keys:
        tree.insert(key)
    return tree


class BPlusTreeInsertBenchmarks(BaseBenchmark):
    """Benchmarks for tree construction via sequential inserts."""

    params = [
        [4, 16, 64],                              # max_keys
        [1000, 10000],                            # size
        ['uniform', 'sequential', 'reversed'],    # distribution
    ]
    param_names = ['max_keys', 'size', 'distribution']

    min_run_count = 5

    def setup(self, max_keys, size, distribution):
        super().setup(max_keys, size, distribution)
        self.keys = BenchmarkUtils.generate_deterministic_keys(
            size=size,
            seed=42 + hash((max_keys, size, distribution)) % 1000,
            distribution=distribution,
        )
        gc.collect()
        gc.disable()

    def time_insert_batch_construction(self, max_keys, size, distribution):
        _build(max_keys, self.keys)


class BPlusTreeSearchBenchmarks(BaseBenchmark):
    """Benchmarks for BPlusTreeBase.search()."""

    params = [
        [4, 16, 64],    # max_keys
        [1000, 10000],  # size
        [0.0, 1.0],     # hit ratio
    ]
    param_names = ['max_keys', 'size', 'hit_ratio']

    min_run_count = 5

    # Class-level cache for built trees
    _tree_cache = {}

    def setup(self, max_keys, size, hit_ratio):
        super().setup(max_keys, size, hit_ratio)
        cache_key = (max_keys, size)
        if cache_key not in self._tree_cache:
            keys = BenchmarkUtils.generate_deterministic_keys(size=size)
            self._tree_cache[cache_key] = (_build(max_keys, keys), keys)
        self.tree, keys = self._tree_cache[cache_key]
        self.lookup_keys = BenchmarkUtils.create_lookup_keys(keys, hit_ratio=hit_ratio)
        gc.collect()
        gc.disable()

    def time_search(self, max_keys, size, hit_ratio):
        search = self.tree.search
        for key in self.lookup_keys:
            search(key)


class BPlusTreeDeleteBenchmarks(BaseBenchmark):
    """Benchmarks for deleting every inserted key from a freshly built tree."""

    params = [
        [4, 16, 64],    # max_keys
        [1000, 10000],  # size
    ]
    param_names = ['max_keys', 'size']

    min_run_count = 5
    number = 1
    repeat = 5

    def setup(self, max_keys, size):
        super().setup(max_keys, size)
        keys = BenchmarkUtils.generate_deterministic_keys(size=size)
        self.tree = _build(max_keys, keys)
        self.keys = keys
        gc.collect()
        gc.disable()

    def time_delete_all(self, max_keys, size):
        delete = self.tree.delete
        for key in self.keys:
            delete(key)

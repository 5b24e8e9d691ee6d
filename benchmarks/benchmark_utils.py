"""
Benchmarking utilities for B+ trees.

This module provides common utilities and base classes for ASV benchmarking
that work with ASV's built-in timing and stabilization mechanisms.

Reproducibility:
    All random data generation uses deterministic seeds by default.
    The default seed can be overridden via the BENCHMARK_SEED environment variable.

Logging:
    Benchmarks must run with logging at WARNING level or higher; delete
    outcomes are logged at INFO and would otherwise dominate the timings.
"""

import gc
import logging
import os
from typing import List

import numpy as np

# Default seed for deterministic benchmarking - can be overridden via environment variable
DEFAULT_BENCHMARK_SEED = int(os.environ.get('BENCHMARK_SEED', '42'))

ALPHABET = np.array(list("abcdefghijklmnopqrstuvwxyz"))


class BenchmarkUtils:
    """Deterministic test data and setup checks for ASV benchmarks."""

    @staticmethod
    def check_logging_level():
        """Raise if the package logger would emit INFO or DEBUG records."""
        effective_level = logging.getLogger("bplus_index").getEffectiveLevel()
        if effective_level < logging.WARNING:
            raise ValueError(
                f"Logging level is set to {logging.getLevelName(effective_level)}. "
                "Benchmarks require logging to be at WARNING level or higher."
            )

    @staticmethod
    def generate_deterministic_keys(size: int,
                                    seed: int = None,
                                    length: int = 8,
                                    distribution: str = 'uniform') -> List[str]:
        """
        Generate deterministic string keys for benchmarking.

        Args:
            size: Number of keys to generate
            seed: Random seed for reproducibility. If None, uses DEFAULT_BENCHMARK_SEED.
            length: Characters per key
            distribution: 'uniform' (random, unique), 'sequential' (ascending)
                or 'reversed' (descending)

        Returns:
            List of ``size`` distinct keys
        """
        if seed is None:
            seed = DEFAULT_BENCHMARK_SEED

        if distribution == 'sequential':
            return [f"{i:0{length}d}" for i in range(size)]
        if distribution == 'reversed':
            return [f"{i:0{length}d}" for i in reversed(range(size))]
        if distribution != 'uniform':
            raise ValueError(f"Unknown distribution: {distribution}")

        rng = np.random.default_rng(seed)
        keys: List[str] = []
        seen = set()
        while len(keys) < size:
            letters = rng.integers(0, len(ALPHABET), size=(size, length))
            for row in ALPHABET[letters]:
                word = "".join(row)
                if word not in seen:
                    seen.add(word)
                    keys.append(word)
                    if len(keys) == size:
                        break
        return keys

    @staticmethod
    def create_lookup_keys(insert_keys: List[str],
                           hit_ratio: float = 0.8,
                           seed: int = None,
                           num_lookups: int = 1000) -> List[str]:
        """
        Create keys for lookup operations with the given hit ratio.

        Misses carry a character outside the generated alphabet, so they
        can never collide with an inserted key.
        """
        if seed is None:
            seed = DEFAULT_BENCHMARK_SEED
        rng = np.random.default_rng(seed)

        num_hits = int(num_lookups * hit_ratio) if insert_keys else 0
        num_misses = num_lookups - num_hits

        hit_idx = rng.integers(0, len(insert_keys), size=num_hits) if num_hits else []
        hits = [insert_keys[int(i)] for i in hit_idx]
        misses = [f"~{i}" for i in rng.integers(0, 1_000_000, size=num_misses)]

        lookup_keys = hits + misses
        order = rng.permutation(len(lookup_keys))
        return [lookup_keys[int(i)] for i in order]


class BaseBenchmark:
    """Base class for ASV benchmarks.

    Subclasses call ``super().setup(*params)`` first, prepare their data,
    then call ``gc.collect()`` and ``gc.disable()``; ``teardown`` turns
    garbage collection back on.
    """

    params = []
    param_names = []

    warmup_time = 0.1
    sample_time = 0.4

    def setup(self, *params):
        BenchmarkUtils.check_logging_level()

    def teardown(self, *params):
        if not gc.isenabled():
            gc.enable()

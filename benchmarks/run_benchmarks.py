#!/usr/bin/env python3
"""Benchmark suite for pyskiplist comparing against a bisect-sorted list."""

import argparse
import bisect
import json
import random
import time
from pathlib import Path
from typing import Dict, List

import numpy as np
import plotly.graph_objects as go
from tqdm import tqdm

from pyskiplist import SkipList


class Metrics:
    def __init__(self):
        self.insert_latencies: List[float] = []
        self.search_latencies: List[float] = []
        self.delete_latencies: List[float] = []
        self.final_level: int = 0

    @staticmethod
    def _percentiles(samples: List[float]) -> Dict[str, float]:
        return {
            "p50": float(np.percentile(samples, 50)),
            "p95": float(np.percentile(samples, 95)),
            "p99": float(np.percentile(samples, 99)),
        }

    def to_dict(self) -> Dict:
        return {
            "insert_latencies": self._percentiles(self.insert_latencies),
            "search_latencies": self._percentiles(self.search_latencies),
            "delete_latencies": self._percentiles(self.delete_latencies),
            "final_level": self.final_level,
        }

    def plot_latencies(self, title: str, output_path: Path):
        fig = go.Figure()
        for name, samples in (
            ("Insert Latency", self.insert_latencies),
            ("Search Latency", self.search_latencies),
            ("Delete Latency", self.delete_latencies),
        ):
            fig.add_trace(go.Box(y=samples, name=name, boxpoints="outliers"))
        fig.update_layout(
            title=title,
            yaxis_title="Latency (µs)",
            boxmode="group"
        )
        fig.write_html(output_path)


class BenchmarkSuite:
    def __init__(self, num_entries: int, max_level: int, seed: int):
        self.num_entries = num_entries
        self.max_level = max_level
        gen = random.Random(seed)
        self._keys = gen.sample(range(num_entries * 10), num_entries)
        self._lookups = list(self._keys)
        gen.shuffle(self._lookups)
        self._seed = seed

    def run_skiplist_benchmark(self) -> Metrics:
        metrics = Metrics()
        sl = SkipList[int, int](self.max_level, rng=random.Random(self._seed))

        for k in tqdm(self._keys, desc="SkipList Insert"):
            start = time.perf_counter()
            sl.insert(k, k)
            metrics.insert_latencies.append((time.perf_counter() - start) * 1e6)

        for k in tqdm(self._lookups, desc="SkipList Search"):
            start = time.perf_counter()
            sl.search(k)
            metrics.search_latencies.append((time.perf_counter() - start) * 1e6)

        metrics.final_level = sl.level

        for k in tqdm(self._lookups, desc="SkipList Delete"):
            start = time.perf_counter()
            sl.delete(k)
            metrics.delete_latencies.append((time.perf_counter() - start) * 1e6)

        return metrics

    def run_bisect_benchmark(self) -> Metrics:
        metrics = Metrics()
        keys: List[int] = []
        values: List[int] = []

        for k in tqdm(self._keys, desc="Bisect Insert"):
            start = time.perf_counter()
            i = bisect.bisect_left(keys, k)
            keys.insert(i, k)
            values.insert(i, k)
            metrics.insert_latencies.append((time.perf_counter() - start) * 1e6)

        for k in tqdm(self._lookups, desc="Bisect Search"):
            start = time.perf_counter()
            i = bisect.bisect_left(keys, k)
            _ = i < len(keys) and keys[i] == k
            metrics.search_latencies.append((time.perf_counter() - start) * 1e6)

        for k in tqdm(self._lookups, desc="Bisect Delete"):
            start = time.perf_counter()
            i = bisect.bisect_left(keys, k)
            del keys[i]
            del values[i]
            metrics.delete_latencies.append((time.perf_counter() - start) * 1e6)

        return metrics


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--size", type=int, default=100000, help="Number of entries")
    parser.add_argument("--max-level", type=int, default=16, help="Skip list level ceiling")
    parser.add_argument("--seed", type=int, default=42, help="Seed for keys and coin flips")
    parser.add_argument("--output", type=Path, default=Path("benchmark_results"), help="Output directory")
    args = parser.parse_args()

    args.output.mkdir(parents=True, exist_ok=True)

    suite = BenchmarkSuite(args.size, args.max_level, args.seed)
    skiplist_metrics = suite.run_skiplist_benchmark()
    bisect_metrics = suite.run_bisect_benchmark()

    skiplist_metrics.plot_latencies(
        "SkipList Latency Distribution",
        args.output / "skiplist_latencies.html"
    )
    bisect_metrics.plot_latencies(
        "Bisect Latency Distribution",
        args.output / "bisect_latencies.html"
    )

    with open(args.output / "metrics.json", "w") as f:
        json.dump({
            "skiplist": skiplist_metrics.to_dict(),
            "bisect": bisect_metrics.to_dict(),
        }, f, indent=2)


if __name__ == "__main__":
    main()

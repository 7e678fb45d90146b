#!/usr/bin/env python3
"""Benchmark suite for pyskip comparing against a bisect-maintained list."""

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

from pyskip import Settings, SkipList
from pyskip.config import configure_logging


class Metrics:
    def __init__(self):
        self.insert_latencies: List[float] = []
        self.search_latencies: List[float] = []
        self.rank_latencies: List[float] = []
        self.delete_latencies: List[float] = []
        self.final_level: int = 0

    @staticmethod
    def _summary(samples: List[float]) -> Dict[str, float]:
        if not samples:
            return {}
        return {
            "p50": float(np.percentile(samples, 50)),
            "p95": float(np.percentile(samples, 95)),
            "p99": float(np.percentile(samples, 99)),
            "mean": float(np.mean(samples)),
        }

    def to_dict(self) -> Dict:
        return {
            "insert_latencies": self._summary(self.insert_latencies),
            "search_latencies": self._summary(self.search_latencies),
            "rank_latencies": self._summary(self.rank_latencies),
            "delete_latencies": self._summary(self.delete_latencies),
            "final_level": self.final_level,
        }

    def plot_latencies(self, title: str, output_path: Path):
        fig = go.Figure()
        for name, samples in (
            ("Insert", self.insert_latencies),
            ("Search", self.search_latencies),
            ("Rank lookup", self.rank_latencies),
            ("Delete", self.delete_latencies),
        ):
            fig.add_trace(go.Box(y=samples, name=f"{name} Latency", boxpoints="outliers"))

        fig.update_layout(
            title=title,
            yaxis_title="Latency (µs)",
            boxmode="group"
        )

        fig.write_html(output_path)


class BenchmarkSuite:
    def __init__(self, num_entries: int, settings: Settings, seed: int = 0):
        self.num_entries = num_entries
        self.settings = settings
        rng = random.Random(seed)
        self._keys = rng.sample(range(num_entries * 10), num_entries)
        self._ranks = [rng.randrange(1, num_entries + 1) for _ in range(num_entries)]

    def run_pyskip_benchmark(self) -> Metrics:
        metrics = Metrics()
        sl: SkipList[int, int] = SkipList.from_settings(self.settings)

        for k in tqdm(self._keys, desc="pyskip Insert"):
            start = time.perf_counter()
            sl.insert(k, k)
            metrics.insert_latencies.append((time.perf_counter() - start) * 1e6)

        for k in tqdm(self._keys, desc="pyskip Search"):
            start = time.perf_counter()
            sl.search(k)
            metrics.search_latencies.append((time.perf_counter() - start) * 1e6)

        for n in tqdm(self._ranks, desc="pyskip Rank"):
            start = time.perf_counter()
            sl.indexed_key(n)
            metrics.rank_latencies.append((time.perf_counter() - start) * 1e6)

        metrics.final_level = sl.level
        for k in tqdm(self._keys, desc="pyskip Delete"):
            start = time.perf_counter()
            sl.delete(k)
            metrics.delete_latencies.append((time.perf_counter() - start) * 1e6)

        return metrics

    def run_bisect_benchmark(self) -> Metrics:
        metrics = Metrics()
        keys: List[int] = []
        values: List[int] = []

        for k in tqdm(self._keys, desc="bisect Insert"):
            start = time.perf_counter()
            pos = bisect.bisect_left(keys, k)
            keys.insert(pos, k)
            values.insert(pos, k)
            metrics.insert_latencies.append((time.perf_counter() - start) * 1e6)

        for k in tqdm(self._keys, desc="bisect Search"):
            start = time.perf_counter()
            pos = bisect.bisect_left(keys, k)
            _ = values[pos] if pos < len(keys) and keys[pos] == k else None
            metrics.search_latencies.append((time.perf_counter() - start) * 1e6)

        for n in tqdm(self._ranks, desc="bisect Rank"):
            start = time.perf_counter()
            _ = keys[n - 1]
            metrics.rank_latencies.append((time.perf_counter() - start) * 1e6)

        for k in tqdm(self._keys, desc="bisect Delete"):
            start = time.perf_counter()
            pos = bisect.bisect_left(keys, k)
            del keys[pos]
            del values[pos]
            metrics.delete_latencies.append((time.perf_counter() - start) * 1e6)

        return metrics


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--size", type=int, default=100000, help="Number of entries")
    parser.add_argument("--seed", type=int, default=0, help="Seed for the key workload")
    parser.add_argument("--output", type=Path, default=Path("benchmark_results"), help="Output directory")
    args = parser.parse_args()

    settings = Settings.from_env()
    configure_logging(settings)
    args.output.mkdir(parents=True, exist_ok=True)

    suite = BenchmarkSuite(args.size, settings, seed=args.seed)
    pyskip_metrics = suite.run_pyskip_benchmark()
    bisect_metrics = suite.run_bisect_benchmark()

    pyskip_metrics.plot_latencies(
        "pyskip Latency Distribution",
        args.output / "pyskip_latencies.html"
    )
    bisect_metrics.plot_latencies(
        "bisect Latency Distribution",
        args.output / "bisect_latencies.html"
    )

    with open(args.output / "metrics.json", "w") as f:
        json.dump({
            "pyskip": pyskip_metrics.to_dict(),
            "bisect": bisect_metrics.to_dict(),
        }, f, indent=2)


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Automated benchmarking script for the indexer.
Runs a grid of mapper/reducer configurations over a generated corpus and
collects performance metrics.
"""

import json
import time
import sys
import csv
from datetime import datetime
from pathlib import Path

from invindex.common.config import JobConfig
from invindex.common.errors import InvertedIndexError
from invindex.coordinator.job_manager import build_index
from scripts.generate_corpus import generate_corpus

# Configuration
RESULTS_DIR = Path("benchmark_results")
CORPUS_DIR = Path("shared") / "corpus"
OUTPUT_DIR = Path("shared") / "output"
CORPUS_DOCUMENTS = 400
CORPUS_WORDS = 4000

# Benchmark configurations
BENCHMARKS = [
    # Experiment 1: Mapper scaling (fixed reducers)
    {"name": "map_scaling_1", "maps": 1, "reduces": 2, "description": "1 mapper"},
    {"name": "map_scaling_2", "maps": 2, "reduces": 2, "description": "2 mappers"},
    {"name": "map_scaling_4", "maps": 4, "reduces": 2, "description": "4 mappers"},
    {"name": "map_scaling_8", "maps": 8, "reduces": 2, "description": "8 mappers"},

    # Experiment 2: Reducer scaling (fixed mappers)
    {"name": "reduce_scaling_1", "maps": 4, "reduces": 1, "description": "1 reducer"},
    {"name": "reduce_scaling_4", "maps": 4, "reduces": 4, "description": "4 reducers"},
    {"name": "reduce_scaling_13", "maps": 4, "reduces": 13, "description": "13 reducers, 2 letters each"},
    {"name": "reduce_scaling_26", "maps": 4, "reduces": 26, "description": "26 reducers, 1 letter each"},

    # Experiment 3: Oversized pools
    {"name": "combined_8_30", "maps": 8, "reduces": 30, "description": "Reducers beyond the alphabet"},
]


def setup_directories():
    """Create necessary directories and the benchmark corpus."""
    RESULTS_DIR.mkdir(exist_ok=True)
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    manifest = generate_corpus(CORPUS_DIR, CORPUS_DOCUMENTS, CORPUS_WORDS)
    print(f"✓ Corpus ready: {manifest}")
    return manifest


def run_benchmark(config, manifest, run_number=1):
    """Run a single benchmark configuration."""
    print(f"\n{'='*70}")
    print(f"Benchmark: {config['name']} (Run {run_number})")
    print(f"Description: {config['description']}")
    print(f"Config: {config['maps']} mappers, {config['reduces']} reducers")
    print(f"{'='*70}")

    job_config = JobConfig(
        num_mappers=config["maps"],
        num_reducers=config["reduces"],
        manifest_path=str(manifest),
        output_dir=str(OUTPUT_DIR / config["name"])
    )

    start = time.time()
    try:
        metrics = build_index(job_config)
    except InvertedIndexError as e:
        print(f"  ❌ Run failed: {e}")
        return {
            "benchmark_name": config["name"],
            "description": config["description"],
            "run_number": run_number,
            "timestamp": datetime.now().isoformat(),
            "num_mappers": config["maps"],
            "num_reducers": config["reduces"],
            "success": False,
            "total_runtime_seconds": round(time.time() - start, 3),
        }

    print(f"  ✓ Completed in {metrics.total_time_seconds:.3f}s "
          f"(map {metrics.map_phase_time_seconds:.3f}s, reduce {metrics.reduce_phase_time_seconds:.3f}s)")

    input_mb = metrics.input_size_bytes / 1024 / 1024
    return {
        "benchmark_name": config["name"],
        "description": config["description"],
        "run_number": run_number,
        "timestamp": datetime.now().isoformat(),
        "job_id": metrics.job_id,
        "num_mappers": metrics.num_mappers,
        "num_reducers": metrics.num_reducers,
        "num_documents": metrics.num_documents,
        "input_size_mb": round(input_mb, 2),
        "unique_words": metrics.unique_words,
        "success": True,
        "total_runtime_seconds": round(metrics.total_time_seconds, 3),
        "map_phase_seconds": round(metrics.map_phase_time_seconds, 3),
        "reduce_phase_seconds": round(metrics.reduce_phase_time_seconds, 3),
        "throughput_mbps": round(input_mb / metrics.total_time_seconds, 3) if metrics.total_time_seconds > 0 else 0,
        "memory_rss_mb": round(metrics.memory_rss_bytes / 1024 / 1024, 1),
    }


def save_results(results, timestamp):
    """Save results to JSON and CSV files."""
    # JSON format
    json_file = RESULTS_DIR / f"benchmark_results_{timestamp}.json"
    with open(json_file, 'w') as f:
        json.dump(results, f, indent=2)
    print(f"\n✓ Results saved to: {json_file}")

    # CSV format
    csv_file = RESULTS_DIR / f"benchmark_results_{timestamp}.csv"
    if results:
        fieldnames = sorted({key for r in results for key in r})
        with open(csv_file, 'w', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            writer.writerows(results)
        print(f"✓ Results saved to: {csv_file}")

    return json_file, csv_file


def print_summary(results):
    """Print a summary table of results."""
    print(f"\n{'='*70}")
    print("BENCHMARK SUMMARY")
    print(f"{'='*70}")
    print(f"{'Benchmark':<25} {'Maps':>5} {'Reduces':>7} {'Runtime':>10} {'Status':>10}")
    print(f"{'-'*70}")

    for r in results:
        print(f"{r['benchmark_name']:<25} {r['num_mappers']:>5} "
              f"{r['num_reducers']:>7} {r['total_runtime_seconds']:>9.3f}s "
              f"{'✓' if r['success'] else '✗':>10}")

    print(f"{'='*70}")

    successful = sum(1 for r in results if r['success'])
    print(f"Total: {len(results)} benchmarks, {successful} successful, "
          f"{len(results) - successful} failed")


def main():
    """Main benchmarking workflow."""
    print("="*70)
    print("Indexer Performance Benchmark Suite")
    print("="*70)

    manifest = setup_directories()

    runs_per_benchmark = 1
    if len(sys.argv) > 1:
        try:
            runs_per_benchmark = max(1, min(5, int(sys.argv[1])))
        except ValueError:
            print(f"Ignoring invalid run count {sys.argv[1]!r}, using 1")

    print(f"\nRunning {len(BENCHMARKS)} benchmarks × {runs_per_benchmark} runs")

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    all_results = []

    for config in BENCHMARKS:
        for run in range(1, runs_per_benchmark + 1):
            all_results.append(run_benchmark(config, manifest, run_number=run))

    save_results(all_results, timestamp)
    print_summary(all_results)


if __name__ == "__main__":
    main()

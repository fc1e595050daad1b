"""
Performance metrics collection for indexing runs.
"""

import os
import time
import json
from dataclasses import dataclass, asdict
from typing import Dict, Optional, Sequence

import psutil

from invindex.worker.partition import ALPHABET


@dataclass
class JobMetrics:
    """Metrics for a single indexing run."""

    job_id: str
    start_time: float
    end_time: float
    map_phase_start: float
    map_phase_end: float
    reduce_phase_start: float
    reduce_phase_end: float
    num_mappers: int
    num_reducers: int
    num_documents: int
    input_size_bytes: int
    unreadable_documents: int = 0
    unique_words: int = 0
    output_size_bytes: int = 0
    memory_rss_bytes: int = 0

    @property
    def total_time_seconds(self) -> float:
        """Total run time in seconds."""
        return self.end_time - self.start_time

    @property
    def map_phase_time_seconds(self) -> float:
        """Time from job start until the barrier released."""
        return self.map_phase_end - self.map_phase_start

    @property
    def reduce_phase_time_seconds(self) -> float:
        """Time from barrier release until every reducer finished."""
        return self.reduce_phase_end - self.reduce_phase_start

    def to_dict(self) -> dict:
        """Convert metrics to dictionary."""
        data = asdict(self)
        data['total_time_seconds'] = self.total_time_seconds
        data['map_phase_time_seconds'] = self.map_phase_time_seconds
        data['reduce_phase_time_seconds'] = self.reduce_phase_time_seconds
        return data

    def save_to_file(self, filepath: str):
        """Save metrics to JSON file."""
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)


def _file_size(path: str) -> int:
    try:
        return os.path.getsize(path)
    except OSError:
        return 0


class MetricsCollector:
    """Collects and manages metrics for indexing runs."""

    def __init__(self):
        self.job_metrics: Dict[str, JobMetrics] = {}
        self.process = psutil.Process()

    def start_job(self, job_id: str, num_mappers: int, num_reducers: int,
                  document_paths: Sequence[str]):
        """Initialize metrics tracking for a new run."""
        now = time.time()
        self.job_metrics[job_id] = JobMetrics(
            job_id=job_id,
            start_time=now,
            end_time=0,
            map_phase_start=now,
            map_phase_end=0,
            reduce_phase_start=0,
            reduce_phase_end=0,
            num_mappers=num_mappers,
            num_reducers=num_reducers,
            num_documents=len(document_paths),
            input_size_bytes=sum(_file_size(p) for p in document_paths)
        )

    def end_map_phase(self, job_id: str):
        """Mark the barrier release: the map phase ends and the reduce phase starts."""
        if job_id in self.job_metrics:
            now = time.time()
            self.job_metrics[job_id].map_phase_end = now
            self.job_metrics[job_id].reduce_phase_start = now

    def end_job(self, job_id: str, output_dir: str, unreadable_documents: int,
                unique_words: int):
        """Mark run completion and calculate output size."""
        if job_id not in self.job_metrics:
            return

        metrics = self.job_metrics[job_id]
        now = time.time()
        metrics.reduce_phase_end = now
        metrics.end_time = now
        metrics.unreadable_documents = unreadable_documents
        metrics.unique_words = unique_words
        metrics.output_size_bytes = sum(
            _file_size(os.path.join(output_dir, f"{letter}.txt")) for letter in ALPHABET
        )
        metrics.memory_rss_bytes = self.process.memory_info().rss

    def get_metrics(self, job_id: str) -> Optional[JobMetrics]:
        """Retrieve metrics for a specific run."""
        return self.job_metrics.get(job_id)

#!/usr/bin/env python3
"""
Job Manager for the indexer
Wires the work queue, barrier and index exchange together, runs the fixed
pool of mapper and reducer threads and tracks the run's state
"""

import uuid
import time
import logging
import threading
from enum import Enum
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from invindex.client.manifest import read_manifest
from invindex.common.config import JobConfig
from invindex.common.errors import WorkerError
from invindex.coordinator.barrier import PhaseBarrier
from invindex.coordinator.index_exchange import IndexExchange
from invindex.coordinator.metrics import JobMetrics, MetricsCollector
from invindex.coordinator.work_queue import Document, WorkQueue
from invindex.worker.map_executor import MapExecutor
from invindex.worker.reduce_executor import ReduceExecutor

logger = logging.getLogger(__name__)


class JobStatus(Enum):
    """Status of an indexing run"""
    PENDING = "pending"
    MAP_PHASE = "map_phase"
    REDUCE_PHASE = "reduce_phase"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class IndexJob:
    """Represents a complete indexing run"""
    job_id: str
    config: JobConfig
    documents: List[Document]
    status: JobStatus = JobStatus.PENDING
    map_results: List[dict] = field(default_factory=list)
    reduce_results: List[dict] = field(default_factory=list)
    start_time: float = 0.0
    end_time: float = 0.0

    @property
    def unreadable_documents(self) -> int:
        return sum(r['unreadable_documents'] for r in self.map_results)

    @property
    def unique_words(self) -> int:
        # Reducers own disjoint letters, so their word counts add up
        return sum(r['unique_words'] for r in self.reduce_results)

    @property
    def output_files(self) -> List[str]:
        return sorted(path for r in self.reduce_results for path in r['output_files'])


class JobManager:
    """Manages indexing runs and their lifecycle"""

    def __init__(self, metrics: Optional[MetricsCollector] = None):
        self.jobs: Dict[str, IndexJob] = {}
        self.metrics = metrics or MetricsCollector()
        self.lock = threading.Lock()

    def create_job(self, config: JobConfig, documents: Optional[Sequence[Document]] = None) -> IndexJob:
        """
        Validate the configuration and load the document list

        Args:
            config: Run parameters
            documents: Document list; read from config.manifest_path when omitted

        Raises:
            ConfigurationError: If the parameters are invalid
            ManifestError: If the manifest can't be loaded
        """
        config.validate()
        if documents is None:
            documents = read_manifest(config.manifest_path)

        with self.lock:
            job = IndexJob(
                job_id=f"index-{uuid.uuid4().hex[:8]}",
                config=config,
                documents=list(documents)
            )
            self.jobs[job.job_id] = job

        logger.info(f"Created job {job.job_id}: {len(job.documents)} documents, "
                    f"{config.num_mappers} mappers, {config.num_reducers} reducers")
        return job

    def _set_status(self, job: IndexJob, status: JobStatus):
        with self.lock:
            job.status = status
        logger.info(f"Job {job.job_id}: {status.value}")

    def _on_barrier_release(self, job: IndexJob):
        self.metrics.end_map_phase(job.job_id)
        self._set_status(job, JobStatus.REDUCE_PHASE)

    def run_job(self, job: IndexJob) -> IndexJob:
        """
        Run the map and reduce phases to completion

        Starts exactly num_mappers + num_reducers threads and joins them all.

        Raises:
            WorkerError: If any worker thread raised
        """
        config = job.config
        job.start_time = time.time()
        self.metrics.start_job(job.job_id, config.num_mappers, config.num_reducers,
                               [d.path for d in job.documents])

        work_queue = WorkQueue(job.documents)
        exchange = IndexExchange(config.num_mappers)
        barrier = PhaseBarrier(config.pool_size, on_release=lambda: self._on_barrier_release(job))

        mappers = [MapExecutor(i, work_queue, barrier, exchange) for i in range(config.num_mappers)]
        reducers = [ReduceExecutor(i, config.num_reducers, barrier, exchange, config.output_dir)
                    for i in range(config.num_reducers)]

        self._set_status(job, JobStatus.MAP_PHASE)

        failures = []
        # Pool size equals worker count so every worker can reach the barrier
        with ThreadPoolExecutor(max_workers=config.pool_size, thread_name_prefix=job.job_id) as pool:
            futures = [(worker, pool.submit(worker.execute)) for worker in mappers + reducers]

            for worker, future in futures:
                try:
                    result = future.result()
                except Exception as e:
                    logger.error(f"Job {job.job_id}: {worker.name} failed: {e}")
                    failures.append((worker.name, e))
                    continue

                if isinstance(worker, MapExecutor):
                    job.map_results.append(result)
                else:
                    job.reduce_results.append(result)

        job.end_time = time.time()
        logger.debug(f"Job {job.job_id}: {work_queue.claimed}/{len(work_queue)} documents claimed, "
                     f"{exchange.published}/{config.num_mappers} indices published, "
                     f"{barrier.arrivals}/{config.pool_size} barrier arrivals")

        if failures:
            if barrier.broken and not barrier.released:
                logger.error(f"Job {job.job_id}: map phase aborted, reducers never ran")
            self._set_status(job, JobStatus.FAILED)
            logger.error(f"Job {job.job_id}: final state {self.get_job_status(job.job_id)}")
            worker_name, cause = self._root_failure(failures)
            raise WorkerError(worker_name, cause)

        self.metrics.end_job(job.job_id, config.output_dir, job.unreadable_documents, job.unique_words)
        self._set_status(job, JobStatus.COMPLETED)
        logger.info(f"Job {job.job_id}: indexed {job.unique_words} words from "
                    f"{len(job.documents)} documents in {job.end_time - job.start_time:.3f}s")
        return job

    @staticmethod
    def _root_failure(failures):
        """Prefer the failure that broke the barrier over the peers it broke."""
        for worker_name, cause in failures:
            if not isinstance(cause, threading.BrokenBarrierError):
                return worker_name, cause
        return failures[0]

    def get_job_status(self, job_id: str) -> Optional[Dict]:
        """Get current job status with progress"""
        with self.lock:
            job = self.jobs.get(job_id)
            if not job:
                return None

            return {
                'status': job.status.value,
                'documents': len(job.documents),
                'map_completed': len(job.map_results),
                'map_total': job.config.num_mappers,
                'reduce_completed': len(job.reduce_results),
                'reduce_total': job.config.num_reducers
            }


def build_index(config: JobConfig, documents: Optional[Sequence[Document]] = None) -> JobMetrics:
    """
    Run a complete indexing job

    Returns:
        Metrics of the finished run
    """
    manager = JobManager()
    job = manager.create_job(config, documents)
    manager.run_job(job)
    return manager.metrics.get_metrics(job.job_id)

"""
Map Worker
Claims documents from the shared queue, tokenizes and normalizes them,
and accumulates a local word -> document-id index owned by this worker only
"""

import re
import time
import logging
from collections import defaultdict
from typing import Iterator

from invindex.coordinator.barrier import PhaseBarrier
from invindex.coordinator.index_exchange import IndexExchange, LocalIndex
from invindex.coordinator.work_queue import Document, WorkQueue
from invindex.worker.normalizer import normalized_words

logger = logging.getLogger(__name__)

# Runs of characters other than ASCII whitespace
_TOKEN_RE = re.compile(r'[^ \t\n\r\f\v]+')


def read_tokens(path: str) -> Iterator[str]:
    """
    Stream the whitespace-delimited tokens of a document

    Raises:
        OSError: If the document cannot be opened or read
    """
    with open(path, 'r', encoding='utf-8', errors='ignore') as f:
        for line in f:
            yield from _TOKEN_RE.findall(line)


class MapExecutor:
    """Runs one mapper slot for the whole map phase"""

    def __init__(self, mapper_id: int, work_queue: WorkQueue, barrier: PhaseBarrier,
                 exchange: IndexExchange):
        """
        Initialize the mapper

        Args:
            mapper_id: Slot index in [0, num_mappers)
            work_queue: Shared document queue
            barrier: Map/reduce rendezvous, arrived at once the queue is empty
            exchange: Where the finished local index is handed to the reducers
        """
        self.mapper_id = mapper_id
        self.work_queue = work_queue
        self.barrier = barrier
        self.exchange = exchange
        self.documents_processed = 0
        self.unreadable_documents = 0

    @property
    def name(self) -> str:
        return f"mapper-{self.mapper_id}"

    def execute(self) -> dict:
        """
        Map every document this worker manages to claim, then wait at the barrier

        Returns:
            Dictionary with 'mapper_id', 'documents_processed',
            'unreadable_documents', 'unique_words' and 'execution_time_ms'
        """
        start_time = time.time()

        try:
            local_index = self.build_local_index()
            self.exchange.publish(self.mapper_id, local_index)
        except Exception:
            # Peers must not wait forever for a mapper that will never arrive
            self.barrier.abort()
            raise

        execution_time = int((time.time() - start_time) * 1000)
        logger.info(f"Map worker {self.mapper_id}: {self.documents_processed} documents, "
                    f"{len(local_index)} words in {execution_time}ms")

        self.barrier.arrive_and_wait()

        return {
            'mapper_id': self.mapper_id,
            'documents_processed': self.documents_processed,
            'unreadable_documents': self.unreadable_documents,
            'unique_words': len(local_index),
            'execution_time_ms': execution_time
        }

    def build_local_index(self) -> LocalIndex:
        """
        Drain the work queue into a fresh local index

        Returns:
            Mapping of normalized word to the set of document ids containing it
        """
        local_index = defaultdict(set)

        while True:
            index = self.work_queue.claim_next()
            if index is None:
                break
            document = self.work_queue.document(index)
            logger.debug(f"Map worker {self.mapper_id}: claimed document {document.doc_id} ({document.path})")
            self._index_document(document, local_index)

        return dict(local_index)

    def _index_document(self, document: Document, local_index: LocalIndex):
        """Add every word of a document; unreadable documents add nothing."""
        try:
            words = set(normalized_words(read_tokens(document.path)))
        except OSError as e:
            self.unreadable_documents += 1
            logger.warning(f"Map worker {self.mapper_id}: skipping unreadable document "
                           f"{document.doc_id} ({document.path}): {e}")
            return

        # Merge only after the whole document was read
        for word in words:
            local_index[word].add(document.doc_id)
        self.documents_processed += 1

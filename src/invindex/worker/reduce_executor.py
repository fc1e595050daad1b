"""
Reduce Worker
Waits for the map phase to finish, merges the words of its letters from every
mapper's local index, sorts them and writes one output file per owned letter
"""

import os
import time
import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Set, Tuple

from invindex.coordinator.barrier import PhaseBarrier
from invindex.coordinator.index_exchange import FrozenIndex, IndexExchange
from invindex.worker.partition import letters_for_reducer, owner_reducer

logger = logging.getLogger(__name__)

SortedEntry = Tuple[str, List[int]]


def combine_indices(local_indices: Iterable[FrozenIndex], reducer_id: int,
                    num_reducers: int) -> Dict[str, Set[int]]:
    """
    Union the document sets of every word owned by a reducer

    Args:
        local_indices: One read-only index per mapper
        reducer_id: Slot whose letters are kept
        num_reducers: Total reducer slots

    Returns:
        Mapping of word to the union of its document ids
    """
    combined = defaultdict(set)
    for local_index in local_indices:
        for word, doc_ids in local_index.items():
            if owner_reducer(word[0], num_reducers) == reducer_id:
                combined[word].update(doc_ids)
    return dict(combined)


def sort_entries(combined: Dict[str, Set[int]]) -> List[SortedEntry]:
    """Most documents first, ties broken by word; document ids ascending."""
    entries = [(word, sorted(doc_ids)) for word, doc_ids in combined.items()]
    entries.sort(key=lambda entry: (-len(entry[1]), entry[0]))
    return entries


def format_entry(word: str, doc_ids: List[int]) -> str:
    """Render one output line, e.g. 'cat:[1 3]'"""
    return f"{word}:[{' '.join(str(doc_id) for doc_id in doc_ids)}]"


class ReduceExecutor:
    """Runs one reducer slot: barrier, merge, sort, write"""

    def __init__(self, reducer_id: int, num_reducers: int, barrier: PhaseBarrier,
                 exchange: IndexExchange, output_dir: str = "."):
        """
        Initialize the reducer

        Args:
            reducer_id: Slot index in [0, num_reducers)
            num_reducers: Total reducer slots (for partitioning)
            barrier: Map/reduce rendezvous, arrived at before anything else
            exchange: Source of the mappers' local indices
            output_dir: Directory where the letter files are written
        """
        self.reducer_id = reducer_id
        self.num_reducers = num_reducers
        self.barrier = barrier
        self.exchange = exchange
        self.output_dir = output_dir
        self.letters = letters_for_reducer(reducer_id, num_reducers)

    @property
    def name(self) -> str:
        return f"reducer-{self.reducer_id}"

    def execute(self) -> dict:
        """
        Wait for the mappers, then produce this reducer's letter files

        Returns:
            Dictionary with 'reducer_id', 'letters', 'unique_words',
            'output_files' and 'execution_time_ms'
        """
        self.barrier.arrive_and_wait()

        start_time = time.time()
        combined = combine_indices(self.exchange.collect(), self.reducer_id, self.num_reducers)
        entries = sort_entries(combined)
        output_files = self._write_output(entries)

        execution_time = int((time.time() - start_time) * 1000)
        logger.info(f"Reduce worker {self.reducer_id}: {len(entries)} words across "
                    f"{len(output_files)} files in {execution_time}ms")

        return {
            'reducer_id': self.reducer_id,
            'letters': list(self.letters),
            'unique_words': len(entries),
            'output_files': output_files,
            'execution_time_ms': execution_time
        }

    def _write_output(self, entries: List[SortedEntry]) -> List[str]:
        """
        Write one file per owned letter, keeping the sorted order

        Returns:
            Paths of the files written, in letter order
        """
        if not self.letters:
            return []

        os.makedirs(self.output_dir, exist_ok=True)

        by_letter = defaultdict(list)
        for word, doc_ids in entries:
            by_letter[word[0]].append(format_entry(word, doc_ids))

        output_files = []
        for letter in self.letters:
            output_file = os.path.join(self.output_dir, f"{letter}.txt")
            with open(output_file, 'w', encoding='utf-8') as f:
                for line in by_letter[letter]:
                    f.write(line + '\n')
            output_files.append(output_file)

        return output_files

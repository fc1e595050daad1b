"""
Hand-off of mapper local indices to the reduce phase
Each mapper publishes its finished index exactly once; reducers read the frozen set
"""

import threading
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping, Optional, Set, Tuple

LocalIndex = Dict[str, Set[int]]
FrozenIndex = Mapping[str, FrozenSet[int]]


def freeze_index(local_index: LocalIndex) -> FrozenIndex:
    """Read-only copy of a local index"""
    return MappingProxyType({word: frozenset(doc_ids) for word, doc_ids in local_index.items()})


class IndexExchange:
    """Collects one frozen local index per mapper slot"""

    def __init__(self, num_mappers: int):
        self.num_mappers = num_mappers
        self._slots: List[Optional[FrozenIndex]] = [None] * num_mappers
        self._lock = threading.Lock()

    def publish(self, mapper_id: int, local_index: LocalIndex):
        """
        Transfer a mapper's index to the exchange

        Raises:
            RuntimeError: If the mapper already published
        """
        frozen = freeze_index(local_index)
        with self._lock:
            if self._slots[mapper_id] is not None:
                raise RuntimeError(f"Mapper {mapper_id} already published its index")
            self._slots[mapper_id] = frozen

    def collect(self) -> Tuple[FrozenIndex, ...]:
        """
        All published indices, ordered by mapper id

        Raises:
            RuntimeError: If some mapper has not published yet
        """
        with self._lock:
            missing = [i for i, slot in enumerate(self._slots) if slot is None]
            if missing:
                raise RuntimeError(f"Local indices missing for mappers {missing}")
            return tuple(self._slots)

    @property
    def published(self) -> int:
        with self._lock:
            return sum(1 for slot in self._slots if slot is not None)

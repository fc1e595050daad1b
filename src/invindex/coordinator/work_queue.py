"""
Shared document queue for the map phase
Mappers claim documents one at a time until the queue runs dry
"""

import threading
from dataclasses import dataclass
from typing import List, Optional, Sequence


@dataclass(frozen=True)
class Document:
    """A manifest entry; doc_id is the 1-based manifest position"""
    doc_id: int
    path: str


def documents_from_paths(paths: Sequence[str]) -> List[Document]:
    """Number paths in manifest order, starting at 1"""
    return [Document(doc_id=index + 1, path=path) for index, path in enumerate(paths)]


class WorkQueue:
    """Lock-guarded cursor over the document list"""

    def __init__(self, documents: Sequence[Document]):
        """
        Initialize the queue

        Args:
            documents: Documents in manifest order
        """
        self._documents = tuple(documents)
        self._cursor = 0
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._documents)

    def claim_next(self) -> Optional[int]:
        """
        Claim the next unprocessed document

        Returns:
            Index into the document list, or None once every document is claimed
        """
        with self._lock:
            if self._cursor >= len(self._documents):
                return None
            index = self._cursor
            self._cursor += 1
            return index

    def document(self, index: int) -> Document:
        """Document at a claimed index"""
        return self._documents[index]

    @property
    def claimed(self) -> int:
        """Number of documents handed out so far"""
        with self._lock:
            return self._cursor

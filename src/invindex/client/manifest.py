"""
Manifest reader
First line holds the document count N, followed by N document paths
"""

from typing import List

from invindex.common.config import parse_count
from invindex.common.errors import ManifestError
from invindex.coordinator.work_queue import Document, documents_from_paths


def read_manifest(manifest_path: str) -> List[Document]:
    """
    Load the document list of a run

    Args:
        manifest_path: Path to the manifest file

    Returns:
        Documents numbered 1..N in manifest order

    Raises:
        ManifestError: If the file can't be read, the count is invalid,
            or fewer than N paths follow it
    """
    try:
        # Undecodable bytes in paths survive as surrogates and map back to the same file name
        with open(manifest_path, 'r', encoding='utf-8', errors='surrogateescape') as f:
            header = f.readline()
            try:
                count = parse_count(header.strip())
            except ValueError:
                raise ManifestError(f"{manifest_path}: first line must be the document count, "
                                    f"got {header.strip()!r}") from None
            if count < 0:
                raise ManifestError(f"{manifest_path}: document count must not be negative, got {count}")

            paths = []
            for _ in range(count):
                line = f.readline()
                if not line:
                    raise ManifestError(f"{manifest_path}: expected {count} document paths, "
                                        f"found {len(paths)}")
                # Paths are taken verbatim apart from the line terminator
                paths.append(line[:-1] if line.endswith('\n') else line)
    except OSError as e:
        raise ManifestError(f"Cannot read manifest {manifest_path}: {e}") from e

    return documents_from_paths(paths)


def write_manifest(manifest_path: str, document_paths: List[str]):
    """Write a manifest listing the given documents."""
    with open(manifest_path, 'w', encoding='utf-8', errors='surrogateescape') as f:
        f.write(f"{len(document_paths)}\n")
        for path in document_paths:
            f.write(f"{path}\n")

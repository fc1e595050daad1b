"""
Exception types shared across the indexer.
"""


class InvertedIndexError(Exception):
    """Base class for indexer failures"""


class ConfigurationError(InvertedIndexError, ValueError):
    """Invalid job parameters, detected before any worker starts"""


class ManifestError(ConfigurationError):
    """Manifest file missing, unreadable or malformed"""


class WorkerError(InvertedIndexError, RuntimeError):
    """A mapper or reducer thread terminated with an exception"""

    def __init__(self, worker_name: str, cause: BaseException):
        super().__init__(f"{worker_name} failed: {cause}")
        self.worker_name = worker_name
        self.cause = cause

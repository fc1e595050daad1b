"""
Job configuration for an indexing run.
"""

import os
import re
from dataclasses import dataclass
from typing import Optional

from invindex.common.errors import ConfigurationError

LOG_LEVEL_ENV = "INVINDEX_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"

_COUNT_RE = re.compile(r"[+-]?[0-9]+")


@dataclass
class JobConfig:
    """Parameters of a single indexing run"""
    num_mappers: int
    num_reducers: int
    manifest_path: str
    output_dir: str = "."
    metrics_path: Optional[str] = None

    def validate(self) -> "JobConfig":
        """
        Check the parameters before any worker is started

        Returns:
            self, so calls can be chained

        Raises:
            ConfigurationError: If a count is below one or the manifest path is empty
        """
        if isinstance(self.num_mappers, bool) or not isinstance(self.num_mappers, int):
            raise ConfigurationError(f"num_mappers must be an integer, got {self.num_mappers!r}")
        if isinstance(self.num_reducers, bool) or not isinstance(self.num_reducers, int):
            raise ConfigurationError(f"num_reducers must be an integer, got {self.num_reducers!r}")
        if self.num_mappers < 1:
            raise ConfigurationError(f"num_mappers must be at least 1, got {self.num_mappers}")
        if self.num_reducers < 1:
            raise ConfigurationError(f"num_reducers must be at least 1, got {self.num_reducers}")
        if not self.manifest_path:
            raise ConfigurationError("manifest path must not be empty")
        return self

    @property
    def pool_size(self) -> int:
        """Number of worker threads (and barrier parties) for this run"""
        return self.num_mappers + self.num_reducers


def default_log_level() -> str:
    """Log level from the environment, falling back to WARNING"""
    return os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()


def parse_count(text: str) -> int:
    """
    Parse a worker or document count

    Only ASCII decimal digits with an optional sign are accepted, so forms
    int() would also take (underscores, other scripts' digits) are rejected.

    Raises:
        ValueError: If the text is not a plain decimal integer
    """
    if not _COUNT_RE.fullmatch(text):
        raise ValueError(f"not a decimal integer: {text!r}")
    return int(text)

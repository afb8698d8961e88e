"""Evaluator configuration."""

from dataclasses import dataclass
from typing import Optional

from primitives.errors import ConfigurationError


@dataclass(frozen=True)
class EvaluatorConfig:
    """Concrete evaluator configuration.

    Rows are independent, so checking can be spread over a thread pool. The
    report is identical for any worker count.
    """
    workers: int = 1  # Thread pool size; 1 checks rows inline
    chunk_size: Optional[int] = None  # Rows per task; None splits evenly across workers

    def __post_init__(self):
        if self.workers < 1:
            raise ConfigurationError(f"workers must be >= 1, got {self.workers}")
        if self.chunk_size is not None and self.chunk_size < 1:
            raise ConfigurationError(f"chunk_size must be >= 1, got {self.chunk_size}")

    def row_chunks(self, height: int) -> list[range]:
        """Split [0, height) into contiguous row ranges, one task each."""
        size = self.chunk_size
        if size is None:
            size = -(-height // self.workers)
        return [range(start, min(start + size, height)) for start in range(0, height, size)]


DEFAULT_CONFIG = EvaluatorConfig()

"""
GenerationStats - Statistics for a generation run.
"""

import time
from dataclasses import dataclass, field
from typing import List


@dataclass
class GenerationStats:
    """
    Statistics for a generation run.

    Attributes:
        total_to_process: Images to create or remove
        created: Images created or replaced
        removed: Images removed
        unchanged: Images left untouched
        files_written: Output files written (renditions and descriptors)
        files_removed: Output files deleted
        errors: Images that failed
        start_time: Start timestamp
        error_details: List of error messages
    """
    total_to_process: int = 0
    created: int = 0
    removed: int = 0
    unchanged: int = 0
    files_written: int = 0
    files_removed: int = 0
    errors: int = 0
    start_time: float = field(default_factory=time.time)
    error_details: List[str] = field(default_factory=list)

    @property
    def elapsed_seconds(self) -> float:
        """Elapsed time in seconds."""
        return time.time() - self.start_time

    @property
    def completed_count(self) -> int:
        """Total completed (created + removed + errors)."""
        return self.created + self.removed + self.errors

    @property
    def remaining_count(self) -> int:
        """Remaining to process."""
        return self.total_to_process - self.completed_count

    @property
    def rate_per_second(self) -> float:
        """Processing rate in images per second."""
        if self.elapsed_seconds > 0:
            return (self.created + self.removed) / self.elapsed_seconds
        return 0.0

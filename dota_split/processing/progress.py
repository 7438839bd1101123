"""
Shared progress accounting for concurrent image splitting.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from ..dataset.models import ImageInfo

logger = logging.getLogger(__name__)

# Callback signature: (completed, total, filename)
ProgressCallback = Callable[[int, int, str], None]


@dataclass
class SplitProgress:
    """
    Count of finished images, safe to advance from worker threads.

    The increment and the per-image log line happen under one lock, so the
    ordinal in each log line is unique.
    """
    total: int
    completed: int = 0
    callback: Optional[ProgressCallback] = None
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def progress_percent(self) -> float:
        """Get completion percentage."""
        if self.total == 0:
            return 100.0
        return (self.completed / self.total) * 100

    def advance(self, info: ImageInfo, patch_count: int) -> int:
        """
        Mark one image as finished and log it.

        Args:
            info: The image that was split
            patch_count: Number of patches written for it

        Returns:
            The ordinal of this image in completion order
        """
        with self._lock:
            self.completed += 1
            logger.info(
                f"Single splitting: {self.completed}/{self.total}, "
                f"{info.filename}: size ({info.width}, {info.height}), "
                f"objects {info.object_count}, patches {patch_count}"
            )
            if self.callback:
                self.callback(self.completed, self.total, info.filename)
            return self.completed

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        with self._lock:
            return {
                "total": self.total,
                "completed": self.completed,
                "progress_percent": self.progress_percent,
            }

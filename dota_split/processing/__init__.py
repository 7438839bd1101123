"""
Split orchestration: per-image splitting, shared progress and the batch runner.
"""

from .progress import SplitProgress
from .splitter import ImageSplitter, SplitResult, split_single
from .runner import BatchResult, SplitRunner, main

__all__ = [
    "SplitProgress",
    "ImageSplitter",
    "SplitResult",
    "split_single",
    "BatchResult",
    "SplitRunner",
    "main",
]

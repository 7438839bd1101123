"""
DOTA Image Split Package

Cuts large aerial images with oriented-box annotations into overlapping
fixed-size patches and re-derives the annotations of every patch.
"""

from .geometry import OverlapMode, intersection_area, overlap_ratio, poly_overlaps
from .tiling import Window, WindowAnnotation, WindowGenerator, assign_objects, generate_windows
from .dataset import Annotation, ImageInfo, load_dota
from .config import SplitConfig
from .processing import BatchResult, ImageSplitter, SplitProgress, SplitRunner, split_single

__all__ = [
    "OverlapMode",
    "intersection_area",
    "overlap_ratio",
    "poly_overlaps",
    "Window",
    "WindowAnnotation",
    "WindowGenerator",
    "assign_objects",
    "generate_windows",
    "Annotation",
    "ImageInfo",
    "load_dota",
    "SplitConfig",
    "BatchResult",
    "ImageSplitter",
    "SplitProgress",
    "SplitRunner",
    "split_single",
]

"""
Tiling module.

Generates sliding crop windows over an image and assigns each window the
annotated objects that fall inside it.
"""

from .models import Window, WindowAnnotation
from .windows import WindowGenerator, generate_windows
from .assign import TRUNCATION_EPS, assign_objects, window_object_overlaps

__all__ = [
    # Models
    "Window",
    "WindowAnnotation",
    # Windows
    "WindowGenerator",
    "generate_windows",
    # Assignment
    "TRUNCATION_EPS",
    "assign_objects",
    "window_object_overlaps",
]

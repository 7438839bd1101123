"""
Raster I/O: reading source images and writing cropped patches.
"""

from .io import (
    RasterIOError,
    crop_and_save,
    crop_window,
    read_image,
    read_image_size,
    save_image,
)

__all__ = [
    "RasterIOError",
    "crop_and_save",
    "crop_window",
    "read_image",
    "read_image_size",
    "save_image",
]

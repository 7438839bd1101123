"""
Pixel I/O for source images and written patches.

Sizes come from Pillow, which only reads the file header. Pixels are
read and written with OpenCV; the output format follows the file extension.
"""

import logging
from pathlib import Path
from typing import Sequence, Tuple, Union, TYPE_CHECKING

import cv2
import numpy as np
from PIL import Image

if TYPE_CHECKING:
    from ..tiling.models import Window

logger = logging.getLogger(__name__)

# Aerial scenes routinely exceed Pillow's decompression-bomb limit
Image.MAX_IMAGE_PIXELS = None

PathLike = Union[str, Path]


class RasterIOError(Exception):
    """Raised when an image cannot be read or a patch cannot be written."""


def read_image_size(path: PathLike) -> Tuple[int, int]:
    """
    Read image dimensions without decoding pixels.

    Args:
        path: Image file

    Returns:
        (width, height)

    Raises:
        RasterIOError: If the file is missing or not a readable image
    """
    try:
        with Image.open(path) as image:
            return image.size
    except OSError as e:
        raise RasterIOError(f"Could not read image size: {path}: {e}") from e


def read_image(path: PathLike) -> np.ndarray:
    """
    Load all channels of an image.

    Args:
        path: Image file

    Returns:
        (H, W) or (H, W, C) array in OpenCV channel order

    Raises:
        RasterIOError: If the image cannot be decoded
    """
    image = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if image is None:
        raise RasterIOError(f"Could not load image: {path}")
    return image


def crop_window(
    image: np.ndarray,
    window: "Window",
    no_padding: bool = False,
    padding_value: Sequence[float] = (104, 116, 124),
) -> np.ndarray:
    """
    Cut a window out of an image.

    Args:
        image: Source image (H, W) or (H, W, C)
        window: Crop window, may extend past the right/bottom image edges
        no_padding: Return only the in-image part instead of padding
        padding_value: Fill value per channel for the out-of-image part;
            repeated cyclically if the image has more channels

    Returns:
        Patch of shape (window.height, window.width[, C]) when padding,
        otherwise the window clipped to the image
    """
    height, width = image.shape[:2]
    patch = image[window.y1:min(window.y2, height), window.x1:min(window.x2, width)]
    if no_padding or patch.shape[:2] == (window.height, window.width):
        return patch.copy()

    padded = np.empty((window.height, window.width) + image.shape[2:], dtype=image.dtype)
    if image.ndim == 3:
        padded[...] = np.resize(np.asarray(padding_value, dtype=image.dtype), image.shape[2])
    else:
        padded[...] = padding_value[0]
    padded[:patch.shape[0], :patch.shape[1]] = patch
    return padded


def save_image(path: PathLike, image: np.ndarray) -> None:
    """
    Write an image; the format is chosen from the extension.

    Raises:
        RasterIOError: If the extension is unsupported or the write fails
    """
    try:
        ok = cv2.imwrite(str(path), image)
    except cv2.error as e:
        raise RasterIOError(f"Could not write image: {path}: {e}") from e
    if not ok:
        raise RasterIOError(f"Could not write image: {path}")


def crop_and_save(
    image: np.ndarray,
    window: "Window",
    path: PathLike,
    no_padding: bool = False,
    padding_value: Sequence[float] = (104, 116, 124),
) -> np.ndarray:
    """
    Crop a window and write it to disk.

    Returns:
        The written patch
    """
    patch = crop_window(image, window, no_padding=no_padding, padding_value=padding_value)
    save_image(path, patch)
    logger.debug(f"Saved patch {path} with shape {patch.shape}")
    return patch

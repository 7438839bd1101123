"""
Per-image splitting: windows, object assignment, patch writing.
"""

import logging
import zlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import numpy as np

from ..config.split_config import SplitConfig
from ..dataset.models import ImageInfo
from ..dataset.writer import make_patch_id, write_annotation_file
from ..raster.io import RasterIOError, crop_and_save, read_image
from ..tiling.assign import assign_objects
from ..tiling.models import WindowAnnotation
from ..tiling.windows import WindowGenerator
from .progress import SplitProgress

logger = logging.getLogger(__name__)


@dataclass
class SplitResult:
    """Result of splitting one image."""
    image_id: str
    filename: str
    object_count: int
    patch_count: int = 0
    success: bool = True
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "image_id": self.image_id,
            "filename": self.filename,
            "object_count": self.object_count,
            "patch_count": self.patch_count,
            "success": self.success,
            "errors": self.errors,
        }


class ImageSplitter:
    """
    Splits single images into annotated patches.

    Per image: read pixels, generate windows, assign objects, then crop and
    write each surviving window with its annotation file.

    Example:
        >>> splitter = ImageSplitter(config)
        >>> result = splitter.split(info, "data/train/images")
        >>> print(result.patch_count)
    """

    def __init__(self, config: SplitConfig):
        """
        Initialize the splitter.

        Args:
            config: Split configuration

        Raises:
            ValueError: If a scaled (size, gap) pair is invalid
        """
        self.config = config
        sizes, gaps = config.scaled_sizes_and_gaps()
        self.window_generator = WindowGenerator(sizes, gaps, config.img_rate_thr)

    def make_rng(self, image_id: str) -> np.random.Generator:
        """
        Random generator for one image's empty-window sampling.

        Seeded from the config seed and the image id so results do not
        depend on which worker handles the image.
        """
        if self.config.seed is None:
            return np.random.default_rng()
        return np.random.default_rng([self.config.seed, zlib.crc32(image_id.encode("utf-8"))])

    def split(
        self,
        info: ImageInfo,
        img_dir: Union[str, Path],
        progress: Optional[SplitProgress] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> SplitResult:
        """
        Split one image into patches.

        I/O failures are logged and reported in the result rather than
        raised, so one bad image does not stop a batch.

        Args:
            info: Image to split
            img_dir: Directory containing the image file
            progress: Shared progress, advanced once when the image is done
            rng: Random generator for empty-window sampling

        Returns:
            SplitResult
        """
        if rng is None:
            rng = self.make_rng(info.id)

        result = SplitResult(
            image_id=info.id,
            filename=info.filename,
            object_count=info.object_count,
        )
        try:
            result.patch_count = self._split(info, Path(img_dir), rng)
        except (RasterIOError, OSError) as e:
            logger.error(f"Error splitting {info.filename}: {e}")
            result.success = False
            result.errors.append(str(e))

        if progress is not None:
            progress.advance(info, result.patch_count)
        return result

    def _split(self, info: ImageInfo, img_dir: Path, rng: np.random.Generator) -> int:
        """Run the split and return the number of written patches."""
        image = read_image(img_dir / info.filename)

        windows = self.window_generator.generate(info.width, info.height)
        window_anns = assign_objects(windows, info.annotation, self.config.iof_thr)

        patch_count = 0
        for window_ann in window_anns:
            if window_ann.is_empty and rng.random() < self.config.ignore_empty_prob:
                continue
            self._save_patch(info, image, window_ann)
            patch_count += 1

        return patch_count

    def _save_patch(
        self,
        info: ImageInfo,
        image: np.ndarray,
        window_ann: WindowAnnotation,
    ) -> None:
        """Write the pixels and the window-local annotation of one window."""
        window = window_ann.window
        patch_id = make_patch_id(info.id, window)

        crop_and_save(
            image,
            window,
            self.config.image_save_dir / f"{patch_id}{self.config.save_ext}",
            no_padding=self.config.no_padding,
            padding_value=self.config.padding_value,
        )
        write_annotation_file(
            self.config.ann_save_dir / f"{patch_id}.txt",
            window_ann.to_local(),
        )


def split_single(
    info: ImageInfo,
    img_dir: Union[str, Path],
    config: SplitConfig,
    progress: Optional[SplitProgress] = None,
    rng: Optional[np.random.Generator] = None,
) -> int:
    """
    Split one image and return its patch count.

    Args:
        info: Image to split
        img_dir: Directory containing the image file
        config: Split configuration
        progress: Shared progress
        rng: Random generator for empty-window sampling

    Returns:
        Number of written patches (0 if the image failed)
    """
    return ImageSplitter(config).split(info, img_dir, progress=progress, rng=rng).patch_count

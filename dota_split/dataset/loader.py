"""
Loading of DOTA-format datasets.

A dataset is an image directory plus an annotation directory holding one
`<image stem>.txt` file per image. Each annotation line is

    x1 y1 x2 y2 x3 y3 x4 y4 label [difficulty]

optionally preceded by `imagesource:...` and `gsd:...` header lines.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Tuple, Union

from ..raster.io import RasterIOError, read_image_size
from .models import GSD_PARSE_ERROR, GSD_UNSET, Annotation, ImageInfo

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = {".jpg", ".png", ".tif", ".bmp"}

PathLike = Union[str, Path]


def parse_annotation_file(txt_file: Optional[PathLike]) -> Tuple[float, Annotation]:
    """
    Parse a DOTA annotation file.

    A missing file is treated as an image without objects.

    Args:
        txt_file: Path to the .txt file, or None

    Returns:
        (gsd, annotation); gsd is GSD_UNSET when absent and GSD_PARSE_ERROR
        when the gsd line is malformed

    Raises:
        ValueError: If a coordinate or difficulty token is not numeric, or
            the file is not valid UTF-8
    """
    gsd = GSD_UNSET
    bboxes = []
    labels = []
    difficulties = []

    if txt_file is None:
        return gsd, Annotation.empty()

    txt_file = Path(txt_file)
    if not txt_file.is_file():
        logger.info(f"can't find {txt_file}, treated as empty annotation")
        return gsd, Annotation.empty()

    with open(txt_file, "r", encoding="utf-8") as f:
        for line in f:
            line = line.rstrip("\r\n")
            if not line:
                continue

            if line.startswith("gsd"):
                _, sep, value = line.partition(":")
                if sep:
                    try:
                        gsd = float(value)
                    except ValueError:
                        gsd = GSD_PARSE_ERROR
                continue
            if line.startswith("imagesource") or line.startswith("NAN"):
                continue

            items = line.split()
            if len(items) < 9:
                continue
            bboxes.append([float(v) for v in items[:8]])
            labels.append(items[8])
            difficulties.append(int(items[9]) if len(items) == 10 else 0)

    return gsd, Annotation(bboxes=bboxes, labels=labels, difficulties=difficulties)


def load_image_info(
    img_file: PathLike,
    ann_dir: Optional[PathLike] = None,
) -> Optional[ImageInfo]:
    """
    Build the ImageInfo of a single image.

    Args:
        img_file: Image path
        ann_dir: Annotation directory, or None for unannotated images

    Returns:
        ImageInfo, or None if the extension is not supported

    Raises:
        RasterIOError: If the image header cannot be read
        ValueError: If the annotation file holds non-numeric coordinates or
            difficulties, or is not valid text
    """
    img_file = Path(img_file)
    if img_file.suffix.lower() not in SUPPORTED_EXTENSIONS:
        return None

    width, height = read_image_size(img_file)
    txt_file = Path(ann_dir) / f"{img_file.stem}.txt" if ann_dir else None
    gsd, annotation = parse_annotation_file(txt_file)

    return ImageInfo(
        filename=img_file.name,
        id=img_file.stem,
        width=width,
        height=height,
        annotation=annotation,
        gsd=gsd,
    )


def _load_or_skip(img_file: Path, ann_dir: Optional[PathLike]) -> Optional[ImageInfo]:
    """Load one image, logging and skipping unreadable images and malformed annotations."""
    try:
        return load_image_info(img_file, ann_dir)
    except (RasterIOError, ValueError) as e:
        # ValueError covers bad numeric tokens and undecodable annotation text
        logger.error(f"Skipping {img_file}: {e}")
        return None


def load_dota(
    img_dir: PathLike,
    ann_dir: Optional[PathLike] = None,
    nproc: int = 10,
) -> List[ImageInfo]:
    """
    Load image and annotation information of a DOTA-format dataset.

    Args:
        img_dir: Directory of images
        ann_dir: Directory of annotation files, or None
        nproc: Number of threads used to read image headers

    Returns:
        ImageInfo list sorted by filename; unsupported files, unreadable
        images and images with malformed annotation files are skipped
    """
    logger.info(f"starting loading the dataset information from {img_dir}")
    start_time = time.time()

    img_files = sorted(p for p in Path(img_dir).iterdir() if p.is_file())

    if nproc > 1:
        with ThreadPoolExecutor(max_workers=nproc) as executor:
            infos = list(executor.map(lambda p: _load_or_skip(p, ann_dir), img_files))
    else:
        infos = [_load_or_skip(p, ann_dir) for p in img_files]

    infos = [info for info in infos if info is not None]
    logger.info(
        f"finishing loading dataset, get {len(infos)} images, "
        f"using {time.time() - start_time:.3f}s"
    )
    return infos

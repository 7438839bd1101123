"""
DOTA dataset handling: image/annotation records, loading and writing.
"""

from .models import GSD_PARSE_ERROR, GSD_UNSET, Annotation, ImageInfo, translate_bboxes
from .loader import (
    SUPPORTED_EXTENSIONS,
    load_dota,
    load_image_info,
    parse_annotation_file,
)
from .writer import (
    TRUNCATED_DIFFICULTY,
    format_annotation_lines,
    make_patch_id,
    write_annotation_file,
)

__all__ = [
    # Models
    "GSD_PARSE_ERROR",
    "GSD_UNSET",
    "Annotation",
    "ImageInfo",
    "translate_bboxes",
    # Loader
    "SUPPORTED_EXTENSIONS",
    "load_dota",
    "load_image_info",
    "parse_annotation_file",
    # Writer
    "TRUNCATED_DIFFICULTY",
    "format_annotation_lines",
    "make_patch_id",
    "write_annotation_file",
]

"""
Batch runner with CLI interface.

Splits every image of the configured datasets, sequentially or on a thread
pool, and reports aggregated patch counts.
"""

import argparse
import logging
import sys
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ..config.split_config import SplitConfig
from ..dataset.loader import load_dota
from ..dataset.models import ImageInfo
from .progress import ProgressCallback, SplitProgress
from .splitter import ImageSplitter, SplitResult

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


@dataclass
class BatchResult:
    """Result of splitting a whole dataset."""
    total_images: int
    successful: int
    failed: int
    total_patches: int
    total_time_s: float
    results: List[SplitResult] = field(default_factory=list)

    @property
    def errors(self) -> List[Dict[str, Any]]:
        """Failed images and their error messages."""
        return [
            {"file": r.filename, "errors": r.errors}
            for r in self.results
            if not r.success
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total_images": self.total_images,
            "successful": self.successful,
            "failed": self.failed,
            "total_patches": self.total_patches,
            "total_time_s": self.total_time_s,
            "success_rate": self.successful / self.total_images if self.total_images > 0 else 0,
            "results": [r.to_dict() for r in self.results],
            "errors": self.errors,
        }


class SplitRunner:
    """
    Runner for splitting DOTA-format datasets.

    Supports:
    - Multiple (image dir, annotation dir) pairs
    - Sequential or thread-pool execution
    - Shared progress with optional callback
    - Result aggregation

    Example:
        >>> runner = SplitRunner(SplitConfig.from_json("split.json"))
        >>> result = runner.run()
        >>> print(f"{result.total_patches} patches from {result.successful} images")
    """

    def __init__(
        self,
        config: SplitConfig,
        splitter: Optional[ImageSplitter] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ):
        """
        Initialize runner.

        Args:
            config: Split configuration
            splitter: Optional pre-configured splitter
            progress_callback: Callback for progress updates (completed, total, filename)

        Raises:
            ValueError: If the window configuration is invalid
        """
        self.config = config
        self.splitter = splitter or ImageSplitter(config)
        self.progress_callback = progress_callback

    def prepare_output_dirs(self) -> None:
        """
        Create the images/ and annfiles/ output directories.

        Raises:
            FileExistsError: If either directory already exists
        """
        for directory in (self.config.image_save_dir, self.config.ann_save_dir):
            directory.mkdir(parents=True, exist_ok=False)

    def load_images(self) -> List[Tuple[ImageInfo, str]]:
        """Load every configured dataset as (image info, image dir) pairs."""
        logger.info("Loading original data!!!")
        infos = []
        for img_dir, ann_dir in zip(self.config.img_dirs, self.config.ann_dirs):
            for info in load_dota(img_dir, ann_dir, nproc=self.config.nproc):
                infos.append((info, img_dir))
        return infos

    def run(self) -> BatchResult:
        """
        Split all configured images.

        Returns:
            BatchResult with aggregated results
        """
        start_time = time.time()

        infos = self.load_images()
        self.prepare_output_dirs()

        logger.info("start splitting images!!!")
        progress = SplitProgress(total=len(infos), callback=self.progress_callback)

        if self.config.nproc > 1 and len(infos) > 1:
            results = self._process_parallel(infos, progress)
        else:
            results = self._process_sequential(infos, progress)

        total_time = time.time() - start_time
        logger.info(f"finish splitting images in {total_time:.3f}s!!!")

        successful = sum(1 for r in results if r.success)
        return BatchResult(
            total_images=len(infos),
            successful=successful,
            failed=len(results) - successful,
            total_patches=sum(r.patch_count for r in results),
            total_time_s=total_time,
            results=results,
        )

    def _process_sequential(
        self,
        infos: List[Tuple[ImageInfo, str]],
        progress: SplitProgress,
    ) -> List[SplitResult]:
        """Split images one after another, in input order."""
        return [
            self.splitter.split(info, img_dir, progress=progress)
            for info, img_dir in infos
        ]

    def _process_parallel(
        self,
        infos: List[Tuple[ImageInfo, str]],
        progress: SplitProgress,
    ) -> List[SplitResult]:
        """Split images on a thread pool; results keep input order."""
        results: List[Optional[SplitResult]] = [None] * len(infos)

        with ThreadPoolExecutor(max_workers=self.config.nproc) as executor:
            future_to_idx = {
                executor.submit(self.splitter.split, info, img_dir, progress): i
                for i, (info, img_dir) in enumerate(infos)
            }

            for future in as_completed(future_to_idx):
                results[future_to_idx[future]] = future.result()

        return results


def create_argument_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="dota-split",
        description="Split large DOTA-format images into annotated patches",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s split.json                   Split using a JSON config
  %(prog)s split.yaml -w 4              Split with 4 worker threads
  %(prog)s split.json -o out/ --seed 0  Override output dir, fix sampling seed
        """,
    )

    parser.add_argument(
        "config",
        help="Path to a JSON or YAML split configuration",
    )

    parser.add_argument(
        "-o", "--save-dir",
        help="Output directory (overrides the config)",
    )

    parser.add_argument(
        "-w", "--nproc",
        type=int,
        help="Number of worker threads (overrides the config)",
    )

    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for empty-patch sampling (overrides the config)",
    )

    parser.add_argument(
        "--log-file",
        help="Also write the log to this file",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 1.0.0",
    )

    return parser


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    """Configure root logging for the CLI."""
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


def load_config(parsed: argparse.Namespace) -> SplitConfig:
    """Load the config file and apply command-line overrides."""
    config = SplitConfig.from_file(parsed.config)

    overrides = {}
    if parsed.save_dir is not None:
        overrides["save_dir"] = parsed.save_dir
    if parsed.nproc is not None:
        overrides["nproc"] = parsed.nproc
    if parsed.seed is not None:
        overrides["seed"] = parsed.seed

    if overrides:
        data = config.to_dict()
        data.update(overrides)
        config = SplitConfig.from_dict(data)
    return config


def main(args: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if not provided)

    Returns:
        Exit code: 0 on success, 1 if any image failed, 2 on configuration errors
    """
    parser = create_argument_parser()
    parsed = parser.parse_args(args)

    setup_logging(parsed.verbose, parsed.log_file)

    try:
        config = load_config(parsed)
        logger.info(f"Configuration: {config.to_dict()}")
        runner = SplitRunner(config)
        result = runner.run()
    except (ValueError, OSError) as e:
        logger.error(f"Split aborted: {e}")
        return 2

    logger.info(
        f"Results: total {result.total_images}, successful {result.successful}, "
        f"failed {result.failed}, patches {result.total_patches}, "
        f"time {result.total_time_s:.1f}s"
    )

    return 0 if result.failed == 0 else 1


if __name__ == "__main__":
    sys.exit(main())

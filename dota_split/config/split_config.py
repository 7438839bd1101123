"""
Configuration for splitting a dataset into patches.

Loaded from JSON or YAML; every value is validated before any image is
touched.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

PathLike = Union[str, Path]


@dataclass
class SplitConfig:
    """
    Configuration for dataset splitting.

    Attributes:
        img_dirs: Image directories to split
        ann_dirs: Annotation directories, one per image directory
        sizes: Window sizes in pixels
        gaps: Overlap between neighbouring windows, one per size
        rates: Scale factors; each size and gap is divided by its rate.
            A single rate applies to every (size, gap) pair.
        save_dir: Output root; patches go to images/, labels to annfiles/
        img_rate_thr: Minimum fraction of a window that must lie inside the image
        iof_thr: Minimum fraction of an object inside a window to keep it
        no_padding: Write windows clipped to the image instead of padding
        padding_value: Per-channel fill value for padding
        save_ext: Extension (and format) of written patches
        ignore_empty_prob: Probability of skipping a window without objects
        nproc: Number of worker threads
        seed: Seed for empty-window sampling, None for nondeterministic runs
    """
    img_dirs: List[str] = field(default_factory=list)
    ann_dirs: List[Optional[str]] = field(default_factory=list)
    sizes: List[int] = field(default_factory=lambda: [1024])
    gaps: List[int] = field(default_factory=lambda: [200])
    rates: List[float] = field(default_factory=lambda: [1.0])
    save_dir: str = ""
    img_rate_thr: float = 0.6
    iof_thr: float = 0.7
    no_padding: bool = False
    padding_value: List[float] = field(default_factory=lambda: [104, 116, 124])
    save_ext: str = ".png"
    ignore_empty_prob: float = 0.0
    nproc: int = 10
    seed: Optional[int] = None

    def __post_init__(self):
        """Validate configuration values."""
        self._validate()

    def _validate(self):
        """Validate all configuration values."""
        if len(self.sizes) != len(self.gaps):
            raise ValueError(
                f"the sizes of gaps and sizes are not same: {len(self.gaps)} != {len(self.sizes)}"
            )
        if not self.sizes:
            raise ValueError("at least one (size, gap) pair is required")
        for size, gap in zip(self.sizes, self.gaps):
            if size <= gap:
                raise ValueError(f"invalid size gap pair [{size} {gap}]: size must be > gap")
            if gap < 0:
                raise ValueError(f"gap must be >= 0, got {gap}")

        if len(self.rates) not in (1, len(self.sizes)):
            raise ValueError(
                f"rates must have 1 or {len(self.sizes)} entries, got {len(self.rates)}"
            )
        if any(rate <= 0 for rate in self.rates):
            raise ValueError(f"rates must be > 0, got {self.rates}")

        if len(self.img_dirs) != len(self.ann_dirs):
            raise ValueError(
                f"the sizes of img_dirs and ann_dirs are not same: "
                f"{len(self.img_dirs)} != {len(self.ann_dirs)}"
            )

        if not (0.0 <= self.img_rate_thr <= 1.0):
            raise ValueError(f"img_rate_thr must be between 0.0 and 1.0, got {self.img_rate_thr}")
        if not (0.0 <= self.iof_thr <= 1.0):
            raise ValueError(f"iof_thr must be between 0.0 and 1.0, got {self.iof_thr}")
        if not (0.0 <= self.ignore_empty_prob <= 1.0):
            raise ValueError(
                f"ignore_empty_prob must be between 0.0 and 1.0, got {self.ignore_empty_prob}"
            )
        if self.nproc < 1:
            raise ValueError(f"nproc must be >= 1, got {self.nproc}")
        if not self.padding_value:
            raise ValueError("padding_value must not be empty")
        if self.seed is not None and self.seed < 0:
            raise ValueError(f"seed must be >= 0, got {self.seed}")

        if not self.save_ext.startswith("."):
            self.save_ext = "." + self.save_ext

    def scaled_sizes_and_gaps(self) -> Tuple[List[int], List[int]]:
        """
        Window sizes and gaps after applying rates.

        Returns:
            (sizes, gaps), each value divided by its rate and truncated to int
        """
        rates = self.rates * len(self.sizes) if len(self.rates) == 1 else self.rates
        sizes = [int(size / rate) for size, rate in zip(self.sizes, rates)]
        gaps = [int(gap / rate) for gap, rate in zip(self.gaps, rates)]
        return sizes, gaps

    @property
    def image_save_dir(self) -> Path:
        """Directory for written patches."""
        return Path(self.save_dir) / "images"

    @property
    def ann_save_dir(self) -> Path:
        """Directory for written patch annotations."""
        return Path(self.save_dir) / "annfiles"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "img_dirs": list(self.img_dirs),
            "ann_dirs": list(self.ann_dirs),
            "sizes": list(self.sizes),
            "gaps": list(self.gaps),
            "rates": list(self.rates),
            "save_dir": self.save_dir,
            "img_rate_thr": self.img_rate_thr,
            "iof_thr": self.iof_thr,
            "no_padding": self.no_padding,
            "padding_value": list(self.padding_value),
            "save_ext": self.save_ext,
            "ignore_empty_prob": self.ignore_empty_prob,
            "nproc": self.nproc,
            "seed": self.seed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SplitConfig":
        """Create from dictionary (e.g., parsed JSON or YAML)."""
        rates = data.get("rates", [1.0])
        if not isinstance(rates, (list, tuple)):
            rates = [rates]

        return cls(
            img_dirs=list(data.get("img_dirs", [])),
            ann_dirs=list(data.get("ann_dirs", [])),
            sizes=[int(s) for s in data.get("sizes", [1024])],
            gaps=[int(g) for g in data.get("gaps", [200])],
            rates=[float(r) for r in rates],
            save_dir=str(data.get("save_dir", "")),
            img_rate_thr=float(data.get("img_rate_thr", 0.6)),
            iof_thr=float(data.get("iof_thr", 0.7)),
            no_padding=bool(data.get("no_padding", False)),
            padding_value=list(data.get("padding_value", [104, 116, 124])),
            save_ext=str(data.get("save_ext", ".png")),
            ignore_empty_prob=float(data.get("ignore_empty_prob", 0.0)),
            nproc=int(data.get("nproc", 10)),
            seed=data.get("seed"),
        )

    @classmethod
    def from_json(cls, json_path: PathLike) -> "SplitConfig":
        """Load configuration from a JSON file."""
        with open(json_path, "r") as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_yaml(cls, yaml_path: PathLike) -> "SplitConfig":
        """Load configuration from a YAML file."""
        import yaml

        with open(yaml_path, "r") as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data.get("split", data))

    @classmethod
    def from_file(cls, path: PathLike) -> "SplitConfig":
        """Load configuration from a .json, .yaml or .yml file."""
        if Path(path).suffix.lower() in (".yaml", ".yml"):
            return cls.from_yaml(path)
        return cls.from_json(path)

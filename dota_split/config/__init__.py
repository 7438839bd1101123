"""
Configuration for dataset splitting.
"""

from .split_config import SplitConfig

__all__ = ["SplitConfig"]

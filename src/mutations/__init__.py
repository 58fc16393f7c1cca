from .base import RasterMutation, apply_mutations
from .spatial import FlipHorizontal, FlipVertical, Rotate90, RotateExpand

__all__ = [
    "FlipHorizontal",
    "FlipVertical",
    "RasterMutation",
    "Rotate90",
    "RotateExpand",
    "apply_mutations",
]

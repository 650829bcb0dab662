"""Leaf-node box geometry helpers. No engine imports."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned box in canvas pixels, top-left origin."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    @property
    def area(self) -> float:
        return self.width * self.height

    def is_valid(self) -> bool:
        values = (self.x, self.y, self.width, self.height)
        return all(math.isfinite(v) for v in values) and self.width >= 0 and self.height >= 0

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class ProblemBounds:
    """Tightest box covering every registered element."""

    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def to_bounds(self) -> Bounds:
        return Bounds(self.min_x, self.min_y, self.width, self.height)


def _as_array(boxes: Sequence[Bounds]) -> NDArray[np.float64]:
    """Nx4 array of (xmin, ymin, xmax, ymax)."""
    return np.array([(b.x, b.y, b.right, b.bottom) for b in boxes], dtype=np.float64).reshape(-1, 4)


def extent(boxes: Sequence[Bounds]) -> ProblemBounds | None:
    """Min/max extent of a set of boxes, or None when there are none."""
    if len(boxes) == 0:
        return None
    arr = _as_array(boxes)
    return ProblemBounds(
        min_x=float(np.min(arr[:, 0])),
        max_x=float(np.max(arr[:, 2])),
        min_y=float(np.min(arr[:, 1])),
        max_y=float(np.max(arr[:, 3])),
    )


def union_bounds(boxes: Sequence[Bounds]) -> Bounds | None:
    """Smallest box covering every input box."""
    ext = extent(boxes)
    return ext.to_bounds() if ext is not None else None


def compound_bounds(first: Bounds, second: Bounds) -> Bounds:
    """Box for a two-part term such as coefficient + variable.

    Width spans both parts; height is the taller of the two, anchored at the
    higher top edge.
    """
    left = min(first.x, second.x)
    return Bounds(
        x=left,
        y=min(first.y, second.y),
        width=max(first.right, second.right) - left,
        height=max(first.height, second.height),
    )


def lies_left_of(box: Bounds, split_x: float, tolerance: float = 0.0) -> bool:
    """True if the box is contained in the half-plane left of split_x."""
    return box.right <= split_x + tolerance


def lies_right_of(box: Bounds, split_x: float, tolerance: float = 0.0) -> bool:
    """True if the box is contained in the half-plane right of split_x."""
    return box.x >= split_x - tolerance


def largest_gap(boxes: Sequence[Bounds], min_gap: float) -> tuple[float, float] | None:
    """Widest horizontal gap between consecutive boxes sorted by left edge.

    Uses the running right edge so that overlapping boxes cannot fake a gap.
    Returns (gap_start, gap_end) when the widest gap exceeds min_gap; every box
    then lies entirely on one side of it.
    """
    if len(boxes) < 2:
        return None
    arr = _as_array(boxes)
    arr = arr[np.argsort(arr[:, 0], kind="stable")]
    reach = np.maximum.accumulate(arr[:, 2])
    gaps = arr[1:, 0] - reach[:-1]
    idx = int(np.argmax(gaps))
    if gaps[idx] <= min_gap:
        return None
    return float(reach[idx]), float(arr[idx + 1, 0])


def split_horizontal(basis: Bounds, split_x: float) -> tuple[Bounds, Bounds]:
    """Cut a box into left/right parts at split_x (clamped into the box)."""
    cut = min(max(split_x, basis.x), basis.right)
    left = Bounds(basis.x, basis.y, cut - basis.x, basis.height)
    right = Bounds(cut, basis.y, basis.right - cut, basis.height)
    return left, right


def fractional_region(basis: Bounds, fx: float, fy: float, fw: float, fh: float) -> Bounds:
    """Sub-box expressed as fractions of the basis box."""
    return Bounds(
        x=basis.x + basis.width * fx,
        y=basis.y + basis.height * fy,
        width=basis.width * fw,
        height=basis.height * fh,
    )


def clamp_to_canvas(box: Bounds, canvas_width: float, canvas_height: float) -> Bounds:
    """Intersect a box with the canvas. Sizes never go negative."""
    left = min(max(box.x, 0.0), canvas_width)
    top = min(max(box.y, 0.0), canvas_height)
    right = min(max(box.right, left), canvas_width)
    bottom = min(max(box.bottom, top), canvas_height)
    return Bounds(left, top, right - left, bottom - top)

"""Uniform rescale of source coordinates into a fixed target canvas."""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .geometry import Point


@dataclass(frozen=True)
class Canvas:
    """Declared coordinate space of an SVG document."""

    origin_x: float = 0.0
    origin_y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def has_size(self) -> bool:
        return self.width > 0 and self.height > 0


@dataclass(frozen=True)
class CanvasTransform:
    """
    Scale-and-center mapping from a source canvas into a target canvas.

    A single scale factor keeps the aspect ratio; the leftover space on the
    shorter axis is split evenly on both sides.
    """

    origin_x: float = 0.0
    origin_y: float = 0.0
    scale: float = 1.0
    translate_x: float = 0.0
    translate_y: float = 0.0

    @classmethod
    def fit(cls, source: Canvas, target_width: float, target_height: float) -> "CanvasTransform":
        scale = min(target_width / source.width, target_height / source.height)
        return cls(
            origin_x=source.origin_x,
            origin_y=source.origin_y,
            scale=scale,
            translate_x=(target_width - source.width * scale) / 2,
            translate_y=(target_height - source.height * scale) / 2,
        )

    def apply(self, point: Point) -> Point:
        return (
            (point[0] - self.origin_x) * self.scale + self.translate_x,
            (point[1] - self.origin_y) * self.scale + self.translate_y,
        )

    def apply_all(self, points: Sequence[Point]) -> List[Point]:
        return [self.apply(p) for p in points]


def build_transform(
    canvas: Canvas,
    should_resize: bool,
    target_width: float = 720.0,
    target_height: float = 1080.0,
) -> Optional[CanvasTransform]:
    """
    Pick the transform for a document.

    Returns:
        A CanvasTransform, or None when resizing is off or the source size
        could not be resolved (points then pass through unchanged)
    """
    if not should_resize or not canvas.has_size:
        return None
    return CanvasTransform.fit(canvas, target_width, target_height)

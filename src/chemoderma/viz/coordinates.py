"""Coordinate types for the layered layout.

Layout collaborators report node centers; the rendering side anchors nodes
at their top-left corner. These helpers convert between the two.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """Immutable 2D point.

    Example:
        >>> Point(1, 2) + Point(3, 4)
        Point(x=4, y=6)
    """

    x: float
    y: float

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def as_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Size:
    """Width and height of a node's bounding box."""

    width: float
    height: float

    @property
    def half(self) -> Point:
        """Offset from the top-left corner to the center."""
        return Point(self.width / 2, self.height / 2)


def center_to_top_left(center: Point, size: Size) -> Point:
    """Convert a center coordinate into a top-left anchor.

    Example:
        >>> center_to_top_left(Point(100, 40), Size(200, 80))
        Point(x=0.0, y=0.0)
    """
    return center - size.half


def top_left_to_center(top_left: Point, size: Size) -> Point:
    """Inverse of :func:`center_to_top_left`."""
    return top_left + size.half

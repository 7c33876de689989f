"""Sphere layout and colour hints for rendering skill nodes."""

import math

from config import settings
from models.schemas.skill_node import MatchType, Point3D

GOLDEN_ANGLE = math.pi * (3 - math.sqrt(5))

MATCH_TYPE_COLORS: dict[str, int] = {
    "exact": 0x4ADE80,  # green
    "similar": 0xFBBF24,  # yellow
    "partial": 0x60A5FA,  # blue
    "none": 0x9CA3AF,  # gray
}

CATEGORY_COLORS: dict[str, int] = {
    "default": 0x4FC3F7,
    "frontend": 0x81C784,
    "backend": 0xFFB74D,
    "data": 0xBA68C8,
    "cloud": 0xFF8A65,
    "mobile": 0x9575CD,
    "design": 0xF06292,
}


def fibonacci_sphere_points(n: int, radius: float | None = None) -> list[Point3D]:
    """Spread n points evenly over a sphere surface along a Fibonacci spiral.

    y runs from +radius to -radius; a single point sits at the north pole.
    """
    radius = settings.sphere_radius if radius is None else radius
    if n <= 0:
        return []
    if n == 1:
        return [Point3D(x=0.0, y=radius, z=0.0)]

    points = []
    for i in range(n):
        y = 1 - (i / (n - 1)) * 2
        r = math.sqrt(max(0.0, 1 - y * y))
        theta = GOLDEN_ANGLE * i
        points.append(Point3D(
            x=math.cos(theta) * r * radius,
            y=y * radius,
            z=math.sin(theta) * r * radius,
        ))
    return points


def skill_match_color(match_type: MatchType) -> int:
    return MATCH_TYPE_COLORS.get(match_type, MATCH_TYPE_COLORS["none"])


def category_color(category: str) -> int:
    return CATEGORY_COLORS.get(category or "default", CATEGORY_COLORS["default"])

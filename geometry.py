from __future__ import annotations
import math
import re
from typing import NamedTuple
import numpy as np

INCHES_TO_PX = 96.0
CM_TO_PX = INCHES_TO_PX / 2.54
MM_TO_PX = CM_TO_PX / 10
PT_TO_PX = INCHES_TO_PX / 72.0
PC_TO_PX = PT_TO_PX * 12

UNIT_SCALES = {
    'px': 1.0,
    'pt': PT_TO_PX,
    'pc': PC_TO_PX,
    'in': INCHES_TO_PX,
    'cm': CM_TO_PX,
    'mm': MM_TO_PX,
}

CURVE_STEP = 0.02
CURVE_SAMPLES = int(round(1.0 / CURVE_STEP)) + 1  # t = 0.00, 0.02, ..., 1.00
ARC_STEP_DEGREES = 1.0

number_pattern = re.compile(r'^([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*([a-zA-Z%]*)$')
plain_number_pattern = re.compile(r'[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?')


class Point(NamedTuple):
    x: float
    y: float


def is_number(token: str) -> bool:
    # literals that overflow to inf are not numbers
    return (bool(token) and plain_number_pattern.fullmatch(token) is not None
            and math.isfinite(float(token)))


def parse_number_with_unit(value: str) -> tuple[float, str]:
    if not value or not isinstance(value, str):
        return (0.0, "")

    value = value.strip()
    match = number_pattern.match(value)
    if match:
        return (float(match.group(1)), match.group(2))

    return (0.0, "")


def normalize_length(value: str, default: float = 0.0) -> float:
    num_value, unit = parse_number_with_unit(value)
    length = num_value * UNIT_SCALES.get(unit.lower(), 1.0)
    if not math.isfinite(length):
        return default
    return length


def quadratic_bezier(a0, a1, a2, t):
    return (1 - t) ** 2 * a0 + 2 * (1 - t) * t * a1 + t ** 2 * a2


def cubic_bezier(a0, a1, a2, a3, t):
    return ((1 - t) ** 3 * a0 + 3 * (1 - t) ** 2 * t * a1
            + 3 * (1 - t) * t ** 2 * a2 + t ** 3 * a3)


def _curve_parameters() -> np.ndarray:
    return np.linspace(0.0, 1.0, CURVE_SAMPLES)


def _to_points(xs: np.ndarray, ys: np.ndarray) -> list[Point]:
    return [Point(float(x), float(y)) for x, y in zip(xs, ys)]


def sample_quadratic(p0: Point, p1: Point, p2: Point) -> list[Point]:
    t = _curve_parameters()
    return _to_points(quadratic_bezier(p0.x, p1.x, p2.x, t),
                      quadratic_bezier(p0.y, p1.y, p2.y, t))


def sample_cubic(p0: Point, p1: Point, p2: Point, p3: Point) -> list[Point]:
    t = _curve_parameters()
    return _to_points(cubic_bezier(p0.x, p1.x, p2.x, p3.x, t),
                      cubic_bezier(p0.y, p1.y, p2.y, p3.y, t))


def reflect(control: Point, through: Point) -> Point:
    return Point(2 * through.x - control.x, 2 * through.y - control.y)


def angle_between(ux: float, uy: float, vx: float, vy: float) -> float:
    """Signed angle from u to v in degrees, sign taken from the 2D cross product."""
    sign = -1.0 if (ux * vy - uy * vx) < 0 else 1.0
    norms = math.hypot(ux, uy) * math.hypot(vx, vy)
    if norms == 0:
        return 0.0
    cosine = max(-1.0, min(1.0, (ux * vx + uy * vy) / norms))
    return sign * math.degrees(math.acos(cosine))


def arc_center_parameters(start: Point, rx: float, ry: float, angle: float,
                          large_arc: bool, sweep: bool, end: Point) -> tuple[Point, float, float, float, float]:
    """Endpoint to center conversion (SVG implementation notes, F.6.5).

    Returns (center, rx, ry, theta1, delta_theta) with radii scaled up when
    they cannot span the chord, and both angles in degrees.
    """
    rx = abs(rx)
    ry = abs(ry)
    cos_a = math.cos(math.radians(angle))
    sin_a = math.sin(math.radians(angle))

    x1_ = (cos_a * (start.x - end.x) + sin_a * (start.y - end.y)) / 2
    y1_ = (cos_a * (start.y - end.y) - sin_a * (start.x - end.x)) / 2

    scale = (x1_ * x1_) / (rx * rx) + (y1_ * y1_) / (ry * ry)
    if scale > 1:
        rx *= math.sqrt(scale)
        ry *= math.sqrt(scale)

    numerator = rx * rx * ry * ry - rx * rx * y1_ * y1_ - ry * ry * x1_ * x1_
    denominator = rx * rx * y1_ * y1_ + ry * ry * x1_ * x1_
    coefficient = math.sqrt(abs(numerator / denominator))
    if large_arc == sweep:
        coefficient = -coefficient

    cx_ = coefficient * (rx * y1_) / ry
    cy_ = -coefficient * (ry * x1_) / rx

    center = Point(cos_a * cx_ - sin_a * cy_ + (start.x + end.x) / 2,
                   sin_a * cx_ + cos_a * cy_ + (start.y + end.y) / 2)

    ux, uy = (x1_ - cx_) / rx, (y1_ - cy_) / ry
    vx, vy = (-x1_ - cx_) / rx, (-y1_ - cy_) / ry
    theta1 = angle_between(1.0, 0.0, ux, uy)
    delta_theta = math.fmod(angle_between(ux, uy, vx, vy), 360.0)

    if not sweep and delta_theta > 0:
        delta_theta -= 360.0
    elif sweep and delta_theta < 0:
        delta_theta += 360.0
    elif not sweep and delta_theta == 0:
        delta_theta -= 180.0
    elif sweep and delta_theta == 0:
        delta_theta += 180.0

    return center, rx, ry, theta1, delta_theta


def arc_to_points(start: Point, rx: float, ry: float, angle: float,
                  large_arc: bool, sweep: bool, end: Point) -> list[Point]:
    if rx == 0 or ry == 0 or start == end:
        return [start, end]

    center, rx, ry, theta1, delta_theta = arc_center_parameters(
        start, rx, ry, angle, large_arc, sweep, end)

    if not math.isfinite(delta_theta):
        return [start, end]

    direction = -1.0 if delta_theta < 0 else 1.0
    count = int(math.floor(abs(delta_theta) / ARC_STEP_DEGREES + 1e-9)) + 1
    k = np.radians(theta1 + direction * ARC_STEP_DEGREES * np.arange(count))

    cos_a = math.cos(math.radians(angle))
    sin_a = math.sin(math.radians(angle))
    xs = cos_a * rx * np.cos(k) - sin_a * ry * np.sin(k) + center.x
    ys = sin_a * rx * np.cos(k) + cos_a * ry * np.sin(k) + center.y
    return _to_points(xs, ys)

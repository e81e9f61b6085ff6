"""Raster canvas the renderer draws onto.

Coordinates are pixel positions: pixel (x, y) sits at the integer point
(x, y). Colors are ``colors.Color`` values. The renderer only relies on the
methods below, so any object providing them can stand in for this canvas:

    fill_polygon, stroke_polygon, stroke_line, fill_ellipse, stroke_ellipse,
    fill_rect, stroke_rect, draw_text, set_stroke_width, set_alpha_blending
"""
from __future__ import annotations
import math
from typing import Sequence
import numpy as np
from PIL import Image, ImageDraw, ImageFont
from colors import Color
from geometry import Point


class RasterCanvas:
    def __init__(self, width: int, height: int,
                 background: tuple[int, int, int, int] = (0, 0, 0, 0),
                 antialias: bool = False):
        self.width = int(width)
        self.height = int(height)
        self.antialias = antialias
        self.alpha_blending = True
        self.stroke_width = 1

        self.buffer = np.zeros((self.height, self.width, 4), dtype=np.uint8)
        self.buffer[:, :] = background
        self._font = None

    def set_alpha_blending(self, enabled: bool):
        self.alpha_blending = enabled

    def set_antialias(self, enabled: bool):
        self.antialias = enabled

    def set_stroke_width(self, width: int):
        self.stroke_width = max(0, int(width))

    def _window(self, min_x: float, min_y: float, max_x: float, max_y: float):
        if not all(math.isfinite(v) for v in (min_x, min_y, max_x, max_y)):
            return None
        x0 = max(0, int(math.floor(min_x)))
        y0 = max(0, int(math.floor(min_y)))
        x1 = min(self.width - 1, int(math.ceil(max_x)))
        y1 = min(self.height - 1, int(math.ceil(max_y)))
        if x0 > x1 or y0 > y1:
            return None

        ys, xs = np.mgrid[y0:y1 + 1, x0:x1 + 1].astype(np.float64)
        return x0, y0, xs, ys

    def _paint(self, x0: int, y0: int, coverage: np.ndarray, color: Color):
        h, w = coverage.shape
        region = self.buffer[y0:y0 + h, x0:x0 + w]
        r, g, b, a = color.to_rgba()

        if not self.alpha_blending:
            region[coverage > 0] = (r, g, b, a)
            return

        alpha = coverage * (a / 255.0)
        dst = region.astype(np.float64)
        dst_alpha = dst[:, :, 3] / 255.0

        out_alpha = alpha + dst_alpha * (1.0 - alpha)
        safe_alpha = np.where(out_alpha > 0, out_alpha, 1.0)
        for channel, value in enumerate((r, g, b)):
            dst[:, :, channel] = (value * alpha + dst[:, :, channel] * dst_alpha * (1.0 - alpha)) / safe_alpha
        dst[:, :, 3] = out_alpha * 255.0

        region[...] = np.clip(np.round(dst), 0, 255).astype(np.uint8)

    def fill_polygon(self, vertices: Sequence[Point], color: Color):
        if len(vertices) < 3:
            return

        pts = np.asarray(vertices, dtype=np.float64)
        window = self._window(pts[:, 0].min(), pts[:, 1].min(), pts[:, 0].max(), pts[:, 1].max())
        if window is None:
            return
        x0, y0, xs, ys = window

        # even-odd crossing test against every edge
        inside = np.zeros(xs.shape, dtype=bool)
        for (xi, yi), (xj, yj) in zip(pts, np.roll(pts, -1, axis=0)):
            if yi == yj:
                continue
            crosses = (yi > ys) != (yj > ys)
            x_at = (xj - xi) * (ys - yi) / (yj - yi) + xi
            inside ^= crosses & (xs < x_at)

        self._paint(x0, y0, inside.astype(np.float64), color)

    def stroke_polygon(self, vertices: Sequence[Point], color: Color):
        count = len(vertices)
        for i in range(count):
            self.stroke_line(vertices[i], vertices[(i + 1) % count], color)

    def stroke_line(self, p1: Point, p2: Point, color: Color):
        x1, y1 = p1
        x2, y2 = p2
        # thickness is not supported together with antialiasing
        width = 1 if self.antialias else max(1, self.stroke_width)
        half_width = width / 2.0

        window = self._window(min(x1, x2) - half_width - 1, min(y1, y2) - half_width - 1,
                              max(x1, x2) + half_width + 1, max(y1, y2) + half_width + 1)
        if window is None:
            return
        x0, y0, xs, ys = window

        dx = x2 - x1
        dy = y2 - y1
        length_sq = dx * dx + dy * dy
        if length_sq == 0:
            t = np.zeros(xs.shape)
        else:
            t = np.clip(((xs - x1) * dx + (ys - y1) * dy) / length_sq, 0.0, 1.0)
        dist = np.hypot(xs - (x1 + t * dx), ys - (y1 + t * dy))

        if self.antialias:
            coverage = np.clip(half_width + 0.5 - dist, 0.0, 1.0)
        else:
            coverage = (dist <= half_width).astype(np.float64)

        self._paint(x0, y0, coverage, color)

    def _ellipse_distance(self, xs: np.ndarray, ys: np.ndarray, center: Point, rx: float, ry: float) -> np.ndarray:
        return ((xs - center.x) / rx) ** 2 + ((ys - center.y) / ry) ** 2

    def fill_ellipse(self, center: Point, radii: tuple[float, float], color: Color):
        rx, ry = abs(radii[0]), abs(radii[1])
        if rx == 0 or ry == 0:
            return

        window = self._window(center.x - rx, center.y - ry, center.x + rx, center.y + ry)
        if window is None:
            return
        x0, y0, xs, ys = window

        inside = self._ellipse_distance(xs, ys, center, rx, ry) <= 1.0
        self._paint(x0, y0, inside.astype(np.float64), color)

    def stroke_ellipse(self, center: Point, radii: tuple[float, float], color: Color):
        half_width = (1 if self.antialias else max(1, self.stroke_width)) / 2.0
        rx, ry = abs(radii[0]), abs(radii[1])
        outer_rx, outer_ry = rx + half_width, ry + half_width
        inner_rx, inner_ry = rx - half_width, ry - half_width

        window = self._window(center.x - outer_rx, center.y - outer_ry,
                              center.x + outer_rx, center.y + outer_ry)
        if window is None:
            return
        x0, y0, xs, ys = window

        ring = self._ellipse_distance(xs, ys, center, outer_rx, outer_ry) <= 1.0
        if inner_rx > 0 and inner_ry > 0:
            ring &= self._ellipse_distance(xs, ys, center, inner_rx, inner_ry) > 1.0
        self._paint(x0, y0, ring.astype(np.float64), color)

    def fill_rect(self, p1: Point, p2: Point, color: Color):
        window = self._window(min(p1.x, p2.x), min(p1.y, p2.y), max(p1.x, p2.x), max(p1.y, p2.y))
        if window is None:
            return
        x0, y0, xs, ys = window

        inside = ((xs >= min(p1.x, p2.x)) & (xs <= max(p1.x, p2.x))
                  & (ys >= min(p1.y, p2.y)) & (ys <= max(p1.y, p2.y)))
        self._paint(x0, y0, inside.astype(np.float64), color)

    def stroke_rect(self, p1: Point, p2: Point, color: Color):
        self.stroke_polygon([p1, Point(p2.x, p1.y), p2, Point(p1.x, p2.y)], color)

    def draw_text(self, position: Point, text: str, color: Color):
        if not text:
            return
        if self._font is None:
            self._font = ImageFont.load_default()

        left, top, right, bottom = self._font.getbbox(text)
        if (position.x + right <= 0 or position.y + bottom <= 0
                or position.x + left >= self.width or position.y + top >= self.height):
            return

        mask = Image.new('L', (self.width, self.height), 0)
        ImageDraw.Draw(mask).text((position.x, position.y), text, fill=255, font=self._font)
        coverage = np.asarray(mask, dtype=np.float64) / 255.0

        rows, cols = np.nonzero(coverage)
        if rows.size == 0:
            return
        y0, y1 = rows.min(), rows.max() + 1
        x0, x1 = cols.min(), cols.max() + 1
        self._paint(int(x0), int(y0), coverage[y0:y1, x0:x1], color)

    def get_rgba_buffer(self) -> np.ndarray:
        return self.buffer.copy()

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.buffer)

    def save(self, path: str):
        self.to_image().save(path)

"""Shared test fixtures."""

from __future__ import annotations

import pytest


BOX_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 40 30">
  <rect x="5" y="5" width="10" height="8" fill="#123456"/>
</svg>'''

STYLED_SVG = '''<?xml version="1.0" encoding="UTF-8"?>
<!-- cascade sample -->
<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">
  <style><![CDATA[
    .box { fill: #ff0000 }
    #special { stroke: #0000ff; stroke-width: 3 }
  ]]></style>
  <rect class="box" style="stroke:#00ff00" x="1" y="1" width="10" height="10"/>
  <rect class="box" id="special" x="20" y="20" width="10" height="10"/>
</svg>'''

GROUP_SVG = '''<svg viewBox="0 0 64 64">
  <g fill="#00ff00" stroke="#ff0000">
    <circle cx="10" cy="10" r="4"/>
    <g stroke-width="3">
      <line x1="0" y1="0" x2="10" y2="10"/>
    </g>
  </g>
  <circle cx="40" cy="40" r="4"/>
</svg>'''

SHAPES_SVG = '''<svg viewBox="0 0 120 80">
  <polygon points="10,10 30,10 20,30" fill="#ff0000" stroke="#000" stroke-width="1"/>
  <polyline points="40,10 60,10 50,30" fill="none" stroke="#000"/>
  <path d="M70 10 L90 10 L80 30 Z" fill="#0000ff"/>
  <ellipse cx="20" cy="60" rx="10" ry="5"/>
  <text x="50" y="70">Hi</text>
  <unknown x="1"/>
</svg>'''


class RecordingCanvas:
    """Stands in for RasterCanvas and records every call in order."""

    def __init__(self):
        self.calls = []
        self.stroke_width = 0
        self.alpha_blending = True

    def _record(self, name, *args):
        self.calls.append((name,) + args)

    def names(self):
        return [call[0] for call in self.calls if call[0] != 'set_stroke_width']

    def fill_polygon(self, vertices, color):
        self._record('fill_polygon', list(vertices), color)

    def stroke_polygon(self, vertices, color):
        self._record('stroke_polygon', list(vertices), color)

    def stroke_line(self, p1, p2, color):
        self._record('stroke_line', p1, p2, color)

    def fill_ellipse(self, center, radii, color):
        self._record('fill_ellipse', center, radii, color)

    def stroke_ellipse(self, center, radii, color):
        self._record('stroke_ellipse', center, radii, color)

    def fill_rect(self, p1, p2, color):
        self._record('fill_rect', p1, p2, color)

    def stroke_rect(self, p1, p2, color):
        self._record('stroke_rect', p1, p2, color)

    def draw_text(self, position, text, color):
        self._record('draw_text', position, text, color)

    def set_stroke_width(self, width):
        self.stroke_width = width
        self._record('set_stroke_width', width)

    def set_alpha_blending(self, enabled):
        self.alpha_blending = enabled
        self._record('set_alpha_blending', enabled)


@pytest.fixture
def recording_canvas() -> RecordingCanvas:
    return RecordingCanvas()

from __future__ import annotations
import logging
from typing import Sequence
from attributes import AttributeScope, normalize_attributes
from canvas import RasterCanvas
from colors import Color
from config import RenderOptions
from geometry import Point
from parser import Node
from path_data import parse_points
from path_interpreter import PathInterpreter
from styles import PaintState, StyleRuleTable, resolve_paint
from svg_state import SVGState

logger = logging.getLogger(__name__)

TEXT_HEIGHT = 16


class Renderer:
    def __init__(self, svg_state: SVGState, options: RenderOptions | None = None):
        self.svg_state = svg_state
        self.options = options or RenderOptions()
        self.styles = StyleRuleTable.from_document(svg_state.svg_tree)
        self.interpreter = PathInterpreter(self.options.path_mode)
        self.canvas = None
        self._handlers = {
            'line': self._render_line,
            'circle': self._render_circle,
            'ellipse': self._render_ellipse,
            'rect': self._render_rect,
            'polygon': self._render_polygon,
            'polyline': self._render_polyline,
            'path': self._render_path,
            'text': self._render_text,
        }

    @classmethod
    def from_string(cls, svg_text: str, options: RenderOptions | None = None) -> Renderer:
        return cls(SVGState.from_string(svg_text), options)

    @classmethod
    def from_file(cls, path: str, options: RenderOptions | None = None) -> Renderer:
        return cls(SVGState.from_file(path), options)

    def create_canvas(self) -> RasterCanvas:
        return RasterCanvas(self.svg_state.width, self.svg_state.height,
                            background=self.options.background,
                            antialias=self.options.antialias)

    def render(self, canvas=None):
        """Draw the whole document and return the canvas.

        ``canvas`` defaults to a fresh RasterCanvas sized from the viewBox.
        """
        self.canvas = canvas if canvas is not None else self.create_canvas()

        root = self.svg_state.svg_tree
        scope = self.svg_state.root_scope
        paint = resolve_paint(normalize_attributes(root.attributes), scope, self.styles)

        count = self._render_children(root, scope, paint)
        logger.info("Rendered %d node(s) onto a %dx%d canvas",
                    count, self.svg_state.width, self.svg_state.height)
        return self.canvas

    def _render_children(self, parent: Node, scope: AttributeScope, paint: PaintState) -> int:
        count = 0
        for node in parent.children:
            count += self._render_node(node, scope, paint)
        return count

    def _render_node(self, node: Node, parent_scope: AttributeScope, parent_paint: PaintState) -> int:
        attributes = normalize_attributes(node.attributes)
        scope = parent_scope.overlay(attributes)
        paint = resolve_paint(attributes, scope, self.styles, parent_paint)

        # descendants are drawn before the element's own shape
        count = 1 + self._render_children(node, scope, paint)

        self.canvas.set_stroke_width(paint.stroke_width)

        handler = self._handlers.get(node.tag)
        if handler is None:
            logger.debug("No drawing for <%s>", node.tag)
        else:
            handler(node, scope, paint)
        return count

    def _draw_lines(self, vertices: Sequence[Point], color: Color):
        for p1, p2 in zip(vertices, vertices[1:]):
            self.canvas.stroke_line(p1, p2, color)

    def _draw_vertices(self, vertices: Sequence[Point], paint: PaintState):
        if len(vertices) > 2:
            self.canvas.fill_polygon(vertices, paint.fill)
        if paint.stroke_width:
            self._draw_lines(vertices, paint.stroke)

    def _draw_ellipse(self, center: Point, rx: float, ry: float, paint: PaintState):
        self.canvas.fill_ellipse(center, (rx, ry), paint.fill)

        if paint.stroke_width:
            # a stroke-colored ellipse half a width larger, re-filled inside
            offset = paint.stroke_width / 4.0
            self.canvas.fill_ellipse(center, (rx + offset, ry + offset), paint.stroke)
            self.canvas.set_alpha_blending(False)
            self.canvas.fill_ellipse(center, (rx - offset, ry - offset), paint.fill)
            self.canvas.set_alpha_blending(True)

    def _render_line(self, node: Node, scope: AttributeScope, paint: PaintState):
        if paint.stroke_width:
            self.canvas.stroke_line(Point(scope.get_number('x1'), scope.get_number('y1')),
                                    Point(scope.get_number('x2'), scope.get_number('y2')),
                                    paint.stroke)

    def _render_circle(self, node: Node, scope: AttributeScope, paint: PaintState):
        r = scope.get_number('r')
        self._draw_ellipse(Point(scope.get_number('cx'), scope.get_number('cy')), r, r, paint)

    def _render_ellipse(self, node: Node, scope: AttributeScope, paint: PaintState):
        self._draw_ellipse(Point(scope.get_number('cx'), scope.get_number('cy')),
                           scope.get_number('rx'), scope.get_number('ry'), paint)

    def _render_rect(self, node: Node, scope: AttributeScope, paint: PaintState):
        x = scope.get_number('x')
        y = scope.get_number('y')
        top_left = Point(x, y)
        bottom_right = Point(x + scope.get_number('width'), y + scope.get_number('height'))

        self.canvas.fill_rect(top_left, bottom_right, paint.fill)
        if paint.stroke_width:
            self.canvas.stroke_rect(top_left, bottom_right, paint.stroke)

    def _render_polygon(self, node: Node, scope: AttributeScope, paint: PaintState):
        points = parse_points(scope.get('points', ''))

        if len(points) > 2:
            self.canvas.fill_polygon(points, paint.fill)
            if paint.stroke_width:
                self.canvas.stroke_polygon(points, paint.stroke)
        elif paint.stroke_width:
            self._draw_lines(points, paint.stroke)

    def _render_polyline(self, node: Node, scope: AttributeScope, paint: PaintState):
        self._draw_vertices(parse_points(scope.get('points', '')), paint)

    def _render_path(self, node: Node, scope: AttributeScope, paint: PaintState):
        for vertices in self.interpreter.interpret(scope.get('d', '')):
            self._draw_vertices(vertices, paint)

    def _render_text(self, node: Node, scope: AttributeScope, paint: PaintState):
        text = node.text.strip()
        if text:
            position = Point(scope.get_number('x'), scope.get_number('y') - TEXT_HEIGHT)
            self.canvas.draw_text(position, text, paint.fill)


def render_svg(svg_text: str, options: RenderOptions | None = None) -> RasterCanvas:
    return Renderer.from_string(svg_text, options).render()

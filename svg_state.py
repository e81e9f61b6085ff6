from __future__ import annotations
import re
from attributes import AttributeScope
from errors import MissingViewBoxError
from geometry import is_number
from parser import Node, parse_svg_file, parse_svg_string
from path_data import parse_points

viewbox_separator_pattern = re.compile(r'[\s,]+')


def parse_viewbox(value: str | None) -> tuple[float, float, float, float]:
    if value is None:
        raise MissingViewBoxError("SVG viewBox attribute not defined")

    parts = viewbox_separator_pattern.split(value.strip())
    if len(parts) != 4 or not all(is_number(p) for p in parts):
        raise MissingViewBoxError(f"Invalid viewBox: {value!r}")

    min_x, min_y, width, height = (float(p) for p in parts)
    if width <= 0 or height <= 0:
        raise MissingViewBoxError(f"viewBox has no area: {value!r}")

    return (min_x, min_y, width, height)


class SVGState:
    def __init__(self, svg_tree: Node):
        self.svg_tree = svg_tree
        self.root_scope = AttributeScope().overlay(svg_tree.attributes)
        self.viewbox = parse_viewbox(self.root_scope.get('viewbox'))
        self.width = max(1, int(self.viewbox[2]))
        self.height = max(1, int(self.viewbox[3]))
        self.validation_warnings: list[str] = []
        self.validate()

    @classmethod
    def from_string(cls, svg_text: str) -> SVGState:
        return cls(parse_svg_string(svg_text))

    @classmethod
    def from_file(cls, path: str) -> SVGState:
        return cls(parse_svg_file(path))

    def validate(self):
        self.validation_warnings = []
        for node in self.svg_tree.iter():
            self._validate_node(node)

    def _validate_node(self, node: Node):
        attrs = node.attributes

        if node.tag == 'circle' and 'r' not in attrs:
            self.validation_warnings.append("<circle> should have radius (r)")
        elif node.tag == 'ellipse' and ('rx' not in attrs or 'ry' not in attrs):
            self.validation_warnings.append("<ellipse> should have rx and ry")
        elif node.tag == 'rect' and ('width' not in attrs or 'height' not in attrs):
            self.validation_warnings.append("<rect> should have width and height")
        elif node.tag == 'line':
            missing = [a for a in ('x1', 'y1', 'x2', 'y2') if a not in attrs]
            if missing:
                self.validation_warnings.append(f"<line> missing attributes: {', '.join(missing)}")
        elif node.tag in ('polyline', 'polygon'):
            points_str = attrs.get('points', '')
            if not points_str.strip():
                self.validation_warnings.append(f"<{node.tag}> should have points attribute")
            elif len(parse_points(points_str)) < 2:
                self.validation_warnings.append(f"<{node.tag}> has fewer than two points")
        elif node.tag == 'path' and not attrs.get('d', '').strip():
            self.validation_warnings.append("<path> should have 'd' (path data) attribute")

    def print_validation_report(self):
        if not self.validation_warnings:
            print("SVG validation: [OK] Valid")
            return

        print("SVG validation: [WARNING] Warnings:")
        for warning in self.validation_warnings:
            print(f"  WARNING: {warning}")

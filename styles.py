from __future__ import annotations
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from colors import BLACK, TRANSPARENT, Color, parse_color
from geometry import normalize_length
from parser import Node

css_rule_pattern = re.compile(r'([\w\s\.,\-#]+)?\{\s*(.*?)\s*\}', re.DOTALL)


@dataclass(frozen=True)
class PaintState:
    fill: Color = BLACK
    stroke: Color = TRANSPARENT
    stroke_width: int = 0


DEFAULT_PAINT = PaintState()


def parse_declarations(text: str) -> dict[str, str]:
    """Parse ``prop: value; prop: value`` pairs, dropping empty values."""
    declarations = {}
    for chunk in text.strip().strip(';').split(';'):
        name, separator, value = chunk.partition(':')
        name = name.strip().lower()
        value = value.strip()
        if separator and name and value:
            declarations[name] = value
    return declarations


class StyleRuleTable:
    def __init__(self, rules: Mapping[str, Mapping[str, str]] | None = None):
        self._rules = MappingProxyType(
            {selector: MappingProxyType(dict(declarations))
             for selector, declarations in (rules or {}).items()})

    @classmethod
    def from_css(cls, css: str | Iterable[str]) -> StyleRuleTable:
        sheets = [css] if isinstance(css, str) else list(css)
        rules: dict[str, dict[str, str]] = {}

        for sheet in sheets:
            for match in css_rule_pattern.finditer(sheet):
                if not match.group(1):
                    continue
                declarations = parse_declarations(match.group(2))
                for selector in match.group(1).split(','):
                    selector = selector.strip()
                    if selector:
                        rules.setdefault(selector, {}).update(declarations)

        return cls(rules)

    @classmethod
    def from_document(cls, root: Node) -> StyleRuleTable:
        return cls.from_css(node.text for node in root.iter() if node.tag == 'style')

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, selector: str) -> bool:
        return selector in self._rules

    def lookup(self, selector: str) -> Mapping[str, str]:
        return self._rules.get(selector, MappingProxyType({}))

    def match(self, scope: Mapping[str, str]) -> dict[str, str]:
        """Declarations for the scope's classes, then its id; later ones win."""
        selectors = ['.' + name for name in scope.get('class', '').split()]
        if scope.get('id'):
            selectors.append('#' + scope['id'].strip())

        styles: dict[str, str] = {}
        for selector in selectors:
            styles.update(self.lookup(selector))
        return styles


def _resolve_color(value: str | Color, scope: Mapping[str, str]) -> Color:
    if isinstance(value, str) and value.strip().lower() == 'currentcolor':
        value = scope.get('color', 'black')
    return parse_color(value)


def coerce_stroke_width(value: str | int) -> int:
    if isinstance(value, int):
        return max(0, value)
    return max(0, int(normalize_length(value)))


def resolve_paint(attributes: Mapping[str, str], scope: Mapping[str, str],
                  rules: StyleRuleTable, inherited: PaintState = DEFAULT_PAINT) -> PaintState:
    """Cascade paint values for one node.

    Priority, lowest first: the parent's paint, the node's own presentation
    attributes, class rules, the id rule, the inline ``style`` attribute.
    A stroke color without any width set still gets a 1 unit stroke.
    """
    fill = attributes.get('fill', inherited.fill)
    stroke = attributes.get('stroke', inherited.stroke)
    width = attributes.get('stroke-width')
    explicit_width = width is not None
    if width is None:
        width = inherited.stroke_width

    styles = rules.match(scope)
    if scope.get('style'):
        styles.update(parse_declarations(scope['style']))

    fill = styles.get('fill', fill)
    stroke = styles.get('stroke', stroke)
    if 'stroke-width' in styles:
        width = styles['stroke-width']
        explicit_width = True

    fill_color = _resolve_color(fill, scope)
    stroke_color = _resolve_color(stroke, scope)
    stroke_width = coerce_stroke_width(width)

    if not explicit_width and stroke_width == 0 and stroke_color != TRANSPARENT:
        stroke_width = 1

    return PaintState(fill_color, stroke_color, stroke_width)

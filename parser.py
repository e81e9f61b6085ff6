from __future__ import annotations
import html
import re
from typing import Iterator
from errors import DocumentParseError

markup_pattern = re.compile(
    r'<!\[CDATA\[(?P<cdata>.*?)\]\]>|(?P<comment><!--.*?-->)|(?P<tag><[^>]*>)|(?P<text>[^<]+)',
    flags=re.DOTALL)
first_word_pattern = re.compile(r'^\s*[/!?]*\s*([\w:.\-]+)')


def is_self_terminating(svg_value: str) -> bool:
    return svg_value.rstrip().endswith('/>')


def is_terminator(svg_value: str) -> bool:
    return svg_value.strip().startswith('</')


def is_declaration(svg_value: str) -> bool:
    return svg_value.strip()[:2] in ('<?', '<!')


def get_tag(svg_value: str) -> str:
    content = svg_value.strip().lstrip('<').rstrip('>').rstrip('/')

    match = first_word_pattern.search(content)
    if not match:
        return ""
    # svg:rect and rect are the same element
    return match.group(1).rsplit(':', 1)[-1].lower()


def parse_attributes(element: str) -> dict[str, str]:
    attributes = {}

    content = element.strip()
    if content.startswith('</'):
        return attributes
    content = content.lstrip('<').rstrip('>').rstrip('/')

    parts = content.split(None, 1)
    if len(parts) < 2:
        return attributes

    attr_string = parts[1]

    state = 0
    accumulator = ""
    current_key = ""
    quote = ""

    for char in attr_string:
        if state == 0:
            if char == '=':
                current_key = accumulator.strip()
                accumulator = ""
                state = 1
            elif not char.isspace():
                accumulator += char
        elif state == 1:
            if char in ('"', "'"):
                quote = char
                state = 2
        elif state == 2:
            if char == quote:
                attributes[current_key] = html.unescape(accumulator)
                accumulator = ""
                current_key = ""
                state = 0
            else:
                accumulator += char

    return attributes


class Node:
    def __init__(self, element: str):
        self.element = element
        self.tag = get_tag(element)
        self.attributes = parse_attributes(element)
        self.children: list[Node] = []
        self.parent: Node | None = None
        self._text: list[str] = []

    @property
    def text(self) -> str:
        return "".join(self._text)

    def add_text(self, text: str):
        self._text.append(text)

    def add_child(self, element: str) -> Node:
        return self.add_node_child(Node(element))

    def add_node_child(self, new_node: Node) -> Node:
        new_node.parent = self
        self.children.append(new_node)
        return new_node

    def compare_tag(self, element: str) -> bool:
        return self.tag == get_tag(element)

    def get_attribute(self, attr_name: str, default: str | None = None) -> str | None:
        return self.attributes.get(attr_name, default)

    def iter(self) -> Iterator[Node]:
        yield self
        for child in self.children:
            yield from child.iter()

    def print_tree(self, level=0):
        indent = '    ' * level
        attrs_str = ', '.join([f"{k}={v}" for k, v in list(self.attributes.items())[:3]])
        if len(self.attributes) > 3:
            attrs_str += "..."
        print(f"{indent}- {self.tag} ({attrs_str})")
        for child in self.children:
            child.print_tree(level + 1)


def parse_svg_string(data: str) -> Node:
    """Build the element tree and return the root ``<svg>`` node.

    Anything before the root (prolog, doctype, comments) is skipped.
    """
    root = None
    r = None

    for match in markup_pattern.finditer(data):
        if match.group('comment'):
            continue

        if match.group('tag') is None:
            if r is not None:
                text = match.group('cdata')
                r.add_text(text if text is not None else html.unescape(match.group('text')))
            continue

        svg_element = match.group('tag')
        if is_declaration(svg_element):
            continue

        if root is None:
            if get_tag(svg_element) != 'svg' or is_terminator(svg_element):
                continue
            root = Node(svg_element)
            if is_self_terminating(svg_element):
                break
            r = root
            continue

        if r is None:
            break

        if is_terminator(svg_element):
            if r.compare_tag(svg_element):
                r = r.parent
            continue

        if is_self_terminating(svg_element):
            r.add_child(svg_element)
        else:
            r = r.add_child(svg_element)

    if root is None:
        raise DocumentParseError("No root <svg> element found")

    return root


def parse_svg_file(path: str) -> Node:
    with open(path, 'r', encoding='utf-8') as file:
        data = file.read()

    return parse_svg_string(data)

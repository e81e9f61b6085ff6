from __future__ import annotations
import logging
import re
from typing import NamedTuple

logger = logging.getLogger(__name__)

ALPHA_TRANSPARENT = 127

hex_pattern = re.compile(r'#([0-9a-fA-F]{3,8})')
rgb_pattern = re.compile(r'rgba?\(([^)]+)\)')
leading_integer_pattern = re.compile(r'\s*([-+]?\d+)')


class Color(NamedTuple):
    """An RGB color with a 7-bit alpha: 0 is opaque, 127 fully transparent.

    ``handle`` packs it as 0xAARRGGBB, the integer form that may be passed
    back through ``parse_color`` unchanged.
    """
    r: int
    g: int
    b: int
    a: int = 0

    @classmethod
    def from_handle(cls, handle: int) -> Color:
        handle = int(handle)
        return cls((handle >> 16) & 0xff, (handle >> 8) & 0xff, handle & 0xff, (handle >> 24) & 0x7f)

    @property
    def handle(self) -> int:
        return (self.a << 24) | (self.r << 16) | (self.g << 8) | self.b

    @property
    def is_transparent(self) -> bool:
        return self.a >= ALPHA_TRANSPARENT

    def to_rgba(self) -> tuple[int, int, int, int]:
        opacity = int(round(255 * (ALPHA_TRANSPARENT - min(self.a, ALPHA_TRANSPARENT)) / ALPHA_TRANSPARENT))
        return (self.r, self.g, self.b, opacity)


BLACK = Color(0, 0, 0, 0)
TRANSPARENT = Color(0, 0, 0, ALPHA_TRANSPARENT)

NAMED_COLORS = {
    'aliceblue': 0xf0f8ff,
    'antiquewhite': 0xfaebd7,
    'aqua': 0x00ffff,
    'aquamarine': 0x7fffd4,
    'azure': 0xf0ffff,
    'beige': 0xf5f5dc,
    'bisque': 0xffe4c4,
    'black': 0x000000,
    'blanchedalmond': 0xffebcd,
    'blue': 0x0000ff,
    'blueviolet': 0x8a2be2,
    'brown': 0xa52a2a,
    'burlywood': 0xdeb887,
    'cadetblue': 0x5f9ea0,
    'chartreuse': 0x7fff00,
    'chocolate': 0xd2691e,
    'coral': 0xff7f50,
    'cornflowerblue': 0x6495ed,
    'cornsilk': 0xfff8dc,
    'crimson': 0xdc143c,
    'cyan': 0x00ffff,
    'darkblue': 0x00008b,
    'darkcyan': 0x008b8b,
    'darkgoldenrod': 0xb8860b,
    'darkgray': 0xa9a9a9,
    'darkgreen': 0x006400,
    'darkgrey': 0xa9a9a9,
    'darkkhaki': 0xbdb76b,
    'darkmagenta': 0x8b008b,
    'darkolivegreen': 0x556b2f,
    'darkorange': 0xff8c00,
    'darkorchid': 0x9932cc,
    'darkred': 0x8b0000,
    'darksalmon': 0xe9967a,
    'darkseagreen': 0x8fbc8f,
    'darkslateblue': 0x483d8b,
    'darkslategray': 0x2f4f4f,
    'darkslategrey': 0x2f4f4f,
    'darkturquoise': 0x00ced1,
    'darkviolet': 0x9400d3,
    'deeppink': 0xff1493,
    'deepskyblue': 0x00bfff,
    'dimgray': 0x696969,
    'dimgrey': 0x696969,
    'dodgerblue': 0x1e90ff,
    'firebrick': 0xb22222,
    'floralwhite': 0xfffaf0,
    'forestgreen': 0x228b22,
    'fuchsia': 0xff00ff,
    'gainsboro': 0xdcdcdc,
    'ghostwhite': 0xf8f8ff,
    'gold': 0xffd700,
    'goldenrod': 0xdaa520,
    'gray': 0x808080,
    'green': 0x008000,
    'greenyellow': 0xadff2f,
    'grey': 0x808080,
    'honeydew': 0xf0fff0,
    'hotpink': 0xff69b4,
    'indianred': 0xcd5c5c,
    'indigo': 0x4b0082,
    'ivory': 0xfffff0,
    'khaki': 0xf0e68c,
    'lavender': 0xe6e6fa,
    'lavenderblush': 0xfff0f5,
    'lawngreen': 0x7cfc00,
    'lemonchiffon': 0xfffacd,
    'lightblue': 0xadd8e6,
    'lightcoral': 0xf08080,
    'lightcyan': 0xe0ffff,
    'lightgoldenrodyellow': 0xfafad2,
    'lightgray': 0xd3d3d3,
    'lightgreen': 0x90ee90,
    'lightgrey': 0xd3d3d3,
    'lightpink': 0xffb6c1,
    'lightsalmon': 0xffa07a,
    'lightseagreen': 0x20b2aa,
    'lightskyblue': 0x87cefa,
    'lightslategray': 0x778899,
    'lightslategrey': 0x778899,
    'lightsteelblue': 0xb0c4de,
    'lightyellow': 0xffffe0,
    'lime': 0x00ff00,
    'limegreen': 0x32cd32,
    'linen': 0xfaf0e6,
    'magenta': 0xff00ff,
    'maroon': 0x800000,
    'mediumaquamarine': 0x66cdaa,
    'mediumblue': 0x0000cd,
    'mediumorchid': 0xba55d3,
    'mediumpurple': 0x9370db,
    'mediumseagreen': 0x3cb371,
    'mediumslateblue': 0x7b68ee,
    'mediumspringgreen': 0x00fa9a,
    'mediumturquoise': 0x48d1cc,
    'mediumvioletred': 0xc71585,
    'midnightblue': 0x191970,
    'mintcream': 0xf5fffa,
    'mistyrose': 0xffe4e1,
    'moccasin': 0xffe4b5,
    'navajowhite': 0xffdead,
    'navy': 0x000080,
    'oldlace': 0xfdf5e6,
    'olive': 0x808000,
    'olivedrab': 0x6b8e23,
    'orange': 0xffa500,
    'orangered': 0xff4500,
    'orchid': 0xda70d6,
    'palegoldenrod': 0xeee8aa,
    'palegreen': 0x98fb98,
    'paleturquoise': 0xafeeee,
    'palevioletred': 0xdb7093,
    'papayawhip': 0xffefd5,
    'peachpuff': 0xffdab9,
    'peru': 0xcd853f,
    'pink': 0xffc0cb,
    'plum': 0xdda0dd,
    'powderblue': 0xb0e0e6,
    'purple': 0x800080,
    'red': 0xff0000,
    'rosybrown': 0xbc8f8f,
    'royalblue': 0x4169e1,
    'saddlebrown': 0x8b4513,
    'salmon': 0xfa8072,
    'sandybrown': 0xf4a460,
    'seagreen': 0x2e8b57,
    'seashell': 0xfff5ee,
    'sienna': 0xa0522d,
    'silver': 0xc0c0c0,
    'skyblue': 0x87ceeb,
    'slateblue': 0x6a5acd,
    'slategray': 0x778090,
    'slategrey': 0x778090,
    'snow': 0xfffafa,
    'springgreen': 0x00ff7f,
    'steelblue': 0x4682b4,
    'tan': 0xd2b48c,
    'teal': 0x008080,
    'thistle': 0xd8bfd8,
    'tomato': 0xff6347,
    'turquoise': 0x40e0d0,
    'violet': 0xee82ee,
    'wheat': 0xf5deb3,
    'white': 0xffffff,
    'whitesmoke': 0xf5f5f5,
    'yellow': 0xffff00,
    'yellowgreen': 0x9acd32,
}


def parse_hex_color(digits: str) -> Color:
    count = len(digits)
    if count < 5:
        groups = [int(d * 2, 16) for d in digits]
    else:
        groups = [int(digits[i:i + 2], 16) for i in range(0, count, 2)]

    if count % 4 == 0:
        # the alpha digits encode opacity, inverted and halved onto 0..127
        return Color(groups[0], groups[1], groups[2], int((0xff - groups[3]) / 2))
    return Color(groups[0], groups[1], groups[2])


def parse_rgb_color(rgb_str: str) -> Color:
    match = rgb_pattern.match(rgb_str.strip().lower())
    if not match:
        return BLACK

    values = [v.strip() for v in match.group(1).split(',')]
    if len(values) < 3:
        return BLACK

    try:
        channels = []
        for v in values[:3]:
            if v.endswith('%'):
                channels.append(int(round(float(v[:-1]) * 2.55)))
            else:
                channels.append(int(float(v)))
        r, g, b = (max(0, min(255, c)) for c in channels)

        alpha = 0
        if len(values) > 3:
            opacity = max(0.0, min(1.0, float(values[3])))
            alpha = int(round((1.0 - opacity) * ALPHA_TRANSPARENT))
        return Color(r, g, b, alpha)
    except ValueError:
        return BLACK


def parse_color(value: str | int | Color) -> Color:
    if isinstance(value, Color):
        return value
    if isinstance(value, int):
        return Color.from_handle(value)

    text = str(value).strip()
    lowered = text.lower()

    if lowered in ('none', 'transparent'):
        return TRANSPARENT

    match = hex_pattern.fullmatch(text)
    if match:
        return parse_hex_color(match.group(1))

    if lowered in NAMED_COLORS:
        return Color.from_handle(NAMED_COLORS[lowered])

    if lowered.startswith('rgb'):
        return parse_rgb_color(lowered)

    # anything else is read as an integer color handle
    match = leading_integer_pattern.match(text)
    if match:
        return Color.from_handle(int(match.group(1)))

    logger.debug("Unrecognised color %r, using black", text)
    return BLACK

from __future__ import annotations
import re
from geometry import Point, is_number

digit_minus_pattern = re.compile(r'(\d)-')
letter_pattern = re.compile(r'([a-zA-Z])')
# ".5.5" is two numbers; a run of fractional parts is split at every point
fraction_run_pattern = re.compile(r'(\.\d+)+')
whitespace_pattern = re.compile(r'\s+')


def _split_fraction_run(match: re.Match) -> str:
    return match.group(0).replace('.', ' .').strip()


def reformat_path_string(d: str) -> str:
    if not d:
        return ""

    d = d.replace(',', ' ')
    d = digit_minus_pattern.sub(r'\1 -', d)
    d = letter_pattern.sub(r' \1 ', d)
    d = fraction_run_pattern.sub(_split_fraction_run, d)
    d = whitespace_pattern.sub(' ', d)
    return d.strip()


def tokenize_path_data(d: str) -> list[str]:
    normalized = reformat_path_string(d)
    if not normalized:
        return []
    return normalized.split(' ')


def parse_points(points_str: str) -> list[Point]:
    """Read a polygon/polyline ``points`` attribute.

    Non-numeric tokens end the list, and an unpaired trailing coordinate is
    dropped.
    """
    coords = []
    for token in tokenize_path_data(points_str):
        if not is_number(token):
            break
        coords.append(float(token))

    return [Point(coords[i], coords[i + 1]) for i in range(0, len(coords) - 1, 2)]

"""Tests for document traversal and shape dispatch."""

import logging

import pytest

from colors import BLACK, TRANSPARENT, Color
from config import PathMode, RenderOptions
from errors import MissingViewBoxError
from geometry import Point
from renderer import Renderer, render_svg
from tests.conftest import BOX_SVG, GROUP_SVG, SHAPES_SVG, STYLED_SVG

RED = Color(255, 0, 0)
GREEN = Color(0, 255, 0)
BLUE = Color(0, 0, 255)


def render_calls(svg_text, canvas, path_mode=PathMode.CONTINUOUS):
    Renderer.from_string(svg_text, RenderOptions(path_mode=path_mode)).render(canvas)
    return canvas


def test_fill_only_rect(recording_canvas):
    render_calls(BOX_SVG, recording_canvas)
    assert recording_canvas.names() == ['fill_rect']
    assert recording_canvas.calls[-1] == ('fill_rect', Point(5, 5), Point(15, 13), Color(0x12, 0x34, 0x56))


def test_circle_stroke_is_drawn_as_layered_fills(recording_canvas):
    render_calls('<svg viewBox="0 0 20 20"><circle cx="10" cy="10" r="5" stroke="#000" stroke-width="2"/></svg>',
                 recording_canvas)
    assert recording_canvas.names() == [
        'fill_ellipse', 'fill_ellipse', 'set_alpha_blending', 'fill_ellipse', 'set_alpha_blending']
    ellipses = [call for call in recording_canvas.calls if call[0] == 'fill_ellipse']
    assert [call[2] for call in ellipses] == [(5, 5), (5.5, 5.5), (4.5, 4.5)]
    assert [call[3] for call in ellipses] == [BLACK, BLACK, BLACK]
    assert recording_canvas.alpha_blending is True


def test_style_cascade(recording_canvas):
    render_calls(STYLED_SVG, recording_canvas)
    assert recording_canvas.names() == ['fill_rect', 'stroke_rect', 'fill_rect', 'stroke_rect']
    first_fill, first_stroke, second_fill, second_stroke = [
        call for call in recording_canvas.calls if call[0] != 'set_stroke_width']
    assert first_fill[3] == RED
    assert first_stroke[3] == GREEN
    assert second_fill[3] == RED
    assert second_stroke[3] == BLUE


def test_stroke_width_is_set_before_each_shape(recording_canvas):
    render_calls(STYLED_SVG, recording_canvas)
    widths = [call[1] for call in recording_canvas.calls if call[0] == 'set_stroke_width']
    # <style>, then the two rects
    assert widths == [0, 1, 3]


def test_group_paint_is_inherited_and_restored(recording_canvas):
    render_calls(GROUP_SVG, recording_canvas)
    assert recording_canvas.names() == [
        'fill_ellipse', 'fill_ellipse', 'set_alpha_blending', 'fill_ellipse', 'set_alpha_blending',
        'stroke_line',
        'fill_ellipse',
    ]

    calls = recording_canvas.calls
    grouped_circle = [call for call in calls if call[0] == 'fill_ellipse'][:3]
    assert [call[3] for call in grouped_circle] == [GREEN, RED, GREEN]

    line_index = recording_canvas.calls.index(
        ('stroke_line', Point(0, 0), Point(10, 10), RED))
    assert calls[line_index - 1] == ('set_stroke_width', 3)

    outside_circle = calls[-1]
    assert outside_circle == ('fill_ellipse', Point(40, 40), (4, 4), BLACK)


def test_children_are_drawn_before_their_parent(recording_canvas):
    render_calls('<svg viewBox="0 0 10 10">'
                 '<rect x="0" y="0" width="5" height="5"><circle cx="1" cy="1" r="1"/></rect>'
                 '</svg>', recording_canvas)
    assert recording_canvas.names() == ['fill_ellipse', 'fill_rect']


def test_shapes(recording_canvas):
    render_calls(SHAPES_SVG, recording_canvas)
    assert recording_canvas.names() == [
        'fill_polygon', 'stroke_polygon',
        'fill_polygon', 'stroke_line', 'stroke_line',
        'fill_polygon',
        'fill_ellipse',
        'draw_text',
    ]
    drawn = [call for call in recording_canvas.calls if call[0] != 'set_stroke_width']
    assert drawn[2][2] == TRANSPARENT
    assert drawn[5] == ('fill_polygon', [Point(70, 10), Point(90, 10), Point(80, 30), Point(70, 10)], BLUE)
    assert drawn[6] == ('fill_ellipse', Point(20, 60), (10, 5), BLACK)
    assert drawn[7] == ('draw_text', Point(50, 54), 'Hi', BLACK)


SPLIT_PATH_SVG = ('<svg viewBox="0 0 40 10">'
                  '<path d="M0 0 L10 0 M20 0 L30 0" fill="none" stroke="#000"/>'
                  '</svg>')


def test_continuous_path_keeps_one_vertex_list(recording_canvas):
    render_calls(SPLIT_PATH_SVG, recording_canvas, PathMode.CONTINUOUS)
    assert recording_canvas.names() == ['fill_polygon', 'stroke_line', 'stroke_line', 'stroke_line']


def test_discontinuous_path_splits_at_moveto(recording_canvas):
    render_calls(SPLIT_PATH_SVG, recording_canvas, PathMode.DISCONTINUOUS)
    assert recording_canvas.calls[1:] == [
        ('stroke_line', Point(0, 0), Point(10, 0), BLACK),
        ('stroke_line', Point(20, 0), Point(30, 0), BLACK),
    ]


def test_malformed_path_renders_what_was_parsed(recording_canvas, caplog):
    render_calls('<svg viewBox="0 0 20 20"><path d="M0 0 L10 0 L10 10 L5 Z"/></svg>', recording_canvas)
    assert recording_canvas.names() == ['fill_polygon']
    assert recording_canvas.calls[-1][1] == [Point(0, 0), Point(10, 0), Point(10, 10)]
    assert "Malformed path data" in caplog.text


def test_missing_viewbox_raises():
    with pytest.raises(MissingViewBoxError):
        Renderer.from_string('<svg width="10" height="10"><rect width="1" height="1"/></svg>')


def test_render_to_raster():
    canvas = render_svg(BOX_SVG)
    buffer = canvas.get_rgba_buffer()
    assert buffer.shape == (30, 40, 4)
    assert tuple(buffer[8, 10]) == (0x12, 0x34, 0x56, 255)
    assert buffer[0, 0, 3] == 0


OVERFLOW_SVG = ('<svg viewBox="0 0 10 10">'
                '<rect x="1" y="1" width="4" height="4" stroke="red" stroke-width="1e999"/>'
                '<circle cx="5" cy="5" r="1e999" fill="#00f"/>'
                '</svg>')


def test_overflowing_numbers_fall_back_to_zero(recording_canvas):
    render_calls(OVERFLOW_SVG, recording_canvas)
    assert recording_canvas.names() == ['fill_rect', 'fill_ellipse']
    assert recording_canvas.calls[-1] == ('fill_ellipse', Point(5, 5), (0.0, 0.0), BLUE)
    widths = [call[1] for call in recording_canvas.calls if call[0] == 'set_stroke_width']
    assert widths == [0, 0]


def test_overflowing_numbers_still_render_an_image():
    buffer = render_svg(OVERFLOW_SVG).get_rgba_buffer()
    assert tuple(buffer[2, 2]) == (0, 0, 0, 255)


def test_style_elements_draw_nothing(recording_canvas, caplog):
    caplog.set_level(logging.DEBUG, logger="renderer")
    render_calls(STYLED_SVG, recording_canvas)
    assert "No drawing for <style>" in caplog.text
    assert 'style' not in Renderer.from_string(STYLED_SVG)._handlers

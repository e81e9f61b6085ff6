"""Tests for color literal parsing."""

from colors import BLACK, TRANSPARENT, Color, parse_color


def test_short_hex_is_doubled():
    assert parse_color("#fff") == Color(255, 255, 255, 0)
    assert parse_color("#1a2") == Color(0x11, 0xaa, 0x22, 0)


def test_long_hex():
    assert parse_color("#123456") == Color(0x12, 0x34, 0x56, 0)


def test_alpha_group_is_inverted_and_halved():
    white = parse_color("#ffffff00")
    assert white == Color(255, 255, 255, 127)
    assert white.is_transparent
    assert parse_color("#ffffffff") == Color(255, 255, 255, 0)
    assert parse_color("#f008") == Color(255, 0, 0, (255 - 0x88) // 2)


def test_none_and_transparent():
    assert parse_color("none") == TRANSPARENT
    assert parse_color(" Transparent ") == TRANSPARENT
    assert TRANSPARENT.is_transparent


def test_integer_handles_pass_through():
    assert parse_color(0x7f000000) == TRANSPARENT
    assert parse_color(TRANSPARENT.handle) == TRANSPARENT
    assert parse_color("16711680") == Color(255, 0, 0, 0)
    red = Color(255, 0, 0)
    assert parse_color(red) is red


def test_handle_packing():
    assert Color(1, 2, 3, 4).handle == 0x04010203
    assert Color.from_handle(0x04010203) == Color(1, 2, 3, 4)


def test_named_and_functional_colors():
    assert parse_color("red") == Color(255, 0, 0, 0)
    assert parse_color("CornflowerBlue") == Color(100, 149, 237, 0)
    assert parse_color("rgb(0, 128, 255)") == Color(0, 128, 255, 0)
    assert parse_color("rgb(100%, 0%, 0%)") == Color(255, 0, 0, 0)
    assert parse_color("rgba(0, 0, 0, 0)").is_transparent


def test_unknown_literal_is_black():
    assert parse_color("bogus") == BLACK
    assert parse_color("url(#grad)") == BLACK


def test_to_rgba_scales_alpha():
    assert BLACK.to_rgba() == (0, 0, 0, 255)
    assert TRANSPARENT.to_rgba() == (0, 0, 0, 0)
    assert 120 < Color(0, 0, 0, 64).to_rgba()[3] < 135

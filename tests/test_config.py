"""Tests for render options."""

import pytest

from config import PathMode, RenderOptions


def test_path_mode_parse():
    assert PathMode.parse('Discontinuous') is PathMode.DISCONTINUOUS
    assert PathMode.parse('continuous') is PathMode.CONTINUOUS
    assert PathMode.parse(1) is PathMode.DISCONTINUOUS
    assert PathMode.parse(0) is PathMode.CONTINUOUS
    assert PathMode.parse(PathMode.DISCONTINUOUS) is PathMode.DISCONTINUOUS
    with pytest.raises(ValueError):
        PathMode.parse('sometimes')


def test_default_options():
    options = RenderOptions()
    assert options.path_mode is PathMode.CONTINUOUS
    assert options.antialias is False
    assert options.background == (0, 0, 0, 0)

"""Tests for attribute scoping."""

import pytest

from attributes import AttributeScope, normalize_attributes


def test_overlay_lowercases_and_skips_blank_values():
    scope = AttributeScope().overlay({'viewBox': '0 0 1 1', 'Fill': 'red', 'stroke': '  '})
    assert dict(scope) == {'viewbox': '0 0 1 1', 'fill': 'red'}


def test_overlay_leaves_parent_untouched():
    parent = AttributeScope({'fill': 'red', 'x': '1'})
    child = parent.overlay({'fill': 'blue'})
    assert child['fill'] == 'blue'
    assert child['x'] == '1'
    assert parent['fill'] == 'red'


def test_scope_is_read_only():
    scope = AttributeScope({'fill': 'red'})
    with pytest.raises(TypeError):
        scope['fill'] = 'blue'


def test_get_number():
    scope = AttributeScope({'r': '5', 'width': '1in', 'bad': 'abc'})
    assert scope.get_number('r') == 5.0
    assert scope.get_number('width') == pytest.approx(96.0)
    assert scope.get_number('bad') == 0.0
    assert scope.get_number('missing') == 0.0
    assert scope.get_number('missing', 3.0) == 3.0


def test_normalize_attributes():
    assert normalize_attributes({'ID': 'a', 'class': ''}) == {'id': 'a'}


def test_get_number_ignores_overflowing_values():
    scope = AttributeScope({'r': '1e999'})
    assert scope.get_number('r') == 0.0
    assert scope.get_number('r', 2.0) == 2.0

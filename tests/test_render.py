import math

import pytest

from randomart import nodes
from randomart.nodes import EvalError
from randomart.render import render, to_channel


def test_to_channel_endpoints():
    assert to_channel(-1.0) == 0
    assert to_channel(1.0) == 255
    assert to_channel(0.0) == 127


def test_to_channel_nan_is_zero():
    assert to_channel(math.nan) == 0


def test_to_channel_stays_a_byte():
    for value in (-3.0, -1.5, 2.0, 7.25):
        assert 0 <= to_channel(value) <= 255


def test_render_constant():
    tree = nodes.triple(nodes.number(0), nodes.number(0), nodes.number(0))
    pixels = render(tree, 2, 2)
    assert pixels == bytes((127, 127, 127, 255)) * 4


def test_render_coordinates():
    tree = nodes.triple(nodes.x(), nodes.y(), nodes.number(1))
    pixels = render(tree, 2, 2)
    assert pixels[0:4] == bytes((0, 0, 255, 255))
    assert pixels[4:8] == bytes((255, 0, 255, 255))
    assert pixels[8:12] == bytes((0, 255, 255, 255))
    assert pixels[12:16] == bytes((255, 255, 255, 255))


def test_render_size_and_alpha():
    tree = nodes.triple(nodes.multi(nodes.x(), nodes.y()), nodes.x(), nodes.y())
    pixels = render(tree, 5, 3)
    assert len(pixels) == 5 * 3 * 4
    assert set(pixels[3::4]) == {255}


def test_render_requires_triple():
    with pytest.raises(EvalError):
        render(nodes.number(0), 2, 2)


def test_render_rejects_rule_nodes():
    tree = nodes.triple(nodes.rule(1), nodes.x(), nodes.y())
    with pytest.raises(EvalError):
        render(tree, 2, 2)


def test_render_rejects_bad_size():
    tree = nodes.triple(nodes.x(), nodes.x(), nodes.x())
    with pytest.raises(ValueError):
        render(tree, 0, 4)
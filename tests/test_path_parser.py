"""Tests for the path data interpreter."""

import pytest

from dotsimplifier.errors import MalformedInputError
from dotsimplifier.path_parser import (
    CommandKind,
    contains_close_path,
    cubic_point,
    interpret_path,
    tokenize_path,
)


def test_tokenize_commands_and_numbers():
    commands = tokenize_path("M10,20 l-5-5.5 Z")
    assert [c.kind for c in commands] == [
        CommandKind.MOVE_TO, CommandKind.LINE_TO, CommandKind.CLOSE_PATH,
    ]
    assert commands[0].args == (10.0, 20.0)
    assert commands[1].relative
    assert commands[1].args == (-5.0, -5.5)
    assert not commands[2].args


def test_tokenize_exponents_and_leading_numbers():
    commands = tokenize_path("3 4 M1e1 2E0")
    assert len(commands) == 1
    assert commands[0].args == (10.0, 2.0)


def test_only_ascii_digits_are_numbers():
    commands = tokenize_path("M \u0661\u0660 2 3")
    assert commands[0].args == (2.0, 3.0)


def test_out_of_range_numbers_are_rejected():
    with pytest.raises(MalformedInputError):
        tokenize_path("M 0 0 L 1e400 5")


def test_unknown_letters_are_unsupported_commands():
    commands = tokenize_path("M 0 0 Q 5 5 10 0 A 1 1 0 0 1 2 2")
    assert commands[1].kind is CommandKind.UNSUPPORTED
    assert commands[1].letter == "Q"
    assert commands[2].kind is CommandKind.UNSUPPORTED


def test_absolute_lines_and_close():
    subpaths = interpret_path("M 0 0 L 10 0 10 10 Z M 20 20 l 5 5")
    assert len(subpaths) == 2
    assert subpaths[0].points == [(0, 0), (10, 0), (10, 10), (0, 0)]
    assert subpaths[0].closed
    assert subpaths[1].points == [(20, 20), (25, 25)]
    assert not subpaths[1].closed


def test_horizontal_and_vertical():
    subpaths = interpret_path("M 1 1 h 4 v 3 H 0 V 0")
    assert subpaths[0].points == [(1, 1), (5, 1), (5, 4), (0, 4), (0, 0)]


def test_extra_moveto_pairs_are_linetos():
    subpaths = interpret_path("M 0 0 10 10 20 0")
    assert len(subpaths) == 1
    assert subpaths[0].points == [(0, 0), (10, 10), (20, 0)]


def test_relative_moveto_uses_cursor():
    subpaths = interpret_path("m 5 5 10 0 m 0 10 l 1 1")
    assert subpaths[0].points == [(5, 5), (15, 5)]
    assert subpaths[1].points == [(15, 15), (16, 16)]


def test_cubic_adds_ten_points():
    subpaths = interpret_path("M 0 0 C 0 10 10 10 10 0")
    points = subpaths[0].points
    assert len(points) == 11
    assert points[5] == pytest.approx((5.0, 7.5))
    assert points[-1] == pytest.approx((10.0, 0.0))


def test_relative_cubic_is_relative_to_segment_start():
    subpaths = interpret_path("m 10 10 c 0 10 10 10 10 0 c 0 10 10 10 10 0")
    points = subpaths[0].points
    assert len(points) == 21
    assert points[10] == pytest.approx((20.0, 10.0))
    assert points[-1] == pytest.approx((30.0, 10.0))


def test_cubic_point_endpoints():
    p0, c1, c2, p1 = (0, 0), (1, 2), (3, 2), (4, 0)
    assert cubic_point(p0, c1, c2, p1, 0) == (0, 0)
    assert cubic_point(p0, c1, c2, p1, 1) == (4, 0)


def test_unsupported_commands_are_skipped():
    subpaths = interpret_path("M 0 0 Q 5 5 10 0 L 20 0")
    assert subpaths[0].points == [(0, 0), (20, 0)]


def test_arcs_leave_only_the_close_point():
    subpaths = interpret_path("M 2 12 A 10 10 0 1 0 22 12 A 10 10 0 1 0 2 12 Z")
    assert subpaths[0].points == [(2, 12), (2, 12)]
    assert subpaths[0].closed


def test_close_without_points_emits_nothing():
    assert interpret_path("Z") == []
    assert interpret_path("M 0 0 L 1 1 Z Z")[0].points == [(0, 0), (1, 1), (0, 0)]


def test_incomplete_argument_groups_are_ignored():
    subpaths = interpret_path("M 0 0 L 5 5 7 C 1 1 2 2")
    assert subpaths[0].points == [(0, 0), (5, 5)]


def test_lone_moveto_is_open_subpath():
    subpaths = interpret_path("M 5 5")
    assert subpaths[0].points == [(5, 5)]
    assert not subpaths[0].closed


def test_empty_path():
    assert interpret_path("") == []
    assert interpret_path(None) == []


def test_contains_close_path():
    assert contains_close_path("M 0 0 L 1 1 z")
    assert not contains_close_path("M 0 0 L 1 1")

"""Tests for the finite-difference verification helpers."""

import math

import numpy as np
import pytest

from snapmap.check import (check_boundary_derivatives, check_jacobian, numerical_derivative,
                           numerical_jacobian)
from snapmap.geometry import Arc, LineSegment
from snapmap.transfinite import TransfiniteMapping


@pytest.fixture
def wrong_tangent():
    """Straight side B1 paired with the tangent of an arc."""
    arc = Arc(0.0, 0.0, 3.0, 0.0, math.pi / 2)
    chord = LineSegment((3.0, 0.0), (0.0, 3.0))
    inner = Arc(0.0, 0.0, 1.0, 0.0, math.pi / 2)
    bottom = LineSegment((1.0, 0.0), (3.0, 0.0))
    left = LineSegment((0.0, 1.0), (0.0, 3.0))
    B = [bottom.evaluate, chord.evaluate, left.evaluate, inner.evaluate]
    Bd = [bottom.derivative, arc.derivative, left.derivative, inner.derivative]
    return TransfiniteMapping(2, B, Bd)


class TestStencil:

    @pytest.mark.parametrize("x", [-1.0, 0.0, 0.4])
    def test_exact_for_quartics(self, x):
        def f(t):
            return t ** 4 - 2 * t ** 3 + t

        assert np.isclose(numerical_derivative(f, x), 4 * x ** 3 - 6 * x ** 2 + 1, atol=1e-11)

    def test_vector_valued(self):
        d = numerical_derivative(lambda t: np.array([math.sin(t), math.cos(t)]), 0.3)
        assert np.allclose(d, [math.cos(0.3), -math.sin(0.3)], atol=1e-12)

    def test_jacobian(self):
        def f(u):
            return np.array([u[0] * u[1], u[0] ** 2, math.exp(u[1])])

        u = np.array([0.5, -0.2])
        J = numerical_jacobian(f, u)
        expected = [[u[1], u[0]], [2 * u[0], 0.0], [0.0, math.exp(u[1])]]
        assert J.shape == (3, 2)
        assert np.allclose(J, expected, atol=1e-11)


class TestChecks:

    def test_consistent_boundaries(self, spline_square):
        assert check_boundary_derivatives(spline_square) < 1e-9

    def test_consistent_faces(self, shell_volume):
        assert check_boundary_derivatives(shell_volume, tvals=[-1.0, 0.0, 1.0]) < 1e-9

    def test_detects_wrong_tangent(self, wrong_tangent):
        assert check_boundary_derivatives(wrong_tangent) > 1e-3
        assert check_jacobian(wrong_tangent, [0.0, 0.0]) > 1e-3

    def test_verbose_report(self, quarter_annulus, capsys):
        err = check_jacobian(quarter_annulus, [0.0, 0.5], verbose=True)
        out = capsys.readouterr().out
        assert "Jacobian check" in out
        assert "OK" in out
        assert "FAIL" not in out
        assert err < 1e-9

    def test_verbose_flags_failures(self, wrong_tangent, capsys):
        check_boundary_derivatives(wrong_tangent, verbose=True)
        out = capsys.readouterr().out
        assert "Boundary derivative check" in out
        assert "FAIL" in out

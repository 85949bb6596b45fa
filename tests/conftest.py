"""Pytest configuration and fixtures for the transfinite mapping tests."""

import math

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from snapmap.geometry import Arc, LineSegment, SplineCurve
from snapmap.transfinite import TransfiniteMapping, TransfiniteVolume


def _patch_from_map(ndim, fmap, jmap):
    """Four boundary curves (and tangents) read off an exact map of (r, s)."""
    B = [
        lambda r: fmap(r, -1.0),
        lambda s: fmap(1.0, s),
        lambda r: fmap(r, 1.0),
        lambda s: fmap(-1.0, s),
    ]
    Bd = [
        lambda r: jmap(r, -1.0)[:, 0],
        lambda s: jmap(1.0, s)[:, 1],
        lambda r: jmap(r, 1.0)[:, 0],
        lambda s: jmap(-1.0, s)[:, 1],
    ]
    return TransfiniteMapping(ndim, B, Bd)


def _volume_from_map(fmap, jmap):
    """Six faces (and their Jacobians) read off an exact map of (r, s, t)."""
    axes = ((1, 2), (0, 2), (0, 1))
    B, Bd = [], []
    for k in range(3):
        for side in (-1.0, 1.0):
            def lift(v, k=k, side=side):
                u = np.empty(3)
                u[k] = side
                u[list(axes[k])] = v
                return u
            B.append(lambda v, lift=lift: fmap(lift(v)))
            Bd.append(lambda v, lift=lift, k=k: jmap(lift(v))[:, list(axes[k])])
    return TransfiniteVolume(B, Bd)


@pytest.fixture
def patch_from_map():
    return _patch_from_map


@pytest.fixture
def volume_from_map():
    return _volume_from_map


@pytest.fixture
def quarter_annulus():
    """Radial lines and quarter circles of radii 1 and 3."""
    return TransfiniteMapping.from_curves(2, [
        LineSegment((1.0, 0.0), (3.0, 0.0)),
        Arc(0.0, 0.0, 3.0, 0.0, math.pi / 2),
        LineSegment((0.0, 1.0), (0.0, 3.0)),
        Arc(0.0, 0.0, 1.0, 0.0, math.pi / 2),
    ])


@pytest.fixture
def quarter_annulus_closures():
    """Same region as quarter_annulus, built from plain closures."""
    pi = math.pi
    e0 = np.array([1.0, 0.0])
    e1 = np.array([0.0, 1.0])

    def theta(s):
        return pi * (s + 1) / 4.0

    B = [
        lambda r: (2 + r) * e0,
        lambda s: 3 * math.cos(theta(s)) * e0 + 3 * math.sin(theta(s)) * e1,
        lambda r: (2 + r) * e1,
        lambda s: math.cos(theta(s)) * e0 + math.sin(theta(s)) * e1,
    ]
    Bd = [
        lambda r: e0,
        lambda s: (-3 * math.sin(theta(s)) * e0 + 3 * math.cos(theta(s)) * e1) * pi / 4,
        lambda r: e1,
        lambda s: (-math.sin(theta(s)) * e0 + math.cos(theta(s)) * e1) * pi / 4,
    ]
    return TransfiniteMapping(2, B, Bd)


@pytest.fixture
def mixed_annulus():
    """Quarter annulus with the outer arc replaced by a straight chord."""
    return TransfiniteMapping.from_curves(2, [
        LineSegment((1.0, 0.0), (3.0, 0.0)),
        LineSegment((3.0, 0.0), (0.0, 3.0)),
        LineSegment((0.0, 1.0), (0.0, 3.0)),
        Arc(0.0, 0.0, 1.0, 0.0, math.pi / 2),
    ])


@pytest.fixture
def spline_bottom():
    """Cubic B-spline from (0, 0) to (3, 0) with one interior knot."""
    ctrl = [(0.0, 0.0), (0.8, -0.4), (1.6, 0.5), (2.3, -0.3), (3.0, 0.0)]
    knots = [0.0, 0.0, 0.0, 0.0, 0.3, 1.0, 1.0, 1.0, 1.0]
    return SplineCurve(ctrl, degree=3, knots=knots)


@pytest.fixture
def spline_square(spline_bottom):
    """Square [0,3]^2 whose bottom side is a B-spline."""
    return TransfiniteMapping.from_curves(2, [
        spline_bottom,
        LineSegment((3.0, 0.0), (3.0, 3.0)),
        LineSegment((0.0, 3.0), (3.0, 3.0)),
        LineSegment((0.0, 0.0), (0.0, 3.0)),
    ])


def shell_map(u):
    """Thick quarter cylinder: radius 2 + r, angle pi (s + 1) / 4, height t."""
    r, s, t = u
    th = math.pi * (s + 1) / 4.0
    return np.array([(2 + r) * math.cos(th), (2 + r) * math.sin(th), t])


def shell_jacobian(u):
    r, s, t = u
    th = math.pi * (s + 1) / 4.0
    dth = math.pi / 4.0
    return np.array([
        [math.cos(th), -(2 + r) * math.sin(th) * dth, 0.0],
        [math.sin(th), (2 + r) * math.cos(th) * dth, 0.0],
        [0.0, 0.0, 1.0],
    ])


# Polynomial map, quadratic in every parameter
BUBBLE = np.array([0.1, 0.05, -0.1])


def twisted_map(u):
    r, s, t = u
    q = (r * s * t) ** 2
    return np.array([r, s + 0.1 * r * t, t]) + BUBBLE * q


def twisted_jacobian(u):
    r, s, t = u
    J = np.array([
        [1.0, 0.0, 0.0],
        [0.1 * t, 1.0, 0.1 * r],
        [0.0, 0.0, 1.0],
    ])
    grad_q = np.array([2 * r * s * s * t * t, 2 * r * r * s * t * t, 2 * r * r * s * s * t])
    return J + np.outer(BUBBLE, grad_q)


@pytest.fixture
def shell_volume():
    return _volume_from_map(shell_map, shell_jacobian)


@pytest.fixture
def twisted_volume():
    return _volume_from_map(twisted_map, twisted_jacobian)


@pytest.fixture
def shell_exact():
    return shell_map, shell_jacobian


@pytest.fixture
def twisted_exact():
    return twisted_map, twisted_jacobian

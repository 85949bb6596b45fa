''' geometry.py
    -----------
    Boundary generators (Lines, Arcs, Splines, ...) for transfinite mappings.
    Every curve is parametrised on t in [-1, 1] and provides its exact
    derivative, so the mapping never has to differentiate numerically.
'''
import math
from abc import ABC, abstractmethod

import numpy as np
from scipy.interpolate import BSpline


class ParametricCurve(ABC):
    ''' Abstract base for all 1D Curves. '''

    @abstractmethod
    def evaluate(self, t):
        ''' Returns the point at parameter t (-1.0 <= t <= 1.0). '''
        pass

    @abstractmethod
    def derivative(self, t):
        ''' Returns dX/dt at parameter t. '''
        pass

    def __call__(self, t):
        return self.evaluate(t)


class ParametricSurface(ABC):
    ''' Abstract base for 2D patches in 3D space (faces of a volume). '''

    @abstractmethod
    def evaluate(self, v):
        ''' Returns the (3,) point at v = (a, b), both in [-1, 1]. '''
        pass

    @abstractmethod
    def derivative(self, v):
        ''' Returns the (3, 2) Jacobian with respect to (a, b). '''
        pass

    def __call__(self, v):
        return self.evaluate(v)


class LineSegment(ParametricCurve):
    """
    A straight line connecting two points (p1, p2), in 2D or 3D.
    t = -1 gives p1, t = +1 gives p2.
    """
    def __init__(self, p1, p2):
        self.p1 = np.array(p1, dtype=np.float64)
        self.p2 = np.array(p2, dtype=np.float64)
        if self.p1.shape != self.p2.shape:
            raise ValueError("LineSegment end points must have the same dimension.")

        self.vec = self.p2 - self.p1
        if np.dot(self.vec, self.vec) == 0:
            raise ValueError("LineSegment cannot be zero length.")

    def evaluate(self, t):
        return self.p1 + 0.5 * (1.0 + t) * self.vec

    def derivative(self, t):
        return 0.5 * self.vec

    def __repr__(self):
        return f"LineSegment(p1={self.p1}, p2={self.p2})"


class Arc(ParametricCurve):
    """
    Circular arc in the plane. Angles are in radians;
    t = -1 maps to start_angle and t = +1 to end_angle.
    """
    def __init__(self, cx, cy, r, start_angle, end_angle):
        if r <= 0:
            raise ValueError("Arc radius must be positive.")
        self.cx = cx
        self.cy = cy
        self.r = float(r)
        self.start = start_angle
        self.end = end_angle
        self.sweep = self.end - self.start

    def _angle(self, t):
        return self.start + 0.5 * self.sweep * (1.0 + t)

    def evaluate(self, t):
        theta = self._angle(t)
        return np.array([self.cx + self.r * math.cos(theta),
                         self.cy + self.r * math.sin(theta)])

    def derivative(self, t):
        # d(theta)/dt = sweep / 2
        theta = self._angle(t)
        scale = 0.5 * self.sweep * self.r
        return np.array([-scale * math.sin(theta), scale * math.cos(theta)])

    def __repr__(self):
        return f"Arc(center=({self.cx}, {self.cy}), r={self.r}, start={self.start}, end={self.end})"


class SplineCurve(ParametricCurve):
    """
    B-spline curve through scipy.interpolate.BSpline.

    control_points: (n, ndim) array.
    knots: optional full knot vector of length n + degree + 1.
           Defaults to a clamped uniform vector on [0, 1], so the curve
           starts at the first control point and ends at the last one.
    """
    def __init__(self, control_points, degree=3, knots=None):
        ctrl = np.array(control_points, dtype=np.float64)
        n = len(ctrl)
        if ctrl.ndim != 2 or n <= degree:
            raise ValueError(f"SplineCurve of degree {degree} needs at least {degree + 1} control points.")

        if knots is None:
            inner = np.linspace(0.0, 1.0, n - degree + 1)
            knots = np.concatenate([np.zeros(degree), inner, np.ones(degree)])
        knots = np.asarray(knots, dtype=np.float64)
        if len(knots) != n + degree + 1:
            raise ValueError(f"Expected {n + degree + 1} knots, got {len(knots)}.")

        self.degree = degree
        self.spline = BSpline(knots, ctrl, degree)
        self.dspline = self.spline.derivative()

        # Valid parameter span of the spline
        self.a = knots[degree]
        self.b = knots[n]

    def _knot(self, t):
        return self.a + 0.5 * (1.0 + t) * (self.b - self.a)

    def evaluate(self, t):
        return self.spline(self._knot(t))

    def derivative(self, t):
        return self.dspline(self._knot(t)) * (0.5 * (self.b - self.a))

    def __repr__(self):
        return f"SplineCurve(degree={self.degree}, n={len(self.spline.c)})"


class FunctionCurve(ParametricCurve):
    """ Wraps a pair of user closures: position(t) and derivative(t). """
    def __init__(self, position, derivative):
        if not callable(position) or not callable(derivative):
            raise ValueError("FunctionCurve needs callable position and derivative.")
        self._position = position
        self._derivative = derivative

    def evaluate(self, t):
        return np.asarray(self._position(t), dtype=np.float64)

    def derivative(self, t):
        return np.asarray(self._derivative(t), dtype=np.float64)


class BilinearSurface(ParametricSurface):
    """
    Flat (or twisted) patch through four points, counter-clockwise:
        p00 at (-1,-1), p10 at (+1,-1), p11 at (+1,+1), p01 at (-1,+1).
    """
    def __init__(self, p00, p10, p11, p01):
        self.P = np.array([p00, p10, p11, p01], dtype=np.float64)
        if self.P.shape != (4, 3):
            raise ValueError("BilinearSurface needs four 3D points.")

    def evaluate(self, v):
        a, b = v
        p00, p10, p11, p01 = self.P
        return 0.25 * ((1 - a) * (1 - b) * p00 + (1 + a) * (1 - b) * p10
                       + (1 + a) * (1 + b) * p11 + (1 - a) * (1 + b) * p01)

    def derivative(self, v):
        a, b = v
        p00, p10, p11, p01 = self.P
        J = np.empty((3, 2))
        J[:, 0] = 0.25 * ((1 - b) * (p10 - p00) + (1 + b) * (p11 - p01))
        J[:, 1] = 0.25 * ((1 - a) * (p01 - p00) + (1 + a) * (p11 - p10))
        return J


class FunctionSurface(ParametricSurface):
    """ Wraps a pair of user closures: position(v) and derivative(v). """
    def __init__(self, position, derivative):
        if not callable(position) or not callable(derivative):
            raise ValueError("FunctionSurface needs callable position and derivative.")
        self._position = position
        self._derivative = derivative

    def evaluate(self, v):
        return np.asarray(self._position(v), dtype=np.float64)

    def derivative(self, v):
        return np.asarray(self._derivative(v), dtype=np.float64)

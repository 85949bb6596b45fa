"""
snapmap/transfinite.py
----------------------
Transfinite interpolation (Coons patches).
Maps the reference square [-1,1]^2 (or cube [-1,1]^3) onto a curved region
given only its boundary curves (or faces) and their analytic derivatives.

Boundary numbering of the 2D patch:

                 s = +1
            C3 +---B2--->+ C2
               ^         ^
        r = -1 B3        B1 r = +1
               |         |
            C0 +---B0--->+ C1
                 s = -1

    B0 and B2 are parametrised by r, B1 and B3 by s.
"""
import itertools
import numbers

import numpy as np

from .vectors import DWEIGHTS, weights, as_param, as_point, as_jacobian, frozen


def _check_functions(B, Bd, count, kind):
    """ Validates the boundary function lists. Returns them as tuples. """
    if B is None or Bd is None:
        raise ValueError(f"Both {kind} functions and their derivatives are required.")
    B, Bd = tuple(B), tuple(Bd)
    if len(B) != count or len(Bd) != count:
        raise ValueError(f"Need exactly {count} {kind} functions and {count} derivatives, "
                         f"got {len(B)} and {len(Bd)}.")
    for k, (f, df) in enumerate(zip(B, Bd)):
        if f is None or df is None:
            raise ValueError(f"{kind.capitalize()} {k} is missing its function or derivative.")
        if not callable(f) or not callable(df):
            raise TypeError(f"{kind.capitalize()} {k}: function and derivative must be callable.")
    return B, Bd


class TransfiniteMapping:
    """
    Coons patch bounded by four curves in 2D or 3D space.

    Usage:
        trf = TransfiniteMapping(2, [B0, B1, B2, B3], [dB0, dB1, dB2, dB3])
        x = trf.point([r, s])
        x, dxdu = trf.derivs([r, s])

    Each B[k] maps a scalar in [-1, 1] to a point of length ndim and each
    Bd[k] returns the matching tangent. Adjacent boundaries are assumed to
    meet at the corners; this is not checked. The corners are taken from
    B0 and B2 only.
    """
    nparam = 2

    def __init__(self, ndim, B, Bd):
        if not isinstance(ndim, numbers.Integral) or ndim not in (2, 3):
            raise ValueError(f"Unsupported dimension {ndim}; expected 2 or 3.")
        self.ndim = ndim
        self.B, self.Bd = _check_functions(B, Bd, 4, "boundary")

        # Corners, counter-clockwise from (r, s) = (-1, -1)
        self.C = frozen([
            as_point(self.B[0](-1.0), ndim, "B0"),
            as_point(self.B[0](+1.0), ndim, "B0"),
            as_point(self.B[2](+1.0), ndim, "B2"),
            as_point(self.B[2](-1.0), ndim, "B2"),
        ])

    @classmethod
    def from_curves(cls, ndim, curves):
        """ Builds the mapping from four objects with evaluate() and derivative(). """
        curves = list(curves)
        B = [getattr(c, "evaluate", None) for c in curves]
        Bd = [getattr(c, "derivative", None) for c in curves]
        return cls(ndim, B, Bd)

    @property
    def corners(self):
        """ (4, ndim) copy of the corner points C0..C3. """
        return np.array(self.C)

    def _boundaries(self, fcns, r, s, label="B"):
        return (as_point(fcns[0](r), self.ndim, f"{label}0"),
                as_point(fcns[1](s), self.ndim, f"{label}1"),
                as_point(fcns[2](r), self.ndim, f"{label}2"),
                as_point(fcns[3](s), self.ndim, f"{label}3"))

    def point(self, u):
        """ Returns x(r, s), an array of length ndim. """
        r, s = as_param(u, 2)
        b0, b1, b2, b3 = self._boundaries(self.B, r, s)
        return self._blend(r, s, b0, b1, b2, b3)

    def derivs(self, u):
        """
        Returns (x, dxdu) at u = (r, s), with dxdu[i, j] = d x_i / d u_j.
        The product rule is applied term by term to the blending formula,
        using the boundary derivatives supplied at construction.
        """
        r, s = as_param(u, 2)
        m, p = 1.0 - r, 1.0 + r
        n, q = 1.0 - s, 1.0 + s
        b0, b1, b2, b3 = self._boundaries(self.B, r, s)
        db0, db1, db2, db3 = self._boundaries(self.Bd, r, s, "dB")
        C0, C1, C2, C3 = self.C

        dxdu = np.empty((self.ndim, 2))
        dxdu[:, 0] = (0.5 * (b1 - b3)
                      + 0.5 * (n * db0 + q * db2)
                      - 0.25 * (-n * C0 + n * C1 + q * C2 - q * C3))
        dxdu[:, 1] = (0.5 * (m * db3 + p * db1)
                      + 0.5 * (b2 - b0)
                      - 0.25 * (-m * C0 - p * C1 + p * C2 + m * C3))
        return self._blend(r, s, b0, b1, b2, b3), dxdu

    def _blend(self, r, s, b0, b1, b2, b3):
        m, p = 1.0 - r, 1.0 + r
        n, q = 1.0 - s, 1.0 + s
        C0, C1, C2, C3 = self.C
        return (0.5 * (m * b3 + p * b1 + n * b0 + q * b2)
                - 0.25 * (m * n * C0 + p * n * C1 + p * q * C2 + m * q * C3))

    # A 3D patch can be used as a face of a TransfiniteVolume
    def evaluate(self, u):
        return self.point(u)

    def derivative(self, u):
        return self.derivs(u)[1]

    def __repr__(self):
        return f"TransfiniteMapping(ndim={self.ndim}, corners={self.C.tolist()})"


# Parametric axes spanned by the faces normal to r, s and t
_FACE_AXES = ((1, 2), (0, 2), (0, 1))


class TransfiniteVolume:
    """
    Trilinear transfinite map of the cube [-1,1]^3 bounded by six faces.

    Faces:  0: r=-1   1: r=+1   2: s=-1   3: s=+1   4: t=-1   5: t=+1
    Each face is parametrised by the remaining two axes in increasing order
    (face 2 takes (r, t), for example). B[k] returns a point of length 3,
    Bd[k] the (3, 2) Jacobian with respect to the two face parameters.

    The map is the Boolean sum of the three linear projectors,
        Pr + Ps + Pt - PrPs - PsPt - PrPt + PrPsPt,
    i.e. face terms minus edge terms plus corner terms. Edges along axis m
    are read from the faces normal to axis (m+1) % 3; corners from the
    r faces. Faces must agree along shared edges.
    """
    ndim = 3
    nparam = 3

    def __init__(self, B, Bd):
        self.B, self.Bd = _check_functions(B, Bd, 6, "face")

        C = np.empty((2, 2, 2, 3))
        for i, j, l in itertools.product((0, 1), repeat=3):
            C[i, j, l] = as_point(self.B[i]((2.0 * j - 1.0, 2.0 * l - 1.0)), 3, f"face {i}")
        self.C = frozen(C)

    @classmethod
    def from_surfaces(cls, faces):
        """ Builds the volume from six objects with evaluate() and derivative(). """
        faces = list(faces)
        B = [getattr(f, "evaluate", None) for f in faces]
        Bd = [getattr(f, "derivative", None) for f in faces]
        return cls(B, Bd)

    @property
    def corners(self):
        """ (2, 2, 2, 3) copy of the corners; corners[i, j, l] sits at (r, s, t) = (2i-1, 2j-1, 2l-1). """
        return np.array(self.C)

    def point(self, u):
        """ Returns x(r, s, t). """
        return self._evaluate(as_param(u, 3), False)[0]

    def derivs(self, u):
        """ Returns (x, dxdu) with dxdu the (3, 3) Jacobian. """
        return self._evaluate(as_param(u, 3), True)

    def _evaluate(self, u, with_derivs):
        w = [weights(x) for x in u]
        x = np.zeros(3)
        dxdu = np.zeros((3, 3)) if with_derivs else None

        # Face terms
        for k in range(3):
            axes = _FACE_AXES[k]
            v = u[list(axes)]
            for i in (0, 1):
                face = 2 * k + i
                F = as_point(self.B[face](v), 3, f"face {face}")
                x += w[k][i] * F
                if with_derivs:
                    JF = as_jacobian(self.Bd[face](v), 3, 2, f"face {face} derivative")
                    dxdu[:, k] += DWEIGHTS[i] * F
                    dxdu[:, axes[0]] += w[k][i] * JF[:, 0]
                    dxdu[:, axes[1]] += w[k][i] * JF[:, 1]

        # Edge terms: edge along m, fixed on axes f and g
        for m in range(3):
            f, g = (m + 1) % 3, (m + 2) % 3
            pm = _FACE_AXES[f].index(m)
            for i, j in itertools.product((0, 1), repeat=2):
                face = 2 * f + i
                v = np.empty(2)
                v[pm] = u[m]
                v[1 - pm] = 2.0 * j - 1.0
                E = as_point(self.B[face](v), 3, f"face {face}")
                x -= w[f][i] * w[g][j] * E
                if with_derivs:
                    dE = as_jacobian(self.Bd[face](v), 3, 2, f"face {face} derivative")[:, pm]
                    dxdu[:, f] -= DWEIGHTS[i] * w[g][j] * E
                    dxdu[:, g] -= w[f][i] * DWEIGHTS[j] * E
                    dxdu[:, m] -= w[f][i] * w[g][j] * dE

        # Corner terms
        for i, j, l in itertools.product((0, 1), repeat=3):
            c = self.C[i, j, l]
            x += w[0][i] * w[1][j] * w[2][l] * c
            if with_derivs:
                dxdu[:, 0] += DWEIGHTS[i] * w[1][j] * w[2][l] * c
                dxdu[:, 1] += w[0][i] * DWEIGHTS[j] * w[2][l] * c
                dxdu[:, 2] += w[0][i] * w[1][j] * DWEIGHTS[l] * c

        return x, dxdu

    def __repr__(self):
        return "TransfiniteVolume(ndim=3)"


def new_transfinite(ndim, B, Bd):
    """
    Factory: four boundary curves give a TransfiniteMapping,
    six faces give a TransfiniteVolume (ndim must then be 3).
    """
    if B is None:
        raise ValueError("Boundary functions are required.")
    B = tuple(B)
    count = len(B)
    if count == 4:
        return TransfiniteMapping(ndim, B, Bd)
    if count == 6:
        if ndim != 3:
            raise ValueError(f"A six-face volume needs ndim=3, got {ndim}.")
        return TransfiniteVolume(B, Bd)
    raise ValueError(f"Expected 4 boundary curves or 6 faces, got {count}.")

"""
snapmap/check.py
----------------
Finite-difference checks for analytic derivatives.

The mappings never differentiate numerically; these helpers exist to verify
that a Jacobian (or a user supplied boundary derivative) agrees with the
positions it belongs to. Differences use the five-point centred stencil
    f'(x) ~ [f(x-2h) - 8 f(x-h) + 8 f(x+h) - f(x+2h)] / (12 h)
whose truncation error is O(h^4).
"""
import itertools

import numpy as np

from .display import Display

DEFAULT_STEP = 1e-3
DEFAULT_TOL = 1e-9


def numerical_derivative(f, x, h=DEFAULT_STEP):
    """ df/dx at scalar x. f may return a scalar or an array. """
    fm2 = np.asarray(f(x - 2.0 * h), dtype=np.float64)
    fm1 = np.asarray(f(x - h), dtype=np.float64)
    fp1 = np.asarray(f(x + h), dtype=np.float64)
    fp2 = np.asarray(f(x + 2.0 * h), dtype=np.float64)
    return (fm2 - 8.0 * fm1 + 8.0 * fp1 - fp2) / (12.0 * h)


def numerical_jacobian(f, u, h=DEFAULT_STEP):
    """ J[i, j] = d f_i / d u_j for a vector function of a vector. """
    u = np.asarray(u, dtype=np.float64)
    cols = []
    for j in range(len(u)):
        def fj(uj, j=j):
            v = u.copy()
            v[j] = uj
            return f(v)
        cols.append(np.atleast_1d(numerical_derivative(fj, u[j], h)))
    return np.column_stack(cols)


def check_jacobian(mapping, u, tol=DEFAULT_TOL, h=DEFAULT_STEP, verbose=False):
    """
    Compares mapping.derivs(u) with finite differences of mapping.point.
    Returns the largest absolute error over all entries.
    """
    u = np.asarray(u, dtype=np.float64)
    _, dxdu = mapping.derivs(u)
    dnum = numerical_jacobian(mapping.point, u, h)
    err = np.abs(dxdu - dnum)

    if verbose:
        display = Display("Jacobian check", f"u = {u.tolist()} | h = {h:g} | tol = {tol:g}")
        display.header()
        display.setup_columns(["i", "j", "analytic", "numeric", "error", "status"],
                              [3, 3, 14, 14, 10, 6])
        for i, j in np.ndindex(dxdu.shape):
            display.row(i, j, dxdu[i, j], dnum[i, j], err[i, j], bool(err[i, j] <= tol))

    return float(err.max())


def check_boundary_derivatives(mapping, tvals=None, tol=DEFAULT_TOL, h=DEFAULT_STEP, verbose=False):
    """
    Compares every supplied boundary derivative Bd[k] with finite
    differences of B[k]. Curves are sampled at tvals, faces on the
    tvals x tvals grid. Returns the largest absolute error.
    """
    if tvals is None:
        tvals = np.linspace(-1.0, 1.0, 5)

    display = None
    if verbose:
        display = Display("Boundary derivative check", f"{type(mapping).__name__} | h = {h:g} | tol = {tol:g}")
        display.header()
        display.setup_columns(["boundary", "parameter", "error", "status"], [8, 20, 10, 6])

    worst = 0.0
    for k, (f, df) in enumerate(zip(mapping.B, mapping.Bd)):
        if mapping.nparam == 2:
            samples = [(t, numerical_derivative(f, t, h), df(t)) for t in tvals]
        else:
            samples = []
            for a, b in itertools.product(tvals, repeat=2):
                v = np.array([a, b])
                samples.append(((a, b), numerical_jacobian(f, v, h), df(v)))

        for param, num, ana in samples:
            e = float(np.abs(np.asarray(ana, dtype=np.float64) - num).max())
            worst = max(worst, e)
            if display:
                display.row(k, str(np.round(param, 4).tolist()), e, e <= tol)

    return worst

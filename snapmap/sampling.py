"""
snapmap/sampling.py
-------------------
Evaluates a mapping over a structured grid of reference coordinates.
This is the hand-off point to meshers and renderers: they only ever see
the arrays produced here.
"""
import numpy as np

DEFAULT_NPTS = 21


def _grid_axes(mapping, npts):
    if npts is None:
        npts = (DEFAULT_NPTS,) * mapping.nparam
    npts = tuple(int(n) for n in npts)
    if len(npts) != mapping.nparam:
        raise ValueError(f"Need {mapping.nparam} grid sizes, got {len(npts)}.")
    if min(npts) < 2:
        raise ValueError("Each grid direction needs at least 2 points.")
    return npts, [np.linspace(-1.0, 1.0, n) for n in npts]


def sample_points(mapping, npts=None):
    """
    Returns X with shape (*npts, ndim); X[i, j] = x(r_i, s_j).
    """
    npts, axes = _grid_axes(mapping, npts)
    X = np.empty(npts + (mapping.ndim,))
    for idx in np.ndindex(*npts):
        u = [axes[k][i] for k, i in enumerate(idx)]
        X[idx] = mapping.point(u)
    return X


def sample_derivs(mapping, npts=None):
    """
    Returns (X, J) with shapes (*npts, ndim) and (*npts, ndim, nparam).
    """
    npts, axes = _grid_axes(mapping, npts)
    X = np.empty(npts + (mapping.ndim,))
    J = np.empty(npts + (mapping.ndim, mapping.nparam))
    for idx in np.ndindex(*npts):
        u = [axes[k][i] for k, i in enumerate(idx)]
        X[idx], J[idx] = mapping.derivs(u)
    return X, J


def jacobian_measure(dxdu):
    """
    Local volume (or area) scale of a Jacobian.
    Square Jacobians give the signed determinant; a (3, 2) surface Jacobian
    gives the area element sqrt(det(J^T J)).
    Works on a single matrix or on a stack with shape (..., ndim, nparam).
    """
    dxdu = np.asarray(dxdu, dtype=np.float64)
    if dxdu.shape[-1] == dxdu.shape[-2]:
        return np.linalg.det(dxdu)
    G = np.einsum("...ki,...kj->...ij", dxdu, dxdu)
    return np.sqrt(np.linalg.det(G))

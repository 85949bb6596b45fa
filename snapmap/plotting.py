"""
snapmap/plotting.py
-------------------
Matplotlib rendering of planar mappings: the mapped reference grid and
the Jacobian columns (dx/dr, dx/ds) drawn as arrows.
"""
import numpy as np
import matplotlib.pyplot as plt

from .sampling import sample_points


def _check_planar(mapping):
    if mapping.ndim != 2 or mapping.nparam != 2:
        raise ValueError("Only planar (ndim=2) patches can be drawn.")


def draw_mapping(mapping, npts=(21, 21), ax=None, grid_kw=None, boundary_kw=None):
    """
    Draws the lines r = const and s = const of the mapped grid and
    highlights the four boundaries. Returns the axes.
    """
    _check_planar(mapping)
    if ax is None:
        _, ax = plt.subplots(figsize=(6, 6))

    grid_style = {"color": "gray", "lw": 0.6}
    grid_style.update(grid_kw or {})
    boundary_style = {"color": "black", "lw": 2}
    boundary_style.update(boundary_kw or {})

    X = sample_points(mapping, npts)
    nr, ns = X.shape[:2]

    # Interior lines
    for j in range(1, ns - 1):
        ax.plot(X[:, j, 0], X[:, j, 1], **grid_style)
    for i in range(1, nr - 1):
        ax.plot(X[i, :, 0], X[i, :, 1], **grid_style)

    # Boundaries B0, B1, B2, B3
    for edge in (X[:, 0], X[-1, :], X[:, -1], X[0, :]):
        ax.plot(edge[:, 0], edge[:, 1], **boundary_style)

    ax.set_aspect("equal")
    return ax


def draw_jacobian_arrows(mapping, rvals=None, svals=None, ax=None, scale=0.3):
    """
    Draws dx/dr (red) and dx/ds (blue) at every (r, s) in rvals x svals.
    Arrows are drawn in data units, multiplied by scale.
    """
    _check_planar(mapping)
    if ax is None:
        _, ax = plt.subplots(figsize=(6, 6))
    if rvals is None:
        rvals = np.linspace(-1.0, 1.0, 3)
    if svals is None:
        svals = np.linspace(-1.0, 1.0, 3)

    pts, dr, ds = [], [], []
    for s in svals:
        for r in rvals:
            x, dxdu = mapping.derivs([r, s])
            pts.append(x)
            dr.append(dxdu[:, 0] * scale)
            ds.append(dxdu[:, 1] * scale)
    pts, dr, ds = np.array(pts), np.array(dr), np.array(ds)

    quiver_kw = {"angles": "xy", "scale_units": "xy", "scale": 1.0, "zorder": 10}
    ax.quiver(pts[:, 0], pts[:, 1], dr[:, 0], dr[:, 1], color="red", **quiver_kw)
    ax.quiver(pts[:, 0], pts[:, 1], ds[:, 0], ds[:, 1], color="blue", **quiver_kw)
    return ax

"""
snapmap/vectors.py
------------------
Small fixed-size vector helpers shared by the mappings.
Everything here works on plain numpy arrays of length 2 or 3.
"""
import numpy as np


# Linear blending weights on [-1, 1]:
#   w_minus(x) = (1 - x) / 2   -> 1 at x = -1, 0 at x = +1
#   w_plus(x)  = (1 + x) / 2   -> 0 at x = -1, 1 at x = +1
# Their derivatives are the constants -1/2 and +1/2.
DWEIGHTS = (-0.5, 0.5)


def weights(x):
    """ Returns the pair (w_minus, w_plus) of linear blending weights at x. """
    return 0.5 * (1.0 - x), 0.5 * (1.0 + x)


def as_param(u, n):
    """
    Converts a parametric coordinate to a float array of length n.
    Raises ValueError if the size does not match.
    """
    u = np.asarray(u, dtype=np.float64)
    if u.shape != (n,):
        raise ValueError(f"Expected {n} parametric coordinates, got shape {u.shape}.")
    return u


def as_point(x, ndim, who="boundary"):
    """ Coerces a boundary result to a (ndim,) float array. """
    x = np.asarray(x, dtype=np.float64)
    if x.shape != (ndim,):
        raise ValueError(f"{who} returned shape {x.shape}, expected ({ndim},).")
    return x


def as_jacobian(J, ndim, npar, who="boundary derivative"):
    """ Coerces a derivative result to a (ndim, npar) float array. """
    J = np.asarray(J, dtype=np.float64)
    if J.shape != (ndim, npar):
        raise ValueError(f"{who} returned shape {J.shape}, expected ({ndim}, {npar}).")
    return J


def frozen(a):
    """ Returns a read-only float copy of a. """
    a = np.array(a, dtype=np.float64)
    a.flags.writeable = False
    return a

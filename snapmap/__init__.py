# snapmap/__init__.py

__version__ = "0.1.0"

# Mappings
from .transfinite import TransfiniteMapping, TransfiniteVolume, new_transfinite

# Boundary generators
from .geometry import (ParametricCurve, ParametricSurface, LineSegment, Arc, SplineCurve,
                       FunctionCurve, BilinearSurface, FunctionSurface)

# Sampling, checks and reports
from .sampling import sample_points, sample_derivs, jacobian_measure
from .check import numerical_derivative, numerical_jacobian, check_jacobian, check_boundary_derivatives
from .quality import MappingQuality

"""
snapmap/quality.py
------------------
Tools for inspecting a mapping before meshing with it.
Samples the Jacobian measure over the reference grid to catch folds
(negative determinants) and strongly stretched regions.
"""
import numpy as np

from .display import Display
from .sampling import sample_derivs, jacobian_measure


class MappingQuality:
    """
    Inspector class for a TransfiniteMapping / TransfiniteVolume.

    Usage:
        inspector = MappingQuality(trf, npts=(21, 21))
        inspector.analyze()
        inspector.print_report()
    """
    def __init__(self, mapping, npts=None):
        self.mapping = mapping
        self.npts = npts
        self.measures = np.array([])
        self._analyzed = False

    def analyze(self):
        """ Samples the Jacobian measure on the grid. """
        _, J = sample_derivs(self.mapping, self.npts)
        self.measures = jacobian_measure(J)
        self._analyzed = True
        return self

    @property
    def is_square(self):
        return self.mapping.ndim == self.mapping.nparam

    @property
    def min_measure(self):
        if not self._analyzed: self.analyze()
        return float(self.measures.min())

    @property
    def max_measure(self):
        if not self._analyzed: self.analyze()
        return float(self.measures.max())

    @property
    def stretch_ratio(self):
        """ max |measure| / min |measure|; inf when some measure vanishes. """
        if not self._analyzed: self.analyze()
        a = np.abs(self.measures)
        if a.min() == 0.0:
            return float("inf")
        return float(a.max() / a.min())

    @property
    def is_folded(self):
        """
        True if det(J) <= 0 anywhere on the grid (square Jacobians), which
        covers folds and inverted orientation. Surface area elements are
        never negative, so only a vanishing one counts there.
        """
        if not self._analyzed: self.analyze()
        m = self.measures
        if self.is_square:
            return bool(np.any(m <= 0.0))
        return bool(np.any(m == 0.0))

    def print_report(self):
        """ Prints a summary to stdout. """
        if not self._analyzed: self.analyze()

        display = Display("Mapping Quality",
                          f"{type(self.mapping).__name__} | {self.measures.size} samples")
        display.header()

        label = "det(J)" if self.is_square else "dA"
        print(f"{label}:")
        print(f"  Min: {self.min_measure:.4e}")
        print(f"  Max: {self.max_measure:.4e}")

        ratio = self.stretch_ratio
        print(f"Stretch Ratio: {ratio:.2f}  ", end="")
        if ratio > 100.0: print("[!] WARNING: Highly Stretched")
        elif ratio > 10.0: print("[~] CAUTION")
        else: print("[OK]")

        if self.is_folded:
            display.error(f"Mapping is folded ({label} <= 0 on the grid)")
        else:
            display.success("Mapping is valid")

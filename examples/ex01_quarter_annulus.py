"""
ex01_quarter_annulus.py
-----------------------
Goal: Map the reference square onto a quarter annulus (radii 1 and 3)
using two radial lines and two arcs, then inspect the Jacobian.
"""
import math

import matplotlib.pyplot as plt

from snapmap import TransfiniteMapping, LineSegment, Arc, MappingQuality, check_jacobian
from snapmap.plotting import draw_mapping, draw_jacobian_arrows


def run():
    print("--- Quarter Annulus (Transfinite Mapping) ---")

    # Corners: C0 (1,0), C1 (3,0), C2 (0,3), C3 (0,1)
    trf = TransfiniteMapping.from_curves(2, [
        LineSegment((1.0, 0.0), (3.0, 0.0)),   # B0: s = -1
        Arc(0.0, 0.0, 3.0, 0.0, math.pi / 2),  # B1: r = +1
        LineSegment((0.0, 1.0), (0.0, 3.0)),   # B2: s = +1
        Arc(0.0, 0.0, 1.0, 0.0, math.pi / 2),  # B3: r = -1
    ])

    print(f"Corners: {trf.corners.tolist()}")
    print(f"x(0, 0) = {trf.point([0.0, 0.0])}  (expected {2 / math.sqrt(2):.6f} each)")

    # Analytic vs numerical derivatives at the center
    check_jacobian(trf, [0.0, 0.0], verbose=True)

    # Check Quality
    inspector = MappingQuality(trf, npts=(21, 21))
    inspector.print_report()

    # Visualize
    fig, ax = plt.subplots(figsize=(6, 6))
    draw_mapping(trf, npts=(21, 21), ax=ax)
    draw_jacobian_arrows(trf, ax=ax)
    ax.set_title("Quarter Annulus")
    plt.show()


if __name__ == "__main__":
    run()

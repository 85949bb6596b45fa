"""
snapmap/display.py
------------------
Standardized console output for SnapMap checks and reports.
Provides consistent headers, section breaks, and tabular rows.
"""
import numpy as np


class Display:
    def __init__(self, title, context_info=""):
        """
        Args:
            title (str): Name of the report (e.g. "Jacobian check")
            context_info (str): Short description (e.g. "TransfiniteMapping | ndim=2")
        """
        self.title = title
        self.context = context_info
        self._col_widths = []
        self._headers = []

    def header(self):
        width = 70
        print("-" * width)
        print(f"SnapMap :: {self.title}")
        if self.context:
            print(f"Config  :: {self.context}")
        print("-" * width)

    def setup_columns(self, headers, widths=None):
        """
        Defines the columns of the table and prints its header row.

        Args:
            headers (list of str): Column names, e.g. ["u", "analytic", "numeric"]
            widths (list of int, optional): Width of each column. Defaults to 12.
        """
        self._headers = list(headers)
        if widths is None:
            self._col_widths = [12] * len(headers)
        else:
            self._col_widths = list(widths)

        header_str = "  ".join([h.rjust(w) for h, w in zip(self._headers, self._col_widths)])
        print(header_str)
        print("-" * len(header_str))

    def row(self, *args):
        """
        Prints a row matching setup_columns().
        Floats switch between fixed and scientific format by magnitude.
        """
        if len(args) != len(self._col_widths):
            raise ValueError(f"Expected {len(self._col_widths)} values, got {len(args)}.")

        row_str = []
        for val, width in zip(args, self._col_widths):
            row_str.append(self.format_value(val).rjust(width))
        print("  ".join(row_str))

    @staticmethod
    def format_value(val):
        if isinstance(val, (bool, np.bool_)):
            return "OK" if val else "FAIL"
        if isinstance(val, (int, np.integer)):
            return f"{val:d}"
        if isinstance(val, (float, np.floating)):
            abs_val = abs(val)
            if abs_val == 0:
                return f"{0.0:.4f}"
            if abs_val < 1e-2 or abs_val >= 1e5:
                return f"{val:.2e}"
            return f"{val:.4f}"
        return str(val)

    def success(self, message="Check passed"):
        print(f">> {message}")

    def error(self, message):
        print(f"!! {message} !!")

"""Roof measurement toolkit.

Computes projected and pitch-corrected roof areas from traced
geographic outlines, measures roof edges, looks up building outlines
for an address, and renders a PDF measurement report.
"""

__version__ = "0.1.0"

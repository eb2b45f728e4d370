"""
Shared compute infrastructure for csvanalysis.

IMPORTANT: This is NOT where domain-specific backends live. Those go in
{domain}/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    timing: Execution timing utilities
    linalg: Linear algebra kernels (normal equations, inverse matrix)
"""

from csvanalysis.core.compute.timing import Timer, timed

__all__ = [
    "Timer",
    "timed",
]

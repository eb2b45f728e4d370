"""
Regression backends.

Available backends:
    CPUNormalEquationsBackend: Reference implementation, LU solve of the
        moment-matrix normal equations
    CPUInverseMatrixBackend: Explicit (Z'Z)⁻¹ Z'y, for cross-checking
"""

from csvanalysis.regression.backends.cpu import (
    CPUNormalEquationsBackend,
    CPUInverseMatrixBackend,
)

__all__ = [
    "CPUNormalEquationsBackend",
    "CPUInverseMatrixBackend",
]

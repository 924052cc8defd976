"""Exact integer math for the optimal swap."""

from zapper.math.quadratic import NewtonResult, Quadratic

__all__ = ["NewtonResult", "Quadratic"]

"""
Numeric policy shared by the polygon geometry code.

Every sign decision and point comparison in the overlap engine goes through
classify_sign so the tolerance lives in one place.
"""

from enum import IntEnum
from typing import Tuple

EPS = 1e-6


class Sign(IntEnum):
    """Tolerance-aware sign of a scalar."""
    NEGATIVE = -1
    ZERO = 0
    POSITIVE = 1


def classify_sign(value, epsilon: float = EPS) -> Sign:
    """
    Classify a value as positive, negative or zero within epsilon.

    Args:
        value: Scalar to classify (float or numpy scalar)
        epsilon: Half-width of the band treated as zero

    Returns:
        Sign.POSITIVE if value > epsilon, Sign.NEGATIVE if value < -epsilon,
        Sign.ZERO otherwise

    Example:
        >>> classify_sign(1e-7)
        <Sign.ZERO: 0>
        >>> classify_sign(-0.5)
        <Sign.NEGATIVE: -1>
    """
    if value > epsilon:
        return Sign.POSITIVE
    if value < -epsilon:
        return Sign.NEGATIVE
    return Sign.ZERO


def points_equal(p: Tuple, q: Tuple, epsilon: float = EPS) -> bool:
    """Check whether two (x, y) points coincide within epsilon."""
    return (
        classify_sign(p[0] - q[0], epsilon) == Sign.ZERO
        and classify_sign(p[1] - q[1], epsilon) == Sign.ZERO
    )

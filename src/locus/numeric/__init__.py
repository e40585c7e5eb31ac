"""Validated numeric scalars for locus.

Key Components:
    - NonnegativeReal: float >= 0, possibly infinite, never NaN
    - NonnegativeInt: int >= 0
    - nonnegative / nonnegative_int: validating factories

Example:
    from locus.numeric import RefinementError, nonnegative

    radius = nonnegative(2.5)
    try:
        nonnegative(-0.001)
    except RefinementError as e:
        print(e.reason)
"""

from locus.numeric.refinement import (
    NonnegativeInt,
    NonnegativeReal,
    RefinementError,
    nonnegative,
    nonnegative_int,
)

__all__ = [
    "NonnegativeInt",
    "NonnegativeReal",
    "RefinementError",
    "nonnegative",
    "nonnegative_int",
]

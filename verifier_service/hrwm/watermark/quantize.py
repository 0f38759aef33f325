"""
Rounding rules shared bit-for-bit with the embedding device.

Two rules are in play and they are not interchangeable:

- `robust_round` is literally `floor(x/step + 0.5) * step`, the formula
  the firmware runs on trend coefficients.
- `round_half_up` is nearest-integer with ties towards positive infinity,
  as used for QIM indices. It is computed as `floor(x)` plus one when the
  fractional part is at least 0.5, not as `floor(x + 0.5)`: for
  `x = 0.49999999999999994` the addition rounds up to 1.0 and would give
  1 where the reference gives 0.

Python's built-in `round` rounds half to even and is used by neither:
`round(2.5) == 2` but both rules above yield 3. `floor` goes towards
negative infinity, so `round_half_up(-2.5) == -2` and
`round_half_up(-2.6) == -3`.
"""

from __future__ import annotations

import math
from typing import Union

from ..errors import NonFiniteValue

Number = Union[int, float]


def _check_finite(x: float) -> None:
    if not math.isfinite(x):
        raise NonFiniteValue(f"cannot round non-finite value {x!r}")


def round_half_up(x: float) -> int:
    """Nearest integer, ties going towards positive infinity."""
    _check_finite(x)
    whole = math.floor(x)
    return whole + 1 if x - whole >= 0.5 else whole


def robust_round(x: float, step: Number = 5) -> Number:
    """
    Snap `x` to the nearest multiple of `step`: floor(x/step + 0.5) * step.

    Small perturbations of `x` leave the result unchanged, which is what
    makes the watermark tolerant to transmission jitter. With an integer
    `step` the result is an `int`.
    """
    scaled = x / step + 0.5
    _check_finite(scaled)
    return math.floor(scaled) * step


def format_hash_number(value: Number) -> str:
    """
    Decimal text of a rounded coefficient as it appears in the hash input.

    Integral values print without a fractional part ("95", "-5", "0"),
    including integral floats, so `95.0` and `95` hash identically.
    """
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)

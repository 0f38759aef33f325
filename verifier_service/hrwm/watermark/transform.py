"""
Single-level Haar discrete wavelet transform over a sample block.

    trend[i]  = (x[2i] + x[2i+1]) * (1/sqrt(2))
    detail[i] = (x[2i] - x[2i+1]) * (1/sqrt(2))

The scale factor is multiplied rather than divided so the result matches
the embedding firmware operation for operation.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from ..errors import BlockLengthMismatch, InvalidBlockLength, NonFiniteValue

INV_SQRT2: float = 1.0 / math.sqrt(2.0)


@dataclass(frozen=True)
class Coefficients:
    trend: Tuple[float, ...]
    detail: Tuple[float, ...]

    def __len__(self) -> int:
        return len(self.detail)


def forward_haar(block: Sequence[float]) -> Coefficients:
    """
    Split `block` into trend (approximation) and detail coefficients.

    Raises `InvalidBlockLength` if the block is empty or odd-length and
    `NonFiniteValue` if a sample is NaN or infinite, or if a pair is so
    large that its sum overflows.
    """
    n = len(block)
    if n == 0 or n % 2 != 0:
        raise InvalidBlockLength(
            f"block length must be even and non-zero, got {n}"
        )

    trend = []
    detail = []
    for i in range(n // 2):
        a = float(block[2 * i])
        b = float(block[2 * i + 1])
        t = (a + b) * INV_SQRT2
        d = (a - b) * INV_SQRT2
        if not (math.isfinite(t) and math.isfinite(d)):
            raise NonFiniteValue(
                f"samples {2 * i} and {2 * i + 1} ({a!r}, {b!r}) give non-finite coefficients"
            )
        trend.append(t)
        detail.append(d)

    return Coefficients(trend=tuple(trend), detail=tuple(detail))


def inverse_haar(trend: Sequence[float], detail: Sequence[float]) -> List[float]:
    """Rebuild a sample block from its trend and (possibly modified) detail."""
    if len(trend) != len(detail):
        raise BlockLengthMismatch(
            f"trend has {len(trend)} coefficients but detail has {len(detail)}"
        )
    if not trend:
        raise InvalidBlockLength("cannot reconstruct a block from no coefficients")

    block: List[float] = []
    for a, d in zip(trend, detail):
        block.append((a + d) * INV_SQRT2)
        block.append((a - d) * INV_SQRT2)
    return block

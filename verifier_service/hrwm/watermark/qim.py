"""
Quantization Index Modulation on detail coefficients.

A bit is carried by the parity of the coefficient's quantization index:
odd index means 1, even means 0. Extraction rounds to the nearest index
(half up), embedding floors and bumps the index by one when the parity
is wrong, so an embedded coefficient always lands exactly on a multiple
of `delta`.
"""

from __future__ import annotations

import math
from typing import List, Sequence

from ..errors import InvalidBit, InvalidDelta, NonFiniteValue
from .quantize import round_half_up


def _check_delta(delta: float) -> None:
    if not delta > 0:
        raise InvalidDelta(f"QIM delta must be positive, got {delta}")


def extract_bit(coefficient: float, delta: float) -> int:
    _check_delta(delta)
    step = round_half_up(coefficient / delta)
    return step % 2


def embed_bit(coefficient: float, delta: float, bit: int) -> float:
    """Move `coefficient` onto the nearest-from-below index with parity `bit`."""
    _check_delta(delta)
    if bit not in (0, 1):
        raise InvalidBit(f"watermark bit must be 0 or 1, got {bit!r}")

    index = coefficient / delta
    if not math.isfinite(index):
        raise NonFiniteValue(f"QIM index of {coefficient!r} / {delta!r} is not finite")
    step = math.floor(index)
    if step % 2 != bit:
        step += 1
    return step * delta


def extract_bits(detail: Sequence[float], delta: float) -> str:
    """Extract one bit per detail coefficient as a '0'/'1' string."""
    _check_delta(delta)
    return "".join(str(extract_bit(c, delta)) for c in detail)


def embed_bits(detail: Sequence[float], delta: float, bits: str) -> List[float]:
    """
    Embed `bits` into `detail`, one per coefficient.

    If `bits` is shorter than `detail` it is repeated cyclically.
    """
    _check_delta(delta)
    if not bits:
        raise InvalidBit("cannot embed an empty bitstring")

    out: List[float] = []
    for i, c in enumerate(detail):
        ch = bits[i % len(bits)]
        if ch not in ("0", "1"):
            raise InvalidBit(f"watermark bit must be '0' or '1', got {ch!r}")
        out.append(embed_bit(c, delta, int(ch)))
    return out

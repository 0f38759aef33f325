"""
Distortion and bit-error metrics.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from ..errors import BlockLengthMismatch, InvalidBlockLength, NonFiniteValue


@dataclass(frozen=True)
class DistortionMetrics:
    mse: float
    psnr: float
    max_error: float


def _check_lengths(a: Sequence[float], b: Sequence[float]) -> None:
    if len(a) != len(b):
        raise BlockLengthMismatch(
            f"blocks differ in length: {len(a)} != {len(b)}"
        )
    if not a:
        raise InvalidBlockLength("cannot compare empty blocks")


def mean_squared_error(a: Sequence[float], b: Sequence[float]) -> float:
    _check_lengths(a, b)
    total = 0.0
    for x, y in zip(a, b):
        diff = x - y
        total += diff * diff
    mse = total / len(a)
    # NaN or infinite samples, or differences too large to square.
    if not math.isfinite(mse):
        raise NonFiniteValue(f"mean squared error is not finite: {mse!r}")
    return mse


def peak_signal_to_noise_ratio(
    mse: float, max_ref: float, ceiling: float = 100.0
) -> float:
    """
    PSNR in dB relative to `max_ref`.

    A zero error would give infinity; `ceiling` is returned instead.
    """
    if mse == 0:
        return ceiling
    return 20 * math.log10(max_ref / math.sqrt(mse))


def bit_errors(expected: str, extracted: str) -> int:
    if len(expected) != len(extracted):
        raise BlockLengthMismatch(
            f"bitstrings differ in length: {len(expected)} != {len(extracted)}"
        )
    return sum(1 for e, x in zip(expected, extracted) if e != x)


def bit_error_rate(expected: str, extracted: str) -> float:
    """Percentage of differing bits, in [0, 100]."""
    errors = bit_errors(expected, extracted)
    if not expected:
        raise BlockLengthMismatch("cannot compute BER of empty bitstrings")
    return 100.0 * errors / len(expected)


def compare_blocks(
    raw: Sequence[float],
    watermarked: Sequence[float],
    max_ref: float,
    psnr_ceiling: float = 100.0,
) -> DistortionMetrics:
    """Distortion introduced by embedding: raw samples vs watermarked ones."""
    mse = mean_squared_error(raw, watermarked)
    max_error = max(abs(x - y) for x, y in zip(raw, watermarked))
    return DistortionMetrics(
        mse=mse,
        psnr=peak_signal_to_noise_ratio(mse, max_ref, psnr_ceiling),
        max_error=max_error,
    )

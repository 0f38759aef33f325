"""
Embedding-side counterpart of `verify`.

Production embedding happens on the sensor device; this mirrors it so
tests and experiments can produce blocks that should verify, and so the
re-embedding attack has something to forge with.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ..config import WatermarkConfig
from .generator import Secret, generate_expected_bits
from .qim import embed_bits
from .transform import forward_haar, inverse_haar


@dataclass(frozen=True)
class EmbeddedBlock:
    samples: Tuple[float, ...]
    bits: str
    sequence_number: int


def embed_watermark(
    samples: Sequence[float],
    sequence_number: int,
    config: WatermarkConfig,
    secret: Optional[Secret] = None,
) -> EmbeddedBlock:
    """
    Watermark a raw block: bits derived from its trend go into its detail.

    Only the detail coefficients change, so the trend (and with it the
    hash input the verifier rebuilds) stays put.
    """
    key = config.secret if secret is None else secret
    coeffs = forward_haar(samples)
    bits = generate_expected_bits(
        coeffs.trend, sequence_number, len(coeffs.detail), key, step=config.robust_step
    )
    detail = embed_bits(coeffs.detail, config.qim_delta, bits)
    return EmbeddedBlock(
        samples=tuple(inverse_haar(coeffs.trend, detail)),
        bits=bits,
        sequence_number=sequence_number,
    )

"""
Expected watermark generation.

The embedding device and the verifier both derive the watermark from
data they can each see:

    hash_input = "".join(str(robust_round(t, 5)) for t in trend)
                 + secret + str(sequence_number)
    bits       = first `num_bits` bits of SHA-256(hash_input), MSB first

Because the trend coefficients are robust-rounded first, mild noise
leaves `hash_input` untouched while gross manipulation changes it and
yields an unrelated bitstring.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from typing import Sequence, Union

from ..errors import InvalidBitCount
from .quantize import format_hash_number, robust_round

logger = logging.getLogger(__name__)

DIGEST_BITS = 256

Secret = Union[str, bytes]


@dataclass(frozen=True)
class ExpectedWatermark:
    bits: str
    hash_input: str
    digest_hex: str


def _secret_bytes(secret: Secret) -> bytes:
    if isinstance(secret, bytes):
        return secret
    return secret.encode("utf-8")


def digest_to_bits(digest: bytes, num_bits: int) -> str:
    """Render the leading `num_bits` of `digest` as a '0'/'1' string."""
    if num_bits <= 0 or num_bits > len(digest) * 8:
        raise InvalidBitCount(
            f"num_bits must be in 1..{len(digest) * 8}, got {num_bits}"
        )
    bytes_needed = (num_bits + 7) // 8
    bits = "".join(format(b, "08b") for b in digest[:bytes_needed])
    return bits[:num_bits]


def generate_expected_watermark(
    trend: Sequence[float],
    sequence_number: int,
    num_bits: int,
    secret: Secret,
    step: int = 5,
) -> ExpectedWatermark:
    """
    Derive the watermark the embedder should have placed in this block.

    Returns the bits together with the exact hash input and hex digest so
    callers can audit a mismatch.
    """
    if num_bits <= 0 or num_bits > DIGEST_BITS:
        raise InvalidBitCount(
            f"num_bits must be in 1..{DIGEST_BITS}, got {num_bits}"
        )

    rounded = "".join(format_hash_number(robust_round(t, step)) for t in trend)
    payload = (
        rounded.encode("ascii")
        + _secret_bytes(secret)
        + str(sequence_number).encode("ascii")
    )
    digest = hashlib.sha256(payload).digest()

    bits = digest_to_bits(digest, num_bits)
    hash_input = payload.decode("utf-8", errors="replace")

    logger.debug("hash input=%r digest=%s bits=%s", hash_input, digest.hex(), bits)
    return ExpectedWatermark(bits=bits, hash_input=hash_input, digest_hex=digest.hex())


def generate_expected_bits(
    trend: Sequence[float],
    sequence_number: int,
    num_bits: int,
    secret: Secret,
    step: int = 5,
) -> str:
    """Bits-only shortcut for `generate_expected_watermark`."""
    return generate_expected_watermark(
        trend, sequence_number, num_bits, secret, step=step
    ).bits

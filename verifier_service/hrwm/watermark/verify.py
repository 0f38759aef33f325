"""
Watermark verification.

Given the block as received and the block as it reached the verifier
(identical in production, distorted under a test channel), this:

1. measures distortion (MSE / PSNR) between the two;
2. decomposes the processed block with the Haar DWT;
3. regenerates the expected watermark from the trend coefficients;
4. extracts the embedded watermark from the detail coefficients;
5. scores the mismatch as a bit error rate and applies the threshold.

An INVALID verdict is a normal return value. Exceptions are reserved for
malformed input (see `hrwm.errors`).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from ..config import WatermarkConfig
from .generator import Secret, generate_expected_watermark
from .metrics import (
    bit_error_rate,
    bit_errors,
    mean_squared_error,
    peak_signal_to_noise_ratio,
)
from .qim import extract_bit
from .quantize import round_half_up
from .transform import forward_haar

logger = logging.getLogger(__name__)


class VerificationStatus(str, Enum):
    VALID = "VALID"
    INVALID = "INVALID"


@dataclass(frozen=True)
class VerificationResult:
    status: VerificationStatus
    bit_error_rate: float
    mean_squared_error: float
    psnr: float
    sequence_number: int
    expected_bits: str
    extracted_bits: str
    error_bits: int
    hash_input: str
    digest_hex: str

    @property
    def num_bits(self) -> int:
        return len(self.expected_bits)

    @property
    def is_valid(self) -> bool:
        return self.status is VerificationStatus.VALID


def verify_block(
    received: Sequence[float],
    processed: Sequence[float],
    sequence_number: int,
    config: WatermarkConfig,
    secret: Optional[Secret] = None,
) -> VerificationResult:
    """
    Verify one block and return the verdict with its metrics.

    `secret` overrides `config.secret` for this call only; it exists so the
    wrong-key scenario can be exercised without building a new config.
    Neither input sequence is modified.
    """
    key = config.secret if secret is None else secret

    mse = mean_squared_error(received, processed)
    psnr = peak_signal_to_noise_ratio(mse, config.max_ref, config.psnr_ceiling)

    coeffs = forward_haar(processed)
    num_bits = len(coeffs.detail)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("seq=%d trend=%s", sequence_number, ["%.2f" % t for t in coeffs.trend])
        logger.debug("seq=%d detail=%s", sequence_number, ["%.2f" % d for d in coeffs.detail])

    expected = generate_expected_watermark(
        coeffs.trend, sequence_number, num_bits, key, step=config.robust_step
    )

    extracted_chars = []
    for i, value in enumerate(coeffs.detail):
        bit = extract_bit(value, config.qim_delta)
        extracted_chars.append(str(bit))
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "seq=%d cD[%d]=%.4f step=%d bit=%d",
                sequence_number,
                i,
                value,
                round_half_up(value / config.qim_delta),
                bit,
            )
    extracted = "".join(extracted_chars)

    errors = bit_errors(expected.bits, extracted)
    ber = bit_error_rate(expected.bits, extracted)
    status = (
        VerificationStatus.VALID
        if ber <= config.ber_threshold
        else VerificationStatus.INVALID
    )

    log = logger.info if status is VerificationStatus.VALID else logger.warning
    log(
        "seq=%d status=%s ber=%.2f%% (%d/%d) mse=%.4f psnr=%.2fdB expected=%s extracted=%s",
        sequence_number,
        status.value,
        ber,
        errors,
        num_bits,
        mse,
        psnr,
        expected.bits,
        extracted,
    )

    return VerificationResult(
        status=status,
        bit_error_rate=ber,
        mean_squared_error=mse,
        psnr=psnr,
        sequence_number=sequence_number,
        expected_bits=expected.bits,
        extracted_bits=extracted,
        error_bits=errors,
        hash_input=expected.hash_input,
        digest_hex=expected.digest_hex,
    )

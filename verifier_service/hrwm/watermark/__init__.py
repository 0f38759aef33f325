"""
Watermark verification pipeline.

Leaf-first: `transform` (Haar DWT), `quantize` (robust rounding),
`generator` (expected bits from SHA-256), `qim` (bit extraction and
embedding), `metrics` (MSE / PSNR / BER) and `verify`, which ties them
together. `embed` is the embedding-side counterpart used to build test
vectors.

Everything here is pure: no I/O, no shared mutable state, safe to call
from any number of threads on independent blocks.
"""

from .generator import generate_expected_bits, generate_expected_watermark
from .qim import embed_bit, extract_bit
from .quantize import robust_round
from .transform import Coefficients, forward_haar, inverse_haar
from .verify import VerificationResult, VerificationStatus, verify_block

__all__ = [
    "Coefficients",
    "VerificationResult",
    "VerificationStatus",
    "embed_bit",
    "extract_bit",
    "forward_haar",
    "generate_expected_bits",
    "generate_expected_watermark",
    "inverse_haar",
    "robust_round",
    "verify_block",
]

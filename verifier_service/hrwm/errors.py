"""
Error taxonomy for the verification engine.

All of these are caller or configuration errors: they abort the single
call that raised them and never leave state behind. An INVALID verdict
is *not* an error and is never signalled through these classes.
"""

from __future__ import annotations


class WatermarkError(ValueError):
    """Base class for every error raised by the engine."""


class InvalidBlockLength(WatermarkError):
    """Sample block is empty or has an odd number of samples."""


class BlockLengthMismatch(WatermarkError):
    """Two blocks that must be compared sample-by-sample differ in length."""


class InvalidBitCount(WatermarkError):
    """Requested watermark length is non-positive or exceeds the digest."""


class InvalidDelta(WatermarkError):
    """QIM quantization step is zero or negative."""


class InvalidBit(WatermarkError):
    """A watermark bit other than 0 or 1 was supplied for embedding."""


class NonFiniteValue(WatermarkError):
    """A sample, coefficient or quantizer input is NaN or infinite."""

import math

import pytest

from hrwm.errors import BlockLengthMismatch, InvalidBlockLength, NonFiniteValue
from hrwm.watermark.metrics import (
    bit_error_rate,
    bit_errors,
    compare_blocks,
    mean_squared_error,
    peak_signal_to_noise_ratio,
)


def test_mean_squared_error():
    assert mean_squared_error([1.0, 2.0], [1.0, 4.0]) == 2.0
    assert mean_squared_error([5.0] * 4, [5.0] * 4) == 0.0


def test_mean_squared_error_rejects_bad_input():
    with pytest.raises(BlockLengthMismatch):
        mean_squared_error([1.0], [1.0, 2.0])
    with pytest.raises(InvalidBlockLength):
        mean_squared_error([], [])


def test_psnr_ceiling_and_formula():
    assert peak_signal_to_noise_ratio(0.0, 200.0) == 100.0
    assert peak_signal_to_noise_ratio(0.0, 200.0, ceiling=80.0) == 80.0
    assert peak_signal_to_noise_ratio(4.0, 200.0) == pytest.approx(20 * math.log10(100.0))


def test_bit_error_rate():
    assert bit_errors("1010", "1001") == 2
    assert bit_error_rate("1010", "1001") == 50.0
    assert bit_error_rate("11111111", "11111111") == 0.0
    with pytest.raises(BlockLengthMismatch):
        bit_error_rate("1", "10")


def test_compare_blocks():
    metrics = compare_blocks([70, 72, 74, 76], [70.5, 72.0, 73.0, 76.0], max_ref=200.0)

    assert metrics.mse == pytest.approx((0.25 + 1.0) / 4)
    assert metrics.max_error == pytest.approx(1.0)
    assert metrics.psnr == pytest.approx(20 * math.log10(200.0 / math.sqrt(metrics.mse)))


def test_mean_squared_error_rejects_non_finite():
    with pytest.raises(NonFiniteValue):
        mean_squared_error([1.0, float("nan")], [1.0, 2.0])
    # Finite samples whose difference cannot be squared.
    with pytest.raises(NonFiniteValue):
        mean_squared_error([1e200, 0.0], [0.0, 0.0])

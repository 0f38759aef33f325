import math
import random

import pytest

from hrwm.errors import BlockLengthMismatch, InvalidBlockLength, NonFiniteValue
from hrwm.watermark.transform import INV_SQRT2, forward_haar, inverse_haar


def test_forward_haar_pairs():
    coeffs = forward_haar([80.0, 78.0, 90.0, 90.0])

    assert list(coeffs.trend) == pytest.approx([158.0 / math.sqrt(2), 180.0 / math.sqrt(2)])
    assert list(coeffs.detail) == pytest.approx([2.0 / math.sqrt(2), 0.0])
    assert len(coeffs) == 2


def test_forward_haar_constant_block_has_zero_detail():
    coeffs = forward_haar([75.0] * 16)

    assert len(coeffs.trend) == 8
    assert all(t == 150.0 * INV_SQRT2 for t in coeffs.trend)
    assert all(d == 0.0 for d in coeffs.detail)


def test_forward_haar_accepts_integers():
    coeffs = forward_haar([70, 72])
    assert coeffs.detail[0] == pytest.approx(-2.0 * INV_SQRT2)


@pytest.mark.parametrize("block", [[], [1.0], [1.0, 2.0, 3.0]])
def test_forward_haar_rejects_bad_lengths(block):
    with pytest.raises(InvalidBlockLength):
        forward_haar(block)


def test_round_trip_restores_block():
    rng = random.Random(1234)
    for n in (2, 8, 16, 64):
        block = [rng.uniform(40.0, 180.0) for _ in range(n)]
        coeffs = forward_haar(block)
        restored = inverse_haar(coeffs.trend, coeffs.detail)
        assert restored == pytest.approx(block, abs=1e-9)


def test_inverse_haar_rejects_mismatched_coefficients():
    with pytest.raises(BlockLengthMismatch):
        inverse_haar([1.0, 2.0], [1.0])

    with pytest.raises(InvalidBlockLength):
        inverse_haar([], [])


def test_forward_haar_does_not_mutate_input():
    block = [60.0, 61.0, 62.0, 63.0]
    forward_haar(block)
    assert block == [60.0, 61.0, 62.0, 63.0]


@pytest.mark.parametrize(
    "pair",
    [(float("nan"), 75.0), (75.0, float("inf")), (float("-inf"), 75.0), (1.7e308, 1.7e308)],
)
def test_forward_haar_rejects_non_finite(pair):
    block = [75.0] * 14 + list(pair)
    with pytest.raises(NonFiniteValue):
        forward_haar(block)

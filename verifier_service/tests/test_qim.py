import random

import pytest

from hrwm.errors import InvalidBit, InvalidDelta, NonFiniteValue
from hrwm.watermark.qim import embed_bit, embed_bits, extract_bit, extract_bits


def test_extract_bit_parity():
    assert extract_bit(0.0, 2.0) == 0
    assert extract_bit(2.0, 2.0) == 1
    assert extract_bit(4.1, 2.0) == 0
    # -2/2 rounds to -1, which is odd.
    assert extract_bit(-2.0, 2.0) == 1


def test_extract_bit_rounds_half_up():
    # 3/2 = 1.5 -> 2 (even); -3/2 = -1.5 -> -1 (odd).
    assert extract_bit(3.0, 2.0) == 0
    assert extract_bit(-3.0, 2.0) == 1


def test_embed_bit_lands_on_grid():
    assert embed_bit(3.3, 2.0, 1) == 2.0
    assert embed_bit(3.3, 2.0, 0) == 4.0
    assert embed_bit(-0.5, 2.0, 1) == -2.0
    assert embed_bit(-0.5, 2.0, 0) == 0.0


def test_embed_then_extract_recovers_bit():
    rng = random.Random(42)
    for delta in (0.5, 1.0, 2.0, 3.7):
        for _ in range(200):
            x = rng.uniform(-50.0, 50.0)
            for bit in (0, 1):
                assert extract_bit(embed_bit(x, delta, bit), delta) == bit


@pytest.mark.parametrize("delta", [0.0, -1.0, float("nan")])
def test_invalid_delta(delta):
    with pytest.raises(InvalidDelta):
        extract_bit(1.0, delta)
    with pytest.raises(InvalidDelta):
        embed_bit(1.0, delta, 1)


def test_invalid_bit():
    with pytest.raises(InvalidBit):
        embed_bit(1.0, 2.0, 2)
    with pytest.raises(InvalidBit):
        embed_bits([1.0, 2.0], 2.0, "1x")
    with pytest.raises(InvalidBit):
        embed_bits([1.0], 2.0, "")


def test_embed_bits_round_trip_and_cycles():
    detail = [0.3, -4.2, 7.9, 1.1]
    embedded = embed_bits(detail, 2.0, "10")
    assert extract_bits(embedded, 2.0) == "1010"


def test_extract_bit_just_below_half_step():
    # 0.9999999999999999 / 2 is the largest double below 0.5.
    assert extract_bit(0.9999999999999999, 2.0) == 0


def test_extract_bit_rejects_index_overflow():
    with pytest.raises(NonFiniteValue):
        extract_bit(1e308, 1e-300)


def test_embed_bit_rejects_non_finite_coefficient():
    with pytest.raises(NonFiniteValue):
        embed_bit(float("nan"), 2.0, 1)

"""
Channel and attack simulator for exercising the verifier.

Test harness only: the receiver service never calls into this module.
Each `ScenarioKind` maps to exactly one pure transformation; scenarios
never change verifier logic, only what is fed into it (the samples, and
for the key attack, which secret the verifier uses).

Randomness comes exclusively from the `random.Random` passed in, so a
seeded generator makes every run reproducible.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Sequence, Tuple

from .config import FAKE_KEY, WatermarkConfig
from .watermark.generator import generate_expected_bits
from .watermark.qim import embed_bits
from .watermark.transform import forward_haar, inverse_haar


class ScenarioKind(str, Enum):
    IDENTITY = "identity"
    GAUSSIAN_NOISE = "gaussian_noise"
    CONSTANT_OFFSET = "constant_offset"
    WRONG_SECRET = "wrong_secret"
    FORGED_REEMBED = "forged_reembed"


@dataclass(frozen=True)
class ChannelScenario:
    kind: ScenarioKind
    sigma: float = 0.0
    offset: float = 0.0
    fake_secret: str = FAKE_KEY
    # Sequence-number shift the forger applies, as it cannot know the real one.
    sequence_shift: int = 1


@dataclass(frozen=True)
class ChannelOutput:
    samples: Tuple[float, ...]
    # Secret the verifier should use instead of its configured one, if any.
    secret: Optional[str] = None


def gaussian(rng: random.Random, mean: float = 0.0, sigma: float = 1.0) -> float:
    """Box-Muller transform over two uniform draws."""
    # 1 - random() lies in (0, 1], keeping log() finite.
    u1 = 1.0 - rng.random()
    u2 = rng.random()
    z = math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)
    return mean + z * sigma


def _identity(block, scenario, rng, sequence_number, config) -> ChannelOutput:
    return ChannelOutput(samples=tuple(block))


def _gaussian_noise(block, scenario, rng, sequence_number, config) -> ChannelOutput:
    return ChannelOutput(
        samples=tuple(x + gaussian(rng, 0.0, scenario.sigma) for x in block)
    )


def _constant_offset(block, scenario, rng, sequence_number, config) -> ChannelOutput:
    return ChannelOutput(samples=tuple(x + scenario.offset for x in block))


def _wrong_secret(block, scenario, rng, sequence_number, config) -> ChannelOutput:
    return ChannelOutput(samples=tuple(block), secret=scenario.fake_secret)


def _forged_reembed(block, scenario, rng, sequence_number, config) -> ChannelOutput:
    """
    Attacker overwrites the watermark with one built from a guessed secret
    and a guessed sequence number. The samples keep their trend, so only
    the knowledge gap shows up at the verifier.
    """
    coeffs = forward_haar(block)
    forged_bits = generate_expected_bits(
        coeffs.trend,
        sequence_number + scenario.sequence_shift,
        len(coeffs.detail),
        scenario.fake_secret,
        step=config.robust_step,
    )
    detail = embed_bits(coeffs.detail, config.qim_delta, forged_bits)
    return ChannelOutput(samples=tuple(inverse_haar(coeffs.trend, detail)))


_Handler = Callable[
    [Sequence[float], ChannelScenario, random.Random, int, WatermarkConfig],
    ChannelOutput,
]

_HANDLERS: Dict[ScenarioKind, _Handler] = {
    ScenarioKind.IDENTITY: _identity,
    ScenarioKind.GAUSSIAN_NOISE: _gaussian_noise,
    ScenarioKind.CONSTANT_OFFSET: _constant_offset,
    ScenarioKind.WRONG_SECRET: _wrong_secret,
    ScenarioKind.FORGED_REEMBED: _forged_reembed,
}


def apply_scenario(
    block: Sequence[float],
    scenario: ChannelScenario,
    rng: Optional[random.Random] = None,
    sequence_number: int = 0,
    config: Optional[WatermarkConfig] = None,
) -> ChannelOutput:
    """
    Push `block` through the simulated channel.

    `sequence_number` and `config` are only consulted by the re-embedding
    forger. The input block is never modified.
    """
    rng = rng or random.Random()
    config = config or WatermarkConfig()
    return _HANDLERS[scenario.kind](block, scenario, rng, sequence_number, config)


# Presets matching the receiver's historical test modes.
SCENARIOS: Dict[str, ChannelScenario] = {
    "normal": ChannelScenario(ScenarioKind.IDENTITY),
    "awgn_light": ChannelScenario(ScenarioKind.GAUSSIAN_NOISE, sigma=0.3),
    "awgn_moderate": ChannelScenario(ScenarioKind.GAUSSIAN_NOISE, sigma=0.6),
    "awgn_critical": ChannelScenario(ScenarioKind.GAUSSIAN_NOISE, sigma=0.9),
    "awgn_severe": ChannelScenario(ScenarioKind.GAUSSIAN_NOISE, sigma=1.2),
    "attack_bpm": ChannelScenario(ScenarioKind.CONSTANT_OFFSET, offset=30.0),
    "attack_key": ChannelScenario(ScenarioKind.WRONG_SECRET),
    "attack_reembed": ChannelScenario(ScenarioKind.FORGED_REEMBED),
}


def get_scenario(name: str) -> ChannelScenario:
    """Look up a preset by name; unknown names raise `KeyError`."""
    try:
        return SCENARIOS[name.lower()]
    except KeyError:
        raise KeyError(
            f"unknown scenario {name!r}; expected one of {sorted(SCENARIOS)}"
        ) from None

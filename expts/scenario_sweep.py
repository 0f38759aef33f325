#!/usr/bin/env python3
"""
expts/scenario_sweep.py

Offline robustness sweep (verbose), no network needed:

  - synthesizes heart-rate blocks and watermarks them like the sensor does
  - pushes each block through every channel scenario preset
  - verifies the result and reports valid rate, mean BER and mean PSNR

Usage:
  python expts/scenario_sweep.py

Environment:
  SWEEP_BLOCKS=200   -> blocks per scenario
  SWEEP_SEED=1234    -> RNG seed (same seed, same table)
  HRWM_*             -> engine parameters, see hrwm/config.py
"""

from __future__ import annotations

import logging
import os
import random
import sys
import time
from typing import Dict, List

from hrwm.channel import SCENARIOS, ChannelScenario, apply_scenario
from hrwm.config import LOG_LEVEL, WatermarkConfig, load_config
from hrwm.watermark.embed import embed_watermark
from hrwm.watermark.verify import verify_block

logger = logging.getLogger("scenario_sweep")


# -----------------------------------------------------------------------------
# Colours (no emojis) – fall back to plain text on non-TTY
# -----------------------------------------------------------------------------
def _colour_codes():
    if sys.stdout.isatty():
        return {
            "BOLD": "\033[1m",
            "DIM": "\033[2m",
            "GREEN": "\033[32m",
            "RED": "\033[31m",
            "RESET": "\033[0m",
        }
    else:
        return {k: "" for k in ["BOLD", "DIM", "GREEN", "RED", "RESET"]}


C = _colour_codes()


def log_kv(label: str, *values: str) -> None:
    print(f"  {C['DIM']}{label}:{C['RESET']} {' '.join(str(v) for v in values)}")


def log_section(*msg: str) -> None:
    title = " ".join(str(m) for m in msg)
    print()
    print("###############################################################################")
    print(f"# {title}")
    print("###############################################################################")
    print()


# -----------------------------------------------------------------------------
# Signal synthesis
# -----------------------------------------------------------------------------
def synth_block(rng: random.Random, length: int) -> List[float]:
    """Integer BPM readings drifting around a resting or active baseline."""
    bpm = rng.uniform(55.0, 150.0)
    block = []
    for _ in range(length):
        bpm += rng.uniform(-1.5, 1.5)
        block.append(float(round(bpm)))
    return block


def run_scenario(
    scenario: ChannelScenario,
    config: WatermarkConfig,
    n_blocks: int,
    seed: int,
) -> Dict[str, float]:
    rng = random.Random(seed)
    valid = 0
    ber_sum = 0.0
    psnr_sum = 0.0

    for seq in range(n_blocks):
        embedded = embed_watermark(synth_block(rng, config.block_length), seq, config)
        out = apply_scenario(
            embedded.samples, scenario, rng, sequence_number=seq, config=config
        )
        result = verify_block(
            embedded.samples, out.samples, seq, config, secret=out.secret
        )
        valid += result.is_valid
        ber_sum += result.bit_error_rate
        psnr_sum += result.psnr

    return {
        "valid_rate": 100.0 * valid / n_blocks,
        "mean_ber": ber_sum / n_blocks,
        "mean_psnr": psnr_sum / n_blocks,
    }


# -----------------------------------------------------------------------------
# Main flow
# -----------------------------------------------------------------------------
def main() -> None:
    # Per-block verdicts are noisy at INFO; keep them out unless asked.
    logging.basicConfig(
        level=LOG_LEVEL if LOG_LEVEL != "INFO" else "ERROR",
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    n_blocks = int(os.environ.get("SWEEP_BLOCKS", "200"))
    seed = int(os.environ.get("SWEEP_SEED", "1234"))
    config = load_config()

    log_section("Engine parameters")
    log_kv("qim_delta", str(config.qim_delta))
    log_kv("ber_threshold", f"{config.ber_threshold}%")
    log_kv("block_length", str(config.block_length))
    log_kv("max_ref", str(config.max_ref))
    log_kv("blocks/scenario", str(n_blocks))
    log_kv("seed", str(seed))

    log_section("Sweeping channel scenarios")
    start = time.perf_counter()
    print(f"{C['BOLD']}{'scenario':<16} {'valid%':>8} {'BER%':>8} {'PSNR dB':>9}{C['RESET']}")
    print("-" * 44)
    for name, scenario in SCENARIOS.items():
        stats = run_scenario(scenario, config, n_blocks, seed)
        colour = C["GREEN"] if stats["valid_rate"] >= 50.0 else C["RED"]
        print(
            f"{name:<16} {colour}{stats['valid_rate']:>8.1f}{C['RESET']} "
            f"{stats['mean_ber']:>8.2f} {stats['mean_psnr']:>9.2f}"
        )
        logger.debug("scenario %s done: %s", name, stats)

    elapsed = time.perf_counter() - start
    log_section("Sweep complete")
    print(f"  total sweep time: {elapsed:.2f}s")


if __name__ == "__main__":
    main()

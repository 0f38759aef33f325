"""
Configuration for the verification engine.

Every value here has to match the embedding device exactly. The engine
never checks that; a mismatch simply shows up as failing blocks. Defaults
come from environment variables so a deployment can override them
without code changes, and `WatermarkConfig` is frozen so it can be
shared freely between threads.
"""

from __future__ import annotations

import os
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


def _env_defaults() -> Dict[str, Any]:
    """Engine parameters from the environment, falling back to the reference values."""
    return {
        "secret": os.environ.get("HRWM_SECRET_KEY", "RahasiaPolban"),
        "qim_delta": float(os.environ.get("HRWM_QIM_DELTA", "2.0")),
        "ber_threshold": float(os.environ.get("HRWM_BER_THRESHOLD", "30.0")),
        "max_ref": float(os.environ.get("HRWM_MAX_REF", "200.0")),
        "block_length": int(os.environ.get("HRWM_BLOCK_LENGTH", "16")),
    }


_DEFAULTS = _env_defaults()

# Shared secret hashed together with the rounded trend coefficients.
SECRET_KEY: str = _DEFAULTS["secret"]

# Secret used by the wrong-key attack scenario.
FAKE_KEY: str = os.environ.get("HRWM_FAKE_KEY", "INIKUNCIPALSU")

QIM_DELTA: float = _DEFAULTS["qim_delta"]

# Blocks with a bit error rate (percent) at or below this are VALID.
BER_THRESHOLD: float = _DEFAULTS["ber_threshold"]

# Reference amplitude for PSNR; the largest plausible BPM value.
MAX_REF: float = _DEFAULTS["max_ref"]

BLOCK_LENGTH: int = _DEFAULTS["block_length"]

LOG_LEVEL: str = os.environ.get("HRWM_LOG_LEVEL", "INFO").upper()


class WatermarkConfig(BaseModel):
    """Immutable parameter set passed into every verification call."""

    model_config = ConfigDict(frozen=True)

    secret: str = SECRET_KEY
    qim_delta: float = QIM_DELTA
    ber_threshold: float = BER_THRESHOLD
    max_ref: float = MAX_REF
    block_length: int = BLOCK_LENGTH
    # Step of the robust rounding applied to trend coefficients.
    robust_step: int = 5
    # PSNR reported for an undistorted block instead of infinity.
    psnr_ceiling: float = 100.0


def load_config() -> WatermarkConfig:
    """
    Build a config from the current environment.

    Unlike the module-level constants, which are captured at import time,
    this re-reads the environment on every call.
    """
    return WatermarkConfig(**_env_defaults())

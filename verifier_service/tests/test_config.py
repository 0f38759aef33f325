import pytest
from pydantic import ValidationError

from hrwm.config import WatermarkConfig, load_config


def test_reference_defaults(monkeypatch):
    for name in ("HRWM_SECRET_KEY", "HRWM_QIM_DELTA", "HRWM_BER_THRESHOLD", "HRWM_MAX_REF", "HRWM_BLOCK_LENGTH"):
        monkeypatch.delenv(name, raising=False)

    config = load_config()

    assert config.secret == "RahasiaPolban"
    assert config.qim_delta == 2.0
    assert config.ber_threshold == 30.0
    assert config.max_ref == 200.0
    assert config.block_length == 16
    assert config.robust_step == 5
    assert config.psnr_ceiling == 100.0


def test_load_config_reads_environment(monkeypatch):
    monkeypatch.setenv("HRWM_SECRET_KEY", "other")
    monkeypatch.setenv("HRWM_QIM_DELTA", "1.5")
    monkeypatch.setenv("HRWM_BLOCK_LENGTH", "32")

    config = load_config()

    assert config.secret == "other"
    assert config.qim_delta == 1.5
    assert config.block_length == 32


def test_config_is_frozen():
    config = WatermarkConfig(secret="S")
    with pytest.raises(ValidationError):
        config.secret = "T"

    swapped = config.model_copy(update={"secret": "T"})
    assert swapped.secret == "T"
    assert config.secret == "S"


def test_module_defaults_and_loader_agree(monkeypatch):
    for name in ("HRWM_SECRET_KEY", "HRWM_QIM_DELTA", "HRWM_BER_THRESHOLD", "HRWM_MAX_REF", "HRWM_BLOCK_LENGTH"):
        monkeypatch.delenv(name, raising=False)

    assert load_config() == WatermarkConfig()

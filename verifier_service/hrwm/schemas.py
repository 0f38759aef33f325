"""
Pydantic schemas used by the FastAPI receiver.

These mirror the JSON messages the sensor gateway publishes:

- live:   {"type": "live", "value": 72.0}
- secure: {"type": "secure", "sequence": 12, "samples": [...], "raw": [...]}

Older gateways send `val`, `seq` and `data`; those names are accepted
on input as aliases.
"""

from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class LiveMessage(BaseModel):
    """Real-time BPM reading. Passed through untouched."""

    model_config = ConfigDict(allow_inf_nan=False)

    type: Literal["live"]
    value: float = Field(validation_alias=AliasChoices("value", "val"))


class SecureBlockMessage(BaseModel):
    """
    Watermarked sample block.

    - sequence: block sequence number assigned by the device
    - samples: watermarked samples (what gets verified)
    - raw: optional pre-watermark samples, for embedding distortion
    - comp_ms: optional embedding time reported by the device
    """

    model_config = ConfigDict(allow_inf_nan=False)

    type: Literal["secure"]
    sequence: int = Field(ge=0, validation_alias=AliasChoices("sequence", "seq"))
    samples: List[float] = Field(validation_alias=AliasChoices("samples", "data"))
    raw: Optional[List[float]] = None
    comp_ms: Optional[float] = Field(default=None, ge=0)


# Tagged on `type`; a message without it is rejected rather than guessed.
Message = Annotated[Union[LiveMessage, SecureBlockMessage], Field(discriminator="type")]


class DistortionResponse(BaseModel):
    """Raw-vs-watermarked distortion introduced by the embedder."""

    mse: float
    psnr: float
    max_error: float


class VerifyResponse(BaseModel):
    """
    Verdict for one secure block.

    - status: "VALID" or "INVALID"
    - bit_error_rate: percent of mismatching watermark bits
    - mean_squared_error / psnr: received vs processed distortion
    - expected_bits / extracted_bits: the two watermarks compared
    - latency_ms: receiver-side verification time
    - device_comp_ms: embedding time reported by the device, if any
    """

    type: Literal["secure"] = "secure"
    status: str
    bit_error_rate: float
    mean_squared_error: float
    psnr: float
    sequence_number: int
    expected_bits: str
    extracted_bits: str
    error_bits: int
    embedding_distortion: Optional[DistortionResponse] = None
    latency_ms: Optional[int] = None
    device_comp_ms: Optional[float] = None


class LiveResponse(BaseModel):
    type: Literal["live"] = "live"
    value: float


class ErrorResponse(BaseModel):
    detail: str
    error: str


class HealthResponse(BaseModel):
    """Simple health check response."""

    status: str

"""
FastAPI receiver for watermarked heart-rate blocks.

Endpoints:
- GET /health
- POST /verify
- POST /messages
"""

from __future__ import annotations

import logging
import time
from typing import Union

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import LOG_LEVEL, WatermarkConfig, load_config
from .errors import WatermarkError
from .schemas import (
    DistortionResponse,
    ErrorResponse,
    HealthResponse,
    LiveMessage,
    LiveResponse,
    Message,
    SecureBlockMessage,
    VerifyResponse,
)
from .watermark.metrics import compare_blocks
from .watermark.verify import verify_block

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Heart-Rate Watermark Verification Service",
    version="0.1.0",
    description="Semi-fragile watermark checks for heart-rate sample blocks.",
)

# Permissive CORS so the dashboard can call us from another origin.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Attach the verification parameters to app state for reuse.
app.state.config = load_config()


@app.exception_handler(WatermarkError)
async def watermark_error_handler(request: Request, exc: WatermarkError) -> JSONResponse:
    # Malformed blocks are a client problem, not an authenticity verdict.
    logger.error("rejected %s: %s", request.url.path, exc)
    body = ErrorResponse(detail=str(exc), error=type(exc).__name__)
    return JSONResponse(status_code=422, content=body.model_dump())


def _verify_message(msg: SecureBlockMessage, config: WatermarkConfig) -> VerifyResponse:
    start = time.perf_counter()

    # In production the processed block is the received block itself.
    result = verify_block(
        received=msg.samples,
        processed=msg.samples,
        sequence_number=msg.sequence,
        config=config,
    )

    distortion = None
    if msg.raw is not None:
        metrics = compare_blocks(msg.raw, msg.samples, config.max_ref, config.psnr_ceiling)
        distortion = DistortionResponse(
            mse=metrics.mse, psnr=metrics.psnr, max_error=metrics.max_error
        )

    latency_ms = int((time.perf_counter() - start) * 1000)

    return VerifyResponse(
        status=result.status.value,
        bit_error_rate=result.bit_error_rate,
        mean_squared_error=result.mean_squared_error,
        psnr=result.psnr,
        sequence_number=result.sequence_number,
        expected_bits=result.expected_bits,
        extracted_bits=result.extracted_bits,
        error_bits=result.error_bits,
        embedding_distortion=distortion,
        latency_ms=latency_ms,
        device_comp_ms=msg.comp_ms,
    )


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Simple health-check endpoint."""
    return HealthResponse(status="ok")


@app.post("/verify", response_model=VerifyResponse)
async def verify(req: SecureBlockMessage) -> VerifyResponse:
    """
    Verify one secure block.

    An INVALID verdict is still a 200; only malformed blocks (odd or
    mismatched lengths, NaN or infinite samples) produce 422.
    """
    return _verify_message(req, app.state.config)


@app.post("/messages", response_model=Union[VerifyResponse, LiveResponse])
async def messages(
    msg: Message,
) -> Union[VerifyResponse, LiveResponse]:
    """Route a gateway message: live readings pass through, secure blocks are verified."""
    if isinstance(msg, LiveMessage):
        return LiveResponse(value=msg.value)
    return _verify_message(msg, app.state.config)


def run() -> None:
    """
    Entrypoint for the `hrwm-service` console_script defined in
    pyproject.toml.
    """
    import uvicorn

    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(
        "hrwm.main:app",
        host="0.0.0.0",
        port=8080,
        reload=False,
    )

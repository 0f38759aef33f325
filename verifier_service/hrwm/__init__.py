"""
Top-level package for the heart-rate watermark verification engine.

The engine authenticates short blocks of heart-rate samples that were
watermarked at the source (DWT Haar + QIM + SHA-256). The pure
verification pipeline lives in `hrwm.watermark`; a small FastAPI
receiver (see `main.py`) exposes it with:

- GET /health
- POST /verify
- POST /messages
"""

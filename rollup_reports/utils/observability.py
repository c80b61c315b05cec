"""Observability helpers (correlation IDs, timing)."""
from __future__ import annotations
import time
import uuid
from typing import Mapping

REQUEST_ID_HEADER = "X-Request-ID"

def ensure_request_id(headers: Mapping[str, str]) -> str:
    return headers.get(REQUEST_ID_HEADER, None) or str(uuid.uuid4())

def elapsed_ms(start: float) -> float:
    return (time.time() - start) * 1000

__all__ = ["ensure_request_id", "elapsed_ms", "REQUEST_ID_HEADER"]

# core/config.py
# -*- coding: utf-8 -*-

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

# load .env first
load_dotenv()

# --------------------------------
# Paths / log directory
# --------------------------------

# project root
BASE_DIR = Path(__file__).resolve().parent.parent

# JSONL event log directory
LOG_DIR = Path(os.getenv("LOG_DIR") or BASE_DIR / "data" / "logs")

# --------------------------------
# Defaults
# --------------------------------

DEFAULT_TIMEOUT_S = 30.0
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024
DEFAULT_BRAIN_SCHEMA_VERSION = "auto"

ALLOWED_EXTENSIONS = (".pdf", ".txt")


def _parse_bool(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_float(value: Optional[str], default: float) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _parse_int(value: Optional[str], default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


# --------------------------------
# External services (Brain / Processor)
# --------------------------------

@dataclass(frozen=True)
class GatewayConfig:
    """
    Everything the intake pipeline needs to talk to the outside world.

    - brain_url      : classification service endpoint (empty = not configured)
    - processor_url  : downstream processing endpoint (empty = skip processor)
    - timeout_s      : per upstream call timeout
    - brain_schema_version : "auto" | "v1" | "v2"
    - max_upload_bytes : per-file upload limit
    - event_log_enabled : write JSONL diagnostic events under LOG_DIR
    """

    brain_url: str = ""
    processor_url: str = ""
    timeout_s: float = DEFAULT_TIMEOUT_S
    brain_schema_version: str = DEFAULT_BRAIN_SCHEMA_VERSION
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    event_log_enabled: bool = True


def load_gateway_config(env: Optional[Mapping[str, str]] = None) -> GatewayConfig:
    """Build a GatewayConfig from environment variables.

    ``env`` can be passed explicitly (tests); otherwise os.environ is used.
    """
    environment = env if env is not None else os.environ

    timeout_s = _parse_float(environment.get("UPSTREAM_TIMEOUT_S"), DEFAULT_TIMEOUT_S)
    if timeout_s <= 0:
        timeout_s = DEFAULT_TIMEOUT_S

    version = (environment.get("BRAIN_SCHEMA_VERSION") or DEFAULT_BRAIN_SCHEMA_VERSION).strip().lower()
    if version not in ("auto", "v1", "v2"):
        version = DEFAULT_BRAIN_SCHEMA_VERSION

    return GatewayConfig(
        brain_url=(environment.get("BRAIN_URL") or "").strip(),
        processor_url=(environment.get("PROCESSOR_URL") or "").strip(),
        timeout_s=timeout_s,
        brain_schema_version=version,
        max_upload_bytes=_parse_int(
            environment.get("MAX_UPLOAD_BYTES"), DEFAULT_MAX_UPLOAD_BYTES
        ),
        event_log_enabled=_parse_bool(environment.get("EVENT_LOG_ENABLED"), True),
    )

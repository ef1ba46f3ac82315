# core/logging.py
# -*- coding: utf-8 -*-

import sys
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict

from .config import LOG_DIR

# ------------------------------------------------
# terminal logger
# ------------------------------------------------
logger = logging.getLogger("brief_intake")
logger.setLevel(logging.DEBUG)

if not logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        "[%(asctime)s] [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_event(run_id: str, payload: Dict[str, Any], enabled: bool = True) -> None:
    """
    Append one diagnostic record to LOG_DIR/<run_id>.jsonl.
    One line per event; nothing here is ever read back by the gateway.
    """
    if not enabled:
        return

    ts = datetime.now(timezone.utc).isoformat()
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    log_path = LOG_DIR / f"{run_id}.jsonl"

    record = {
        "timestamp": ts,
        "run_id": run_id,
        **payload,
    }

    try:
        with log_path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False, default=str) + "\n")
    except OSError as e:
        logger.warning(f"event log write failed ({log_path}): {e}")

# services/upstream.py
# -*- coding: utf-8 -*-
"""
HTTP calls to the two external services.

- call_brain(client, url, request_text):
    POST {"request_text": ...}  ->  Brain output (dict)
- call_processor(client, url, intent_object):
    POST {"intent_object": {...}}  ->  processing result (dict)

Any non-2xx answer, transport error, timeout or non-JSON body raises
UpstreamCallFailed with the upstream status and body in the message.
No retries.
"""

from typing import Any, Dict

import httpx

from core.logging import logger
from engine.schemas import IntentObject

from .errors import UpstreamCallFailed

# canonical Processor request wrapper
PROCESSOR_BODY_KEY = "intent_object"

BODY_PREVIEW_CHARS = 500


async def _post_json(
    client: httpx.AsyncClient,
    service: str,
    url: str,
    payload: Dict[str, Any],
) -> Any:
    if not url:
        raise UpstreamCallFailed(service, f"{service} endpoint is not configured")

    try:
        res = await client.post(url, json=payload)
    except httpx.TimeoutException as e:
        logger.error(f"❌ [{service}] timeout: {url}")
        raise UpstreamCallFailed(service, f"{service} call timed out: {e}") from e
    except httpx.HTTPError as e:
        logger.error(f"❌ [{service}] transport error: {e}")
        raise UpstreamCallFailed(service, f"{service} call failed: {e}") from e

    if not res.is_success:
        body = res.text
        logger.error(f"❌ [{service}] call failed: {res.status_code} - {body[:BODY_PREVIEW_CHARS]}")
        raise UpstreamCallFailed(
            service,
            f"{service} call failed ({res.status_code}): {body}",
            status_code=res.status_code,
            body=body,
        )

    try:
        return res.json()
    except ValueError as e:
        raise UpstreamCallFailed(
            service,
            f"{service} returned non-JSON body: {res.text[:BODY_PREVIEW_CHARS]}",
            status_code=res.status_code,
            body=res.text,
        ) from e


async def call_brain(client: httpx.AsyncClient, url: str, request_text: str) -> Dict[str, Any]:
    """Send the extracted brief text to the Brain and return its output object."""
    data = await _post_json(client, "Brain", url, {"request_text": request_text})

    if not isinstance(data, dict):
        raise UpstreamCallFailed("Brain", f"Brain returned {type(data).__name__}, expected an object")

    logger.info("✅ [Brain] classification received")
    return data


async def call_processor(client: httpx.AsyncClient, url: str, intent_object: IntentObject) -> Any:
    """Send an adapted intent object to the Processor and return its result."""
    data = await _post_json(
        client,
        "Processor",
        url,
        {PROCESSOR_BODY_KEY: intent_object.to_json()},
    )
    logger.info("✅ [Processor] processing result received")
    return data

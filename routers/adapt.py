# routers/adapt.py
from typing import Any, Dict, Literal

from fastapi import APIRouter, Body, Query

from core.logging import logger
from engine import adapt

router = APIRouter(tags=["engine"])


@router.post(
    "/api/adapt",
    summary="Brain output -> intent object (no Processor call)",
)
def adapt_brain_output(
    payload: Any = Body(default=None),
    version: Literal["auto", "v1", "v2"] = Query(
        default="auto",
        description="Brain schema version of the payload. auto detects it.",
    ),
) -> Dict[str, Any]:
    # adapt() is total: a missing or non-object body yields the default intent object
    intent_object = adapt(payload, version)
    logger.info(
        f"[adapt] version={version} scope={intent_object.intent.what.scope_class} "
        f"run_id={intent_object.meta.run_id}"
    )
    return intent_object.to_json()

# routers/orchestrate.py
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body
from pydantic import BaseModel, Field

from core.logging import logger
from engine import classify_scope, decide

router = APIRouter(tags=["engine"])

# wrappers older clients put around the intent object
INTENT_WRAPPER_KEYS = ("intent_object", "intentObject")


def unwrap_intent_object(payload: Any) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        return {}
    for key in INTENT_WRAPPER_KEYS:
        inner = payload.get(key)
        if isinstance(inner, dict):
            return inner
    return payload


@router.post(
    "/api/orchestrate",
    summary="Routing verdict for an intent object",
)
def orchestrate(payload: Any = Body(default=None)) -> Dict[str, Any]:
    """
    - blocked : {status, reason, questions}
    - routed  : {status, route, escalation}
    """
    decision = decide(unwrap_intent_object(payload))
    logger.info(f"[orchestrate] {decision.status} route={decision.route}")
    return decision.to_json()


class ScopeRequest(BaseModel):
    routing: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Brain routing block ({recommendation, flags})",
        examples=[{"recommendation": "creative", "flags": []}],
    )
    project_type: Optional[Any] = Field(
        default=None,
        description="Bare project type string or {primary: ...}",
        examples=["pickup_outdated_brand"],
    )


@router.post(
    "/api/classify-scope",
    summary="Workflow scope for a routing block + project type",
)
def classify(body: ScopeRequest) -> Dict[str, str]:
    return {"scope_class": classify_scope(body.routing, body.project_type)}

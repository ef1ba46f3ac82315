# -*- coding: utf-8 -*-
"""
engine.adapter

Brain output -> IntentObject (the schema the Processor expects).

Main entry point
----------------
- adapt(payload, version="auto"):
    Never raises. Missing or malformed fields resolve to defaults, so every
    call returns a complete IntentObject with is_valid=True.

Versions
--------
- "v2": flat Brain output (request_summary, routing, project_type, ...)
        resolved field by field through the fallback chains below.
- "v1": the Brain already answers in the IntentObject shape; it is only
        validated and completed.
- "auto": detect_version(payload) picks one of the two.

Only meta.generated_at and the fallback meta.run_id change between two calls
on the same payload.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError

from core.logging import logger

from .classifier import classify_scope
from .schemas import (
    DEFAULT_CONFIDENCE,
    SCHEMA_VERSION,
    BrainDeliverable,
    BrainOutputV2,
    BrainProjectType,
    BrainSchemaVersion,
    IntentObject,
)
from .utils_text import contains_any, first_present, normalize, stringify

DEFAULT_PROPERTY = "unknown"
DEFAULT_DELIVERABLE_NAME = "Unknown"
DEFAULT_QTY = 1

URGENT_WORDS = {"high", "urgent", "rush", "asap"}
RUSH_FLAG = "rush"
MULTI_PROPERTY_FLAG = "multi_property"


# ------------------------------------------------------------
# 1. meta helpers (the only non-deterministic fields)
# ------------------------------------------------------------

def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _fallback_run_id() -> str:
    return f"run_{int(time.time() * 1000)}"


# ------------------------------------------------------------
# 2. field resolution (v2)
# ------------------------------------------------------------

def resolve_property(brain: BrainOutputV2) -> str:
    prop = brain.property
    if isinstance(prop, str):
        return prop
    if prop is None:
        return DEFAULT_PROPERTY
    return first_present(prop.id, prop.name) or DEFAULT_PROPERTY


def resolve_confidence(brain: BrainOutputV2) -> float:
    value = first_present(brain.routing.confidence, brain.run_metadata.confidence)
    return DEFAULT_CONFIDENCE if value is None else value


def project_type_text(brain: BrainOutputV2) -> str:
    """project_type as a string: bare strings as-is, objects as JSON."""
    project_type = brain.project_type
    if isinstance(project_type, BrainProjectType):
        return stringify(project_type.model_dump(exclude_none=True))
    return stringify(project_type)


def resolve_novelty(brain: BrainOutputV2) -> str:
    text = project_type_text(brain).lower()
    if "net_new" in text:
        return "net_new"
    if "pickup" in text:
        return "pickup"
    return "derivative"


def resolve_rework_risk(brain: BrainOutputV2) -> str:
    if normalize(brain.routing.recommendation) == "creative":
        return "high"
    return "low"


def _normalized_flags(brain: BrainOutputV2) -> List[str]:
    return [normalize(flag) for flag in brain.routing.flags]


def resolve_coordination_cost(brain: BrainOutputV2) -> str:
    if MULTI_PROPERTY_FLAG in _normalized_flags(brain):
        return "high"
    return "low"


def resolve_speed_sensitivity(brain: BrainOutputV2) -> str:
    urgency = normalize(brain.timeline.urgency)
    if contains_any(urgency, URGENT_WORDS) or RUSH_FLAG in _normalized_flags(brain):
        return "high"
    return "low"


def question_text(item: Any) -> str:
    """A clarification as a human-readable question."""
    if isinstance(item, str):
        return item
    if isinstance(item, dict):
        found = first_present(item.get("item"), item.get("question"))
        if isinstance(found, str):
            return found
    return stringify(item)


def map_deliverable(item: BrainDeliverable) -> Dict[str, Any]:
    """{type, format, quantity} (or their aliases) -> {deliverable_name, format_hint, qty}."""
    name = first_present(item.type, item.name, item.deliverable_name)
    fmt = first_present(item.format, item.format_hint)
    qty = first_present(item.quantity, item.qty)
    return {
        "deliverable_name": name or DEFAULT_DELIVERABLE_NAME,
        "format_hint": fmt or "",
        "qty": DEFAULT_QTY if qty is None else qty,
    }


def adapt_v2(payload: Any) -> IntentObject:
    """Flat Brain v2 output -> IntentObject."""
    brain = _validate_brain_output(payload)

    confidence = resolve_confidence(brain)
    questions = [question_text(item) for item in brain.clarifications_needed]
    request_text = brain.request_summary or ""

    intent_dict = {
        "meta": {
            "schema_version": SCHEMA_VERSION,
            "brain_version": first_present(brain.run_metadata.model, "v2"),
            "generated_at": _now_iso(),
            "run_id": first_present(brain.run_metadata.run_id) or _fallback_run_id(),
        },
        "input": {
            "request_text": request_text,
            "property": resolve_property(brain),
            "channel_hint": brain.channels[0] if brain.channels else "",
            "due_date": brain.timeline.due_date or "",
            "attachments": [],
        },
        "intent": {
            "why": {
                "stated": request_text,
                "inferred": first_present(brain.content.campaign_purpose, brain.request_summary) or "",
                "confidence": confidence,
            },
            "who": {
                "segments": list(brain.content.audience),
                "posture": "",
                "confidence": confidence,
            },
            "what": {
                "scope_class": classify_scope(brain.routing, brain.project_type),
                "novelty": resolve_novelty(brain),
                "deliverables": [map_deliverable(d) for d in brain.deliverables],
                "confidence": confidence,
            },
            "where": {
                "channels": list(brain.channels),
                "constraints": [],
                "confidence": confidence,
            },
            "how_hard": {
                "speed_sensitivity": resolve_speed_sensitivity(brain),
                "rework_risk": resolve_rework_risk(brain),
                "coordination_cost": resolve_coordination_cost(brain),
                "confidence": confidence,
            },
            "overall_confidence": confidence,
        },
        "uncertainty": {
            "assumptions": [],
            "missing_info": [],
            "flags": list(brain.routing.flags),
            "human_confirmation_required": len(brain.clarifications_needed) > 0,
            "questions_for_humans": questions,
        },
        "sources": {
            "source_refs_used": [],
            "citations": [],
        },
        "is_valid": True,
        "validation_errors": [],
    }

    return IntentObject.model_validate(intent_dict)


def _validate_brain_output(payload: Any) -> BrainOutputV2:
    if isinstance(payload, BrainOutputV2):
        return payload
    try:
        return BrainOutputV2.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"[adapter] Brain output could not be read, using defaults: {e}")
        return BrainOutputV2()


# ------------------------------------------------------------
# 3. v1 (already intent-shaped)
# ------------------------------------------------------------

def adapt_v1(payload: Any) -> IntentObject:
    """Intent-shaped Brain output -> validated, completed IntentObject."""
    if isinstance(payload, IntentObject):
        obj = payload
    else:
        try:
            obj = IntentObject.model_validate(payload)
        except ValidationError as e:
            logger.warning(f"[adapter] v1 payload rejected, falling back to v2: {e}")
            return adapt_v2(payload)

    meta = obj.meta.model_copy(
        update={
            "brain_version": obj.meta.brain_version or "v1",
            "generated_at": obj.meta.generated_at or _now_iso(),
            "run_id": obj.meta.run_id or _fallback_run_id(),
        }
    )
    return obj.model_copy(update={"meta": meta, "is_valid": True, "validation_errors": []})


# ------------------------------------------------------------
# 4. version dispatch
# ------------------------------------------------------------

ADAPTERS: Dict[str, Callable[[Any], IntentObject]] = {
    "v1": adapt_v1,
    "v2": adapt_v2,
}


def detect_version(payload: Any) -> BrainSchemaVersion:
    """v1 when the payload already has `intent` and `uncertainty` objects."""
    if isinstance(payload, IntentObject):
        return "v1"
    if isinstance(payload, dict):
        if isinstance(payload.get("intent"), dict) and isinstance(payload.get("uncertainty"), dict):
            return "v1"
    return "v2"


def adapt(payload: Any, version: Optional[str] = "auto") -> IntentObject:
    """Adapt a Brain payload of the given schema version ("auto" detects it)."""
    tag = normalize(version) or "auto"
    if tag == "auto":
        tag = detect_version(payload)

    adapter = ADAPTERS.get(tag)
    if adapter is None:
        logger.warning(f"[adapter] unknown Brain schema version '{version}', using v2")
        adapter = adapt_v2

    return adapter(payload)

# -*- coding: utf-8 -*-
"""
engine.routing

Routing verdict for an already adapted intent object.

- decide(intent_object):
    blocked : uncertainty.human_confirmation_required is set.
              The caller must not send the brief to the Processor.
    routed  : route from the brief's scope_class, escalation when
              how_hard.speed_sensitivity is "high".

Each call is a fresh evaluation; nothing is remembered between calls.
"""

from __future__ import annotations

from typing import Any, Dict

from .schemas import IntentObject, Route, RoutingDecision
from .utils_text import as_flag, as_text_list

BLOCKED_REASON = "Human confirmation required"

# The workflow scopes produced by engine.classifier are the primary keys.
# "production" / "concept" come from older intent objects and stay routable.
ROUTE_BY_SCOPE: Dict[str, Route] = {
    "quick_turn": "studio_direct",
    "concepting": "creative_review",
    "adaptation": "creative_review",
    # legacy
    "production": "studio_direct",
    "concept": "creative_review",
}


def _get(source: Any, *path: str) -> Any:
    """Walk nested mappings; any missing step yields None."""
    current = source
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def route_for_scope(scope_class: Any) -> Route:
    if not isinstance(scope_class, str):
        return "unknown"
    return ROUTE_BY_SCOPE.get(scope_class, "unknown")


def decide(intent_object: Any) -> RoutingDecision:
    """IntentObject (or any partial mapping of one) -> RoutingDecision."""
    if isinstance(intent_object, IntentObject):
        data = intent_object.model_dump()
    elif isinstance(intent_object, dict):
        data = intent_object
    else:
        data = {}

    # hard stop
    if as_flag(_get(data, "uncertainty", "human_confirmation_required")):
        return RoutingDecision(
            status="blocked",
            reason=BLOCKED_REASON,
            questions=as_text_list(_get(data, "uncertainty", "questions_for_humans")),
        )

    route = route_for_scope(_get(data, "intent", "what", "scope_class"))
    escalation = _get(data, "intent", "how_hard", "speed_sensitivity") == "high"

    return RoutingDecision(status="routed", route=route, escalation=escalation)

# engine/classifier.py
# -*- coding: utf-8 -*-
"""
Workflow scope classification.

Role
----
- classify_scope(routing, project_type):
    Decide how much creative work a brief needs before production:
    concepting / adaptation / quick_turn.
- pickup-outdated-brand briefs are pinned to adaptation no matter what the
  Brain's router recommended; a stale brand refresh always starts from the
  existing concept.

Notes
-----
- Only the workflow scope is decided here.
  Novelty, rework risk, coordination cost and escalation are resolved in
  engine.adapter / engine.routing.
"""

from __future__ import annotations

from typing import Any, Optional

from .schemas import WorkflowScope
from .utils_text import normalize

# ------------------------------------------------------------
# 1. project types / recommendations
# ------------------------------------------------------------

# work that needs a fresh creative idea
CONCEPTING_PROJECT_TYPES = {
    "net_new_creative",
    "logo_identity",
}

PINNED_ADAPTATION_PROJECT_TYPES = {
    "pickup_outdated_brand",
}

ADAPTATION_PROJECT_TYPES = PINNED_ADAPTATION_PROJECT_TYPES | {
    "two_stage",
}

REC_CONCEPTING = "concepting"
REC_TWO_STAGE = "two_stage"
REC_CREATIVE = "creative"


def _field(source: Any, name: str) -> Any:
    """Read `name` from a mapping or an object (pydantic model)."""
    if source is None:
        return None
    if isinstance(source, dict):
        return source.get(name)
    return getattr(source, name, None)


def primary_project_type(project_type: Any) -> str:
    """Normalized primary project type from a bare string or a {primary} object."""
    if isinstance(project_type, str):
        return normalize(project_type)
    return normalize(_field(project_type, "primary"))


def recommendation_of(routing: Any) -> str:
    return normalize(_field(routing, "recommendation"))


# ------------------------------------------------------------
# 2. main classification
# ------------------------------------------------------------

def classify_scope(routing: Any, project_type: Optional[Any]) -> WorkflowScope:
    """Classify a brief into a workflow scope.

    Order (first match wins)
    ------------------------
    1) concepting : primary is net_new_creative / logo_identity,
                    or the recommendation is "concepting"
    2) adaptation : primary is pickup_outdated_brand (pinned) or two_stage,
                    or the recommendation is "two_stage",
                    or the recommendation is "creative" (rule 1 already
                    took net_new_creative / logo_identity)
    3) quick_turn : everything else (templated / studio-direct execution)

    pickup_outdated_brand is checked before rule 1 so that no recommendation
    can move it out of adaptation.

    Both inputs are compared lower-cased.
    """
    primary = primary_project_type(project_type)
    recommendation = recommendation_of(routing)

    # pinned: overrides any recommendation, "concepting" included
    if primary in PINNED_ADAPTATION_PROJECT_TYPES:
        return "adaptation"

    # 1) fresh idea needed
    if primary in CONCEPTING_PROJECT_TYPES or recommendation == REC_CONCEPTING:
        return "concepting"

    # 2) creative judgment on an existing concept
    if primary in ADAPTATION_PROJECT_TYPES:
        return "adaptation"

    if recommendation == REC_TWO_STAGE:
        return "adaptation"

    if recommendation == REC_CREATIVE and primary not in CONCEPTING_PROJECT_TYPES:
        return "adaptation"

    # 3) default
    return "quick_turn"

# -*- coding: utf-8 -*-
"""
engine.schemas

Data contracts for the intake engine.

- BrainOutputV2 : what the Brain service returns (flat, loosely typed).
                  Every field is optional and malformed values are dropped
                  instead of rejected, so validation never fails.
- IntentObject  : the canonical nested schema the Processor expects.
                  Frozen once built.
- RoutingDecision : verdict produced by engine.routing.decide.

Type aliases
------------
- WorkflowScope      : "concepting" | "adaptation" | "quick_turn"
- BrainSchemaVersion : "v1" | "v2"
"""

from __future__ import annotations

import math
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

from .utils_text import as_flag, as_str_list, as_text_list

WorkflowScope = Literal["concepting", "adaptation", "quick_turn"]
BrainSchemaVersion = Literal["v1", "v2"]
RoutingStatus = Literal["blocked", "routed"]
Route = Literal["studio_direct", "creative_review", "unknown"]

SCHEMA_VERSION = "1.0"
DEFAULT_CONFIDENCE = 0.85


# ------------------------------------------------------------
# 1. lenient field types
# ------------------------------------------------------------

def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _str_or_none(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    if _is_number(value):
        return str(value)
    return None


def _number_or_none(value: Any) -> Optional[float]:
    if _is_number(value):
        # ints beyond float range raise OverflowError here
        try:
            finite = math.isfinite(value)
        except OverflowError:
            return None
        return value if finite else None
    if isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            return None
        return parsed if math.isfinite(parsed) else None
    return None


def _list_or_empty(value: Any) -> list:
    return value if isinstance(value, list) else []


def _str_or_mapping(value: Any) -> Any:
    if isinstance(value, (str, dict)):
        return value
    if isinstance(value, BaseModel):
        return value
    return None


def _text(value: Any) -> str:
    return _str_or_none(value) or ""


def _confidence(value: Any) -> float:
    number = _number_or_none(value)
    return DEFAULT_CONFIDENCE if number is None else number


def _quantity(value: Any) -> Union[int, float]:
    number = _number_or_none(value)
    if number is None:
        return 1
    if float(number).is_integer():
        return int(number)
    return number


LenientStr = Annotated[Optional[str], BeforeValidator(_str_or_none)]
LenientNumber = Annotated[Optional[float], BeforeValidator(_number_or_none)]
StrList = Annotated[List[str], BeforeValidator(as_str_list)]
# positional lists: every item kept, non-strings stringified
TextList = Annotated[List[str], BeforeValidator(as_text_list)]

Text = Annotated[str, BeforeValidator(_text)]
Confidence = Annotated[float, BeforeValidator(_confidence)]
Quantity = Annotated[Union[int, float], BeforeValidator(_quantity)]
Flag = Annotated[bool, BeforeValidator(as_flag)]


class _Lenient(BaseModel):
    """Base for loosely-typed payload sections: a non-mapping becomes {}."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _mapping_only(cls, data: Any) -> Any:
        if isinstance(data, BaseModel):
            return data
        if not isinstance(data, dict):
            return {}
        return data


# ------------------------------------------------------------
# 2. Brain output (v2)
# ------------------------------------------------------------

class BrainDeliverable(_Lenient):
    type: LenientStr = None
    name: LenientStr = None
    deliverable_name: LenientStr = None
    format: LenientStr = None
    format_hint: LenientStr = None
    quantity: LenientNumber = None
    qty: LenientNumber = None


class BrainRouting(_Lenient):
    recommendation: LenientStr = None
    confidence: LenientNumber = None
    flags: StrList = Field(default_factory=list)


class BrainProjectType(_Lenient):
    # extra keys are kept so the stringified form matches what the Brain sent
    model_config = ConfigDict(extra="allow")

    primary: LenientStr = None


class BrainContent(_Lenient):
    campaign_purpose: LenientStr = None
    audience: StrList = Field(default_factory=list)


class BrainTimeline(_Lenient):
    due_date: LenientStr = None
    urgency: LenientStr = None


class BrainProperty(_Lenient):
    id: LenientStr = None
    name: LenientStr = None


class BrainMetadata(_Lenient):
    confidence: LenientNumber = None
    run_id: LenientStr = None
    model: LenientStr = None


class BrainOutputV2(_Lenient):
    """Flat Brain v2 output. Unknown keys are ignored."""

    request_summary: LenientStr = None
    deliverables: Annotated[List[BrainDeliverable], BeforeValidator(_list_or_empty)] = Field(
        default_factory=list
    )
    clarifications_needed: Annotated[List[Any], BeforeValidator(_list_or_empty)] = Field(
        default_factory=list
    )
    routing: BrainRouting = Field(default_factory=BrainRouting)
    project_type: Annotated[
        Optional[Union[str, BrainProjectType]], BeforeValidator(_str_or_mapping)
    ] = None
    content: BrainContent = Field(default_factory=BrainContent)
    channels: TextList = Field(default_factory=list)
    timeline: BrainTimeline = Field(default_factory=BrainTimeline)
    property: Annotated[
        Optional[Union[str, BrainProperty]], BeforeValidator(_str_or_mapping)
    ] = None
    run_metadata: BrainMetadata = Field(default_factory=BrainMetadata, alias="_metadata")


# ------------------------------------------------------------
# 3. Intent object (Processor input)
# ------------------------------------------------------------

class _Section(_Lenient):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class Meta(_Section):
    schema_version: Text = SCHEMA_VERSION
    brain_version: Text = ""
    generated_at: Text = ""
    run_id: Text = ""


class IntentInput(_Section):
    request_text: Text = ""
    property: Text = "unknown"
    channel_hint: Text = ""
    due_date: Text = ""
    attachments: Annotated[List[Any], BeforeValidator(_list_or_empty)] = Field(
        default_factory=list
    )


class Why(_Section):
    stated: Text = ""
    inferred: Text = ""
    confidence: Confidence = DEFAULT_CONFIDENCE


class Who(_Section):
    segments: StrList = Field(default_factory=list)
    posture: Text = ""
    confidence: Confidence = DEFAULT_CONFIDENCE


class IntentDeliverable(_Section):
    deliverable_name: Text = "Unknown"
    format_hint: Text = ""
    qty: Quantity = 1


class What(_Section):
    # str rather than WorkflowScope: v1 objects may still carry legacy values
    scope_class: Text = "quick_turn"
    novelty: Text = "derivative"
    deliverables: Annotated[List[IntentDeliverable], BeforeValidator(_list_or_empty)] = Field(
        default_factory=list
    )
    confidence: Confidence = DEFAULT_CONFIDENCE


class Where(_Section):
    channels: TextList = Field(default_factory=list)
    constraints: StrList = Field(default_factory=list)
    confidence: Confidence = DEFAULT_CONFIDENCE


class HowHard(_Section):
    speed_sensitivity: Text = "low"
    rework_risk: Text = "low"
    coordination_cost: Text = "low"
    confidence: Confidence = DEFAULT_CONFIDENCE


class Intent(_Section):
    why: Why = Field(default_factory=Why)
    who: Who = Field(default_factory=Who)
    what: What = Field(default_factory=What)
    where: Where = Field(default_factory=Where)
    how_hard: HowHard = Field(default_factory=HowHard)
    overall_confidence: Confidence = DEFAULT_CONFIDENCE


class Uncertainty(_Section):
    assumptions: StrList = Field(default_factory=list)
    missing_info: StrList = Field(default_factory=list)
    flags: StrList = Field(default_factory=list)
    human_confirmation_required: Flag = False
    questions_for_humans: TextList = Field(default_factory=list)


class Sources(_Section):
    source_refs_used: Annotated[List[Any], BeforeValidator(_list_or_empty)] = Field(
        default_factory=list
    )
    citations: Annotated[List[Any], BeforeValidator(_list_or_empty)] = Field(
        default_factory=list
    )


class IntentObject(_Section):
    """Canonical intent object. Built once per brief, never mutated."""

    meta: Meta = Field(default_factory=Meta)
    input: IntentInput = Field(default_factory=IntentInput)
    intent: Intent = Field(default_factory=Intent)
    uncertainty: Uncertainty = Field(default_factory=Uncertainty)
    sources: Sources = Field(default_factory=Sources)
    is_valid: bool = True
    validation_errors: List[str] = Field(default_factory=list)

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


# ------------------------------------------------------------
# 4. Routing decision
# ------------------------------------------------------------

class RoutingDecision(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: RoutingStatus
    route: Optional[Route] = None
    escalation: Optional[bool] = None
    reason: Optional[str] = None
    questions: Optional[List[str]] = None

    def to_json(self) -> Dict[str, Any]:
        """JSON form without the keys that do not apply to this status."""
        return self.model_dump(mode="json", exclude_none=True)

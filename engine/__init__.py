# -*- coding: utf-8 -*-
"""
engine package

Core logic of the creative-brief intake gateway. Everything here is pure:
no I/O, no network, safe to call from any number of concurrent tasks.

Callers (services/, routers/) normally only need:

- adapt(payload, version):
    Brain output -> IntentObject for the Processor.
- classify_scope(routing, project_type):
    concepting / adaptation / quick_turn.
- decide(intent_object):
    blocked / routed verdict with route and escalation.

Modules

- utils_text  : normalisation and fallback helpers
- schemas     : BrainOutputV2 / IntentObject / RoutingDecision models
- classifier  : workflow scope rules
- adapter     : field resolution + Brain schema version dispatch
- routing     : routing verdict
"""

from .adapter import ADAPTERS, adapt, adapt_v1, adapt_v2, detect_version
from .classifier import classify_scope
from .routing import ROUTE_BY_SCOPE, decide
from .schemas import (
    BrainOutputV2,
    BrainSchemaVersion,
    IntentObject,
    RoutingDecision,
    WorkflowScope,
)

__all__ = [
    "ADAPTERS",
    "ROUTE_BY_SCOPE",
    "BrainOutputV2",
    "BrainSchemaVersion",
    "IntentObject",
    "RoutingDecision",
    "WorkflowScope",
    "adapt",
    "adapt_v1",
    "adapt_v2",
    "classify_scope",
    "decide",
    "detect_version",
]

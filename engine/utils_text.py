# -*- coding: utf-8 -*-
"""
engine.utils_text

Small helpers shared by the engine modules.

Role
----
- normalize(value): lower-case + strip for case-insensitive comparisons
- contains_any(text, keywords): True when any keyword occurs in text
- first_present(*values): first value that is not None / empty string
- stringify(value): str for strings, compact JSON for anything else
- as_str_list(value): keep only the string items of a list
- as_text_list(value): every item of a list as a string, positions kept
- as_flag(value): loose boolean for flags coming from JSON

Only the engine package uses these.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, List


# ------------------------------------------------------------
# 1. normalisation
# ------------------------------------------------------------

def normalize(value: Any) -> str:
    """Lower-cased, stripped text. None and non-strings become ""."""
    if not isinstance(value, str):
        return ""
    return value.strip().lower()


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    """
    True when any keyword is a substring of text.
    text is expected to be normalized already.
    """
    if not text:
        return False

    return any(kw in text for kw in keywords)


# ------------------------------------------------------------
# 2. fallback chains
# ------------------------------------------------------------

def first_present(*values: Any) -> Any:
    """
    Return the first value that is neither None nor an empty string.
    Returns None when every candidate is missing.

    0 and False count as present: a confidence of 0.0 is a real value.
    """
    for value in values:
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return None


def stringify(value: Any) -> str:
    """str as-is, everything else as compact JSON (None -> "")."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value, ensure_ascii=False, sort_keys=True, default=str)
    except (TypeError, ValueError):
        return str(value)


def as_str_list(value: Any) -> List[str]:
    """Keep the non-empty string items of a list; anything else -> []."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str) and item.strip()]


def as_text_list(value: Any) -> List[str]:
    """Every list item as text (stringify), blanks included; anything else -> []."""
    if not isinstance(value, list):
        return []
    return [stringify(item) for item in value]


def as_flag(value: Any) -> bool:
    """
    Loose boolean: real bools as-is, "true"/"yes"/"1"/"on" strings,
    non-zero numbers. Everything else is False.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"true", "yes", "1", "on"}
    if isinstance(value, (int, float)):
        return value != 0
    return False

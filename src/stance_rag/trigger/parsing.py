# src/stance_rag/trigger/parsing.py
"""Lenient parsing of trigger-classifier model output.

Stages, in order:
  1. strict JSON: extract a JSON object and validate it as TriggerVerdict
  2. substring heuristic: a ``"shouldTrigger": true|false`` fragment, or a
     lone bare ``true``/``false`` token
Both failing yields None; the classifier then falls back to keyword rules.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

ParseStage = Literal["json", "substring"]

_FENCED_JSON_RE = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL | re.IGNORECASE)
_KEY_VALUE_RE = re.compile(r'"?shouldTrigger"?\s*:\s*"?(true|false)\b', re.IGNORECASE)
_TRUE_RE = re.compile(r"\btrue\b", re.IGNORECASE)
_FALSE_RE = re.compile(r"\bfalse\b", re.IGNORECASE)


class TriggerVerdict(BaseModel):
    """Expected classifier output: ``{"shouldTrigger": bool, "reason": str}``."""

    model_config = ConfigDict(populate_by_name=True)

    should_trigger: bool = Field(..., alias="shouldTrigger", strict=True)
    reason: str = ""


class ParsedVerdict(BaseModel):
    should_trigger: bool
    reason: str = ""
    stage: ParseStage


def _extract_json_object(text: str) -> Optional[str]:
    fenced = _FENCED_JSON_RE.search(text)
    if fenced:
        return fenced.group(1)

    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    for i in range(start, len(text)):
        c = text[i]
        if c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
            if depth == 0:
                return text[start : i + 1]
    return None


def parse_json_verdict(text: str) -> Optional[TriggerVerdict]:
    candidate = _extract_json_object(text)
    if candidate is None:
        return None
    try:
        return TriggerVerdict.model_validate(json.loads(candidate))
    except (json.JSONDecodeError, ValidationError) as e:
        logger.debug(f"Trigger output is not a valid verdict object: {e}")
        return None


def parse_substring_verdict(text: str) -> Optional[bool]:
    kv = _KEY_VALUE_RE.search(text)
    if kv:
        return kv.group(1).lower() == "true"

    has_true = bool(_TRUE_RE.search(text))
    has_false = bool(_FALSE_RE.search(text))
    if has_true != has_false:
        return has_true
    # Neither or both: ambiguous
    return None


def parse_trigger_response(text: str) -> Optional[ParsedVerdict]:
    content = (text or "").strip()
    if not content:
        return None

    verdict = parse_json_verdict(content)
    if verdict is not None:
        return ParsedVerdict(should_trigger=verdict.should_trigger, reason=verdict.reason, stage="json")

    loose = parse_substring_verdict(content)
    if loose is not None:
        return ParsedVerdict(should_trigger=loose, stage="substring")

    return None

"""Turn backend text into an ApplicationPlan, with a local fallback that can't fail.

Two stages, both returning values rather than raising:

1. ``extract_plan`` tries each JSON object found in free text (fenced
   ```json blocks first, then other fences, then bare objects) and keeps the
   first one that validates. It returns either an ``ApplicationPlan`` or a
   ``PlanExtractionError``.
2. ``heuristic_plan`` picks a keyword-triggered template. Always succeeds.
"""

import json
import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Literal

from pydantic import ValidationError

from ide_assistant.logging_config import get_logger
from ide_assistant.schemas.pipeline import ApplicationPlan, UserIntent
from ide_assistant.templates.plan_templates import APP_TYPE_LABELS, DEFAULT_PLAN, PLAN_TEMPLATES

logger = get_logger(__name__)

_CODE_FENCE = re.compile(r"```([\w+-]*)[^\S\n]*\n?([\s\S]*?)```")
_DECODER = json.JSONDecoder()

PlanSource = Literal["backend", "heuristic"]


@dataclass(frozen=True)
class PlanExtractionError:
    reason: str


def _json_objects(text: str) -> Iterator[dict]:
    """Every top-level JSON object embedded in text, left to right."""
    pos = text.find("{")
    while pos != -1:
        try:
            data, end = _DECODER.raw_decode(text, pos)
        except json.JSONDecodeError:
            pos = text.find("{", pos + 1)
            continue
        if isinstance(data, dict):
            yield data
        pos = text.find("{", end)


def _candidate_objects(content: str) -> Iterator[dict]:
    # ```json fences first, then any other fence, then objects anywhere in the text
    blocks = [(lang.lower(), body) for lang, body in _CODE_FENCE.findall(content)]
    for body in [b for lang, b in blocks if lang == "json"] + [b for lang, b in blocks if lang != "json"]:
        yield from _json_objects(body)
    yield from _json_objects(content)


def extract_plan(content: str | None) -> ApplicationPlan | PlanExtractionError:
    if not content or not content.strip():
        return PlanExtractionError("no backend content")

    error = PlanExtractionError("no JSON object found")
    for data in _candidate_objects(content):
        try:
            return ApplicationPlan.model_validate(data)
        except ValidationError as e:
            error = PlanExtractionError(f"invalid plan structure: {e.error_count()} error(s)")
    return error


def heuristic_plan(intent: UserIntent) -> ApplicationPlan:
    text = intent.description.lower()
    for keywords, app_types, template in PLAN_TEMPLATES:
        if any(k in text for k in keywords) or intent.app_type in app_types:
            return ApplicationPlan.model_validate(template)

    plan = dict(DEFAULT_PLAN)
    if intent.app_type in APP_TYPE_LABELS:
        plan["type"] = APP_TYPE_LABELS[intent.app_type]
    return ApplicationPlan.model_validate(plan)


def synthesize_plan_with_source(raw: str | None, intent: UserIntent) -> tuple[ApplicationPlan, PlanSource]:
    extracted = extract_plan(raw)
    if isinstance(extracted, ApplicationPlan):
        return extracted, "backend"

    logger.info("Using heuristic plan (%s)", extracted.reason)
    return heuristic_plan(intent), "heuristic"


def synthesize_plan(raw: str | None, intent: UserIntent) -> ApplicationPlan:
    plan, _ = synthesize_plan_with_source(raw, intent)
    return plan

"""
Response normalizer.

Model output is prose-wrapped JSON of uneven quality. The reply is cut from
the first "{" to the last "}" (greedy, no brace balancing), parsed, and each
field is coerced into the IdeaAnalysis shape with a default for anything
missing or malformed. If nothing parseable comes back the caller still gets
a complete result: the fixed fallback analysis.
"""

import json
import logging
import math
import re
from typing import Any, Optional

from idea_validator.analysis.schemas import IdeaAnalysis

logger = logging.getLogger(__name__)

_JSON_SPAN = re.compile(r"\{.*\}", re.DOTALL)

DEFAULT_SCORE = 50
DEFAULT_AUDIENCE = "General consumers"
DEFAULT_COMPETITORS = ["Unknown competitors"]
DEFAULT_MONETIZATION = ["Subscription model", "Freemium model"]
DEFAULT_TECH_STACK = ["React", "Node.js", "MongoDB", "AWS"]

MAX_COMPETITORS = 3
MAX_MONETIZATION = 2
MAX_TECH_STACK = 4

AUDIENCE_LABELS = (
    (("demographics",), "Demographics"),
    (("income",), "Income"),
    (("location",), "Location"),
    (("painPoints", "pain_points"), "Pain Points"),
)


def extract_json_span(raw: str) -> Optional[str]:
    match = _JSON_SPAN.search(raw or "")
    return match.group(0) if match else None


def fallback_analysis() -> IdeaAnalysis:
    return IdeaAnalysis(
        feasibility_score=65,
        target_audience="Target audience based on the idea characteristics",
        competitors=["Market leader in similar space", "Emerging competitor", "Indirect competitor"],
        monetization_strategies=["Subscription model", "Transaction fees"],
        suggested_tech_stack=["React", "Node.js", "PostgreSQL", "AWS"],
    )


def normalize_response(raw: str) -> IdeaAnalysis:
    """Turn raw model text into an IdeaAnalysis. Never raises."""
    span = extract_json_span(raw)
    if span is None:
        logger.error(f"No JSON object found in AI response: {raw!r}")
        return fallback_analysis()

    try:
        parsed = json.loads(span)
    except (ValueError, RecursionError) as e:
        logger.error(f"Failed to parse AI response ({e}): {raw!r}")
        return fallback_analysis()

    if not isinstance(parsed, dict):
        logger.error(f"AI response JSON is not an object: {raw!r}")
        return fallback_analysis()

    return clean_analysis(parsed)


def clean_analysis(data: dict) -> IdeaAnalysis:
    return IdeaAnalysis(
        feasibility_score=_clean_score(data.get("feasibilityScore")),
        target_audience=_clean_audience(data.get("targetAudience")),
        competitors=_clean_list(data.get("competitors"), MAX_COMPETITORS, DEFAULT_COMPETITORS),
        monetization_strategies=_clean_list(
            data.get("monetizationStrategies"), MAX_MONETIZATION, DEFAULT_MONETIZATION
        ),
        suggested_tech_stack=_clean_list(
            data.get("suggestedTechStack"), MAX_TECH_STACK, DEFAULT_TECH_STACK
        ),
    )


# ═══════════════════════════════════════
# Field coercion
# ═══════════════════════════════════════

def _clean_score(value: Any) -> int:
    if isinstance(value, bool):
        return DEFAULT_SCORE
    if isinstance(value, int):
        return max(0, min(100, value))
    if isinstance(value, str):
        try:
            value = float(value.strip().rstrip("%"))
        except ValueError:
            return DEFAULT_SCORE
    if not isinstance(value, float) or math.isnan(value):
        return DEFAULT_SCORE
    if math.isinf(value):
        return 100 if value > 0 else 0
    return max(0, min(100, round(value)))


def _clean_audience(value: Any) -> str:
    if isinstance(value, str):
        return value.strip() or DEFAULT_AUDIENCE
    if not isinstance(value, dict):
        return DEFAULT_AUDIENCE

    parts = []
    for keys, label in AUDIENCE_LABELS:
        text = next((_as_text(value.get(k)) for k in keys if value.get(k)), "")
        if text:
            parts.append(f"{label}: {text}")
    return ", ".join(parts) or DEFAULT_AUDIENCE


def _clean_list(value: Any, limit: int, default: list[str]) -> list[str]:
    if not isinstance(value, list):
        return list(default)
    items = [_as_text(item) for item in value if item is not None]
    return items[:limit]


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, list):
        return ", ".join(_as_text(v) for v in value if v is not None)
    if isinstance(value, dict) and value.get("name"):
        return _as_text(value["name"])
    return json.dumps(value, ensure_ascii=False)

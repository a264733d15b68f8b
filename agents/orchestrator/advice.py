"""Which replies become advice-log entries, and how they are labelled."""
from datetime import date
from typing import Optional

from agents.shared.state import Intent, OrchestratorReply

ADVICE_INTENTS = (Intent.ACADEMIC, Intent.WELLNESS)
ADVICE_CONFIDENCE_THRESHOLD = 0.7

_CATEGORY_BY_INTENT = {
    Intent.ACADEMIC: "study_plan",
    Intent.WELLNESS: "wellness_check",
    Intent.CAMPUS_LIFE: "campus_resource",
}


def should_save_advice(reply: OrchestratorReply) -> bool:
    """Advice is kept for academic and wellness replies above the confidence threshold."""
    return reply.intent in ADVICE_INTENTS and reply.confidence > ADVICE_CONFIDENCE_THRESHOLD


def advice_category(intent: Intent) -> str:
    return _CATEGORY_BY_INTENT.get(intent, "general")


def advice_priority(reply: OrchestratorReply) -> str:
    if reply.crisis_detected:
        return "urgent"
    if reply.confidence > 0.85:
        return "high"
    if reply.confidence > ADVICE_CONFIDENCE_THRESHOLD:
        return "medium"
    return "low"


def advice_title(intent: Intent, on: Optional[date] = None) -> str:
    """E.g. ``Campus Life Advice - 2026-10-18``."""
    label = intent.value.replace("_", " ").title()
    return f"{label} Advice - {(on or date.today()).isoformat()}"

"""Rule-based crisis, danger and stress detection.

All checks are substring matches over fixed phrase lists: no model inference
and no I/O, so they can run before any network call and cannot fail on
well-typed input. Matching is broad on purpose; a missed crisis costs more
than a false alarm.

Substring matching still misses paraphrases, misspellings and other
languages. The generated replies carry crisis resources for that reason.
"""
from typing import Optional

from .keywords import CRISIS_PHRASES, DANGER_PHRASES, STRESS_TIERS, keyword_match, normalize


def detect_crisis(text: Optional[str]) -> bool:
    """Return whether ``text`` contains any self-harm or suicide phrase."""
    return keyword_match(text or "", CRISIS_PHRASES)


def detect_potential_danger(text: Optional[str]) -> bool:
    """Return whether ``text`` signals a physical-safety risk.

    Only meaningful when ``detect_crisis`` is false; the result raises the
    emergency-resources flag but never changes the chosen handler.
    """
    return keyword_match(text or "", DANGER_PHRASES)


def detect_stress_level(text: Optional[str]) -> Optional[int]:
    """Estimate a 0-10 stress score from tiered keyword buckets (8, 6 or 4)."""
    if not text:
        return None
    lowered = normalize(text)
    for terms, score in STRESS_TIERS:
        if any(term in lowered for term in terms):
            return score
    return None

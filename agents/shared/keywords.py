"""Keyword and phrase tables used by the router and the handlers.

Each handler has exactly one table here. The handler tables overlap on
purpose ("schedule" is both academic and campus life, "lonely" is both
wellness and campus life); the router's priority order resolves overlaps.
"""
from typing import Iterable

INTENT_CATEGORIES = ("academic", "wellness", "campus_life", "general")

ACADEMIC_KEYWORDS = (
    "study", "exam", "test", "quiz", "homework", "assignment",
    "course", "class", "professor", "grade", "gpa",
    "major", "minor", "degree", "credit", "semester",
    "research", "paper", "essay", "presentation",
    "learn", "understand", "memorize", "focus", "concentrate",
    "time management", "productivity", "procrastination",
    "schedule", "calendar", "deadline", "due date",
)

WELLNESS_KEYWORDS = (
    "stress", "anxiety", "worried", "nervous", "overwhelmed",
    "sad", "depressed", "lonely", "isolated", "alone",
    "tired", "exhausted", "burnout", "sleep", "insomnia",
    "feel", "feeling", "emotion", "mood", "mental health",
    "self-care", "wellness", "mindfulness", "meditation",
    "relax", "calm", "cope", "coping", "balance",
    "scared", "afraid", "panic", "angry", "frustrated",
)

CAMPUS_LIFE_KEYWORDS = (
    "club", "organization", "activity", "event",
    "friend", "social", "meet people", "lonely", "roommate",
    "dorm", "housing", "residence", "campus",
    "party", "fun", "weekend", "greek", "fraternity", "sorority",
    "job", "work", "internship", "volunteer",
    "gym", "recreation", "sports", "fitness",
    "dining", "food", "cafeteria", "meal plan",
    "library", "study space", "career center", "health center",
    "schedule",
)

CRISIS_PHRASES = (
    "want to die", "wanna die", "want 2 die", "going to kill myself", "gonna kill myself",
    "kill myself", "suicide", "suicidal", "end my life", "end it all", "no reason to live",
    "better off dead", "hurt myself", "harm myself", "self harm", "self-harm",
    "can't go on", "cannot go on", "don't want to be here", "wish i was dead",
    "take my life", "want to disappear", "end this pain",
    "no point in living", "no point living", "life isn't worth", "not worth living",
    "rather be dead", "ending it", "thinking about dying", "thoughts of suicide",
    "plan to kill", "feeling suicidal", "want to end", "ready to die",
)

DANGER_PHRASES = (
    "in danger", "are you in danger", "feeling unsafe", "not safe",
    "scared for my life", "afraid of", "threatening", "being threatened",
    "domestic violence", "abusive relationship", "being hurt",
    "someone hurting me", "afraid to go home",
)

# Stress tiers, checked highest first
HIGH_STRESS_TERMS = (
    "overwhelmed", "can't cope", "breaking down", "panic", "crisis",
    "can't handle", "too much", "drowning", "collapsing", "desperate",
)
MEDIUM_HIGH_STRESS_TERMS = (
    "stressed", "anxious", "worried", "struggling", "hard time",
    "difficult", "challenging", "burnt out", "exhausted",
)
LOW_MEDIUM_STRESS_TERMS = (
    "concerned", "nervous", "unsure", "tired", "busy", "pressure",
)

STRESS_TIERS = (
    (HIGH_STRESS_TERMS, 8),
    (MEDIUM_HIGH_STRESS_TERMS, 6),
    (LOW_MEDIUM_STRESS_TERMS, 4),
)


def normalize(text: str) -> str:
    """Lower-case and straighten curly apostrophes."""
    return text.lower().replace("’", "'").replace("‘", "'")


def keyword_match(text: str, keywords: Iterable[str]) -> bool:
    """Case-insensitive substring match against any keyword."""
    if not text:
        return False
    lowered = normalize(text)
    return any(keyword in lowered for keyword in keywords)

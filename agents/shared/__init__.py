"""Building blocks shared by the router and the handlers."""
from .base_agent import BaseAgent
from .safety import detect_crisis, detect_potential_danger, detect_stress_level
from .state import (
    AgentContext,
    AgentReply,
    ConversationTurn,
    Intent,
    OrchestratorReply,
    RoutingDecision,
    UserProfileContext,
)

__all__ = [
    "BaseAgent",
    "detect_crisis",
    "detect_potential_danger",
    "detect_stress_level",
    "AgentContext",
    "AgentReply",
    "ConversationTurn",
    "Intent",
    "OrchestratorReply",
    "RoutingDecision",
    "UserProfileContext",
]

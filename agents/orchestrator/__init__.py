"""Message router and post-reply advice policy."""
from .agent import OrchestratorAgent, enable_chat_logging
from .advice import advice_category, advice_priority, advice_title, should_save_advice

__all__ = [
    "OrchestratorAgent",
    "enable_chat_logging",
    "advice_category",
    "advice_priority",
    "advice_title",
    "should_save_advice",
]

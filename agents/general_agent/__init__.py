"""General handler."""
from .agent import GeneralAgent

__all__ = ["GeneralAgent"]

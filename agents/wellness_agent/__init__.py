"""Wellness handler."""
from .agent import WellnessAgent

__all__ = ["WellnessAgent"]

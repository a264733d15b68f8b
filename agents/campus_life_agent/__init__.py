"""Campus life handler."""
from .agent import CampusLifeAgent

__all__ = ["CampusLifeAgent"]

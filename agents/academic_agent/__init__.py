"""Academic handler."""
from .agent import AcademicAgent

__all__ = ["AcademicAgent"]

"""Message router and domain handlers."""
from .academic_agent import AcademicAgent
from .campus_life_agent import CampusLifeAgent
from .general_agent import GeneralAgent
from .orchestrator import OrchestratorAgent
from .wellness_agent import WellnessAgent

__all__ = ["AcademicAgent", "CampusLifeAgent", "GeneralAgent", "OrchestratorAgent", "WellnessAgent"]

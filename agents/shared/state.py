"""Data model shared by the router, the handlers and the API layer."""
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator


class Intent(str, Enum):
    """Routing category chosen for a message."""
    ACADEMIC = "academic"
    WELLNESS = "wellness"
    CAMPUS_LIFE = "campus_life"
    GENERAL = "general"
    EMERGENCY = "emergency"


class ConversationTurn(BaseModel):
    """One prior message in the conversation."""
    role: Literal["user", "assistant"]
    content: str


class UserProfileContext(BaseModel):
    """Profile fields the handlers weave into their prompts."""
    name: Optional[str] = None
    major: Optional[str] = None
    year: Optional[str] = None
    interests: List[str] = Field(default_factory=list)
    stress_level: Optional[Union[int, Literal["low", "medium", "high"]]] = Field(
        default=None,
        description="0-10 score or a low/medium/high label",
    )

    @field_validator("stress_level", mode="before")
    @classmethod
    def _coerce_stress_level(cls, value):
        # Persisted as text; numeric strings become scores
        if isinstance(value, str):
            value = value.strip().lower()
            if not value:
                return None
            if value.isdigit():
                return int(value)
        return value

    @field_validator("stress_level")
    @classmethod
    def _check_range(cls, value):
        if isinstance(value, int) and not 0 <= value <= 10:
            raise ValueError("stress level must be between 0 and 10")
        return value


class AgentContext(BaseModel):
    """Per-request, read-only context handed to the router.

    ``conversation_history`` is most-recent-last and already bounded to the
    configured window.
    """
    user_id: int
    user_profile: Optional[UserProfileContext] = None
    conversation_history: List[ConversationTurn] = Field(default_factory=list)


class RoutingDecision(BaseModel):
    """Outcome of intent classification for one message."""
    intent: Intent
    handler_name: str
    danger_detected: bool = False
    matched_by: Literal["crisis", "keyword", "classifier"]


# --------------------------------------------------------------------------- #
# Reply metadata, one variant per handler
# --------------------------------------------------------------------------- #


class AcademicMetadata(BaseModel):
    agent_type: Literal["academic"] = "academic"
    support_type: str = "study-support"


class WellnessMetadata(BaseModel):
    agent_type: Literal["wellness"] = "wellness"
    support_type: str = "emotional-wellbeing"
    crisis_detected: bool = False
    severity: Optional[str] = None
    detected_stress_level: Optional[int] = None
    show_emergency_popup: bool = False


class CampusLifeMetadata(BaseModel):
    agent_type: Literal["campus_life"] = "campus_life"
    support_type: str = "campus-life"


class GeneralMetadata(BaseModel):
    agent_type: Literal["general"] = "general"


class ErrorMetadata(BaseModel):
    agent_type: Literal["error"] = "error"
    error: str


AgentMetadata = Annotated[
    Union[AcademicMetadata, WellnessMetadata, CampusLifeMetadata, GeneralMetadata, ErrorMetadata],
    Field(discriminator="agent_type"),
]


class AgentReply(BaseModel):
    """Reply produced by a handler."""
    content: str
    confidence: float = Field(ge=0.0, le=1.0, description="Strength-of-match signal, not a probability")
    tools_used: List[str] = Field(default_factory=list)
    metadata: AgentMetadata

    @field_validator("tools_used")
    @classmethod
    def _dedupe_tools(cls, value: List[str]) -> List[str]:
        return list(dict.fromkeys(value))

    @property
    def crisis_detected(self) -> bool:
        return isinstance(self.metadata, WellnessMetadata) and self.metadata.crisis_detected

    @property
    def show_emergency_popup(self) -> bool:
        return isinstance(self.metadata, WellnessMetadata) and self.metadata.show_emergency_popup

    @property
    def detected_stress_level(self) -> Optional[int]:
        if isinstance(self.metadata, WellnessMetadata):
            return self.metadata.detected_stress_level
        return None


class OrchestratorReply(AgentReply):
    """Handler reply stamped with the routing outcome."""
    intent: Intent
    handler_name: str
    danger_detected: bool = False

    @property
    def show_emergency_popup(self) -> bool:
        return self.danger_detected or self.crisis_detected or super().show_emergency_popup

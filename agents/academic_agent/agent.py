"""Academic handler: study tips, exam prep, course planning."""
from agents.shared.base_agent import FALLBACK_CONFIDENCE, BaseAgent
from agents.shared.keywords import ACADEMIC_KEYWORDS
from agents.shared.state import AcademicMetadata, AgentContext, AgentReply, Intent
from shared.generation import TextGenerationService

from .prompts import SYSTEM_PROMPT


class AcademicAgent(BaseAgent):
    """Handles academic guidance and study strategies."""

    intent = Intent.ACADEMIC

    def __init__(self, generation: TextGenerationService):
        super().__init__(
            "AcademicAgent",
            "Handles academic guidance and study strategies",
            SYSTEM_PROMPT,
            ACADEMIC_KEYWORDS,
            generation,
        )

    async def process(self, message: str, context: AgentContext) -> AgentReply:
        prompt = self.build_context_prompt(message, context)
        content, used_fallback = await self.generate_or_fallback(message, prompt)
        return AgentReply(
            content=content,
            confidence=FALLBACK_CONFIDENCE if used_fallback else 0.85,
            tools_used=["fallback-response"] if used_fallback else [],
            metadata=AcademicMetadata(),
        )

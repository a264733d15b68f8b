"""Campus life handler: clubs, housing, social life, campus resources."""
from agents.shared.base_agent import FALLBACK_CONFIDENCE, BaseAgent
from agents.shared.keywords import CAMPUS_LIFE_KEYWORDS
from agents.shared.state import AgentContext, AgentReply, CampusLifeMetadata, Intent
from shared.generation import TextGenerationService

from .prompts import SYSTEM_PROMPT


class CampusLifeAgent(BaseAgent):
    """Handles campus life and social guidance."""

    intent = Intent.CAMPUS_LIFE

    def __init__(self, generation: TextGenerationService):
        super().__init__(
            "CampusLifeAgent",
            "Handles campus life and social guidance",
            SYSTEM_PROMPT,
            CAMPUS_LIFE_KEYWORDS,
            generation,
        )

    async def process(self, message: str, context: AgentContext) -> AgentReply:
        prompt = self.build_context_prompt(message, context)
        content, used_fallback = await self.generate_or_fallback(message, prompt)
        return AgentReply(
            content=content,
            confidence=FALLBACK_CONFIDENCE if used_fallback else 0.8,
            tools_used=["fallback-response"] if used_fallback else [],
            metadata=CampusLifeMetadata(),
        )

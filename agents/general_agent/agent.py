"""General handler for messages no specialist claims."""
import logging

from agents.shared.base_agent import BaseAgent
from agents.shared.state import AgentContext, AgentReply, GeneralMetadata, Intent
from shared.generation import GenerationError, TextGenerationService

from .prompts import CAPABILITIES_MENU, GREETING_REPLY, HELP_REPLY, SYSTEM_PROMPT, THANKS_REPLY

_logger = logging.getLogger("chat")

GENERAL_MAX_TOKENS = 400
CANNED_CONFIDENCE = 0.6


def canned_reply(message: str, context: AgentContext) -> str:
    """Pick a deterministic reply when the local LLM is down."""
    lowered = message.lower()
    if "help" in lowered or "what can you do" in lowered:
        return HELP_REPLY
    if "thank" in lowered:
        return THANKS_REPLY
    if "hi" in lowered or "hello" in lowered:
        profile = context.user_profile
        name = profile.name if profile and profile.name else "there"
        return GREETING_REPLY.format(name=name)
    return CAPABILITIES_MENU


class GeneralAgent(BaseAgent):
    """Generic college-life persona; never claims a message through keywords."""

    intent = Intent.GENERAL
    history_window = 6
    profile_heading = "Student Profile"

    def __init__(self, generation: TextGenerationService):
        super().__init__(
            "GeneralAgent",
            "Handles general questions not covered by the specialists",
            SYSTEM_PROMPT,
            (),
            generation,
        )

    async def process(self, message: str, context: AgentContext) -> AgentReply:
        prompt = self.build_context_prompt(message, context)
        try:
            content = await self.generate(prompt, max_tokens=GENERAL_MAX_TOKENS)
        except GenerationError as exc:
            _logger.warning("General query fell back to canned reply: %s", exc)
            return AgentReply(
                content=canned_reply(message, context),
                confidence=CANNED_CONFIDENCE,
                tools_used=["fallback-response"],
                metadata=GeneralMetadata(),
            )
        return AgentReply(content=content, confidence=0.8, metadata=GeneralMetadata())

"""Base class for the domain handlers."""
import logging
from abc import ABC, abstractmethod
from typing import Dict, Sequence

from shared.generation import GenerationError, TextGenerationService

from .keywords import keyword_match
from .state import AgentContext, AgentReply, Intent

_logger = logging.getLogger("chat")

HANDLER_TEMPERATURE = 0.7
HANDLER_MAX_TOKENS = 512
FALLBACK_CONFIDENCE = 0.5


def _topic_fallback(message: str) -> str:
    """Canned reply used when the local LLM is unavailable."""
    lowered = message.lower()

    if "study" in lowered or "exam" in lowered:
        return (
            "I recommend creating a study schedule, breaking down material into manageable chunks, "
            "and using active recall techniques like practice problems and self-quizzing. "
            "Would you like specific study tips for your subject?"
        )

    if "stress" in lowered or "anxiety" in lowered:
        return (
            "It's normal to feel stressed sometimes. Try deep breathing exercises, take regular breaks, "
            "and make sure you're getting enough sleep. Consider talking to a campus counselor "
            "if stress becomes overwhelming."
        )

    if "friend" in lowered or "social" in lowered:
        return (
            "Making friends in college takes time! Join clubs related to your interests, attend campus "
            "events, and don't be afraid to start conversations in class. "
            "Quality friendships develop naturally."
        )

    return (
        "I'm here to help with academic advice, wellness support, or campus life questions. "
        "Could you tell me more about what you need help with?"
    )


class BaseAgent(ABC):
    """A domain handler that turns a message and context into a reply.

    Subclasses provide the persona, the capability keywords and ``process``.
    The generation service is injected so handlers never reach for a global
    client.
    """

    intent: Intent
    history_window: int = 5
    profile_heading: str = "User Profile"

    def __init__(
        self,
        name: str,
        description: str,
        system_prompt: str,
        keywords: Sequence[str],
        generation: TextGenerationService,
    ):
        self.name = name
        self.description = description
        self.system_prompt = system_prompt
        self.keywords = tuple(keywords)
        self.generation = generation

    @abstractmethod
    async def process(self, message: str, context: AgentContext) -> AgentReply:
        """Process a user message and generate a reply."""

    def can_handle(self, message: str, context: AgentContext) -> bool:
        """Capability probe: does any of this handler's keywords occur in the message?"""
        return keyword_match(message, self.keywords)

    def info(self) -> Dict[str, str]:
        return {"name": self.name, "description": self.description}

    async def generate(self, prompt: str, *, max_tokens: int = HANDLER_MAX_TOKENS) -> str:
        return await self.generation.generate(
            prompt,
            system_prompt=self.system_prompt,
            temperature=HANDLER_TEMPERATURE,
            max_tokens=max_tokens,
        )

    async def generate_or_fallback(self, message: str, prompt: str) -> tuple[str, bool]:
        """Generate a reply, returning ``(text, used_fallback)``."""
        try:
            return await self.generate(prompt), False
        except GenerationError as exc:
            _logger.warning("%s falling back to canned reply: %s", self.name, exc)
            return _topic_fallback(message), True

    def build_context_prompt(self, message: str, context: AgentContext) -> str:
        """Assemble profile block, recent turns and the current question."""
        prompt = ""

        profile = context.user_profile
        if profile is not None:
            lines = []
            if profile.name:
                lines.append(f"- Name: {profile.name}")
            if profile.major:
                lines.append(f"- Major: {profile.major}")
            if profile.year:
                lines.append(f"- Year: {profile.year}")
            if profile.interests:
                lines.append(f"- Interests: {', '.join(profile.interests)}")
            if profile.stress_level is not None:
                lines.append(f"- Stress Level: {self._format_stress(profile.stress_level)}")
            if lines:
                prompt += f"{self.profile_heading}:\n" + "\n".join(lines) + "\n\n"

        history = context.conversation_history[-self.history_window:]
        if history:
            prompt += "Recent Conversation:\n"
            for turn in history:
                speaker = "Student" if turn.role == "user" else "Advisor"
                prompt += f"{speaker}: {turn.content}\n"
            prompt += "\n"

        prompt += f"Current Question: {message}\n\n"
        prompt += "Response:"
        return prompt

    @staticmethod
    def _format_stress(level) -> str:
        return f"{level}/10" if isinstance(level, int) else str(level)

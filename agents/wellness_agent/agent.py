"""Wellness handler: emotional check-ins, stress management, crisis response."""
import logging

from agents.shared.base_agent import FALLBACK_CONFIDENCE, BaseAgent
from agents.shared.keywords import WELLNESS_KEYWORDS
from agents.shared.safety import detect_crisis, detect_potential_danger, detect_stress_level
from agents.shared.state import AgentContext, AgentReply, Intent, WellnessMetadata
from shared.generation import TextGenerationService

from .prompts import CRISIS_RESPONSE_TEMPLATE, SYSTEM_PROMPT

_logger = logging.getLogger("chat")


class WellnessAgent(BaseAgent):
    """Handles emotional support and wellness guidance.

    Crisis messages never reach the LLM: ``process`` checks for crisis
    phrases before building a prompt and answers from a fixed template, so
    the reply cannot be delayed or altered by the generation service.
    """

    intent = Intent.WELLNESS

    def __init__(self, generation: TextGenerationService):
        super().__init__(
            "WellnessAgent",
            "Handles emotional support and wellness guidance",
            SYSTEM_PROMPT,
            WELLNESS_KEYWORDS,
            generation,
        )

    async def process(self, message: str, context: AgentContext) -> AgentReply:
        if detect_crisis(message):
            _logger.warning("CRISIS DETECTED for user=%s, returning crisis resources", context.user_id)
            return self.crisis_response(context)

        tools_used = []
        danger = detect_potential_danger(message)
        if danger:
            _logger.warning("Potential danger indicator for user=%s", context.user_id)
            tools_used.append("danger-detection")

        stress_level = detect_stress_level(message)
        if stress_level is not None:
            tools_used.append("stress-detection")

        prompt = self.build_context_prompt(message, context)
        content, used_fallback = await self.generate_or_fallback(message, prompt)
        if used_fallback:
            tools_used.append("fallback-response")

        return AgentReply(
            content=content,
            confidence=FALLBACK_CONFIDENCE if used_fallback else 0.9,
            tools_used=tools_used,
            metadata=WellnessMetadata(
                detected_stress_level=stress_level,
                show_emergency_popup=danger,
            ),
        )

    def crisis_response(self, context: AgentContext) -> AgentReply:
        """Build the fixed crisis reply. Purely local."""
        profile = context.user_profile
        name = profile.name if profile and profile.name else "friend"
        return AgentReply(
            content=CRISIS_RESPONSE_TEMPLATE.format(name=name),
            confidence=1.0,
            tools_used=["crisis-detection", "crisis-intervention"],
            metadata=WellnessMetadata(
                support_type="crisis-intervention",
                severity="critical",
                crisis_detected=True,
                show_emergency_popup=True,
            ),
        )

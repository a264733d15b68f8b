"""Message router: crisis check, capability probes, fallback classification."""
from pathlib import Path
from typing import Dict, List, Optional
import logging

from agents.academic_agent import AcademicAgent
from agents.campus_life_agent import CampusLifeAgent
from agents.general_agent import GeneralAgent
from agents.wellness_agent import WellnessAgent
from agents.shared.base_agent import BaseAgent
from agents.shared.keywords import INTENT_CATEGORIES
from agents.shared.safety import detect_crisis, detect_potential_danger
from agents.shared.state import (
    AgentContext,
    ErrorMetadata,
    Intent,
    OrchestratorReply,
    RoutingDecision,
)
from shared.generation import TextGenerationService, generation_owner

_logger = logging.getLogger("chat")

CLASSIFIER_SYSTEM_PROMPT = "You are classifying college student questions into categories."

APOLOGY_MESSAGE = (
    "I apologize, but I'm having trouble processing your request right now. "
    "Please try again or rephrase your question."
)


def enable_chat_logging(level: int = logging.INFO, to_console: bool = True, to_file: bool = True) -> None:
    """Enable chat logging on demand.

    Adds console and file handlers to the 'chat' logger. Safe to call multiple times.
    """
    _logger.setLevel(level)
    if _logger.handlers:
        return
    fmt = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    if to_file:
        log_dir = Path(__file__).resolve().parents[2] / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_dir / "chat.log", encoding="utf-8")
        fh.setFormatter(fmt)
        _logger.addHandler(fh)
    if to_console:
        sh = logging.StreamHandler()
        sh.setFormatter(fmt)
        _logger.addHandler(sh)


def _safe_preview(text: str, limit: int = 200) -> str:
    if text is None:
        return ""
    s = str(text)
    return s if len(s) <= limit else s[:limit] + "... [truncated]"


class OrchestratorAgent:
    """Routes each message to exactly one handler.

    Routing order:
    1. Crisis phrases -> ``emergency`` (wellness handler), before any network call
    2. Danger phrases -> flag only, routing continues
    3. Capability probes, priority wellness > academic > campus life
    4. LLM classification over academic/wellness/campus_life/general,
       defaulting to ``general``

    The router holds no storage; persisting the exchange is the caller's job.
    """

    def __init__(self, generation: TextGenerationService):
        self.generation = generation
        self.academic_agent = AcademicAgent(generation)
        self.wellness_agent = WellnessAgent(generation)
        self.campus_life_agent = CampusLifeAgent(generation)
        self.general_agent = GeneralAgent(generation)

        # Probe order is the tie-break order
        self._specialists = (self.wellness_agent, self.academic_agent, self.campus_life_agent)
        self._handlers = {
            Intent.ACADEMIC: self.academic_agent,
            Intent.WELLNESS: self.wellness_agent,
            Intent.EMERGENCY: self.wellness_agent,
            Intent.CAMPUS_LIFE: self.campus_life_agent,
            Intent.GENERAL: self.general_agent,
        }

    def handler_for(self, intent: Intent) -> BaseAgent:
        return self._handlers[intent]

    async def classify_intent(self, message: str, context: AgentContext) -> RoutingDecision:
        """Choose one intent for ``message``."""
        if detect_crisis(message):
            _logger.warning("ROUTE: emergency (crisis phrase) user=%s", context.user_id)
            return RoutingDecision(
                intent=Intent.EMERGENCY,
                handler_name=self.wellness_agent.name,
                matched_by="crisis",
            )

        danger = detect_potential_danger(message)

        probes = [(agent, agent.can_handle(message, context)) for agent in self._specialists]
        for agent, matched in probes:
            if matched:
                _logger.info("ROUTE: %s (keyword)", agent.intent.value)
                return RoutingDecision(
                    intent=agent.intent,
                    handler_name=agent.name,
                    danger_detected=danger,
                    matched_by="keyword",
                )

        label = await self.generation.classify(message, list(INTENT_CATEGORIES), CLASSIFIER_SYSTEM_PROMPT)
        intent = Intent(label)
        _logger.info("ROUTE: %s (classifier)", intent.value)
        return RoutingDecision(
            intent=intent,
            handler_name=self.handler_for(intent).name,
            danger_detected=danger,
            matched_by="classifier",
        )

    async def process_message(self, message: str, context: AgentContext) -> OrchestratorReply:
        """Route ``message`` and return the chosen handler's reply.

        Never raises: unexpected failures become a generic apology with
        confidence 0.
        """
        _logger.info("USER %s: %s", context.user_id, _safe_preview(message))
        try:
            with generation_owner(context.user_id):
                decision = await self.classify_intent(message, context)
                handler = self.handler_for(decision.intent)
                reply = await handler.process(message, context)
        except Exception as exc:
            _logger.exception("Orchestrator error")
            return OrchestratorReply(
                content=APOLOGY_MESSAGE,
                confidence=0.0,
                tools_used=[],
                metadata=ErrorMetadata(error=str(exc) or type(exc).__name__),
                intent=Intent.GENERAL,
                handler_name=type(self).__name__,
            )

        _logger.info(
            "ASSISTANT (%s, confidence=%.2f): %s",
            decision.handler_name,
            reply.confidence,
            _safe_preview(reply.content),
        )
        return OrchestratorReply(
            **reply.model_dump(),
            intent=decision.intent,
            handler_name=decision.handler_name,
            danger_detected=decision.danger_detected,
        )

    def advisors(self) -> List[Dict[str, str]]:
        """Name, description and intent of every handler, in routing order."""
        agents = (*self._specialists, self.general_agent)
        return [{**agent.info(), "intent": agent.intent.value} for agent in agents]

    def stop_generation(self, user_id: Optional[int] = None) -> int:
        """Best-effort stop of in-flight generation, limited to ``user_id`` when given."""
        return self.generation.stop_generation(user_id)

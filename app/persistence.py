"""Context loading and post-reply persistence for the chat boundary.

The router never touches storage. The HTTP handler (and the CLI) load the
context before routing and call ``record_exchange`` once the reply exists.
A storage outage costs history, never the reply itself.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from agents.orchestrator.advice import (
    advice_category,
    advice_priority,
    advice_title,
    should_save_advice,
)
from agents.shared.state import AgentContext, ConversationTurn, OrchestratorReply, UserProfileContext
from database import store

logger = logging.getLogger("campus_advisor.persistence")


def _profile_context(user: Dict[str, Any]) -> Optional[UserProfileContext]:
    profile = user.get("profile") or {}
    try:
        return UserProfileContext(
            name=user.get("name"),
            major=profile.get("major"),
            year=profile.get("year"),
            interests=profile.get("interests") or [],
            stress_level=profile.get("stress_level"),
        )
    except ValidationError as exc:
        logger.warning("Ignoring malformed profile for user=%s: %s", user.get("id"), exc)
        return UserProfileContext(name=user.get("name"))


def load_context(user_id: int, history_limit: int = 10) -> AgentContext:
    """Build the router context from the stored profile and recent turns."""
    try:
        user = store.get_user(user_id)
        rows = store.get_conversation_history(user_id, limit=history_limit)
    except SQLAlchemyError:
        logger.exception("Context building failed for user=%s", user_id)
        return AgentContext(user_id=user_id)

    history: List[ConversationTurn] = [
        ConversationTurn(role=row["role"], content=row["content"])
        for row in rows
        if row["role"] in ("user", "assistant")
    ]
    return AgentContext(
        user_id=user_id,
        user_profile=_profile_context(user) if user else None,
        conversation_history=history,
    )


def _attempt(step: str, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    try:
        return fn(*args, **kwargs)
    except SQLAlchemyError:
        logger.exception("Persistence step '%s' failed", step)
        return None


def record_exchange(user_id: int, message: str, reply: OrchestratorReply) -> Dict[str, Any]:
    """Persist both turns, the advice log when warranted, and a detected stress level.

    The stress write-back runs before the assistant turn is saved so a
    successful update is tagged ``stress-tracking`` in the stored turn and
    in the returned ``tools_used``. Returns the ids written (None where a
    step was skipped or failed).
    """
    intent = reply.intent.value
    tools_used = list(reply.tools_used)

    user_message_id = _attempt("save user turn", store.save_message, user_id, "user", message, intent=intent)

    stress_level_updated = False
    if reply.detected_stress_level is not None:
        stress_level_updated = bool(
            _attempt("update stress level", store.update_stress_level, user_id, reply.detected_stress_level)
        )
        if stress_level_updated:
            logger.info("Stress level %s recorded for user=%s", reply.detected_stress_level, user_id)
            tools_used.append("stress-tracking")

    # Router-level flags live on the reply, not on the handler metadata
    metadata = {
        **reply.metadata.model_dump(),
        "danger_detected": reply.danger_detected,
        "show_emergency_popup": reply.show_emergency_popup,
        "tools_used": tools_used,
    }

    assistant_message_id = _attempt(
        "save assistant turn",
        store.save_message,
        user_id,
        "assistant",
        reply.content,
        intent=intent,
        agent_type=reply.handler_name,
        metadata=metadata,
    )

    advice_log_id = None
    if should_save_advice(reply):
        advice_log_id = _attempt(
            "save advice log",
            store.save_advice_log,
            user_id,
            advice_category(reply.intent),
            advice_title(reply.intent),
            reply.content,
            reply.handler_name,
            advice_priority(reply),
            metadata,
        )

    return {
        "user_message_id": user_message_id,
        "assistant_message_id": assistant_message_id,
        "advice_log_id": advice_log_id,
        "stress_level_updated": stress_level_updated,
        "tools_used": tools_used,
    }

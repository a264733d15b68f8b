"""LangChain callbacks for request introspection."""
from __future__ import annotations

import logging
from typing import Any, List

from langchain_core.callbacks import BaseCallbackHandler
from langchain_core.messages import BaseMessage

_logger = logging.getLogger("chat")


def _preview(text: Any, limit: int = 300) -> str:
    s = str(text)
    return s if len(s) <= limit else s[:limit] + "... [truncated]"


class ChatMessagesLogger(BaseCallbackHandler):
    """Logs a compact preview of each prompt sent to the local LLM.

    Handy when a local model misbehaves: the log shows exactly which persona,
    profile block and history window reached it.
    """

    def on_chat_model_start(
        self,
        serialized: dict[str, Any],
        messages: List[List[BaseMessage]],
        **kwargs: Any,
    ) -> None:
        if not _logger.isEnabledFor(logging.DEBUG):
            return
        # messages is a list of message lists (one per generation); take the first
        batch = messages[0] if messages else []
        for m in batch:
            _logger.debug("LLM REQ %s: %s", m.type, _preview(m.content, 180))

    def on_llm_error(self, error: BaseException, **kwargs: Any) -> None:
        _logger.warning("LLM ERROR: %s", _preview(error))

"""Text-generation service over a local OpenAI-compatible LLM.

The service is constructed explicitly and handed to the router, so tests can
swap in any object exposing the same ``generate``/``classify`` coroutines.
"""
from __future__ import annotations

import asyncio
import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Iterator, Optional, Sequence, Set

import httpx
import openai
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage

from .config import Configuration
from .utils import get_text_llm, _normalize_base_url

_logger = logging.getLogger("chat")

DEFAULT_MAX_TOKENS = 1024

# Who the current generation is for; tasks inherit it from the request
_current_owner: ContextVar[Optional[int]] = ContextVar("generation_owner", default=None)


class GenerationError(RuntimeError):
    """Raised when the local LLM cannot produce a completion."""


def _coerce_text(content: Any) -> str:
    """Extract plain text from message content (string or list of parts)."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text" and part.get("text"):
                parts.append(part["text"])
        return "\n".join(parts)
    return ""


@contextmanager
def generation_owner(owner: Optional[int]) -> Iterator[None]:
    """Attribute generations started inside the block to ``owner``."""
    token = _current_owner.set(owner)
    try:
        yield
    finally:
        _current_owner.reset(token)


class TextGenerationService:
    """Single-call text generation and classification."""

    def __init__(self, llm: BaseChatModel, *, model_name: Optional[str] = None, endpoint: Optional[str] = None):
        self._llm = llm
        self.model_name = model_name or getattr(llm, "model_name", None) or "unknown"
        self.endpoint = endpoint
        self._inflight: Dict[asyncio.Task, Optional[int]] = {}
        self._stopped: Set[asyncio.Task] = set()

    @classmethod
    def from_config(cls, cfg: Configuration) -> "TextGenerationService":
        """Build the service around the configured local endpoint."""
        return cls(
            get_text_llm(cfg),
            model_name=cfg.llm_model,
            endpoint=_normalize_base_url(cfg.llm_base_url),
        )

    async def generate(
        self,
        prompt: str,
        *,
        temperature: float = 0.7,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        system_prompt: Optional[str] = None,
    ) -> str:
        """Generate a completion for ``prompt``.

        The system prompt is folded into the user message; several local
        instruct models reject a separate system role.

        Raises:
            GenerationError: on transport/API failure, an empty completion,
                or when the call was stopped through ``stop_generation``.
        """
        user_message = f"{system_prompt}\n\n{prompt}" if system_prompt else prompt
        runnable = self._llm.bind(temperature=temperature, max_tokens=max_tokens)

        task = asyncio.ensure_future(runnable.ainvoke([HumanMessage(content=user_message)]))
        self._inflight[task] = _current_owner.get()
        try:
            message = await task
        except asyncio.CancelledError:
            if task in self._stopped:
                raise GenerationError("Generation stopped") from None
            raise
        except (openai.OpenAIError, httpx.HTTPError, asyncio.TimeoutError) as exc:
            _logger.error("Local LLM error: %s", exc)
            raise GenerationError(f"Local LLM request failed: {exc}") from exc
        finally:
            self._inflight.pop(task, None)
            self._stopped.discard(task)

        text = _coerce_text(getattr(message, "content", message)).strip()
        if not text:
            raise GenerationError("Local LLM returned an empty completion")
        return text

    async def classify(
        self,
        text: str,
        categories: Sequence[str],
        system_prompt: Optional[str] = None,
    ) -> str:
        """Classify ``text`` into exactly one of ``categories``.

        Falls back to the last category when the reply names none of them or
        the service fails. There is no retry.
        """
        classification_prompt = (
            f"Classify the following text into ONLY ONE of these categories: {', '.join(categories)}\n\n"
            f'Text: "{text}"\n\n'
            "Reply with ONLY the category name, nothing else."
        )
        try:
            result = await self.generate(
                classification_prompt,
                system_prompt=system_prompt or "You are a text classifier.",
                temperature=0.3,
                max_tokens=20,
            )
        except GenerationError as exc:
            _logger.warning("Classification failed, defaulting to %r: %s", categories[-1], exc)
            return categories[-1]

        cleaned = result.strip().lower().replace("-", "_").replace(" ", "_")
        for category in categories:
            if category.lower() in cleaned:
                return category
        _logger.info("Unrecognized classification %r, defaulting to %r", result, categories[-1])
        return categories[-1]

    def stop_generation(self, owner: Optional[int] = None) -> int:
        """Cancel in-flight generations. Best effort: the server may keep working.

        With ``owner`` only that user's generations are cancelled; without it,
        every generation started by this service is.
        """
        pending = [
            task
            for task, task_owner in list(self._inflight.items())
            if not task.done() and (owner is None or task_owner == owner)
        ]
        for task in pending:
            self._stopped.add(task)
            task.cancel()
        if pending:
            _logger.info("Stopped %d in-flight generation(s) for owner=%s", len(pending), owner)
        return len(pending)

    def in_flight(self, owner: Optional[int] = None) -> int:
        return sum(1 for task_owner in self._inflight.values() if owner is None or task_owner == owner)

    def model_info(self) -> Dict[str, Any]:
        return {
            "model": self.model_name,
            "provider": "Local LLM (LM Studio/Ollama)",
            "endpoint": self.endpoint,
            "in_flight": self.in_flight(),
        }

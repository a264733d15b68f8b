"""Shared utilities for LLM creation."""
from typing import Optional

from langchain_openai import ChatOpenAI

from .config import Configuration
from .callbacks import ChatMessagesLogger


def _normalize_base_url(url: Optional[str]) -> Optional[str]:
    """Normalize user-provided base URL for OpenAI-compatible endpoints.

    - If it ends with "/chat/completions", strip that suffix.
    - Trim any trailing slash.
    """
    if not url:
        return url
    u = url.rstrip("/")
    if u.endswith("/chat/completions"):
        u = u[: -len("/chat/completions")]
    return u


def get_text_llm(cfg: Configuration) -> ChatOpenAI:
    """Get the chat model backing every handler.

    Retries are disabled: a failed call falls back to a canned reply
    immediately instead of keeping the student waiting.

    Args:
        cfg: Configuration instance with endpoint and model settings

    Returns:
        ChatOpenAI instance pointed at the local OpenAI-compatible server
    """
    return ChatOpenAI(
        model=cfg.llm_model,
        api_key=cfg.llm_api_key,
        base_url=_normalize_base_url(cfg.llm_base_url),
        streaming=False,
        timeout=cfg.llm_timeout,
        max_retries=0,
        temperature=0.7,
        callbacks=[ChatMessagesLogger()],
    )

"""Shared configuration for the campus advisor."""
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

DEFAULT_LLM_URL = "http://localhost:1234/v1/chat/completions"
DEFAULT_LLM_MODEL = "mistralai/mistral-7b-instruct-v0.3"


def _load_model_config() -> dict:
    """Load model configuration from JSON file."""
    config_path = Path(__file__).parent.parent / "model_config.json"
    if not config_path.exists():
        return {"text_model": DEFAULT_LLM_MODEL}

    with open(config_path) as f:
        config = json.load(f)

    return {"text_model": config.get("text_model", DEFAULT_LLM_MODEL)}


def _default_model() -> str:
    return os.getenv("LOCAL_LLM_MODEL") or _load_model_config()["text_model"]


@dataclass(kw_only=True)
class Configuration:
    """Configuration for the router and the local LLM endpoint.

    This configuration provides:
    - Endpoint, key and model for an OpenAI-compatible local server (LM Studio, Ollama)
    - Networking controls for the single generation call per request
    - The size of the conversation window handed to the router
    """

    llm_base_url: str = field(
        default_factory=lambda: os.getenv("LOCAL_LLM_URL", DEFAULT_LLM_URL),
        metadata={"description": "OpenAI-compatible endpoint (e.g. http://localhost:1234/v1)"}
    )

    # Local servers ignore the key but the OpenAI client insists on one
    llm_api_key: Optional[str] = field(
        default_factory=lambda: os.getenv("LOCAL_LLM_API_KEY", "lm-studio"),
        metadata={"description": "API key sent to the local LLM server"}
    )

    llm_model: str = field(
        default_factory=_default_model,
        metadata={"description": "Model name as exposed by the local server"}
    )

    llm_timeout: int = field(
        default_factory=lambda: int(os.getenv("LOCAL_LLM_TIMEOUT", "60")),
        metadata={"description": "HTTP timeout (seconds) for LLM calls"}
    )

    history_limit: int = field(
        default_factory=lambda: int(os.getenv("CHAT_HISTORY_LIMIT", "10")),
        metadata={"description": "Number of recent turns loaded into the router context"}
    )

    def validate(self) -> None:
        """Validate that required configuration is present."""
        if not self.llm_base_url or not self.llm_base_url.startswith(("http://", "https://")):
            raise ValueError(
                f"LOCAL_LLM_URL must be an http(s) URL, got {self.llm_base_url!r}. "
                "Please set it in your .env file or environment."
            )
        if self.llm_timeout <= 0:
            raise ValueError("LOCAL_LLM_TIMEOUT must be a positive number of seconds.")
        if self.history_limit <= 0:
            raise ValueError("CHAT_HISTORY_LIMIT must be positive.")

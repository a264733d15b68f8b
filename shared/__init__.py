"""Shared configuration and utilities."""
from .config import Configuration
from .generation import GenerationError, TextGenerationService
from .utils import get_text_llm

__all__ = ["Configuration", "GenerationError", "TextGenerationService", "get_text_llm"]

import asyncio
import importlib
import sys
from pathlib import Path
from typing import Generator

import pytest
from langchain_core.messages import AIMessage


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from shared.generation import GenerationError  # noqa: E402


@pytest.fixture()
def temp_database(tmp_path, monkeypatch) -> Generator[Path, None, None]:
    """Create a temporary SQLite database and reload connection module."""
    db_path = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_PATH", str(db_path))

    # Reload database.connection so it picks up the new env variable
    from database import connection as connection_module

    importlib.reload(connection_module)
    connection_module.init_db()

    yield db_path

    # Cleanup: remove env, reload to default state
    monkeypatch.delenv("DATABASE_PATH", raising=False)
    importlib.reload(connection_module)


class FakeGenerationService:
    """Stands in for TextGenerationService and records every call."""

    def __init__(self, responses=None, classification="general", fail=False):
        self.responses = list(responses or [])
        self.classification = classification
        self.fail = fail
        self.generate_calls = []
        self.classify_calls = []
        self.stop_calls = []

    async def generate(self, prompt, *, temperature=0.7, max_tokens=1024, system_prompt=None):
        self.generate_calls.append(
            {
                "prompt": prompt,
                "temperature": temperature,
                "max_tokens": max_tokens,
                "system_prompt": system_prompt,
            }
        )
        if self.fail:
            raise GenerationError("service unreachable")
        return self.responses.pop(0) if self.responses else "Here is some generated advice."

    async def classify(self, text, categories, system_prompt=None):
        self.classify_calls.append({"text": text, "categories": list(categories)})
        if self.fail:
            return categories[-1]
        return self.classification

    def stop_generation(self, owner=None):
        self.stop_calls.append(owner)
        return 0

    @property
    def network_calls(self):
        return len(self.generate_calls) + len(self.classify_calls)


class FakeChatModel:
    """Minimal chat-model double for TextGenerationService.

    ``error`` is raised from every call; ``hang`` blocks until cancelled.
    """

    def __init__(self, replies=None, error=None, hang=False):
        self.replies = list(replies or [])
        self.error = error
        self.hang = hang
        self.calls = []
        self._bound = {}
        self.model_name = "fake-model"

    def bind(self, **kwargs):
        self._bound = kwargs
        return self

    async def ainvoke(self, messages, *args, **kwargs):
        self.calls.append({"messages": messages, "params": dict(self._bound)})
        if self.hang:
            await asyncio.Event().wait()
        if self.error is not None:
            raise self.error
        return AIMessage(content=self.replies.pop(0) if self.replies else "ok")


@pytest.fixture()
def fake_generation():
    """Factory for FakeGenerationService instances."""
    return FakeGenerationService


@pytest.fixture()
def fake_chat_model():
    """Factory for FakeChatModel instances."""
    return FakeChatModel

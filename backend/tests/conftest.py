"""Shared test fixtures for all test groups."""

import os

# Settings are cached on first use; pin a non-production environment with no
# LLM credentials before anything imports the app.
os.environ["ENVIRONMENT"] = "test"
os.environ["OPENAI_API_KEY"] = ""
os.environ["AZURE_OPENAI_API_KEY"] = ""
os.environ["AZURE_AI_API_KEY"] = ""
os.environ["DEV_AUTH_BYPASS"] = "false"

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from venture_hub.agents.base import AgentContext, AgentOptions
from venture_hub.core.config import Settings
from venture_hub.llm.client import LLMClient
from venture_hub.llm.service import AIService, ContentSafetyResult
from venture_hub.store.memory import InMemoryStore
from venture_hub.store.models import UserType, utc_now
from venture_hub.store.seed import seed_store


@pytest.fixture
def test_settings() -> Settings:
    """Settings with no LLM keys and no seeding, independent of the environment."""
    return Settings(
        _env_file=None,
        environment="test",
        openai_api_key="",
        azure_openai_api_key="",
        azure_ai_endpoint="",
        azure_ai_api_key="",
        seed_on_startup=False,
    )


@pytest.fixture
def store() -> InMemoryStore:
    """Empty store."""
    return InMemoryStore()


@pytest.fixture
def seeded_store() -> InMemoryStore:
    store = InMemoryStore()
    seed_store(store)
    return store


@pytest.fixture
def unconfigured_ai(test_settings) -> AIService:
    """AIService whose LLM client has no credentials."""
    return AIService(llm=LLMClient(settings=test_settings), settings=test_settings)


@pytest.fixture
def mock_ai() -> MagicMock:
    """Configured AIService double: safe content, structured replies via AsyncMock."""
    ai = MagicMock(spec=AIService)
    ai.configured = True
    ai.check_content_safety = AsyncMock(return_value=ContentSafetyResult(safe=True))
    ai.llm = MagicMock()
    ai.llm.generate_structured_response = AsyncMock()
    return ai


@pytest.fixture
def make_context():
    """Build an AgentContext whose history ends with ``message``."""

    def _make(
        message: str = "hello",
        task: str = "general",
        user_type: UserType = UserType.ENTREPRENEUR,
        history: list[dict] | None = None,
        **relevant_data,
    ) -> AgentContext:
        turns = list(history or [])
        turns.append({"role": "user", "content": message})
        return AgentContext(
            user_id="user-a",
            user_type=user_type,
            current_task=task,
            conversation_history=turns,
            relevant_data=relevant_data,
        )

    return _make


@pytest.fixture
def options() -> AgentOptions:
    return AgentOptions()


@pytest.fixture
def tomorrow():
    return utc_now() + timedelta(days=1)


@pytest.fixture
def yesterday():
    return utc_now() - timedelta(days=1)

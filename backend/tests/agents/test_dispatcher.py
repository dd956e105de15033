"""Tests for agent selection, dispatch and the request pipeline."""

import pytest

from venture_hub.agents import dispatcher
from venture_hub.agents.base import Agent, AgentRequest
from venture_hub.agents.dispatcher import AgentEngine, AgentKind, build_agent, select_agent_kind, tools_for
from venture_hub.store.models import MessageRole, UserType

pytestmark = pytest.mark.unit


class TestSelectAgentKind:
    @pytest.mark.parametrize(
        ("user_type", "expected"),
        [
            (UserType.ENTREPRENEUR, AgentKind.BUSINESS_ADVISOR),
            (UserType.INVESTOR, AgentKind.DEAL_ANALYZER),
            (UserType.LENDER, AgentKind.CREDIT_ASSESSOR),
            (UserType.GRANTOR, AgentKind.IMPACT_EVALUATOR),
            (UserType.PARTNER, AgentKind.PARTNERSHIP_FACILITATOR),
            (UserType.TEAM_MEMBER, AgentKind.PLATFORM_ORCHESTRATOR),
            (UserType.ADMIN, AgentKind.PLATFORM_ORCHESTRATOR),
        ],
    )
    def test_user_type_mapping(self, user_type, expected):
        assert select_agent_kind(user_type, "general") == expected

    @pytest.mark.parametrize("task", ["co_founder_chat", "cofounder", "daily_cofounder_standup"])
    def test_cofounder_task_overrides_user_type(self, task):
        """Any task naming the co-founder routes there regardless of role."""
        assert select_agent_kind(UserType.LENDER, task) == AgentKind.CO_FOUNDER

    def test_unknown_user_type_falls_back_to_orchestrator(self):
        assert select_agent_kind("astronaut", "general") == AgentKind.PLATFORM_ORCHESTRATOR

    def test_every_kind_has_a_handler(self):
        assert set(dispatcher._HANDLERS) == set(AgentKind)

    def test_handlers_satisfy_agent_protocol(self, unconfigured_ai):
        for kind in AgentKind:
            assert isinstance(build_agent(kind, unconfigured_ai), Agent)

    def test_tools_are_copied(self):
        tools = tools_for(UserType.LENDER)
        tools.append("mutated")
        assert "mutated" not in tools_for(UserType.LENDER)


class TestAgentEngine:
    async def test_stores_user_and_assistant_messages(self, store, unconfigured_ai, test_settings):
        engine = AgentEngine(store, unconfigured_ai, test_settings)
        request = AgentRequest(user_id="u1", user_type=UserType.LENDER, message="help", task_type="underwriting")

        response = await engine.process_request(request)

        history = store.messages.by_owner("u1")
        assert [m.role for m in history] == [MessageRole.USER, MessageRole.ASSISTANT]
        assert history[0].content == "help"
        assert history[1].content == response.content
        assert history[1].task_type == "underwriting"

    async def test_kind_override_wins(self, store, unconfigured_ai, test_settings):
        """An explicit kind bypasses user-type selection."""
        engine = AgentEngine(store, unconfigured_ai, test_settings)
        request = AgentRequest(user_id="u1", user_type=UserType.INVESTOR, message="hi", task_type="brainstorm")

        response = await engine.process_request(request, AgentKind.CO_FOUNDER)

        assert response.content.startswith("**Brainstorm Mode")

    async def test_request_context_reaches_handler(self, store, unconfigured_ai, test_settings):
        """Context values are visible to the handler as options and relevant data."""
        engine = AgentEngine(store, unconfigured_ai, test_settings)
        request = AgentRequest(
            user_id="u1",
            user_type=UserType.LENDER,
            message="dscr please",
            task_type="calculate_dscr",
            context={"net_operating_income": 150_000, "total_debt_service": 100_000},
        )

        response = await engine.process_request(request)

        assert response.content.startswith("The Debt Service Coverage Ratio is 1.50x")

    async def test_failure_stores_nothing(self, store, unconfigured_ai, test_settings, monkeypatch):
        async def boom(*args, **kwargs):
            raise RuntimeError("handler crashed")

        monkeypatch.setattr(dispatcher, "dispatch", boom)
        engine = AgentEngine(store, unconfigured_ai, test_settings)

        with pytest.raises(RuntimeError):
            await engine.process_request(AgentRequest(user_id="u1", message="hi"))

        assert len(store.messages) == 0

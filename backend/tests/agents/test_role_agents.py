"""Tests for the role-specific advisor agents."""

from unittest.mock import AsyncMock

import pytest

from venture_hub.agents.base import AgentOptions
from venture_hub.agents.business_advisor import PLAN_ANALYSIS_CONFIDENCE, BusinessAdvisorAgent
from venture_hub.agents.credit_assessor import MIN_DSCR, CreditAssessorAgent, calculate_dscr
from venture_hub.agents.deal_analyzer import DealAnalyzerAgent
from venture_hub.agents.impact_evaluator import ImpactEvaluatorAgent
from venture_hub.agents.partnership_facilitator import PartnershipFacilitatorAgent
from venture_hub.agents.platform_orchestrator import PlatformOrchestratorAgent
from venture_hub.core.exceptions import LLMNotConfiguredError
from venture_hub.llm.service import BusinessGuidance, MarketAnalysis
from venture_hub.store.models import UserType

pytestmark = pytest.mark.unit


class TestScriptedAgents:
    @pytest.mark.parametrize(
        "agent_cls",
        [DealAnalyzerAgent, ImpactEvaluatorAgent, PartnershipFacilitatorAgent, PlatformOrchestratorAgent],
    )
    async def test_unknown_task_gets_greeting(self, agent_cls, make_context, options):
        response = await agent_cls().execute(make_context(task="something_else"), options)
        assert response.content.startswith("Hello!")
        assert response.suggestions

    async def test_scripted_responses_are_copies(self, make_context, options):
        """Mutating a returned response does not leak into the next one."""
        agent = PartnershipFacilitatorAgent()
        first = await agent.execute(make_context(task="match_startups"), options)
        first.suggestions.clear()

        second = await agent.execute(make_context(task="match_startups"), options)
        assert second.suggestions

    async def test_orchestrator_insights(self, make_context, options):
        response = await PlatformOrchestratorAgent().execute(make_context(task="generate_insights"), options)
        assert [i["type"] for i in response.insights] == ["platform_activity", "success_patterns"]


class TestDealAnalyzer:
    async def test_empty_portfolio(self, make_context, options):
        response = await DealAnalyzerAgent().execute(make_context(task="portfolio_analysis"), options)
        assert response.content.startswith("You don't have any investments")

    async def test_portfolio_counts_investments(self, make_context, options):
        investments = [{"industry": "FinTech"}, {"industry": "FinTech"}, {"industry": "AI/ML"}]
        context = make_context(task="portfolio_analysis", investments=investments)

        response = await DealAnalyzerAgent().execute(context, options)

        assert response.content.startswith("Your portfolio contains 3 investments.")
        assert response.insights == [{"type": "diversification", "value": "Spread across 2 sectors"}]


class TestCreditAssessor:
    def test_calculate_dscr(self):
        assert calculate_dscr(125_000, 100_000) == 1.25
        assert calculate_dscr(100_000, 30_000) == 3.33

    def test_calculate_dscr_rejects_non_positive_debt_service(self):
        with pytest.raises(ValueError):
            calculate_dscr(100_000, 0)

    async def test_dscr_from_options(self, make_context):
        options = AgentOptions(extra={"net_operating_income": "180,000", "total_debt_service": 120_000})

        response = await CreditAssessorAgent().execute(
            make_context(task="calculate_dscr", user_type=UserType.LENDER), options
        )

        assert response.content.startswith("The Debt Service Coverage Ratio is 1.50x.")
        assert {i["type"]: i["value"] for i in response.insights} == {"dscr": 1.5, "meets_minimum": True}
        assert response.confidence == 1.0

    async def test_dscr_below_minimum(self, make_context, options):
        context = make_context(task="calculate_dscr", net_operating_income=90_000, total_debt_service=100_000)

        response = await CreditAssessorAgent().execute(context, options)

        assert "0.90x" in response.content
        assert "restructuring" in response.content
        assert 0.9 < MIN_DSCR

    async def test_dscr_without_inputs_is_scripted(self, make_context, options):
        response = await CreditAssessorAgent().execute(make_context(task="calculate_dscr"), options)
        assert response.content.startswith("I'll help you calculate the Debt Service Coverage Ratio")
        assert response.insights == []


class TestBusinessAdvisor:
    async def test_analyze_without_plan_offers_creation(self, unconfigured_ai, make_context, options):
        response = await BusinessAdvisorAgent(unconfigured_ai).execute(
            make_context(task="analyze_business_plan"), options
        )
        assert response.actions[0]["type"] == "create_business_plan"

    async def test_analyze_plan_with_ai(self, mock_ai, make_context, options):
        mock_ai.provide_business_guidance = AsyncMock(return_value=BusinessGuidance(
            response="Tighten the go-to-market.",
            action_items=["Interview 10 customers"],
            resources=[],
            next_steps=["Revise pricing"],
        ))
        context = make_context(task="analyze_business_plan", business_plans=[{"name": "Solar Co", "industry": "Energy"}])

        response = await BusinessAdvisorAgent(mock_ai).execute(context, options)

        assert response.content.startswith('I\'ve analyzed your business plan "Solar Co"')
        assert response.suggestions == ["Revise pricing"]
        assert response.actions == [{"type": "task", "label": "Interview 10 customers"}]
        assert response.confidence == PLAN_ANALYSIS_CONFIDENCE

    async def test_analyze_plan_falls_back_on_llm_error(self, mock_ai, make_context, options):
        mock_ai.provide_business_guidance = AsyncMock(side_effect=LLMNotConfiguredError())
        context = make_context(task="analyze_business_plan", business_plans=[{"name": "Solar Co"}])

        response = await BusinessAdvisorAgent(mock_ai).execute(context, options)

        assert response.content.startswith("I'm having trouble analyzing your business plan")

    async def test_market_analysis_insights(self, mock_ai, make_context, options):
        mock_ai.analyze_market_trends = AsyncMock(return_value=MarketAnalysis(
            trends=["Electrification"],
            opportunities=["Grid storage"],
            threats=["Subsidy cuts"],
            market_size="$10B",
            growth_rate="12%",
            key_players=["Tesla"],
            confidence=0.7,
        ))
        context = make_context(task="market_analysis", business_plans=[{"name": "Solar Co", "industry": "Energy"}])

        response = await BusinessAdvisorAgent(mock_ai).execute(context, options)

        mock_ai.analyze_market_trends.assert_awaited_once_with("Energy", "Solar Co")
        assert "• Electrification" in response.content
        assert response.insights == [
            {"type": "market_size", "value": "$10B"},
            {"type": "growth_rate", "value": "12%"},
        ]
        assert response.confidence == 0.7

    async def test_general_greeting(self, unconfigured_ai, make_context, options):
        response = await BusinessAdvisorAgent(unconfigured_ai).execute(make_context(), options)
        assert response.content.startswith("Hello! I'm your AI Business Advisor.")

"""Business advisor for entrepreneurs."""

import json

import structlog

from venture_hub.agents.base import AgentContext, AgentOptions, AgentResponse, action, insight
from venture_hub.core.exceptions import LLMError
from venture_hub.llm.service import AIService

logger = structlog.get_logger(__name__)

PLAN_ANALYSIS_CONFIDENCE = 0.85

_PLAN_FIELDS = (
    "name", "description", "industry", "stage", "funding_goal", "team_size",
    "target_market", "competitive_advantage", "revenue_model", "content",
)


class BusinessAdvisorAgent:
    def __init__(self, ai: AIService):
        self.ai = ai

    async def execute(self, context: AgentContext, options: AgentOptions) -> AgentResponse:
        handlers = {
            "analyze_business_plan": self.analyze_business_plan,
            "financial_guidance": self.financial_guidance,
            "market_analysis": self.market_analysis,
            "strategy_advice": self.strategy_advice,
        }
        handler = handlers.get(context.current_task, self.general_advice)
        return await handler(context)

    async def analyze_business_plan(self, context: AgentContext) -> AgentResponse:
        plans = context.relevant_data.get("business_plans") or []
        if not plans:
            return AgentResponse(
                content=(
                    "I'd love to help you analyze your business plan! It looks like you haven't created one yet. "
                    "Let me guide you through building a comprehensive business plan that will attract investors "
                    "and help you clarify your strategy."
                ),
                suggestions=[
                    "Start with an Executive Summary",
                    "Define your Value Proposition",
                    "Analyze your Target Market",
                    "Create Financial Projections",
                ],
                actions=[action("create_business_plan", "Create New Business Plan")],
            )

        latest = plans[0]
        plan_context = json.dumps({k: latest.get(k) for k in _PLAN_FIELDS}, default=str)
        try:
            guidance = await self.ai.provide_business_guidance(
                "Analyze this business plan and provide specific recommendations", plan_context
            )
        except LLMError as exc:
            logger.warning("business_plan_analysis_fallback", error_type=type(exc).__name__)
            return AgentResponse(
                content=(
                    "I'm having trouble analyzing your business plan right now. "
                    "Let me provide some general guidance on what makes a strong business plan."
                ),
                suggestions=[
                    "Ensure your executive summary is compelling",
                    "Include detailed financial projections",
                    "Clearly define your competitive advantage",
                    "Show traction and market validation",
                ],
            )

        return AgentResponse(
            content=f'I\'ve analyzed your business plan "{latest.get("name")}" and here are my key findings:\n\n{guidance.response}',
            suggestions=guidance.next_steps,
            actions=[action("task", item) for item in guidance.action_items],
            confidence=PLAN_ANALYSIS_CONFIDENCE,
        )

    async def financial_guidance(self, context: AgentContext) -> AgentResponse:
        return AgentResponse(
            content="I can help you with various financial aspects of your business. What specific area would you like to focus on?",
            suggestions=[
                "Create financial projections",
                "Calculate burn rate and runway",
                "Analyze unit economics",
                "Plan funding requirements",
                "Optimize cash flow",
            ],
            actions=[action("open_financial_tools", "Open Financial Calculator")],
        )

    async def market_analysis(self, context: AgentContext) -> AgentResponse:
        plans = context.relevant_data.get("business_plans") or []
        if not plans:
            return AgentResponse(
                content=(
                    "Let's dive deep into your market analysis. I can help you understand market size, "
                    "competition, trends, and opportunities."
                ),
                suggestions=[
                    "Research your target market",
                    "Analyze competitors",
                    "Identify market trends",
                    "Calculate addressable market",
                ],
            )

        plan = plans[0]
        try:
            analysis = await self.ai.analyze_market_trends(
                plan.get("industry") or "technology",
                plan.get("description") or plan.get("name") or "",
            )
        except LLMError as exc:
            logger.warning("market_analysis_fallback", error_type=type(exc).__name__)
            return AgentResponse(
                content="I'll help you analyze your market. Can you tell me more about your industry and target customers?",
                suggestions=[
                    "Define your target market segments",
                    "Analyze competitor landscape",
                    "Identify market trends",
                    "Calculate market size (TAM/SAM/SOM)",
                ],
            )

        def bullets(items: list[str]) -> str:
            return "\n".join(f"• {item}" for item in items)

        return AgentResponse(
            content=(
                "Here's my analysis of your market:\n\n"
                f"**Market Trends:**\n{bullets(analysis.trends)}\n\n"
                f"**Opportunities:**\n{bullets(analysis.opportunities)}\n\n"
                f"**Potential Challenges:**\n{bullets(analysis.threats)}"
            ),
            insights=[
                insight("market_size", analysis.market_size),
                insight("growth_rate", analysis.growth_rate),
            ],
            confidence=analysis.confidence,
        )

    async def strategy_advice(self, context: AgentContext) -> AgentResponse:
        return AgentResponse(
            content="I'm here to help you develop winning strategies for your business. What strategic challenge are you facing?",
            suggestions=[
                "Go-to-market strategy",
                "Product development roadmap",
                "Competitive positioning",
                "Scaling and growth planning",
                "Partnership strategies",
            ],
        )

    async def general_advice(self, context: AgentContext) -> AgentResponse:
        return AgentResponse(
            content=(
                "Hello! I'm your AI Business Advisor. I'm here to help you succeed with your entrepreneurial journey. "
                "I can assist with business planning, financial modeling, market analysis, strategy development, "
                "and much more. What would you like to work on today?"
            ),
            suggestions=[
                "Analyze my business plan",
                "Help with financial projections",
                "Research my market",
                "Develop growth strategy",
                "Prepare for fundraising",
            ],
            actions=[action("quick_start", "Quick Business Health Check")],
        )

"""Deal analyzer for investors."""

from venture_hub.agents.base import (
    AgentContext,
    AgentOptions,
    AgentResponse,
    ScriptedAgent,
    action,
    insight,
)


class DealAnalyzerAgent(ScriptedAgent):
    script = {
        "analyze_deal": AgentResponse(
            content=(
                "I'll help you analyze potential investment opportunities. Please share the startup details "
                "or business plan you'd like me to evaluate."
            ),
            suggestions=[
                "Evaluate business model strength",
                "Analyze market opportunity",
                "Assess founding team",
                "Review financial projections",
                "Calculate potential ROI",
            ],
            actions=[action("upload_pitch_deck", "Upload Pitch Deck for Analysis")],
        ),
        "risk_assessment": AgentResponse(
            content="I can help you assess various types of investment risks. What specific risk analysis would you like me to perform?",
            suggestions=[
                "Market risk analysis",
                "Technology risk assessment",
                "Team risk evaluation",
                "Financial risk modeling",
                "Regulatory risk review",
            ],
        ),
        "valuation": AgentResponse(
            content=(
                "I'll help you perform comprehensive startup valuations using multiple methodologies. "
                "What company would you like to value?"
            ),
            suggestions=[
                "DCF valuation model",
                "Comparable company analysis",
                "Venture capital method",
                "First Chicago method",
                "Risk factor summation",
            ],
            actions=[action("valuation_calculator", "Open Valuation Calculator")],
        ),
        "due_diligence": AgentResponse(
            content=(
                "I'll assist you with due diligence processes. I can analyze documents, verify claims, "
                "and identify potential red flags."
            ),
            suggestions=[
                "Financial statement analysis",
                "Legal document review",
                "Market validation check",
                "Technology assessment",
                "Reference verification",
            ],
            actions=[action("dd_checklist", "Generate DD Checklist")],
        ),
    }
    default = AgentResponse(
        content=(
            "Hello! I'm your AI Deal Analyzer. I specialize in helping investors evaluate opportunities, "
            "manage portfolios, and make data-driven investment decisions. What can I help you with today?"
        ),
        suggestions=[
            "Analyze a new deal",
            "Review portfolio performance",
            "Conduct risk assessment",
            "Perform startup valuation",
            "Support due diligence",
        ],
        actions=[action("deal_flow", "View New Deal Flow")],
    )

    async def execute(self, context: AgentContext, options: AgentOptions) -> AgentResponse:
        if context.current_task == "portfolio_analysis":
            return self.portfolio_analysis(context)
        return await super().execute(context, options)

    def portfolio_analysis(self, context: AgentContext) -> AgentResponse:
        investments = context.relevant_data.get("investments") or []
        if not investments:
            return AgentResponse(
                content=(
                    "You don't have any investments in your portfolio yet. I can help you build a diversified "
                    "investment strategy and analyze potential opportunities."
                ),
                suggestions=[
                    "Define investment criteria",
                    "Set portfolio diversification goals",
                    "Explore deal flow opportunities",
                    "Create investment thesis",
                ],
            )

        sectors = {i.get("industry") for i in investments if i.get("industry")}
        return AgentResponse(
            content=(
                f"Your portfolio contains {len(investments)} investments. Let me analyze the performance "
                "and provide insights on optimization strategies."
            ),
            insights=[insight("diversification", f"Spread across {len(sectors)} sectors")],
            suggestions=[
                "Consider rebalancing sector allocation",
                "Monitor underperforming investments",
                "Identify exit opportunities",
                "Plan follow-on investments",
            ],
        )

"""Credit assessor for lenders.

Guidance only: no scoring model runs here. ``calculate_dscr`` computes the
debt service coverage ratio when both inputs are supplied in the options or
the request context.
"""

from typing import Any

from venture_hub.agents.base import (
    AgentContext,
    AgentOptions,
    AgentResponse,
    ScriptedAgent,
    action,
    insight,
)

# Lenders commonly require at least this coverage
MIN_DSCR = 1.25

DSCR_SUGGESTIONS = [
    "Calculate current DSCR",
    "Project future DSCR",
    "Analyze DSCR trends",
    "Compare to industry benchmarks",
    "Assess minimum DSCR requirements",
]


def calculate_dscr(net_operating_income: float, total_debt_service: float) -> float:
    """Debt service coverage ratio, rounded to two places."""
    if total_debt_service <= 0:
        raise ValueError("total_debt_service must be positive")
    return round(net_operating_income / total_debt_service, 2)


def _number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.replace(",", ""))
        except ValueError:
            return None
    return None


class CreditAssessorAgent(ScriptedAgent):
    script = {
        "assess_credit": AgentResponse(
            content=(
                "I'll help you assess credit risk for loan applications. Please provide the applicant's "
                "information for comprehensive analysis."
            ),
            suggestions=[
                "Review applicant financials",
                "Check repayment capacity",
                "Detect fraud indicators",
                "Calculate optimal credit limit",
                "Analyze portfolio risk",
            ],
            actions=[action("credit_analyzer", "Open Credit Analysis Tool")],
        ),
        "analyze_financials": AgentResponse(
            content=(
                "I can analyze financial statements and provide insights on creditworthiness. "
                "What financial documents would you like me to review?"
            ),
            suggestions=[
                "Income statement analysis",
                "Balance sheet review",
                "Cash flow statement evaluation",
                "Financial ratio calculations",
                "Trend analysis",
            ],
        ),
        "calculate_dscr": AgentResponse(
            content=(
                "I'll help you calculate the Debt Service Coverage Ratio (DSCR) to evaluate the "
                "borrower's ability to service debt."
            ),
            suggestions=DSCR_SUGGESTIONS,
            actions=[action("dscr_calculator", "Open DSCR Calculator")],
        ),
        "risk_modeling": AgentResponse(
            content=(
                "I can help you build predictive risk models to assess default probability and "
                "optimize lending decisions."
            ),
            suggestions=[
                "Default probability modeling",
                "Loss given default analysis",
                "Economic scenario stress testing",
                "Portfolio risk assessment",
                "Regulatory compliance check",
            ],
        ),
        "underwriting": AgentResponse(
            content=(
                "I'll assist with the underwriting process, helping you make informed lending decisions "
                "based on comprehensive risk analysis."
            ),
            suggestions=[
                "Automated underwriting rules",
                "Manual review recommendations",
                "Loan structuring advice",
                "Terms and pricing optimization",
                "Approval workflow guidance",
            ],
        ),
    }
    default = AgentResponse(
        content=(
            "Hello! I'm your AI Credit Assessor. I specialize in credit risk analysis, debt service "
            "coverage calculations, financial statement analysis and underwriting support. "
            "How can I help with your credit assessment needs today?"
        ),
        suggestions=[
            "Assess a credit application",
            "Calculate DSCR",
            "Analyze financial statements",
            "Build a risk model",
            "Get underwriting guidance",
        ],
        actions=[action("pending_applications", "Review Pending Applications")],
    )

    async def execute(self, context: AgentContext, options: AgentOptions) -> AgentResponse:
        if context.current_task == "calculate_dscr":
            computed = self.compute_dscr(context, options)
            if computed is not None:
                return computed
        return await super().execute(context, options)

    def compute_dscr(self, context: AgentContext, options: AgentOptions) -> AgentResponse | None:
        """Return a computed DSCR response, or None when inputs are missing."""
        source = {**context.relevant_data, **options.extra}
        noi = _number(source.get("net_operating_income"))
        debt_service = _number(source.get("total_debt_service"))
        if noi is None or debt_service is None or debt_service <= 0:
            return None

        dscr = calculate_dscr(noi, debt_service)
        if dscr >= MIN_DSCR:
            verdict = f"This meets the typical minimum of {MIN_DSCR}x, so debt service looks covered."
        elif dscr >= 1.0:
            verdict = f"This covers debt service but falls below the typical minimum of {MIN_DSCR}x."
        else:
            verdict = "Operating income does not cover debt service; the loan would need restructuring."

        return AgentResponse(
            content=f"The Debt Service Coverage Ratio is {dscr:.2f}x. {verdict}",
            suggestions=DSCR_SUGGESTIONS,
            insights=[
                insight("dscr", dscr),
                insight("meets_minimum", dscr >= MIN_DSCR),
            ],
            confidence=1.0,
        )

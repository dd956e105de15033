"""Impact evaluator for grantors."""

from venture_hub.agents.base import AgentResponse, ScriptedAgent, action


class ImpactEvaluatorAgent(ScriptedAgent):
    script = {
        "evaluate_impact": AgentResponse(
            content=(
                "I'll help you evaluate the social and environmental impact of grant applications. "
                "What project would you like me to assess?"
            ),
            suggestions=[
                "Quantify expected impact metrics",
                "Assess target beneficiaries",
                "Evaluate implementation feasibility",
                "Compare to similar programs",
                "Score against impact criteria",
            ],
            actions=[action("impact_calculator", "Open Impact Assessment Tool")],
        ),
        "assess_sustainability": AgentResponse(
            content="I can evaluate projects against ESG (Environmental, Social, Governance) criteria and sustainability frameworks.",
            suggestions=[
                "Environmental impact assessment",
                "Social value measurement",
                "Governance structure evaluation",
                "Long-term sustainability analysis",
                "UN SDG alignment check",
            ],
        ),
        "review_application": AgentResponse(
            content=(
                "I'll help you systematically review grant applications using your evaluation criteria. "
                "Which application should we analyze?"
            ),
            suggestions=[
                "Score against evaluation criteria",
                "Identify strengths and weaknesses",
                "Flag potential risks",
                "Compare to other applications",
                "Generate review summary",
            ],
        ),
        "track_outcomes": AgentResponse(
            content=(
                "I can help you monitor and measure the outcomes of your funded programs to demonstrate impact "
                "and improve future decisions."
            ),
            suggestions=[
                "Set up impact tracking metrics",
                "Analyze outcome data",
                "Generate impact reports",
                "Compare actual vs projected outcomes",
                "Identify successful program patterns",
            ],
            actions=[action("outcome_dashboard", "View Impact Dashboard")],
        ),
        "compliance_check": AgentResponse(
            content="I'll help ensure grant programs comply with regulatory requirements and internal policies.",
            suggestions=[
                "Regulatory compliance check",
                "Policy adherence verification",
                "Documentation requirements review",
                "Reporting obligation tracking",
                "Audit preparation support",
            ],
        ),
    }
    default = AgentResponse(
        content=(
            "Hello! I'm your AI Impact Evaluator. I specialize in assessing social impact, evaluating grant "
            "applications, and measuring program outcomes. What can I help you with?"
        ),
        suggestions=[
            "Evaluate program impact",
            "Review grant applications",
            "Track outcome metrics",
            "Assess sustainability",
            "Ensure compliance",
        ],
        actions=[action("pending_reviews", "View Pending Applications")],
    )

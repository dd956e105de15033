"""Platform orchestrator for team members and admins, and the fallback handler."""

from venture_hub.agents.base import AgentResponse, ScriptedAgent, insight


class PlatformOrchestratorAgent(ScriptedAgent):
    script = {
        "coordinate_workflow": AgentResponse(
            content="I'll help coordinate multi-user workflows and ensure smooth collaboration across the platform.",
            suggestions=[
                "Orchestrate funding workflows",
                "Manage approval processes",
                "Coordinate due diligence",
                "Facilitate introductions",
                "Synchronize timelines",
            ],
        ),
        "generate_insights": AgentResponse(
            content="I can analyze platform-wide data to generate actionable insights for all user types.",
            insights=[
                insight("platform_activity", "Deal flow increased 25% this quarter"),
                insight("success_patterns", "Startups with mentors 3x more likely to raise funds"),
            ],
            suggestions=[
                "Identify trending industries",
                "Analyze success patterns",
                "Predict market opportunities",
                "Optimize matching algorithms",
                "Enhance user engagement",
            ],
        ),
        "detect_anomalies": AgentResponse(
            content="I monitor platform activity to detect unusual patterns and potential issues that need attention.",
            suggestions=[
                "Monitor fraud indicators",
                "Detect unusual activity patterns",
                "Identify system performance issues",
                "Flag compliance violations",
                "Alert to security concerns",
            ],
        ),
        "optimize_platform": AgentResponse(
            content="I analyze platform performance and recommend optimizations to improve user experience and outcomes.",
            suggestions=[
                "Optimize user onboarding",
                "Improve matching algorithms",
                "Enhance workflow efficiency",
                "Reduce processing times",
                "Increase success rates",
            ],
        ),
        "manage_notifications": AgentResponse(
            content="I manage intelligent notifications to keep users informed without overwhelming them.",
            suggestions=[
                "Send timely alerts",
                "Prioritize important updates",
                "Personalize notification preferences",
                "Reduce notification fatigue",
                "Improve engagement rates",
            ],
        ),
    }
    default = AgentResponse(
        content=(
            "Hello! I'm your Platform Orchestrator. I coordinate workflows, generate insights, and optimize "
            "the entire platform ecosystem. What can I help you with?"
        ),
        suggestions=[
            "View platform insights",
            "Coordinate workflows",
            "Monitor system health",
            "Optimize performance",
            "Manage notifications",
        ],
    )

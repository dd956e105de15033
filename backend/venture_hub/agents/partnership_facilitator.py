"""Partnership facilitator for accelerators, incubators and other partners."""

from venture_hub.agents.base import AgentResponse, ScriptedAgent, action


class PartnershipFacilitatorAgent(ScriptedAgent):
    script = {
        "match_startups": AgentResponse(
            content=(
                "I'll help you find the best startup matches for your programs based on compatibility scoring "
                "and strategic fit."
            ),
            suggestions=[
                "Analyze startup-program fit",
                "Score compatibility factors",
                "Identify optimal partnerships",
                "Recommend program placements",
                "Predict partnership success",
            ],
            actions=[action("matching_engine", "Open Startup Matching Tool")],
        ),
        "optimize_programs": AgentResponse(
            content="I can analyze your programs and recommend optimizations to improve outcomes and success rates.",
            suggestions=[
                "Analyze program performance",
                "Identify improvement opportunities",
                "Optimize resource allocation",
                "Enhance curriculum design",
                "Improve mentor matching",
            ],
        ),
        "allocate_resources": AgentResponse(
            content=(
                "I'll help you optimize resource allocation across programs and startups to maximize impact "
                "and success rates."
            ),
            suggestions=[
                "Analyze resource utilization",
                "Optimize budget allocation",
                "Balance mentor assignments",
                "Distribute facilities efficiently",
                "Plan capacity management",
            ],
        ),
        "predict_success": AgentResponse(
            content="I can predict partnership success rates and startup outcomes based on historical data and key indicators.",
            suggestions=[
                "Startup success probability",
                "Program completion likelihood",
                "Funding success prediction",
                "Growth trajectory forecasting",
                "Risk factor identification",
            ],
        ),
        "network_analysis": AgentResponse(
            content="I'll analyze your partnership network to identify valuable connections and growth opportunities.",
            suggestions=[
                "Map network connections",
                "Identify key influencers",
                "Find collaboration opportunities",
                "Analyze relationship strength",
                "Expand network strategically",
            ],
            actions=[action("network_map", "View Network Visualization")],
        ),
    }
    default = AgentResponse(
        content=(
            "Hello! I'm your AI Partnership Facilitator. I help optimize partnerships, match startups with "
            "programs, and maximize ecosystem success. How can I assist you?"
        ),
        suggestions=[
            "Match startups to programs",
            "Optimize program performance",
            "Allocate resources efficiently",
            "Predict partnership success",
            "Analyze network opportunities",
        ],
        actions=[action("program_overview", "View Program Dashboard")],
    )

"""Co-founder coaching agent.

Structured tasks (stand-up, strategy, devil's advocate, decisions, brainstorm,
accountability, crisis) are rule-based. Free conversation goes through the
adaptive path: the brain picks a response mode, then the LLM answers in that
mode as JSON, falling back to a canned reply when the LLM is unavailable.
"""

from typing import Any

import structlog
from pydantic import BaseModel, Field

from venture_hub.agents.base import AgentContext, AgentOptions, AgentResponse, action, insight
from venture_hub.agents.cofounder import brain
from venture_hub.agents.cofounder.brain import ResponseMode
from venture_hub.core.exceptions import LLMError
from venture_hub.llm.service import AIService, validate_ai_response

logger = structlog.get_logger(__name__)

AI_CONFIDENCE = 0.9
RULE_CONFIDENCE = 0.8
SAFETY_CONFIDENCE = 1.0

ADAPTIVE_TEMPERATURE = 0.8
ADAPTIVE_MAX_TOKENS = 1500

BLOCKER_KEYWORDS = ("blocked", "stuck", "can't", "unable", "waiting for", "need to", "should")
BLOCKER_WINDOW = 20
BLOCKER_MIN_MENTIONS = 3

SAFETY_REFUSAL = AgentResponse(
    content=(
        "I noticed your message contains content that I can't respond to appropriately. Let's keep our "
        "conversation professional and focused on building your business. How can I help you with your "
        "startup challenges?"
    ),
    suggestions=[
        "Share a business challenge you're facing",
        "Discuss your current goals",
        "Talk about decision-making",
    ],
    confidence=SAFETY_CONFIDENCE,
)

CRISIS_REMINDER = (
    "**Remember**: Every successful entrepreneur faces crises. This is not a reflection of your abilities - "
    "it's part of the journey. You've handled challenges before, and you'll handle this one too.\n\n"
    "What's the first immediate action you want to tackle? Let's start there and build momentum."
)


class CoFounderReply(BaseModel):
    content: str
    suggestions: list[str] = Field(default_factory=list)
    actions: list[dict[str, Any]] = Field(default_factory=list)


def _numbered(items: list[str]) -> str:
    return "\n".join(f"{i}. {item}" for i, item in enumerate(items, start=1))


def find_blockers(history: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Obstacle keywords mentioned repeatedly in recent conversation."""
    counts = dict.fromkeys(BLOCKER_KEYWORDS, 0)
    for message in history[-BLOCKER_WINDOW:]:
        text = (message.get("content") or "").lower()
        for keyword in BLOCKER_KEYWORDS:
            if keyword in text:
                counts[keyword] += 1
    return [
        {"type": "recurring_obstacle", "keyword": keyword, "mentions": count}
        for keyword, count in counts.items()
        if count >= BLOCKER_MIN_MENTIONS
    ]


class CoFounderAgent:
    def __init__(self, ai: AIService):
        self.ai = ai

    async def execute(self, context: AgentContext, options: AgentOptions) -> AgentResponse:
        handlers = {
            "daily_standup": self.daily_standup,
            "strategic_session": self.strategic_session,
            "devils_advocate": self.devils_advocate,
            "decision_support": self.decision_support,
            "brainstorm": self.brainstorm,
            "accountability_check": self.accountability_check,
            "crisis_support": self.crisis_support,
        }
        handler = handlers.get(context.current_task)
        if handler is not None:
            return await handler(context)
        return await self.adaptive_response(context)

    async def daily_standup(self, context: AgentContext) -> AgentResponse:
        goals = context.relevant_data.get("goals") or []
        blockers = find_blockers(context.conversation_history)
        insights = self._daily_insights(context, blockers)

        if goals:
            on_track = sum(1 for g in goals if g.get("status") != "overdue")
            goal_line = f"- Goals on track: {on_track}/{len(goals)}"
        else:
            goal_line = "- No active goals set - want to set some?"
        if blockers:
            blocker_line = f"- Blockers detected: {len(blockers)} items need attention"
        else:
            blocker_line = "- No major blockers detected"

        content = (
            "Good morning! Let's do our daily check-in:\n\n"
            f"**Quick Status Update:**\n{goal_line}\n{blocker_line}\n\n"
            "**Today's Focus:**\nWhat's the ONE thing that will move the needle most today?\n\n"
            "**Yesterday's Win:**\nWhat went well yesterday that we can build on?\n\n"
            "**What's in Your Way:**\nAny obstacles I can help you think through?"
        )
        if insights:
            content += f"\n\n**Quick Insight:**\n{insights[0]['value']}"

        return AgentResponse(
            content=content,
            suggestions=[
                "Set today's top priority",
                "Review weekly goals",
                "Discuss blockers",
                "Celebrate recent wins",
                "Plan the week ahead",
            ],
            actions=[
                action("set_daily_priority", "Set Today's Priority"),
                action("update_goals", "Update Goal Progress"),
            ],
            insights=insights[:2],
        )

    def _daily_insights(self, context: AgentContext, blockers: list[dict[str, Any]]) -> list[dict[str, Any]]:
        insights = []
        recent = context.conversation_history[-BLOCKER_WINDOW:]
        if any(brain.detect_needs(m.get("content") or "").celebration for m in recent):
            insights.append(insight(
                "celebration",
                "You've had some solid wins recently. Let's capitalize on this momentum and tackle "
                "something bigger today.",
            ))
        if blockers:
            insights.append(insight(
                "accountability",
                "I notice you've been stuck on a few things. Sometimes the best way through is to ask for "
                "help or try a different approach.",
            ))
        return insights

    async def strategic_session(self, context: AgentContext) -> AgentResponse:
        plans = context.relevant_data.get("business_plans") or []
        business = {**(plans[0] if plans else {}), **context.relevant_data}
        challenges = brain.strategic_challenges(business)
        focus = "\n\n".join(
            f"{i}. **{c['area']}**: {c['question']}" for i, c in enumerate(challenges, start=1)
        )
        return AgentResponse(
            content=(
                "Let's dive deep into strategy. I've been analyzing your business and I want to explore some "
                "bigger picture questions with you.\n\n"
                f"**Strategic Focus Areas I'm Thinking About:**\n\n{focus}\n\n"
                "Which of these resonates most with what's keeping you up at night? Or is there something else "
                "entirely you want to think through strategically?\n\n"
                "I'm not here to give you quick answers - I want to think through this WITH you, challenge "
                "your assumptions, and help you see angles you might be missing."
            ),
            suggestions=[c["area"] for c in challenges],
            actions=[
                action("swot_analysis", "Build SWOT Analysis"),
                action("scenario_planning", "Model Different Scenarios"),
            ],
        )

    async def devils_advocate(self, context: AgentContext) -> AgentResponse:
        assumptions = brain.identify_assumptions(context.last_message)
        counter_points = brain.generate_counter_points(assumptions)
        counters = "\n\n".join(
            f"{i}. {p.challenge}\n   *Evidence:* {p.evidence}" for i, p in enumerate(counter_points, start=1)
        )
        return AgentResponse(
            content=(
                "Okay, I need to challenge you on this. It's my job as your co-founder to poke holes in ideas "
                "BEFORE the market does.\n\n"
                f"**Assumptions I'm Seeing:**\n{_numbered(assumptions)}\n\n"
                f"**Counter-Arguments:**\n{counters}\n\n"
                "I'm not trying to kill your idea - I'm trying to make it bulletproof. How do you respond to "
                "these challenges? What am I missing?"
            ),
            suggestions=[
                "Address the strongest counter-argument",
                "Provide evidence for key assumptions",
                "Modify the approach based on feedback",
                "Double down with stronger reasoning",
            ],
            insights=[insight("counter_point", p.challenge) for p in counter_points],
        )

    async def decision_support(self, context: AgentContext) -> AgentResponse:
        decision = brain.classify_decision(context.last_message)
        analysis = brain.analyze_decision(decision)
        considerations = "\n".join(
            f"- **{c['factor']}**: {c['analysis']}" for c in analysis["considerations"]
        )
        scenarios = analysis["scenarios"]
        return AgentResponse(
            content=(
                "Let's work through this decision systematically. Based on what you've shared, this is a "
                f"{decision.impact} impact, {decision.reversibility} decision.\n\n"
                "**Decision Framework:**\n\n"
                f"**1. Clarify the Real Decision**\n{analysis['clarification']}\n\n"
                f"**2. What Are You Optimizing For?**\n{' - '.join(analysis['optimization_factors'])}\n\n"
                f"**3. Key Considerations:**\n{considerations}\n\n"
                "**4. Potential Scenarios:**\n"
                f"- **Best Case**: {scenarios['best']}\n"
                f"- **Most Likely**: {scenarios['likely']}\n"
                f"- **Worst Case**: {scenarios['worst']}\n\n"
                f"**My Take**: {analysis['recommendation']}\n\n"
                "What's your gut telling you? Sometimes the analytical framework confirms what you already "
                "know deep down."
            ),
            actions=[
                action("decision_matrix", "Build Decision Matrix"),
                action("premortem", "Run Pre-mortem Analysis"),
            ],
            insights=[
                insight("impact", decision.impact),
                insight("reversibility", decision.reversibility),
                insight("urgency", decision.urgency),
                insight("category", decision.category),
            ],
        )

    async def brainstorm(self, context: AgentContext) -> AgentResponse:
        topic = brain.extract_brainstorm_topic(context.last_message)
        ideas = brain.CREATIVE_IDEAS
        what_if = "\n".join(f"{i}. What if {idea}?" for i, idea in enumerate(ideas["what_if"], start=1))
        return AgentResponse(
            content=(
                f"**Brainstorm Mode: {topic}**\n\n"
                "No judgment here - let's get creative and see what emerges. Here are some directions to "
                "explore:\n\n"
                f"**Initial Ideas:**\n{_numbered(ideas['conventional'])}\n\n"
                f"**Unconventional Angles:**\n{_numbered(ideas['unconventional'])}\n\n"
                f"**What If We...:**\n{what_if}\n\n"
                "What sparks something for you? Or what completely different direction should we explore?"
            ),
            suggestions=[
                "Build on the most interesting idea",
                "Combine two different approaches",
                "Explore the riskiest option",
                "Find the simplest solution",
            ],
        )

    async def accountability_check(self, context: AgentContext) -> AgentResponse:
        commitments = context.relevant_data.get("commitments") or []
        completed = [c for c in commitments if c.get("status") == "completed"]
        overdue = [c for c in commitments if c.get("status") == "overdue"]

        completed_lines = "\n".join(
            f"- {c['description']} - {c.get('completed_at')}" for c in completed
        ) or "- None completed recently"
        overdue_lines = "\n".join(
            f"- {c['description']} - was due {c.get('due_date')}" for c in overdue
        ) or "- All caught up!"

        if len(completed) > len(overdue):
            pattern = "Strong completion rate - you follow through on commitments"
        elif len(overdue) > len(completed):
            pattern = "Commitments tend to go overdue - may be setting unrealistic timelines"
        else:
            pattern = "Not enough history yet to spot a pattern"

        if overdue:
            closing = "**We Need to Talk About the Overdue Items**\nWhat's really blocking progress here?"
            suggestions = [
                "Address the biggest blocker",
                "Reschedule unrealistic commitments",
                "Break down large tasks",
                "Identify support needed",
            ]
        else:
            closing = "**Strong Accountability!** You're staying on top of commitments."
            suggestions = [
                "Set next week's priorities",
                "Plan bigger goals",
                "Celebrate consistent progress",
            ]

        return AgentResponse(
            content=(
                "Time for an honest accountability check. Let's see how we're doing on commitments:\n\n"
                f"**Completed** ({len(completed)}):\n{completed_lines}\n\n"
                f"**Overdue** ({len(overdue)}):\n{overdue_lines}\n\n"
                f"**Pattern Analysis:**\n{pattern}\n\n{closing}\n\n"
                "What's the real story behind the delays? No judgment - just want to understand so we can "
                "solve for it."
            ),
            suggestions=suggestions,
            insights=[
                insight("completed_commitments", len(completed)),
                insight("overdue_commitments", len(overdue)),
            ],
        )

    async def crisis_support(self, context: AgentContext) -> AgentResponse:
        crisis_type = brain.identify_crisis_type(context.last_message)
        plan = brain.crisis_plan(crisis_type)
        return AgentResponse(
            content=(
                "**Crisis Mode Activated**\n\n"
                "I can sense this is urgent and stressful. Let's break this down into manageable pieces and "
                "create an action plan.\n\n"
                f"**Immediate Triage (Next 24 Hours):**\n{_numbered(plan.immediate)}\n\n"
                f"**Short-term Stabilization (This Week):**\n{_numbered(plan.short_term)}\n\n"
                f"**Strategic Recovery (Next 30 Days):**\n{_numbered(plan.strategic)}\n\n"
                f"{CRISIS_REMINDER}"
            ),
            actions=[
                action("emergency_plan", "Create Emergency Action Plan"),
                action("stakeholder_communication", "Draft Stakeholder Communications"),
            ],
            insights=[insight("crisis_type", crisis_type)],
        )

    async def adaptive_response(self, context: AgentContext) -> AgentResponse:
        message = context.last_message
        state = brain.analyze_conversation_state(context.conversation_history)
        needs = brain.detect_needs(message)
        mode = brain.select_response_mode(state, needs)
        logger.debug(
            "cofounder_mode_selected",
            mode=mode.value,
            emotional_state=state.emotional_state.value,
            urgency=state.urgency.value,
            engagement=state.engagement.value,
        )

        if mode == ResponseMode.CRISIS_SUPPORT:
            return await self.crisis_support(context)

        if self.ai is not None and self.ai.configured:
            try:
                return await self._ai_reply(message, context, mode)
            except LLMError as exc:
                logger.warning("cofounder_ai_fallback", mode=mode.value, error_type=type(exc).__name__)

        reply = brain.mode_reply(mode)
        return AgentResponse(**reply, confidence=RULE_CONFIDENCE)

    async def _ai_reply(self, message: str, context: AgentContext, mode: ResponseMode) -> AgentResponse:
        safety = await self.ai.check_content_safety(message)
        if not safety.safe:
            logger.warning("cofounder_content_unsafe", user_id=context.user_id)
            return SAFETY_REFUSAL.model_copy(deep=True)

        stage = context.relevant_data.get("stage") or "early stage"
        extra = context.relevant_data.get("additional_context") or ""
        prompt = f"{message}\n\nContext: The entrepreneur is {stage}. {extra}".rstrip()

        # The current message is the prompt, so it is not repeated in history
        history = context.conversation_history[:-1]
        data = await self.ai.llm.generate_structured_response(
            brain.build_system_prompt(mode),
            prompt,
            history,
            temperature=ADAPTIVE_TEMPERATURE,
            max_tokens=ADAPTIVE_MAX_TOKENS,
        )
        reply = validate_ai_response(data, CoFounderReply, "co-founder reply")
        return AgentResponse(
            content=reply.content,
            suggestions=reply.suggestions,
            actions=reply.actions,
            confidence=AI_CONFIDENCE,
        )

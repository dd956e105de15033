"""Rule-based conversation analysis for the co-founder agent.

Everything here is deterministic keyword matching over the latest message, so
the agent still behaves sensibly when no LLM is configured.
"""

import re
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class EmotionalState(StrEnum):
    CONFIDENT = "confident"
    STRESSED = "stressed"
    EXCITED = "excited"
    OVERWHELMED = "overwhelmed"
    NEUTRAL = "neutral"


class Urgency(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRISIS = "crisis"


class Engagement(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ConversationMode(StrEnum):
    LISTENING = "listening"
    CHALLENGING = "challenging"
    SUPPORTING = "supporting"
    TEACHING = "teaching"
    STRATEGIZING = "strategizing"


class ResponseMode(StrEnum):
    CRISIS_SUPPORT = "crisis_support"
    SUPPORTIVE = "supportive"
    CHALLENGING = "challenging"
    CELEBRATORY = "celebratory"
    TEACHING = "teaching"
    COLLABORATIVE = "collaborative"


@dataclass(frozen=True)
class ConversationState:
    mode: ConversationMode
    urgency: Urgency
    emotional_state: EmotionalState
    engagement: Engagement
    intent: str = "general_conversation"
    key_topics: tuple[str, ...] = ()


@dataclass(frozen=True)
class EntrepreneurNeeds:
    support: bool = False
    challenging: bool = False
    guidance: bool = False
    accountability: bool = False
    celebration: bool = False
    crisis_help: bool = False


@dataclass(frozen=True)
class DecisionType:
    impact: str = "low"  # low | medium | high | critical
    reversibility: str = "reversible"  # reversible | semi-reversible | irreversible
    urgency: str = "near-term"  # immediate | near-term | long-term
    category: str = "operational"  # strategic | financial | hiring | product | operational


@dataclass(frozen=True)
class CounterPoint:
    challenge: str
    evidence: str


@dataclass
class CrisisPlan:
    immediate: list[str] = field(default_factory=list)
    short_term: list[str] = field(default_factory=list)
    strategic: list[str] = field(default_factory=list)


def _pattern(words: str) -> re.Pattern[str]:
    return re.compile(f"({words})", re.IGNORECASE)


_STRESSED = _pattern("stressed|overwhelmed|exhausted|burnt out|tired")
_EXCITED = _pattern("excited|pumped|amazing|fantastic|incredible")
_CONFIDENT = _pattern("confident|sure|definitely|absolutely")
_LOST = _pattern("lost|confused|stuck|don't know|uncertain")

_URGENCY_CRISIS = _pattern("crisis|emergency|urgent|asap|immediately")
_URGENCY_HIGH = _pattern("soon|quickly|today|this week")
_URGENCY_MEDIUM = _pattern("important|significant|major")

_NEEDS_SUPPORT = _pattern("struggling|difficult|hard|stressed|overwhelmed")
_COMPLACENCY = _pattern("easy|simple|obvious|no problem|piece of cake")
_UNCERTAINTY = _pattern("not sure|don't know|uncertain|confused|what should")
_AVOIDANCE = _pattern("should|need to|have to|must|later|eventually")
_WINS = _pattern("closed|signed|launched|raised|hired|achieved|success")
_CRISIS = _pattern("crisis|emergency|disaster|failed|lost|quit|broke")

ASSUMPTION_PATTERNS = [
    re.compile(r"everyone (wants|needs|will)", re.IGNORECASE),
    re.compile(r"customers (always|never|definitely)", re.IGNORECASE),
    re.compile(r"the market (is|will|should)", re.IGNORECASE),
    re.compile(r"(obviously|clearly|definitely)", re.IGNORECASE),
    re.compile(r"we just need to", re.IGNORECASE),
    re.compile(r"it will only take", re.IGNORECASE),
    re.compile(r"users will obviously", re.IGNORECASE),
    re.compile(r"competitors can't", re.IGNORECASE),
]

MAX_COUNTER_POINTS = 3
ENGAGEMENT_WINDOW = 10


def last_message(history: list[dict[str, Any]]) -> str:
    if not history:
        return ""
    return history[-1].get("content") or ""


def detect_emotional_state(message: str) -> EmotionalState:
    if _STRESSED.search(message):
        return EmotionalState.STRESSED
    if _EXCITED.search(message):
        return EmotionalState.EXCITED
    if _CONFIDENT.search(message):
        return EmotionalState.CONFIDENT
    if _LOST.search(message):
        return EmotionalState.OVERWHELMED
    return EmotionalState.NEUTRAL


def detect_urgency(message: str) -> Urgency:
    if _URGENCY_CRISIS.search(message):
        return Urgency.CRISIS
    if _URGENCY_HIGH.search(message):
        return Urgency.HIGH
    if _URGENCY_MEDIUM.search(message):
        return Urgency.MEDIUM
    return Urgency.LOW


def assess_engagement(messages: list[dict[str, Any]]) -> Engagement:
    """Engagement from the average message length; fewer than two turns is low."""
    if len(messages) < 2:
        return Engagement.LOW
    average = sum(len(m.get("content") or "") for m in messages) / len(messages)
    if average > 200:
        return Engagement.HIGH
    if average > 50:
        return Engagement.MEDIUM
    return Engagement.LOW


def determine_mode(emotional_state: EmotionalState, urgency: Urgency) -> ConversationMode:
    if urgency == Urgency.CRISIS or emotional_state == EmotionalState.OVERWHELMED:
        return ConversationMode.SUPPORTING
    if emotional_state == EmotionalState.CONFIDENT:
        return ConversationMode.CHALLENGING
    if emotional_state == EmotionalState.EXCITED:
        return ConversationMode.STRATEGIZING
    return ConversationMode.LISTENING


def analyze_conversation_state(history: list[dict[str, Any]]) -> ConversationState:
    recent = history[-ENGAGEMENT_WINDOW:]
    message = last_message(recent)
    emotional_state = detect_emotional_state(message)
    urgency = detect_urgency(message)
    return ConversationState(
        mode=determine_mode(emotional_state, urgency),
        urgency=urgency,
        emotional_state=emotional_state,
        engagement=assess_engagement(recent),
    )


def detect_needs(message: str) -> EntrepreneurNeeds:
    return EntrepreneurNeeds(
        support=bool(_NEEDS_SUPPORT.search(message)),
        challenging=bool(_COMPLACENCY.search(message)),
        guidance=bool(_UNCERTAINTY.search(message)),
        accountability=bool(_AVOIDANCE.search(message)),
        celebration=bool(_WINS.search(message)),
        crisis_help=bool(_CRISIS.search(message)),
    )


def select_response_mode(state: ConversationState, needs: EntrepreneurNeeds) -> ResponseMode:
    """Pick how to respond. Checked in priority order, first match wins."""
    if needs.crisis_help or state.urgency == Urgency.CRISIS:
        return ResponseMode.CRISIS_SUPPORT
    if state.emotional_state in (EmotionalState.STRESSED, EmotionalState.OVERWHELMED):
        return ResponseMode.SUPPORTIVE
    if needs.challenging and state.emotional_state == EmotionalState.CONFIDENT:
        return ResponseMode.CHALLENGING
    if needs.celebration:
        return ResponseMode.CELEBRATORY
    if needs.guidance:
        return ResponseMode.TEACHING
    return ResponseMode.COLLABORATIVE


def identify_assumptions(message: str) -> list[str]:
    assumptions = []
    for pattern in ASSUMPTION_PATTERNS:
        match = pattern.search(message)
        if match:
            assumptions.append(f"Assumption: {match.group(0)} - This might not always be true")

    if re.search(r"(everyone|all customers|users)", message, re.IGNORECASE):
        assumptions.append("Assuming universal customer behavior - different segments may act differently")
    if re.search(r"(just need to|simply|easy)", message, re.IGNORECASE):
        assumptions.append("Assuming implementation simplicity - execution often reveals complexity")
    if re.search(r"(will definitely|must|always)", message, re.IGNORECASE):
        assumptions.append("Assuming certainty in uncertain market conditions")
    return assumptions


def generate_counter_points(assumptions: list[str]) -> list[CounterPoint]:
    points = []
    for assumption in assumptions[:MAX_COUNTER_POINTS]:
        if "customer" in assumption:
            points.append(CounterPoint(
                "What if customer behavior varies significantly across segments?",
                "Different customer segments often have varying needs, budgets, and decision-making processes",
            ))
        elif "market" in assumption:
            points.append(CounterPoint(
                "What if market conditions change rapidly?",
                "Markets are dynamic - economic shifts, new competitors, and changing regulations can impact assumptions",
            ))
        elif "simple" in assumption or "easy" in assumption:
            points.append(CounterPoint(
                "What if implementation is more complex than expected?",
                "Technical debt, regulatory requirements, and scale challenges often emerge during execution",
            ))
        else:
            points.append(CounterPoint(
                "What evidence validates this assumption?",
                "Test assumptions with real user data, market research, or small experiments before betting big",
            ))
    return points


def classify_decision(message: str) -> DecisionType:
    def has(words: str) -> bool:
        return re.search(f"({words})", message, re.IGNORECASE) is not None

    impact = "low"
    if has("pivot|shut down|sell|acquire|merge|ipo"):
        impact = "critical"
    elif has("hire|fire|funding|invest|partner"):
        impact = "high"
    elif has("feature|price|marketing|process"):
        impact = "medium"

    reversibility = "reversible"
    if has("fire|shut down|sell|legal|contract|equity"):
        reversibility = "irreversible"
    elif has("hire|invest|partner|commit"):
        reversibility = "semi-reversible"

    urgency = "near-term"
    if has("urgent|asap|immediately|crisis|emergency"):
        urgency = "immediate"

    category = "operational"
    if has("strategy|pivot|market|vision"):
        category = "strategic"
    elif has("funding|revenue|cost|price|budget"):
        category = "financial"
    elif has("hire|fire|team|culture"):
        category = "hiring"
    elif has("feature|product|development|tech"):
        category = "product"

    return DecisionType(impact=impact, reversibility=reversibility, urgency=urgency, category=category)


def analyze_decision(decision: DecisionType) -> dict[str, Any]:
    if decision.reversibility == "irreversible":
        reversibility_note = "take extra time to consider"
    else:
        reversibility_note = "you can adjust course later"
    return {
        "clarification": f"You're facing a {decision.category} decision with {decision.impact} impact.",
        "optimization_factors": [
            "Speed vs. Quality",
            "Risk vs. Reward",
            "Short-term vs. Long-term impact",
            "Cost vs. Benefit",
        ],
        "considerations": [
            {
                "factor": "Timing",
                "analysis": f"This seems {decision.urgency} - do you have enough information to decide now?",
            },
            {
                "factor": "Reversibility",
                "analysis": f"This decision is {decision.reversibility} - {reversibility_note}.",
            },
            {
                "factor": "Resources",
                "analysis": "What resources (time, money, people) does each option require?",
            },
        ],
        "scenarios": {
            "best": "Decision works perfectly and accelerates growth",
            "likely": "Decision has mixed results requiring adjustments",
            "worst": "Decision fails and requires significant course correction",
        },
        "recommendation": "Need more context about your specific situation to provide a strong recommendation.",
    }


def extract_brainstorm_topic(message: str) -> str:
    text = message.lower()
    if "product" in text:
        return "Product Development Ideas"
    if "marketing" in text:
        return "Marketing Strategy"
    if "revenue" in text or "monetiz" in text:
        return "Revenue Generation"
    if "team" in text or "hiring" in text:
        return "Team Building & Hiring"
    return "Business Growth Opportunities"


CREATIVE_IDEAS = {
    "conventional": [
        "Focus on core customer segment validation",
        "Optimize existing acquisition channels",
        "Improve product-market fit metrics",
        "Build strategic partnerships",
    ],
    "unconventional": [
        "Create a community-driven growth model",
        "Use gamification to increase engagement",
        "Partner with unlikely industry players",
        "Build in public to generate interest",
    ],
    "what_if": [
        "we completely changed our business model",
        "we targeted a different customer segment",
        "we gave our product away for free initially",
        "we focused on one feature and did it perfectly",
    ],
}


def identify_crisis_type(message: str) -> str:
    text = message.lower()
    if any(word in text for word in ("cash", "money", "funding")):
        return "financial_crisis"
    if any(word in text for word in ("team", "quit", "fired")):
        return "team_crisis"
    if any(word in text for word in ("customer", "churn", "lost")):
        return "customer_crisis"
    if any(word in text for word in ("product", "bug", "broken")):
        return "product_crisis"
    return "general_crisis"


CRISIS_PLANS = {
    "financial_crisis": CrisisPlan(
        immediate=[
            "Calculate exact runway remaining",
            "List all possible cost cuts",
            "Contact existing investors for bridge funding",
            "Explore emergency revenue opportunities",
        ],
        short_term=[
            "Create detailed cash flow projections",
            "Negotiate payment terms with vendors",
            "Focus sales efforts on fastest-closing deals",
            "Consider strategic partnerships for immediate revenue",
        ],
        strategic=[
            "Reassess business model sustainability",
            "Plan next fundraising round timeline",
            "Evaluate pivot opportunities",
            "Build relationships with potential acquirers",
        ],
    ),
    "team_crisis": CrisisPlan(
        immediate=[
            "Assess critical knowledge transfer needs",
            "Communicate with remaining team members",
            "Document key processes and systems",
            "Prioritize most urgent hiring needs",
        ],
        short_term=[
            "Redistribute responsibilities temporarily",
            "Fast-track hiring for critical roles",
            "Consider interim consultants or contractors",
            "Improve team retention strategies",
        ],
        strategic=[
            "Review company culture and management practices",
            "Implement better team communication systems",
            "Design competitive compensation packages",
            "Create clear career development paths",
        ],
    ),
    "default": CrisisPlan(
        immediate=[
            "Assess the immediate impact and scope",
            "Communicate with key stakeholders",
            "Implement damage control measures",
            "Gather all relevant information",
        ],
        short_term=[
            "Create action plan for resolution",
            "Allocate resources to fix the issue",
            "Monitor progress and adjust as needed",
            "Keep stakeholders informed of progress",
        ],
        strategic=[
            "Analyze root causes to prevent recurrence",
            "Strengthen systems and processes",
            "Build better crisis response capabilities",
            "Document lessons learned for future",
        ],
    ),
}


def crisis_plan(crisis_type: str) -> CrisisPlan:
    return CRISIS_PLANS.get(crisis_type, CRISIS_PLANS["default"])


def strategic_challenges(business: dict[str, Any]) -> list[dict[str, str]]:
    """Top four strategic questions for the business, high priority first."""
    challenges = [
        ("Market Positioning", "How do we differentiate from competitors and create a unique value proposition?", "high", 8),
    ]
    revenue = business.get("revenue")
    if isinstance(revenue, (int, float)) and revenue > 100_000:
        challenges.append((
            "Scaling Operations",
            "What systems and processes do we need to scale efficiently without losing quality?",
            "high", 7,
        ))
    funding_raised = business.get("funding_raised")
    if not funding_raised or funding_raised < 500_000:
        challenges.append((
            "Funding Strategy",
            "When and how should we raise our next round? What milestones do we need to hit?",
            "medium", 6,
        ))
    team_size = business.get("team_size")
    if not team_size or team_size < 10:
        challenges.append(("Team Building", "What key hires should we prioritize to accelerate growth?", "medium", 5))
    challenges.append((
        "Product Strategy",
        "Should we focus on depth in our core product or expand to adjacent markets?",
        "high", 7,
    ))
    challenges.append((
        "Customer Acquisition",
        "What channels will give us the best ROI for sustainable customer growth?",
        "high", 6,
    ))

    challenges.sort(key=lambda c: (c[2] != "high", -c[3]))
    return [{"area": area, "question": question} for area, question, _, _ in challenges[:4]]


BASE_TONE = "direct, honest, and supportive"
EXPERTISE = "startup strategy, product development, and business growth"

_MODE_PROMPTS = {
    ResponseMode.SUPPORTIVE: (
        "You are an empathetic co-founder providing emotional support. Be {tone}. "
        "Acknowledge their challenges, validate their feelings, and help them find a path forward."
    ),
    ResponseMode.CHALLENGING: (
        "You are a devil's advocate co-founder who pushes back constructively. Be {tone}. "
        "Question assumptions, poke holes in ideas, and demand evidence. Your goal is to strengthen their thinking."
    ),
    ResponseMode.TEACHING: (
        "You are a mentor co-founder sharing frameworks and knowledge. Be {tone}. "
        "Teach principles, share frameworks, and help them develop their own decision-making skills."
    ),
    ResponseMode.COLLABORATIVE: (
        "You are a thought partner co-founder working through problems together. Be {tone}. "
        "Think out loud, explore possibilities, and build on their ideas. You're in this together."
    ),
    ResponseMode.CELEBRATORY: (
        "You are an encouraging co-founder celebrating wins. Be {tone}. "
        "Acknowledge achievements, identify what made them successful, and build momentum."
    ),
}

_JSON_INSTRUCTIONS = """IMPORTANT: Respond in JSON format with this structure:
{
  "content": "Your response to the entrepreneur",
  "suggestions": ["actionable suggestion 1", "actionable suggestion 2", "actionable suggestion 3"],
  "actions": []
}

Keep responses concise, actionable, and authentic. Speak like a real co-founder, not a chatbot."""


def build_system_prompt(mode: ResponseMode, tone: str = BASE_TONE, expertise: str = EXPERTISE) -> str:
    template = _MODE_PROMPTS.get(mode, _MODE_PROMPTS[ResponseMode.COLLABORATIVE])
    return f"{template.format(tone=tone)}\nYour expertise includes: {expertise}.\n\n{_JSON_INSTRUCTIONS}"


MODE_REPLIES: dict[ResponseMode, dict[str, Any]] = {
    ResponseMode.SUPPORTIVE: {
        "content": (
            "I can hear that this is challenging right now. Every entrepreneur faces tough moments - it's part "
            "of the journey, not a reflection of your abilities. Let's break this down into manageable pieces "
            "and find a path forward together."
        ),
        "suggestions": [
            "Talk through what's most stressful",
            "Identify one small win we can achieve today",
            "Look at the bigger picture",
            "Plan some recovery time",
        ],
    },
    ResponseMode.CHALLENGING: {
        "content": (
            "I need to push back on this a bit. I'm seeing some assumptions here that might be worth "
            "questioning. As your co-founder, it's my job to poke holes in ideas before the market does. "
            "What evidence are you basing this on?"
        ),
        "suggestions": [
            "Show me the data",
            "What could go wrong?",
            "Have you tested this assumption?",
            "What would competitors do?",
        ],
    },
    ResponseMode.TEACHING: {
        "content": (
            "Great question! Let me share some frameworks that might help you think through this. The key is "
            "understanding the underlying principles so you can apply them to similar situations in the future."
        ),
        "suggestions": [
            "Walk through the framework step by step",
            "See examples from other companies",
            "Practice with your specific situation",
            "Explore common mistakes",
        ],
    },
    ResponseMode.COLLABORATIVE: {
        "content": (
            "I'm thinking about this with you. Let me share what I'm seeing and get your perspective. We're in "
            "this together, and the best solutions come from combining your deep knowledge of the business "
            "with my outside perspective."
        ),
        "suggestions": [
            "Explore different angles together",
            "Build on your initial idea",
            "Consider alternative approaches",
            "Make this decision together",
        ],
    },
    ResponseMode.CELEBRATORY: {
        "content": (
            "This is huge! Take a moment to actually celebrate this win. You've worked hard for this, and it "
            "deserves recognition. What made this successful? Let's understand the pattern so we can "
            "replicate it."
        ),
        "suggestions": [
            "Celebrate with the team",
            "Share the success story",
            "Identify what worked",
            "Plan the next milestone",
        ],
    },
}


def mode_reply(mode: ResponseMode) -> dict[str, Any]:
    """Canned reply for a response mode; unknown modes get the collaborative one."""
    reply = MODE_REPLIES.get(mode, MODE_REPLIES[ResponseMode.COLLABORATIVE])
    return {"content": reply["content"], "suggestions": list(reply["suggestions"]), "actions": []}

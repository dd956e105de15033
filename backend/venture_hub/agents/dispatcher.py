"""Agent selection and the request pipeline.

``select_agent_kind`` maps (user type, task type) to an AgentKind and
``dispatch`` is the only place a kind becomes a handler instance.
"""

from enum import StrEnum

import structlog

from venture_hub.agents.base import Agent, AgentContext, AgentOptions, AgentRequest, AgentResponse
from venture_hub.agents.business_advisor import BusinessAdvisorAgent
from venture_hub.agents.cofounder.agent import CoFounderAgent
from venture_hub.agents.context import ContextBuilder
from venture_hub.agents.credit_assessor import CreditAssessorAgent
from venture_hub.agents.deal_analyzer import DealAnalyzerAgent
from venture_hub.agents.impact_evaluator import ImpactEvaluatorAgent
from venture_hub.agents.partnership_facilitator import PartnershipFacilitatorAgent
from venture_hub.agents.platform_orchestrator import PlatformOrchestratorAgent
from venture_hub.core.config import Settings, get_settings
from venture_hub.llm.service import AIService, get_ai_service
from venture_hub.repositories import ConversationRepository
from venture_hub.store.memory import InMemoryStore
from venture_hub.store.models import MessageRole, UserType

logger = structlog.get_logger(__name__)


class AgentKind(StrEnum):
    BUSINESS_ADVISOR = "business_advisor"
    DEAL_ANALYZER = "deal_analyzer"
    CREDIT_ASSESSOR = "credit_assessor"
    IMPACT_EVALUATOR = "impact_evaluator"
    PARTNERSHIP_FACILITATOR = "partnership_facilitator"
    PLATFORM_ORCHESTRATOR = "platform_orchestrator"
    CO_FOUNDER = "co_founder"


_KIND_BY_USER_TYPE = {
    UserType.ENTREPRENEUR: AgentKind.BUSINESS_ADVISOR,
    UserType.INVESTOR: AgentKind.DEAL_ANALYZER,
    UserType.LENDER: AgentKind.CREDIT_ASSESSOR,
    UserType.GRANTOR: AgentKind.IMPACT_EVALUATOR,
    UserType.PARTNER: AgentKind.PARTNERSHIP_FACILITATOR,
    UserType.TEAM_MEMBER: AgentKind.PLATFORM_ORCHESTRATOR,
    UserType.ADMIN: AgentKind.PLATFORM_ORCHESTRATOR,
}

TOOLS: dict[UserType, list[str]] = {
    UserType.ENTREPRENEUR: ["financial_calculator", "market_analyzer", "business_planner"],
    UserType.INVESTOR: ["valuation_engine", "risk_analyzer", "portfolio_optimizer"],
    UserType.LENDER: ["credit_scorer", "risk_modeler", "underwriter"],
    UserType.GRANTOR: ["impact_scorer", "compliance_checker", "outcome_predictor"],
    UserType.PARTNER: ["matcher", "program_optimizer", "resource_allocator"],
    UserType.TEAM_MEMBER: ["task_manager", "document_processor", "collaboration_tools"],
    UserType.ADMIN: ["platform_analytics", "user_manager", "system_monitor"],
}

_HANDLERS = {
    AgentKind.BUSINESS_ADVISOR: BusinessAdvisorAgent,
    AgentKind.DEAL_ANALYZER: DealAnalyzerAgent,
    AgentKind.CREDIT_ASSESSOR: CreditAssessorAgent,
    AgentKind.IMPACT_EVALUATOR: ImpactEvaluatorAgent,
    AgentKind.PARTNERSHIP_FACILITATOR: PartnershipFacilitatorAgent,
    AgentKind.PLATFORM_ORCHESTRATOR: PlatformOrchestratorAgent,
    AgentKind.CO_FOUNDER: CoFounderAgent,
}

_missing = set(AgentKind) - set(_HANDLERS)
if _missing:
    raise RuntimeError(f"No handler registered for agent kinds: {sorted(_missing)}")


def select_agent_kind(user_type: UserType | str, task_type: str) -> AgentKind:
    if "co_founder" in task_type or "cofounder" in task_type:
        return AgentKind.CO_FOUNDER
    try:
        user_type = UserType(user_type)
    except ValueError:
        return AgentKind.PLATFORM_ORCHESTRATOR
    return _KIND_BY_USER_TYPE.get(user_type, AgentKind.PLATFORM_ORCHESTRATOR)


def tools_for(user_type: UserType) -> list[str]:
    return list(TOOLS.get(user_type, []))


def build_agent(kind: AgentKind, ai: AIService | None = None) -> Agent:
    return _HANDLERS[kind](ai or get_ai_service())


async def dispatch(
    kind: AgentKind,
    context: AgentContext,
    options: AgentOptions,
    ai: AIService | None = None,
) -> AgentResponse:
    agent = build_agent(kind, ai)
    return await agent.execute(context, options)


class AgentEngine:
    """Context building, dispatch and conversation persistence for one request."""

    def __init__(self, store: InMemoryStore, ai: AIService | None = None, settings: Settings | None = None):
        self.store = store
        self.ai = ai
        self.settings = settings or get_settings()
        self.contexts = ContextBuilder(store, self.settings)
        self.conversations = ConversationRepository(store)

    async def process_request(self, request: AgentRequest, kind: AgentKind | None = None) -> AgentResponse:
        context = self.contexts.build(request)
        kind = kind or select_agent_kind(request.user_type, request.task_type)
        options = AgentOptions(
            tools=tools_for(request.user_type),
            memory=context.conversation_history[:-1],
            streaming=request.streaming,
            extra=dict(request.context),
        )

        logger.info(
            "agent_request",
            user_id=request.user_id,
            agent_kind=kind.value,
            task_type=request.task_type,
        )
        response = await dispatch(kind, context, options, self.ai)

        self.conversations.add_message(request.user_id, MessageRole.USER, request.message, request.task_type)
        self.conversations.add_message(
            request.user_id, MessageRole.ASSISTANT, response.content, request.task_type
        )
        return response

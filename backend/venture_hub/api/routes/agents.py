"""Agent chat endpoints and co-founder goals/commitments/decisions.

Engine failures are logged and answered with a fixed apology body (500);
nothing is retried at this layer.
"""

import json

import structlog
from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import JSONResponse, StreamingResponse

from venture_hub.agents.base import AgentRequest, AgentResponse
from venture_hub.agents.dispatcher import AgentEngine, AgentKind
from venture_hub.api.deps import get_agent_engine, get_ai, get_current_profile, get_store, user_type_of
from venture_hub.core.auth import AuthenticatedUser, require_auth
from venture_hub.core.config import get_settings
from venture_hub.core.exceptions import ForbiddenError, LLMError, LLMNotConfiguredError, NotFoundError
from venture_hub.llm.service import AIService
from venture_hub.repositories import CoFounderRepository, ConversationRepository
from venture_hub.schemas.agents import AutomateRequest, ChatMessageRequest, SuggestionsRequest
from venture_hub.schemas.cofounder import (
    ChatRequest,
    CommitmentCreate,
    CommitmentUpdate,
    DecisionRequest,
    DecisionTopic,
    GoalCreate,
    GoalUpdate,
)
from venture_hub.store.memory import InMemoryStore
from venture_hub.store.models import MessageRole, User, UserType

logger = structlog.get_logger(__name__)

router = APIRouter()

AGENT_APOLOGY = {
    "content": "I'm having trouble processing your request right now. Please try again.",
    "error": "Agent processing failed",
}
COFOUNDER_APOLOGY = {
    "content": "I'm having trouble right now. Let's try that again.",
    "error": "Co-Founder processing failed",
}

STREAM_SYSTEM_PROMPT = (
    "You are an AI assistant on a startup ecosystem platform helping a {user_type}. "
    "Give practical, concise, actionable answers."
)

SCENARIOS = {
    "scenarios": {
        "best_case": {
            "description": "Everything exceeds expectations",
            "probability": 20,
            "outcomes": ["Strong market reception", "Rapid growth", "Team morale high"],
        },
        "likely_case": {
            "description": "Mixed results requiring adjustments",
            "probability": 60,
            "outcomes": ["Moderate traction", "Some pivots needed", "Extended timeline"],
        },
        "worst_case": {
            "description": "Significant challenges emerge",
            "probability": 20,
            "outcomes": ["Low adoption", "Resource constraints", "Strategy revision needed"],
        },
    },
    "early_warning_signals": [
        "Customer engagement below targets",
        "Burn rate exceeding budget",
        "Team concerns emerging",
    ],
}

PREMORTEM = {
    "potential_failures": [
        {"reason": "Insufficient market validation", "likelihood": "medium", "impact": "high"},
        {"reason": "Resource constraints emerge", "likelihood": "high", "impact": "medium"},
        {"reason": "Team misalignment on execution", "likelihood": "low", "impact": "high"},
    ],
    "mitigation_strategies": [
        "Conduct targeted customer interviews before full commit",
        "Build resource buffer into timeline",
        "Hold alignment session with all stakeholders",
    ],
    "early_warning_signals": [
        "Customer feedback trending negative",
        "Budget tracking shows overruns",
        "Team velocity declining",
    ],
}


async def _run(
    engine: AgentEngine, request: AgentRequest, kind: AgentKind | None = None
) -> AgentResponse | None:
    """Process a request. Any engine failure is logged and yields None."""
    try:
        return await engine.process_request(request, kind)
    except Exception as exc:
        logger.error(
            "agent_processing_failed",
            user_id=request.user_id,
            task_type=request.task_type,
            error=str(exc),
            error_type=type(exc).__name__,
            exc_info=True,
        )
        return None


# General agents


@router.post("/chat")
async def chat(
    body: ChatMessageRequest,
    user: AuthenticatedUser = Depends(require_auth),
    profile: User = Depends(get_current_profile),
    engine: AgentEngine = Depends(get_agent_engine),
):
    request = AgentRequest(
        user_id=user.user_id,
        user_type=user_type_of(profile),
        message=body.message,
        task_type=body.task_type,
        context=body.context,
        streaming=body.streaming,
    )
    response = await _run(engine, request)
    if response is None:
        return JSONResponse(status_code=500, content=AGENT_APOLOGY)
    return response.model_dump(exclude_none=True)


@router.post("/chat/stream")
async def chat_stream(
    body: ChatMessageRequest,
    user: AuthenticatedUser = Depends(require_auth),
    profile: User = Depends(get_current_profile),
    ai: AIService = Depends(get_ai),
    store: InMemoryStore = Depends(get_store),
):
    """Stream an LLM reply as server-sent events.

    Each chunk is ``data: {"delta": ...}``; the stream ends with
    ``data: {"done": true}`` or ``data: {"error": ...}``.
    """
    if not ai.configured:
        raise LLMNotConfiguredError()

    user_type = user_type_of(profile)
    conversations = ConversationRepository(store)
    history = [
        {"role": m.role.value, "content": m.content}
        for m in conversations.recent(user.user_id, get_settings().recent_message_limit)
    ]
    system = STREAM_SYSTEM_PROMPT.format(user_type=user_type.value.replace("_", " "))

    async def event_generator():
        parts: list[str] = []
        try:
            async for delta in ai.llm.stream_response(system, body.message, history):
                parts.append(delta)
                yield f"data: {json.dumps({'delta': delta})}\n\n"
        except LLMError as exc:
            logger.warning("agent_stream_failed", user_id=user.user_id, error_type=type(exc).__name__)
            yield f"data: {json.dumps({'error': exc.message})}\n\n"
            return

        conversations.add_message(user.user_id, MessageRole.USER, body.message, body.task_type)
        conversations.add_message(user.user_id, MessageRole.ASSISTANT, "".join(parts), body.task_type)
        yield f"data: {json.dumps({'done': True})}\n\n"

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )


@router.post("/suggestions")
async def suggestions(
    body: SuggestionsRequest,
    user: AuthenticatedUser = Depends(require_auth),
    profile: User = Depends(get_current_profile),
    engine: AgentEngine = Depends(get_agent_engine),
):
    request = AgentRequest(
        user_id=user.user_id,
        user_type=body.user_type or user_type_of(profile),
        message="Get contextual suggestions",
        task_type="suggestions",
        context=body.context,
    )
    response = await _run(engine, request)
    if response is None:
        return JSONResponse(status_code=500, content={"suggestions": [], "error": "Failed to get suggestions"})
    return {"suggestions": response.suggestions, "insights": response.insights}


@router.get("/insights")
async def insights(
    user_type: UserType | None = Query(default=None, alias="userType"),
    user: AuthenticatedUser = Depends(require_auth),
    profile: User = Depends(get_current_profile),
    engine: AgentEngine = Depends(get_agent_engine),
):
    request = AgentRequest(
        user_id=user.user_id,
        user_type=user_type or user_type_of(profile),
        message="Generate dashboard insights",
        task_type="insights",
    )
    response = await _run(engine, request)
    if response is None:
        return JSONResponse(status_code=500, content={"insights": [], "error": "Failed to generate insights"})
    return {"insights": response.insights, "actions": response.actions}


@router.post("/automate")
async def automate(
    body: AutomateRequest,
    user: AuthenticatedUser = Depends(require_auth),
    profile: User = Depends(get_current_profile),
    engine: AgentEngine = Depends(get_agent_engine),
):
    request = AgentRequest(
        user_id=user.user_id,
        user_type=user_type_of(profile),
        message=f"Automate: {body.task}",
        task_type="automation",
        context=body.parameters,
    )
    response = await _run(engine, request)
    if response is None:
        return JSONResponse(status_code=500, content={"success": False, "error": "Automation failed"})
    return {"success": True, "result": response.content, "actions": response.actions}


# Co-founder


@router.post("/co-founder/chat")
async def cofounder_chat(
    body: ChatRequest,
    user: AuthenticatedUser = Depends(require_auth),
    engine: AgentEngine = Depends(get_agent_engine),
):
    """Chat with the co-founder; ``mode`` selects the task (stand-up, brainstorm, ...)."""
    context = {}
    if body.conversation_history:
        context["conversation_history"] = [m.model_dump() for m in body.conversation_history]
    request = AgentRequest(
        user_id=user.user_id,
        user_type=UserType.ENTREPRENEUR,
        message=body.message,
        task_type=body.mode or "general",
        context=context,
    )
    response = await _run(engine, request, AgentKind.CO_FOUNDER)
    if response is None:
        return JSONResponse(status_code=500, content=COFOUNDER_APOLOGY)
    return response.model_dump(exclude_none=True)


@router.get("/co-founder/goals")
async def list_goals(
    user: AuthenticatedUser = Depends(require_auth),
    store: InMemoryStore = Depends(get_store),
):
    goals = CoFounderRepository(store).list_goals(user.user_id)
    return [g.model_dump(mode="json") for g in goals]


@router.post("/co-founder/goals", status_code=201)
async def create_goal(
    body: GoalCreate,
    user: AuthenticatedUser = Depends(require_auth),
    store: InMemoryStore = Depends(get_store),
):
    goal = CoFounderRepository(store).create_goal(user.user_id, body.model_dump())
    logger.info("goal_created", goal_id=goal.id, user_id=user.user_id)
    return goal.model_dump(mode="json")


@router.patch("/co-founder/goals/{goal_id}")
async def update_goal(
    goal_id: str,
    body: GoalUpdate,
    user: AuthenticatedUser = Depends(require_auth),
    store: InMemoryStore = Depends(get_store),
):
    async with store.transaction():
        repo = CoFounderRepository(store)
        goal = repo.get_goal(goal_id)
        if goal is None:
            raise NotFoundError("Goal")
        if goal.user_id != user.user_id:
            raise ForbiddenError("Unauthorized to update this goal")
        changes = body.model_dump(exclude_unset=True, exclude_none=True)
        if changes:
            goal = repo.update_goal(goal_id, changes)
    return goal.model_dump(mode="json")


@router.delete("/co-founder/goals/{goal_id}", status_code=204)
async def delete_goal(
    goal_id: str,
    user: AuthenticatedUser = Depends(require_auth),
    store: InMemoryStore = Depends(get_store),
):
    async with store.transaction():
        repo = CoFounderRepository(store)
        goal = repo.get_goal(goal_id)
        if goal is None:
            raise NotFoundError("Goal")
        if goal.user_id != user.user_id:
            raise ForbiddenError("Unauthorized to delete this goal")
        repo.delete_goal(goal_id)
    return Response(status_code=204)


@router.get("/co-founder/commitments")
async def list_commitments(
    user: AuthenticatedUser = Depends(require_auth),
    store: InMemoryStore = Depends(get_store),
):
    commitments = CoFounderRepository(store).list_commitments(user.user_id)
    return [c.model_dump(mode="json") for c in commitments]


@router.post("/co-founder/commitments", status_code=201)
async def create_commitment(
    body: CommitmentCreate,
    user: AuthenticatedUser = Depends(require_auth),
    store: InMemoryStore = Depends(get_store),
):
    commitment = CoFounderRepository(store).create_commitment(user.user_id, body.model_dump())
    return commitment.model_dump(mode="json")


@router.patch("/co-founder/commitments/{commitment_id}")
async def update_commitment(
    commitment_id: str,
    body: CommitmentUpdate,
    user: AuthenticatedUser = Depends(require_auth),
    store: InMemoryStore = Depends(get_store),
):
    async with store.transaction():
        repo = CoFounderRepository(store)
        commitment = repo.get_commitment(commitment_id)
        if commitment is None:
            raise NotFoundError("Commitment")
        if commitment.user_id != user.user_id:
            raise ForbiddenError("Unauthorized to update this commitment")
        changes = body.model_dump(exclude_unset=True, exclude_none=True)
        if changes:
            commitment = repo.update_commitment(commitment_id, changes)
    return commitment.model_dump(mode="json")


@router.post("/co-founder/decision/analyze")
async def analyze_decision(
    body: DecisionRequest,
    user: AuthenticatedUser = Depends(require_auth),
    engine: AgentEngine = Depends(get_agent_engine),
):
    request = AgentRequest(
        user_id=user.user_id,
        user_type=UserType.ENTREPRENEUR,
        message=body.decision,
        task_type="decision_support",
        context={"options": body.options or []},
    )
    response = await _run(engine, request, AgentKind.CO_FOUNDER)
    if response is None:
        return JSONResponse(status_code=500, content={"error": "Failed to analyze decision"})
    return response.model_dump(exclude_none=True)


@router.post("/co-founder/decision/scenarios")
async def decision_scenarios(body: DecisionTopic, user: AuthenticatedUser = Depends(require_auth)):
    return {"decision": body.decision, **SCENARIOS}


@router.post("/co-founder/decision/premortem")
async def decision_premortem(body: DecisionTopic, user: AuthenticatedUser = Depends(require_auth)):
    return {"decision": body.decision, **PREMORTEM}

"""Schema-validated AI analyses built on LLMClient."""

from typing import TypeVar

import httpx
import structlog
from pydantic import BaseModel, Field, ValidationError

from venture_hub.core.config import Settings, get_settings
from venture_hub.core.exceptions import LLMPermanentError
from venture_hub.llm.client import LLMClient, get_llm_client

logger = structlog.get_logger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)

# Azure Content Safety severities above this are treated as unsafe
SAFETY_SEVERITY_THRESHOLD = 2


class MarketAnalysis(BaseModel):
    trends: list[str]
    opportunities: list[str]
    threats: list[str]
    market_size: str = Field(alias="marketSize")
    growth_rate: str = Field(alias="growthRate")
    key_players: list[str] = Field(alias="keyPlayers")
    confidence: float = Field(ge=0, le=1)

    model_config = {"populate_by_name": True}


class BusinessGuidance(BaseModel):
    response: str
    action_items: list[str] = Field(alias="actionItems")
    resources: list[str]
    next_steps: list[str] = Field(alias="nextSteps")

    model_config = {"populate_by_name": True}


class SentimentAnalysis(BaseModel):
    rating: float = Field(ge=1, le=5)
    confidence: float = Field(ge=0, le=1)


class SafetyCategories(BaseModel):
    hate: int = 0
    self_harm: int = 0
    sexual: int = 0
    violence: int = 0


class ContentSafetyResult(BaseModel):
    safe: bool
    categories: SafetyCategories = Field(default_factory=SafetyCategories)


_CATEGORY_FIELDS = {
    "Hate": "hate",
    "SelfHarm": "self_harm",
    "Sexual": "sexual",
    "Violence": "violence",
}


def validate_ai_response(data: dict, schema: type[SchemaT], context: str) -> SchemaT:
    """Validate parsed model output against a schema.

    Raises:
        LLMPermanentError: when the JSON does not match the schema.
    """
    try:
        return schema.model_validate(data)
    except ValidationError as exc:
        logger.warning("ai_response_schema_mismatch", context=context, errors=exc.error_count())
        raise LLMPermanentError(f"AI response for {context} did not match the expected format") from exc


class AIService:
    def __init__(
        self,
        llm: LLMClient | None = None,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.settings = settings or get_settings()
        self.llm = llm or get_llm_client()
        self._http_client = http_client

    @property
    def configured(self) -> bool:
        return self.llm.configured

    async def provide_business_guidance(self, question: str, business_context: str) -> BusinessGuidance:
        prompt = (
            f"Business question: {question}. Business context: {business_context}.\n"
            "Provide expert guidance with response, actionItems, resources, and nextSteps in JSON format."
        )
        data = await self.llm.generate_structured_response(
            "You are an experienced business advisor. Provide practical, actionable guidance in JSON format.",
            prompt,
        )
        return validate_ai_response(data, BusinessGuidance, "business guidance")

    async def analyze_market_trends(self, industry: str, business_description: str) -> MarketAnalysis:
        prompt = (
            f"Analyze current market trends for {industry} industry. Business context: {business_description}.\n"
            "Provide analysis in JSON format with trends, opportunities, threats, marketSize, growthRate, "
            "keyPlayers, and confidence (0-1)."
        )
        data = await self.llm.generate_structured_response(
            "You are a market research expert. Provide comprehensive market analysis in JSON format.",
            prompt,
        )
        return validate_ai_response(data, MarketAnalysis, "market trends analysis")

    async def analyze_sentiment(self, text: str) -> SentimentAnalysis:
        data = await self.llm.generate_structured_response(
            "You are a sentiment analysis expert. Analyze the sentiment of the text and provide a rating "
            "from 1 to 5 stars and a confidence score between 0 and 1. Respond with JSON in this format: "
            '{"rating": number, "confidence": number}',
            text,
        )
        return validate_ai_response(data, SentimentAnalysis, "sentiment analysis")

    async def check_content_safety(self, text: str) -> ContentSafetyResult:
        """Screen text with Azure AI Content Safety.

        Unconfigured or failing screening returns ``safe=True`` with zero
        severities.
        """
        endpoint = self.settings.azure_ai_endpoint.rstrip("/")
        if not endpoint or not self.settings.azure_ai_api_key:
            return ContentSafetyResult(safe=True)

        url = f"{endpoint}/contentsafety/text:analyze"
        try:
            client = self._http_client or httpx.AsyncClient(timeout=self.settings.llm_timeout_seconds)
            try:
                response = await client.post(
                    url,
                    params={"api-version": self.settings.content_safety_api_version},
                    headers={"Ocp-Apim-Subscription-Key": self.settings.azure_ai_api_key},
                    json={"text": text},
                )
                response.raise_for_status()
                payload = response.json()
            finally:
                if self._http_client is None:
                    await client.aclose()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("content_safety_check_failed", error=str(exc), error_type=type(exc).__name__)
            return ContentSafetyResult(safe=True)

        categories = SafetyCategories()
        unsafe = False
        for item in payload.get("categoriesAnalysis", []):
            severity = item.get("severity") or 0
            field = _CATEGORY_FIELDS.get(item.get("category"))
            if field:
                setattr(categories, field, severity)
            if severity > SAFETY_SEVERITY_THRESHOLD:
                unsafe = True
        return ContentSafetyResult(safe=not unsafe, categories=categories)


def get_ai_service() -> AIService:
    return AIService()

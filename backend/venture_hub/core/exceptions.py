from typing import Any


class VentureHubError(Exception):
    """Base exception for Venture Hub application.

    Carries the HTTP status and machine-readable code the global handler
    renders, so services can raise without importing FastAPI.
    """

    status_code: int = 500
    code: str = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str = "Internal server error", details: Any = None):
        self.message = message
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message, "code": self.code}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(VentureHubError):
    """Raised when a payload fails domain validation."""

    status_code = 400
    code = "VALIDATION_ERROR"


class UnauthorizedError(VentureHubError):
    """Raised when no authenticated user is present."""

    status_code = 401
    code = "UNAUTHORIZED"

    def __init__(self, message: str = "Unauthorized - please log in"):
        super().__init__(message)


class ForbiddenError(VentureHubError):
    """Raised when the caller does not own the resource."""

    status_code = 403
    code = "FORBIDDEN"

    def __init__(self, message: str = "Access forbidden"):
        super().__init__(message)


class NotFoundError(VentureHubError):
    """Raised when a resource id is unknown."""

    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, resource: str = "Resource"):
        self.resource = resource
        super().__init__(f"{resource} not found")


class ConflictError(VentureHubError):
    status_code = 409
    code = "CONFLICT"


class UnsupportedCapabilityError(VentureHubError):
    """Raised when a placeholder domain (loans, portfolios, ...) is requested."""

    status_code = 501
    code = "NOT_IMPLEMENTED"

    def __init__(self, domain: str):
        self.domain = domain
        super().__init__(f"Domain '{domain}' is not supported yet")

    def to_dict(self) -> dict[str, Any]:
        return {"error": "not_implemented", "domain": self.domain, "message": self.message}


class LLMError(VentureHubError):
    """Base for failures talking to the LLM provider."""

    status_code = 502
    code = "LLM_ERROR"


class LLMNotConfiguredError(LLMError):
    """Raised when no Azure OpenAI or OpenAI key is configured."""

    status_code = 503
    code = "LLM_NOT_CONFIGURED"

    def __init__(self, message: str = "AI features are not available. Configure AZURE_OPENAI_API_KEY or OPENAI_API_KEY."):
        super().__init__(message)


class LLMTransientError(LLMError):
    """Raised after retries are exhausted on timeouts, rate limits, or 5xx."""

    code = "LLM_TRANSIENT"

    def __init__(self, message: str, attempts: int = 1):
        self.attempts = attempts
        super().__init__(message)


class LLMPermanentError(LLMError):
    """Raised on auth failures, bad requests, or malformed model output. Never retried."""

    code = "LLM_PERMANENT"

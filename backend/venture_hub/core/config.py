from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Venture Hub"
    debug: bool = False
    environment: str = "production"  # development | test | production

    # API
    backend_url: str = "http://localhost:8000"
    frontend_url: str = "http://localhost:5173"
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    # Sessions
    session_secret: str = "change-me"
    session_max_age: int = 7 * 24 * 60 * 60  # one week
    session_cookie: str = "venture_hub_session"

    # Development auth bypass (only honoured when environment == "development")
    dev_auth_bypass: bool = False
    dev_user_id: str = "dev-user-1"
    dev_user_email: str = "dev@venturehub.local"
    dev_user_type: str = "entrepreneur"

    # OAuth identity providers (ID token audiences)
    google_client_id: str = ""
    azure_client_id: str = ""
    azure_tenant_id: str = "common"

    # Azure OpenAI
    azure_openai_api_key: str = ""
    azure_openai_endpoint: str = ""
    azure_openai_deployment: str = "gpt-4"
    azure_openai_api_version: str = "2024-08-01-preview"

    # OpenAI
    openai_api_key: str = ""
    ai_model: str = "gpt-4o"

    # Azure AI Content Safety (optional)
    azure_ai_endpoint: str = ""
    azure_ai_api_key: str = ""
    content_safety_api_version: str = "2023-10-01"

    # LLM call policy
    llm_temperature: float = 0.7
    llm_max_tokens: int = 1000
    llm_structured_max_tokens: int = 1500
    llm_timeout_seconds: float = 30.0
    llm_max_attempts: int = 3

    # Agents
    recent_message_limit: int = 10

    # Store
    seed_on_startup: bool = True

    @property
    def use_azure(self) -> bool:
        return bool(self.azure_openai_api_key and self.azure_openai_endpoint)

    @property
    def llm_configured(self) -> bool:
        return bool(self.azure_openai_api_key or self.openai_api_key)

    @property
    def dev_auth_enabled(self) -> bool:
        return self.environment == "development" and self.dev_auth_bypass


@lru_cache
def get_settings() -> Settings:
    return Settings()

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DOMAIN_KEYWORDS = [
    "technova",
    "cloudsphere",
    "cloud sphere",
    "cloud computing",
    "ai",
    "enterprise software",
    "product",
    "service",
    "support",
    "account",
    "billing",
    "subscription",
    "login",
    "password",
    "feature",
    "bug",
    "issue",
    "documentation",
    "api",
    "integration",
    "platform",
    "dashboard",
    "cloud",
    "nova",
    "company",
    "software",
    "enterprise",
    "faq",
    "help",
    "contact",
    "customer",
]

DEFAULT_REFUSAL = (
    "I'm sorry, but I can only assist with questions related to TechNova, CloudSphere, "
    "or our cloud computing, AI, and enterprise software products and services. "
    "Please ask a question related to these topics."
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"

    openai_api_key: str | None = None
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-4.1-mini"
    openai_temperature: float = 0.1

    llamacloud_base_url: str = "https://api.cloud.llamaindex.ai"
    retriever_pipeline_name: str = "FAQ Knowledge Base"
    retriever_pipeline_description: str = "Find relevant information from knowledge base"
    knowledge_base_pipeline_name: str = "faq-knowledge-base"

    domain_keywords: list[str] = DEFAULT_DOMAIN_KEYWORDS
    domain_keywords_file: str | None = None
    domain_refusal_message: str = DEFAULT_REFUSAL

    max_context_chars: int | None = None
    max_history_turns: int | None = None

    document_poll_interval: float = 10.0
    cors_allow_origins: list[str] = ["*"]
    backend_url: str = "http://localhost:8000"

    def keywords(self) -> list[str]:
        if not self.domain_keywords_file:
            return list(self.domain_keywords)
        lines = Path(self.domain_keywords_file).read_text(encoding="utf-8").splitlines()
        return [line.strip() for line in lines if line.strip() and not line.strip().startswith("#")]


settings = Settings()

"""Application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,  # so DB_HOST works regardless of case
    )

    # Database fields (read from .env)
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "rfq_leads"
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_url: str | None = None  # full URL override, e.g. sqlite+aiosqlite:///./leads.db

    # Construct database URL dynamically
    @property
    def database_url(self) -> str:
        if self.db_url:
            return self.db_url
        return f"postgresql+asyncpg://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    # OpenAI (or compatible API) for outreach drafts
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    openai_base_url: str | None = None  # For Azure/OpenRouter

    # App
    log_level: str = "INFO"
    log_format: str = "console"  # console | json
    cors_origins: list[str] = ["*"]
    max_list_limit: int = 500


settings = Settings()

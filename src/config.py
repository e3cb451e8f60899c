"""Configuration for the AI Code Review service."""

from typing import Literal, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # App
    environment: str = Field(default="development", env="ENVIRONMENT")
    debug: bool = Field(default=True, env="DEBUG")
    host: str = Field(default="0.0.0.0", env="HOST")
    port: int = Field(default=8080, env="PORT")

    # LLM - OpenRouter (multi-provider gateway)
    openrouter_api_key: Optional[str] = Field(default=None, env="OPENROUTER_API_KEY")
    review_model: str = Field(default="claude-haiku-4.5", env="REVIEW_MODEL")
    review_max_tokens: int = Field(default=4096, env="REVIEW_MAX_TOKENS")

    # GitHub App Authentication (or a plain token)
    github_app_id: Optional[str] = Field(default=None, env="GITHUB_APP_ID")
    github_private_key: Optional[str] = Field(default=None, env="GITHUB_PRIVATE_KEY")
    github_installation_id: Optional[str] = Field(default=None, env="GITHUB_INSTALLATION_ID")
    github_token: Optional[str] = Field(default=None, env="GITHUB_TOKEN")
    github_webhook_secret: Optional[str] = Field(default=None, env="GITHUB_WEBHOOK_SECRET")

    # Review Configuration
    check_name: str = Field(default="AI Code Review", env="CHECK_NAME")
    max_diff_chars: int = Field(default=10_000, env="MAX_DIFF_CHARS")
    max_files_per_review: Optional[int] = Field(default=None, env="MAX_FILES_PER_REVIEW")
    review_concurrency: int = Field(default=5, env="REVIEW_CONCURRENCY")

    # Dedupe store
    dedupe_backend: Literal["memory", "mongodb"] = Field(default="memory", env="DEDUPE_BACKEND")
    dedupe_ttl_seconds: int = Field(default=86_400, env="DEDUPE_TTL_SECONDS")
    mongodb_uri: Optional[str] = Field(default=None, env="MONGODB_URI")
    mongodb_database: str = Field(default="code_review", env="MONGODB_DATABASE")
    dedupe_collection: str = Field(default="review_dedupe", env="DEDUPE_COLLECTION")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


settings = Settings()

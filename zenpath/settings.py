# zenpath/settings.py
import os
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # core
    APP_NAME: str = Field(default="Zenpath")
    ENV: str = Field(default=os.getenv("APP_ENV", "dev"))
    DEBUG: bool = Field(default=True)
    LOG_LEVEL: str = Field(default="INFO")

    # dev server
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000, gt=0, lt=65536)
    RELOAD: bool = Field(default=True)

    # credential override; secrets.json is consulted when this is empty
    OPENAI_API_KEY: str | None = None
    SECRETS_PATHS: List[str] = Field(
        default_factory=lambda: ["secrets.json", os.path.expanduser("~/.zenpath/secrets.json")]
    )

    # generation
    GENERATION_CLIENT: str = Field(default="http")  # http | openai | echo
    OPENAI_ENDPOINT: str = Field(default="https://api.openai.com/v1/chat/completions")
    OPENAI_MODEL: str = Field(default="gpt-4o-mini")
    TEMPERATURE: float = Field(default=0.7, ge=0.0, le=2.0)
    THOUGHT_MAX_TOKENS: int = Field(default=200, gt=0)
    CHAT_MAX_TOKENS: int = Field(default=150, gt=0)
    QUOTE_MAX_TOKENS: int = Field(default=150, gt=0)
    REQUEST_TIMEOUT: float = Field(default=20.0, gt=0)

    # pipelines
    THOUGHT_MODE: str = Field(default="chained")  # chained | structured
    INCLUDE_EXPLANATIONS: bool = Field(default=True)
    CHAT_WAIT_CEILING: float = Field(default=10.0, gt=0)
    SAFETY_PATTERNS_PATH: str | None = None

    # read root-level .env.dev
    model_config = SettingsConfigDict(
        env_file=".env.dev",
        extra="ignore",
    )

    @property
    def app_name(self) -> str:
        return self.APP_NAME


settings = Settings()

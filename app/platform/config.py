from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── App ─────────────────────────────────────
    APP_NAME: str = "Site Audit AI Assistant"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    DEBUG: bool = True

    # ── Language model provider ─────────────────
    # Absence of a key pins the assistant to the deterministic strategy
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_BASE_URL: Optional[str] = None
    OPENAI_MODEL: str = "gpt-4o-mini"
    OPENAI_TEMPERATURE: float = 0.7
    OPENAI_MAX_TOKENS: int = 500
    SUGGESTIONS_MODEL: str = "gpt-4-turbo-preview"

    # ── Detection cache ─────────────────────────
    REDIS_URL: Optional[str] = None
    FORCE_IN_MEMORY_DETECTION_CACHE: bool = False
    DETECTION_CACHE_TTL_SECONDS: int = 60 * 60 * 24 * 30

    # ── Assistant context bounds ────────────────
    CONTEXT_ISSUE_LIMIT: int = 10  # issues sent on the wire
    PROMPT_ISSUE_LIMIT: int = 5  # issues spelled out in generated prose
    CONVERSATION_HISTORY_WINDOW: int = 5

    # ── Page signal collection ──────────────────
    HTML_EXCERPT_LIMIT: int = 50_000
    CHROMEDRIVER_PATH: Optional[str] = None
    PAGE_LOAD_TIMEOUT: int = 30

    class Config:
        env_file = str(Path(__file__).parent.parent.parent / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


settings = Settings()

"""
Process-wide configuration.

Values are read once from the environment (and a local .env file) into a
Settings object that is handed to the datastore and LLM collaborators.
"""

import os
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()  # Load environment variables from .env file


DEFAULT_LLM_MODEL = "openrouter/mistralai/mistral-7b-instruct"


class Settings(BaseModel):
    """Configuration for the Mock Interview API."""
    # Supabase datastore
    supabase_url: str = ""
    supabase_key: str = ""

    # Chat-completion LLM (litellm model string, as accepted by crewai.LLM)
    llm_model: str = DEFAULT_LLM_MODEL
    llm_api_key: Optional[str] = None
    llm_base_url: Optional[str] = None

    # Number of questions requested per interview
    question_count: int = 5

    # HTTP server
    port: int = 3001
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables."""
        origins = os.getenv("CORS_ORIGINS", "*")
        return cls(
            supabase_url=os.getenv("SUPABASE_URL", ""),
            supabase_key=os.getenv("SUPABASE_KEY", ""),
            llm_model=os.getenv("LLM_MODEL", DEFAULT_LLM_MODEL),
            llm_api_key=os.getenv("OPENROUTER_API_KEY"),
            llm_base_url=os.getenv("LLM_BASE_URL"),
            question_count=int(os.getenv("INTERVIEW_QUESTION_COUNT", "5")),
            port=int(os.getenv("PORT", "3001")),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


@lru_cache
def get_settings() -> Settings:
    """Return the settings singleton, built on first use."""
    return Settings.from_env()

import os
from dotenv import load_dotenv
import logging
from typing import List
from pydantic import BaseModel, Field

# Configure logging
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-5.2"

# Load .env file if it exists (for local development)
env_path = os.path.join(os.path.dirname(__file__), "..", ".env")


class Settings(BaseModel):
    """Process-wide configuration, read once at startup."""

    model_config = {"frozen": True}

    openai_api_key: str = ""
    openai_model: str = DEFAULT_MODEL
    # Comma-separated ALLOWED_ORIGINS, wildcard when unset
    allowed_origins: List[str] = Field(default_factory=lambda: ["*"])

    def has_key(self) -> bool:
        return bool(self.openai_api_key)


def load_settings() -> Settings:
    if os.path.exists(env_path):
        load_dotenv(env_path)
        logger.info("Loaded .env file for local development")
    else:
        logger.info("No .env file found, using environment variables")

    _allowed_origins_env = os.getenv("ALLOWED_ORIGINS", "").strip()
    if _allowed_origins_env:
        allowed_origins = [o.strip() for o in _allowed_origins_env.split(",") if o.strip()]
    else:
        allowed_origins = ["*"]

    settings = Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY", "").strip(),
        openai_model=os.getenv("OPENAI_MODEL", "").strip() or DEFAULT_MODEL,
        allowed_origins=allowed_origins,
    )
    if not settings.has_key():
        logger.warning("Missing API keys: OPENAI_API_KEY")
    return settings

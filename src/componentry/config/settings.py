import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load .env file from the project root
# This file: src/componentry/config/settings.py
SERVER_ROOT = Path(__file__).resolve().parent.parent.parent.parent
ENV_PATH = SERVER_ROOT / ".env"

if ENV_PATH.exists():
    load_dotenv(ENV_PATH)
else:
    # Fallback to simple load_dotenv which looks in cwd
    load_dotenv()


class Settings(BaseModel):
    """Global Component Settings"""

    # Environment
    ENV: str = Field(default="development", description="Environment: development, production, testing")
    LOG_LEVEL: str = Field(default="INFO", description="Log level")

    # Identity
    KEY_START: int = Field(default=0, ge=0, description="First identity key issued by the default key generator")

    # Listener wiring
    STRICT_LISTENERS: bool = Field(
        default=False,
        description="Raise when a listener names an event the component never emits",
    )

    model_config = {
        "frozen": True,
    }


def load_settings() -> Settings:
    """Load settings from environment variables."""
    return Settings(
        ENV=os.getenv("ENV", "development"),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
        KEY_START=int(os.getenv("COMPONENTRY_KEY_START", "0")),
        STRICT_LISTENERS=os.getenv("COMPONENTRY_STRICT_LISTENERS", "false"),
    )


# Global settings instance
settings = load_settings()

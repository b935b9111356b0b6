import os
from dotenv import load_dotenv
from pathlib import Path
from typing import List

# Load environment variables from .env file with explicit path
load_dotenv(dotenv_path=Path(__file__).parent.parent / '.env')

# Messenger Configuration
PAGE_ACCESS_TOKEN = os.getenv("PAGE_ACCESS_TOKEN")
VERIFY_TOKEN = os.getenv("VERIFY_TOKEN")
# Optional: when set, inbound webhooks must carry a valid X-Hub-Signature-256
APP_SECRET = os.getenv("APP_SECRET")
GRAPH_API_URL = os.getenv("GRAPH_API_URL", "https://graph.facebook.com")
GRAPH_API_VERSION = os.getenv("GRAPH_API_VERSION", "v18.0")

# Groq Configuration (OpenAI-compatible chat completions)
GROQ_API_KEY = os.getenv("GROQ_API_KEY")
GROQ_API_URL = os.getenv("GROQ_API_URL", "https://api.groq.com/openai/v1")

# Completion parameters are fixed, not tunable per request
GROQ_MODEL = "llama-3.3-70b-versatile"
TEMPERATURE = 0.7
MAX_TOKENS = 300
TOP_P = 1

# Server Configuration
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "5000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

REQUIRED_ENV_VARS = ("PAGE_ACCESS_TOKEN", "VERIFY_TOKEN", "GROQ_API_KEY")


class ConfigError(RuntimeError):
    """Raised when required configuration is missing at startup."""


def missing_config() -> List[str]:
    """Return the names of required settings that are unset or empty."""
    current = globals()
    return [name for name in REQUIRED_ENV_VARS if not current.get(name)]


def validate_config() -> None:
    missing = missing_config()
    if missing:
        raise ConfigError(
            f"Missing required environment variables: {', '.join(missing)}. "
            "Please check your .env file"
        )

import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent
ENV_FILE = Path(os.environ.get("STORY_CHAT_ENV_FILE", BASE_DIR / ".env"))

# Must run before the Config class body reads os.environ.
load_dotenv(ENV_FILE)

DEFAULT_MODEL = "gpt-4o"
DEFAULT_SERVER_URL = "http://127.0.0.1:5000"


class Config:
    """Base configuration shared across environments."""

    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-change-me")
    OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY")
    OPENAI_MODEL = os.environ.get("OPENAI_MODEL", DEFAULT_MODEL)
    STORY_CHAT_URL = os.environ.get("STORY_CHAT_URL", DEFAULT_SERVER_URL)
    WTF_CSRF_TIME_LIMIT = None


class TestConfig(Config):
    TESTING = True
    OPENAI_API_KEY = "test-key"
    OPENAI_MODEL = DEFAULT_MODEL
    WTF_CSRF_ENABLED = False

import importlib
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from story_chat import config, create_app

DOTENV_KEYS = ("OPENAI_API_KEY", "OPENAI_MODEL", "SECRET_KEY", "STORY_CHAT_URL")


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    env_path = tmp_path / ".env"
    monkeypatch.setenv("STORY_CHAT_ENV_FILE", str(env_path))
    for key in DOTENV_KEYS:
        # setenv first so teardown removes whatever load_dotenv adds.
        monkeypatch.setenv(key, "placeholder")
        monkeypatch.delenv(key)
    yield env_path
    monkeypatch.undo()
    importlib.reload(config)


def test_app_config_reads_values_from_dotenv_file(clean_env):
    clean_env.write_text("OPENAI_API_KEY=sk-from-dotenv\nOPENAI_MODEL=gpt-dotenv\n")

    importlib.reload(config)
    app = create_app(config.Config)

    assert app.config["OPENAI_API_KEY"] == "sk-from-dotenv"
    assert app.config["OPENAI_MODEL"] == "gpt-dotenv"


def test_environment_wins_over_dotenv_file(clean_env, monkeypatch):
    clean_env.write_text("OPENAI_MODEL=gpt-dotenv\n")
    monkeypatch.setenv("OPENAI_MODEL", "gpt-from-shell")

    importlib.reload(config)
    app = create_app(config.Config)

    assert app.config["OPENAI_MODEL"] == "gpt-from-shell"
    assert app.config["OPENAI_API_KEY"] is None


def test_missing_dotenv_file_falls_back_to_defaults(clean_env):
    importlib.reload(config)
    app = create_app(config.Config)

    assert app.config["OPENAI_MODEL"] == config.DEFAULT_MODEL
    assert app.config["STORY_CHAT_URL"] == config.DEFAULT_SERVER_URL

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from scripts import dev_setup


def test_update_env_file_preserves_existing_values(tmp_path):
    env_path = tmp_path / ".env"
    env_path.write_text("# local settings\nSECRET_KEY=keep-me\nOPENAI_API_KEY=sk-old\n")

    args = dev_setup.parse_args(["--env-path", str(env_path), "--openai-api-key", "sk-new"])
    values = dev_setup.update_env_file(args)

    assert values["SECRET_KEY"] == "keep-me"
    assert values["OPENAI_API_KEY"] == "sk-new"
    assert values["OPENAI_MODEL"] == "gpt-4o"
    assert values["FLASK_APP"] == "wsgi.py"
    assert dev_setup.read_env(env_path) == values
    assert (tmp_path / ".env.bak").exists()


def test_write_env_keeps_comments_and_creates_missing_file(tmp_path):
    existing = tmp_path / ".env"
    existing.write_text("# local settings\nSECRET_KEY=keep-me\n")
    dev_setup.write_env(existing, {"OPENAI_MODEL": "gpt-4o"})

    assert existing.read_text().startswith("# local settings\n")
    assert dev_setup.read_env(existing) == {"SECRET_KEY": "keep-me", "OPENAI_MODEL": "gpt-4o"}

    fresh = tmp_path / "fresh.env"
    dev_setup.write_env(fresh, {"FLASK_APP": "wsgi.py"})

    assert dev_setup.read_env(fresh) == {"FLASK_APP": "wsgi.py"}
    assert not (tmp_path / "fresh.env.bak").exists()

"""Utility script to configure development environment variables for the story relay."""
from __future__ import annotations

import argparse
import shutil
import sys
from pathlib import Path
from typing import Dict, Optional, Sequence

from dotenv import dotenv_values, set_key

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from story_chat.config import DEFAULT_MODEL, DEFAULT_SERVER_URL

DEFAULT_ENV_PATH = REPO_ROOT / ".env"
BACKUP_SUFFIX = ".bak"


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Create or update a .env file with the settings the story relay reads at startup."
    )
    parser.add_argument(
        "--flask-app",
        default="wsgi.py",
        help="Entry point used by Flask (default: wsgi.py)",
    )
    parser.add_argument(
        "--secret-key",
        required=False,
        help=(
            "Secret key for Flask sessions and CSRF tokens. If omitted, the current value in .env "
            "is preserved or the development default is used."
        ),
    )
    parser.add_argument(
        "--openai-api-key",
        help="API key forwarded to the OpenAI client (optional, keeps the existing value).",
    )
    parser.add_argument(
        "--model",
        help=f"Chat completions model used for stories (default: {DEFAULT_MODEL}).",
    )
    parser.add_argument(
        "--server-url",
        help=f"Relay URL used by the story-chat terminal client (default: {DEFAULT_SERVER_URL}).",
    )
    parser.add_argument(
        "--env-path",
        type=Path,
        default=DEFAULT_ENV_PATH,
        help="Path to the .env file that should be created/updated.",
    )
    return parser.parse_args(argv)


def read_env(path: Path) -> Dict[str, str]:
    if not path.exists():
        return {}
    return {key: value for key, value in dotenv_values(path).items() if value is not None}


def write_env(path: Path, values: Dict[str, str]) -> None:
    if path.exists():
        backup_path = path.with_suffix(path.suffix + BACKUP_SUFFIX)
        shutil.copy(path, backup_path)
        print(f"Existing {path.name} backed up to {backup_path.name}.")
    else:
        path.touch()
    # set_key rewrites matching lines in place, so comments survive.
    for key, value in values.items():
        set_key(path, key, value, quote_mode="never")
    print(f"Updated environment variables written to {path}.")


def update_env_file(args: argparse.Namespace) -> Dict[str, str]:
    env_data = read_env(args.env_path)
    env_updates = {"FLASK_APP": args.flask_app}
    if args.secret_key:
        env_updates["SECRET_KEY"] = args.secret_key
    if args.openai_api_key:
        env_updates["OPENAI_API_KEY"] = args.openai_api_key
    if args.model:
        env_updates["OPENAI_MODEL"] = args.model
    if args.server_url:
        env_updates["STORY_CHAT_URL"] = args.server_url

    env_data.update(env_updates)
    env_data.setdefault("OPENAI_MODEL", DEFAULT_MODEL)
    write_env(args.env_path, env_data)
    return env_data


def _redact(key: str, value: str) -> str:
    if key in {"OPENAI_API_KEY", "SECRET_KEY"} and value:
        return value[:4] + "…"
    return value


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    env_values = update_env_file(args)

    if "OPENAI_API_KEY" not in env_values:
        print("Warning: OPENAI_API_KEY is not set; the relay will fail until it is provided.")

    print("\nSetup complete! Summary:")
    for key in sorted(env_values):
        print(f"  {key}={_redact(key, env_values[key])}")


if __name__ == "__main__":
    main()

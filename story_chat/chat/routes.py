from __future__ import annotations

from typing import Dict, Iterator, List

from flask import Response, abort, current_app, jsonify, request, stream_with_context

from ..extensions import csrf
from ..models import Character, InvalidPayloadError, parse_history
from ..prompts import build_character_introduction, build_system_prompt
from ..services.completion import get_completion_client
from . import bp
from .forms import CharacterForm


@bp.route("/chat", methods=["POST"])
@csrf.exempt
def relay():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        abort(400, description="Send a JSON object with a 'messages' list.")

    try:
        history = parse_history(payload.get("messages"))
        character = Character.from_wire(payload.get("character"))
    except InvalidPayloadError as exc:
        abort(400, description=str(exc))

    messages: List[Dict[str, str]] = [
        {"role": "system", "content": build_system_prompt(character)},
    ]
    messages.extend(message.to_wire() for message in history)

    # Provider failures while opening the stream propagate as a 500.
    fragments = get_completion_client().stream_chat(messages)

    return Response(
        stream_with_context(_relay_fragments(fragments)),
        content_type="text/plain; charset=utf-8",
    )


def _relay_fragments(fragments: Iterator[str]) -> Iterator[bytes]:
    try:
        for fragment in fragments:
            yield fragment.encode("utf-8")
    except Exception:
        # Headers are already sent; the client sees a truncated story.
        current_app.logger.exception("Completion stream failed mid-response")


@bp.route("/character", methods=["POST"])
def create_character():
    form = CharacterForm()
    if not form.validate_on_submit():
        return jsonify({"errors": form.errors}), 400

    character = Character.create(
        form.name.data,
        description=form.description.data,
        personality=form.personality.data,
    )
    return jsonify(
        {
            "character": character.to_wire(),
            "opening_message": build_character_introduction(character),
        }
    )

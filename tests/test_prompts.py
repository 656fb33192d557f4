import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from story_chat.models import Character, InvalidPayloadError
from story_chat.prompts import build_character_introduction, build_system_prompt


BASE_DIRECTIVE = (
    "You are a creative storyteller. When given a prompt, weave a captivating and "
    "dynamic story. Keep the tone engaging and immersive."
)


def test_system_prompt_without_character_is_the_directive():
    assert build_system_prompt(None) == BASE_DIRECTIVE


def test_system_prompt_with_name_only_omits_optional_lines():
    prompt = build_system_prompt(Character.create("Nova"))

    assert prompt.startswith(BASE_DIRECTIVE + "\n\n")
    assert "Context: You are telling a story about a character named Nova." in prompt
    assert "Description:" not in prompt
    assert "Personality:" not in prompt
    assert prompt.endswith("consistent with this description and personality throughout the story.")


def test_system_prompt_lists_every_character_fact_in_order():
    character = Character.create(
        "Nova",
        description="A scout raised among smugglers.",
        personality="Wry and restless.",
    )

    lines = build_system_prompt(character).split("\n")

    assert lines[2:5] == [
        "Context: You are telling a story about a character named Nova.",
        "Description: A scout raised among smugglers.",
        "Personality: Wry and restless.",
    ]


def test_blank_optional_fields_are_dropped():
    character = Character.create("  Nova ", description="   ", personality="")

    assert character.name == "Nova"
    assert character.description is None
    assert character.personality is None


def test_character_requires_a_name():
    with pytest.raises(InvalidPayloadError):
        Character.create("   ")


def test_character_introduction_includes_only_given_fields():
    assert (
        build_character_introduction(Character.create("Nova"))
        == "I want to create a character named Nova. Let's start an adventure!"
    )
    assert build_character_introduction(
        Character.create("Nova", personality="Wry")
    ) == "I want to create a character named Nova. Personality: Wry. Let's start an adventure!"
    assert build_character_introduction(
        Character.create("Nova", description="A scout", personality="Wry")
    ) == (
        "I want to create a character named Nova. Description: A scout. "
        "Personality: Wry. Let's start an adventure!"
    )

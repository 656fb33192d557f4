"""Prompt text used when relaying a conversation to the storyteller model."""

from __future__ import annotations

from typing import Optional

from .models import Character

SYSTEM_PROMPTS = {
    "storyteller": {
        "base": (
            "You are a creative storyteller. When given a prompt, weave a captivating and "
            "dynamic story. Keep the tone engaging and immersive."
        ),
        "character_context": "Context: You are telling a story about a character named {name}.",
        "description": "Description: {description}",
        "personality": "Personality: {personality}",
        "consistency": (
            "Ensure the character's actions and dialogue are consistent with this description "
            "and personality throughout the story."
        ),
    },
    "character_introduction": {
        "opening": "I want to create a character named {name}",
        "description": ". Description: {description}",
        "personality": ". Personality: {personality}",
        "closing": ". Let's start an adventure!",
    },
}


def build_system_prompt(character: Optional[Character] = None) -> str:
    """Return the storyteller directive, extended with ``character`` facts when given.

    Description and personality lines only appear for the fields that are set.
    """

    config = SYSTEM_PROMPTS["storyteller"]
    prompt = config["base"]
    if character is None:
        return prompt

    lines = [config["character_context"].format(name=character.name)]
    if character.description:
        lines.append(config["description"].format(description=character.description))
    if character.personality:
        lines.append(config["personality"].format(personality=character.personality))
    lines.append(config["consistency"])
    return prompt + "\n\n" + "\n".join(lines)


def build_character_introduction(character: Character) -> str:
    """Return the opening user turn announcing ``character`` to the storyteller."""

    config = SYSTEM_PROMPTS["character_introduction"]
    text = config["opening"].format(name=character.name)
    if character.description:
        text += config["description"].format(description=character.description)
    if character.personality:
        text += config["personality"].format(personality=character.personality)
    return text + config["closing"]

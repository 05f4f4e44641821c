"""
Slash command matching for h2oGPTe instructions.

Slash commands are user-defined shortcuts configured on the workflow, e.g.

    SLASH_COMMANDS='[{"name": "/review", "prompt": "Review the code ..."}]'

A command is used when its name appears anywhere in the instruction. This is
plain substring containment: "/test" also matches "/testing".
"""

import json
from typing import Any, Iterable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import ConfigurationError

ENTRY_SHAPE_ERROR = (
    "Each entry in SLASH_COMMANDS must be an object with string 'name' and 'prompt' properties"
)

SLASH_COMMANDS_INTRO = (
    "Slash commands are a way for the user to predefine specific actions "
    "for you (the agent) to perform in the repository."
)


class SlashCommand(BaseModel):
    """A named prompt shortcut the user can invoke from an instruction."""

    model_config = ConfigDict(strict=True, frozen=True)

    name: str = Field(min_length=1, description="Command name as typed, usually '/something'")
    prompt: str = Field(description="Prompt text handed to the agent when used")


def parse_slash_commands(raw: Union[str, list[Any], None]) -> list[SlashCommand]:
    """
    Validate slash command configuration.

    Accepts the JSON text of SLASH_COMMANDS or an already-decoded list
    (e.g. from the YAML config file). Empty or missing means no commands.

    Raises:
        ConfigurationError: If the JSON is invalid, not an array, or an entry
            lacks string name/prompt.
    """
    if raw is None:
        return []

    if isinstance(raw, str):
        if not raw.strip():
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"SLASH_COMMANDS is not valid JSON: {e}") from e
    else:
        data = raw

    if not isinstance(data, list):
        raise ConfigurationError("SLASH_COMMANDS must be an array")

    commands = []
    for entry in data:
        try:
            commands.append(SlashCommand.model_validate(entry))
        except ValidationError as e:
            raise ConfigurationError(f"{ENTRY_SHAPE_ERROR} (got {entry!r})") from e
    return commands


def match_slash_commands(
    instruction: Optional[str], commands: Iterable[SlashCommand]
) -> list[SlashCommand]:
    """Return the commands named in the instruction, sorted by name."""
    instruction = instruction or ""
    used: dict[str, SlashCommand] = {}
    for command in commands:
        if command.name in instruction and command.name not in used:
            used[command.name] = command
    return sorted(used.values(), key=lambda c: c.name)


def format_slash_commands_prompt(used_commands: Iterable[SlashCommand]) -> str:
    """
    Format the prompt block that tells the agent which commands were requested.

    Returns an empty string when no commands were used.
    """
    used = sorted(used_commands, key=lambda c: c.name)
    if not used:
        return ""

    lines = ["<slash_commands>", SLASH_COMMANDS_INTRO]
    lines.append("The following slash commands were requested by the user:")
    for command in used:
        lines.append(f"- {command.name}: {command.prompt}")
    lines.append("</slash_commands>")
    return "\n".join(lines)


def format_slash_commands_summary(used_commands: Iterable[SlashCommand]) -> str:
    """Space-joined command names in ascending order, e.g. "/docs /review"."""
    return " ".join(sorted(command.name for command in used_commands))

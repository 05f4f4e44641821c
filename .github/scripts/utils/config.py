"""
Action configuration for the h2oGPTe reply pipeline.

Configuration is loaded and validated once, at script start, and the typed
ActionConfig is passed into the pipeline from there.

Sources (highest priority first):
1. Environment: SLASH_COMMANDS (JSON array), STRICT_TLDR, END_OF_TURN_MARKER
2. YAML config file: H2OGPTE_CONFIG_FILE (default .github/h2ogpte.yaml)
3. Defaults: no slash commands, lenient TL;DR matching, ENDOFTURN
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import ConfigurationError
from .slash_commands import SlashCommand, parse_slash_commands
from .transcript import END_OF_TURN

DEFAULT_CONFIG_FILE = ".github/h2ogpte.yaml"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class ActionConfig(BaseModel):
    """Validated configuration for one action run."""

    model_config = ConfigDict(strict=True, frozen=True)

    slash_commands: list[SlashCommand] = Field(
        default_factory=list, description="Configured slash commands"
    )
    strict_tldr: bool = Field(
        default=False, description="Require exact 'TL;DR' casing in headings"
    )
    delimiter: str = Field(
        default=END_OF_TURN, min_length=1, description="Turn delimiter in agent transcripts"
    )


def _parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be true or false, got {value!r}")


def load_config_file(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load the optional YAML config file.

    A missing file gives an empty dict.

    Raises:
        ConfigurationError: If the file is not valid YAML or not a mapping.
    """
    path = path or Path(os.environ.get("H2OGPTE_CONFIG_FILE", DEFAULT_CONFIG_FILE))
    if not path.exists():
        return {}

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Could not parse config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    return data


def load_action_config(config_path: Optional[Path] = None) -> ActionConfig:
    """
    Build the ActionConfig from the environment and the config file.

    Raises:
        ConfigurationError: On any malformed setting. Nothing is returned
            partially.
    """
    file_config = load_config_file(config_path)

    env_commands = os.environ.get("SLASH_COMMANDS")
    if env_commands is not None:
        slash_commands = parse_slash_commands(env_commands)
    else:
        slash_commands = parse_slash_commands(file_config.get("slash_commands"))

    strict_tldr = _parse_bool(
        "STRICT_TLDR", os.environ.get("STRICT_TLDR", file_config.get("strict_tldr", False))
    )
    delimiter = os.environ.get("END_OF_TURN_MARKER") or file_config.get("delimiter", END_OF_TURN)

    try:
        config = ActionConfig(
            slash_commands=slash_commands,
            strict_tldr=strict_tldr,
            delimiter=delimiter,
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid action configuration: {e}") from e

    print(
        f"Loaded config: {len(config.slash_commands)} slash commands, "
        f"strict_tldr={config.strict_tldr}"
    )
    return config

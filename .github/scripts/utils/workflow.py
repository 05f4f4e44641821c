"""GitHub Actions step plumbing: environment inputs and step outputs."""

import json
import os
import uuid
from pathlib import Path
from typing import Dict, Optional

from .exceptions import ConfigurationError


def set_output(name: str, value: str):
    """Set a step output for the GitHub Actions workflow."""
    output_file = os.environ.get("GITHUB_OUTPUT")
    if output_file:
        with open(output_file, "a") as f:
            if "\n" in value:
                delimiter = uuid.uuid4().hex
                f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
            else:
                f.write(f"{name}={value}\n")


def get_env_int(name: str) -> Optional[int]:
    """Read an integer environment variable; unset or blank gives None."""
    value = os.environ.get(name, "").strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from e


def get_env_bool(name: str, default: bool = False) -> bool:
    """Read a true/false environment variable."""
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_attachment_url_map() -> Dict[str, str]:
    """
    Read ATTACHMENT_URL_MAP, a JSON object of remote URL -> local path.

    Unset means no attachments were downloaded.
    """
    raw = os.environ.get("ATTACHMENT_URL_MAP", "").strip()
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"ATTACHMENT_URL_MAP is not valid JSON: {e}") from e
    if not isinstance(data, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in data.items()
    ):
        raise ConfigurationError("ATTACHMENT_URL_MAP must be an object of string URL to path")
    return data


def read_agent_response() -> Optional[str]:
    """
    Read the raw agent transcript.

    AGENT_RESPONSE_FILE (a path written by the completion step) wins over
    AGENT_RESPONSE; transcripts are often too big for an env var.
    """
    response_file = os.environ.get("AGENT_RESPONSE_FILE")
    if response_file:
        path = Path(response_file)
        if path.exists():
            return path.read_text(encoding="utf-8")
        print(f"Warning: AGENT_RESPONSE_FILE {response_file} does not exist")
    return os.environ.get("AGENT_RESPONSE")

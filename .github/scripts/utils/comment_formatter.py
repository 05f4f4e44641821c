"""
GitHub comment bodies for the h2oGPTe action.

Two comments are posted per run:
- A "working on it" comment as soon as the action starts
- The final reply, which replaces the working comment

Reply layout (each part on its own line):

    [❌ h2oGPTe ran into some issues]
    [---]
    > quoted instruction
    ---
    agent response

    ---
    [Slash commands used: /a /b]
    []
    [---]
    references line
    attribution line
"""

import random
from typing import Iterable, Optional, Sequence

from .slash_commands import SlashCommand, format_slash_commands_summary
from .transcript import END_OF_TURN, extract_final_agent_response

DIVIDER = "---"

FAILURE_HEADER = "❌ h2oGPTe ran into some issues"

ATTRIBUTION_LINE = "🤖 Powered by [h2oGPTe](https://h2o.ai/platform/enterprise-h2ogpte/)"

LOADING_GIF_URL = "https://h2ogpte-github-action.cdn.h2o.ai/h2o_loading.gif"

WORKING_MESSAGES = (
    "h2oGPTe is working on it",
    "h2oGPTe is working",
    "h2oGPTe is thinking",
    "h2oGPTe is connecting the dots",
    "h2oGPTe is putting it all together",
    "h2oGPTe is processing your request",
)


def format_instruction_quote(instruction: Optional[str]) -> str:
    """
    Quote an instruction for markdown, one "> " per non-blank line.

    Lines are trimmed and blank ones dropped; a blank instruction gives "".
    """
    lines = [line.strip() for line in (instruction or "").split("\n")]
    return "\n".join(f"> {line}" for line in lines if line)


def format_references_line(action_url: str, chat_url: str) -> str:
    """Footer line linking the Actions run and the h2oGPTe chat session."""
    return (
        f"For more details see the [github action run]({action_url}) "
        f"or the [chat session]({chat_url}) (contact the repo admin for access)."
    )


def build_agent_reply(
    success: bool,
    body: str,
    instruction: Optional[str],
    action_url: str,
    chat_url: str,
    used_commands: Iterable[SlashCommand] = (),
) -> str:
    """
    Assemble the final reply comment.

    The body is used verbatim; clean it first (see build_agent_response).
    The footer is always present and always last.
    """
    lines = []

    if not success:
        lines.append(FAILURE_HEADER)
        lines.append(DIVIDER)

    lines.append(format_instruction_quote(instruction))
    lines.append(DIVIDER)
    lines.append(body)
    lines.append("")
    lines.append(DIVIDER)

    summary = format_slash_commands_summary(used_commands)
    if summary:
        lines.append(f"Slash commands used: {summary}")
        lines.append("")
        lines.append(DIVIDER)

    lines.append(format_references_line(action_url, chat_url))
    lines.append(ATTRIBUTION_LINE)

    return "\n".join(lines)


def build_agent_response(
    success: bool,
    raw_body: Optional[str],
    instruction: Optional[str],
    action_url: str,
    chat_url: str,
    used_commands: Iterable[SlashCommand] = (),
    delimiter: str = END_OF_TURN,
    strict_tldr: bool = False,
) -> str:
    """
    Build the reply from an agent completion.

    Successful completions are reduced to the agent's final answer; failed
    ones carry the error text as-is.
    """
    if success:
        body = extract_final_agent_response(raw_body, delimiter=delimiter, strict=strict_tldr)
    else:
        body = raw_body or ""

    return build_agent_reply(success, body, instruction, action_url, chat_url, used_commands)


def create_initial_working_comment(
    action_url: str,
    used_commands: Sequence[SlashCommand],
    rng: Optional[random.Random] = None,
) -> str:
    """Build the placeholder comment posted while the agent is running."""
    message = (rng or random).choice(WORKING_MESSAGES)

    comment = f'### {message} &nbsp;<img src="{LOADING_GIF_URL}" width="40px"/>\n\n'

    summary = format_slash_commands_summary(used_commands)
    if summary:
        comment += f"Slash commands used: `{summary}`\n\n"

    comment += f"Follow progress in the [GitHub Action run]({action_url})"
    return comment

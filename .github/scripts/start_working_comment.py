#!/usr/bin/env python3
"""
Post the "h2oGPTe is working on it" comment and prepare the agent instruction.

Runs before the agent is called. Loads and validates the action config, so a
broken SLASH_COMMANDS fails the run before anything is sent to h2oGPTe.

INPUTS (environment):
- ISSUE_NUMBER: issue or PR the instruction came from
- COMMENT_BODY: the user's instruction
- ACTION_URL: link to this workflow run
- ATTACHMENT_URL_MAP: JSON object of attachment URL -> downloaded local path
- SLASH_COMMANDS: JSON array of {"name", "prompt"} (optional)

OUTPUTS:
- comment_id: ID of the working comment, to be replaced by the reply
- instruction: instruction with attachment URLs pointing at local files
- slash_commands_prompt: prompt block for the requested slash commands
- slash_commands_used: space-separated command names
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from scripts.utils.comment_formatter import create_initial_working_comment  # noqa: E402
from scripts.utils.config import load_action_config  # noqa: E402
from scripts.utils.exceptions import ConfigurationError  # noqa: E402
from scripts.utils.github_client import (  # noqa: E402
    create_comment,
    get_github_client,
    get_issue,
    get_repo,
)
from scripts.utils.slash_commands import (  # noqa: E402
    format_slash_commands_prompt,
    format_slash_commands_summary,
    match_slash_commands,
)
from scripts.utils.url_replace import replace_attachment_urls  # noqa: E402
from scripts.utils.workflow import get_env_int, load_attachment_url_map, set_output  # noqa: E402


def main():
    try:
        config = load_action_config()
        issue_number = get_env_int("ISSUE_NUMBER")
        url_map = load_attachment_url_map()
    except ConfigurationError as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    if not issue_number:
        print("ERROR: ISSUE_NUMBER not set")
        sys.exit(1)

    comment_body = os.environ.get("COMMENT_BODY", "")
    action_url = os.environ.get("ACTION_URL", "")

    used_commands = match_slash_commands(comment_body, config.slash_commands)
    if used_commands:
        print(f"Slash commands used: {format_slash_commands_summary(used_commands)}")

    instruction = replace_attachment_urls(comment_body, url_map)
    if url_map:
        print(f"Rewrote {len(url_map)} attachment URL(s) to local filenames")

    gh = get_github_client()
    repo = get_repo(gh)
    issue = get_issue(repo, issue_number)

    comment = create_comment(issue, create_initial_working_comment(action_url, used_commands))
    print(f"Posted working comment {comment.id} on #{issue_number}")

    set_output("comment_id", str(comment.id))
    set_output("instruction", instruction)
    set_output("slash_commands_prompt", format_slash_commands_prompt(used_commands))
    set_output("slash_commands_used", format_slash_commands_summary(used_commands))


if __name__ == "__main__":
    main()

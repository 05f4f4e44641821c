#!/usr/bin/env python3
"""
Turn the h2oGPTe agent transcript into the final reply comment.

Runs after the agent call. Extracts the agent's final answer, builds the
reply, and replaces the working comment with it (or posts a new comment if
the working comment is gone).

INPUTS (environment):
- ISSUE_NUMBER: issue or PR to reply on
- COMMENT_ID: working comment to replace (optional)
- COMMENT_BODY: the user's original instruction
- AGENT_RESPONSE_FILE / AGENT_RESPONSE: raw agent transcript or error text
- AGENT_SUCCESS: "true" when the agent call succeeded
- ACTION_URL, CHAT_URL: links for the reply footer
- SLASH_COMMANDS: JSON array of {"name", "prompt"} (optional)

OUTPUTS:
- response_comment: the posted reply body
- comment_id: ID of the comment holding the reply
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from scripts.utils.comment_formatter import build_agent_response  # noqa: E402
from scripts.utils.config import load_action_config  # noqa: E402
from scripts.utils.exceptions import ConfigurationError  # noqa: E402
from scripts.utils.github_client import (  # noqa: E402
    get_github_client,
    get_issue,
    get_repo,
    post_or_update_comment,
)
from scripts.utils.slash_commands import match_slash_commands  # noqa: E402
from scripts.utils.workflow import (  # noqa: E402
    get_env_bool,
    get_env_int,
    read_agent_response,
    set_output,
)


def main():
    try:
        config = load_action_config()
        issue_number = get_env_int("ISSUE_NUMBER")
        comment_id = get_env_int("COMMENT_ID")
    except ConfigurationError as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    if not issue_number:
        print("ERROR: ISSUE_NUMBER not set")
        sys.exit(1)

    instruction = os.environ.get("COMMENT_BODY", "")
    success = get_env_bool("AGENT_SUCCESS")
    raw_response = read_agent_response()

    used_commands = match_slash_commands(instruction, config.slash_commands)

    reply = build_agent_response(
        success=success,
        raw_body=raw_response,
        instruction=instruction,
        action_url=os.environ.get("ACTION_URL", ""),
        chat_url=os.environ.get("CHAT_URL", ""),
        used_commands=used_commands,
        delimiter=config.delimiter,
        strict_tldr=config.strict_tldr,
    )
    if not success:
        print("Agent call failed, posting error reply")

    gh = get_github_client()
    repo = get_repo(gh)
    issue = get_issue(repo, issue_number)

    comment = post_or_update_comment(issue, reply, comment_id=comment_id)
    print(f"Reply posted to #{issue_number} (comment {comment.id})")

    set_output("response_comment", reply)
    set_output("comment_id", str(comment.id))


if __name__ == "__main__":
    main()

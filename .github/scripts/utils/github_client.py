"""GitHub API utilities for the h2oGPTe action."""

import os
from typing import Optional

from github import Github, GithubException


def get_github_client() -> Github:
    """Get authenticated GitHub client."""
    token = os.environ.get("GITHUB_TOKEN")
    if not token:
        raise ValueError("GITHUB_TOKEN environment variable not set")
    return Github(token)


def get_repo(gh: Github, repo_name: Optional[str] = None):
    """Get repository object."""
    repo_name = repo_name or os.environ.get("GITHUB_REPOSITORY")
    if not repo_name:
        raise ValueError("Repository name not provided")
    return gh.get_repo(repo_name)


def get_issue(repo, issue_number: int):
    """Get issue (or PR, as an issue) by number."""
    return repo.get_issue(issue_number)


def create_comment(issue, body: str):
    """Add a comment to an issue or PR conversation. Returns the new comment."""
    return issue.create_comment(body)


def update_comment(issue, comment_id: int, body: str):
    """Replace the body of an existing issue comment. Returns the comment."""
    comment = issue.get_comment(comment_id)
    comment.edit(body)
    return comment


def post_or_update_comment(issue, body: str, comment_id: Optional[int] = None):
    """
    Update the given comment, or post a new one.

    Falls back to a new comment when there is no comment ID or the update
    fails (e.g. the working comment was deleted).
    """
    if comment_id:
        try:
            return update_comment(issue, comment_id, body)
        except GithubException as e:
            print(f"Warning: Could not update comment {comment_id}, posting a new one: {e}")
    return create_comment(issue, body)

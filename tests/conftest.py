"""Shared pytest fixtures for h2oGPTe action tests."""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add scripts path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / ".github" / "scripts"))


@pytest.fixture
def tldr_transcript():
    """Agent transcript whose final answer carries a TL;DR heading."""
    return """Some code output
ENDOFTURN

## ⚡️ TL;DR
The repository lacks test coverage for critical components.

## 🧪 Analysis
Detailed analysis here...

## 🎯 Next Steps
- Add tests
- Improve coverage

<stream_turn_title>Test Coverage Analysis</stream_turn_title>

**LLM Call Info:**
Turn Time: 19.40s
ENDOFTURN
More output after"""


@pytest.fixture
def tldr_answer():
    """Expected extraction from tldr_transcript."""
    return """## ⚡️ TL;DR
The repository lacks test coverage for critical components.

## 🧪 Analysis
Detailed analysis here...

## 🎯 Next Steps
- Add tests
- Improve coverage"""


@pytest.fixture
def noisy_transcript():
    """Transcript full of telemetry, titles and citations, with no TL;DR."""
    return (
        "Looking at the repository\n"
        "**Completed LLM call in 2.34 seconds after 2 turns and time 2.34 out of 3600.**\n"
        "ENDOFTURN\n"
        "<stream_turn_title>Reviewing Files</stream_turn_title>\n"
        "The main module is `app.py` [citation: 1].\n"
        "** [2025-07-02 - 08:45:44.1 PM PDT] Completed execution of code block "
        "using python in 2.03 seconds after 1 turns and time 54.98 out of 3600.**\n"
        "It has no tests [citation:2].\n"
        "ENDOFTURN\n"
        "**No executable code blocks found, terminating conversation.**\n"
    )


@pytest.fixture
def slash_commands():
    """Configured slash commands, deliberately out of name order."""
    from scripts.utils.slash_commands import SlashCommand

    return [
        SlashCommand(name="/review", prompt="Review the code and provide feedback"),
        SlashCommand(name="/docs", prompt="Update the documentation"),
        SlashCommand(name="/test", prompt="Write tests for the changes"),
    ]


@pytest.fixture
def mock_comment():
    """Mock GitHub issue comment."""
    comment = MagicMock()
    comment.id = 4242
    return comment


@pytest.fixture
def mock_issue(mock_comment):
    """Mock GitHub issue whose comments all resolve to mock_comment."""
    issue = MagicMock()
    issue.number = 7
    issue.create_comment.return_value = mock_comment
    issue.get_comment.return_value = mock_comment
    return issue


@pytest.fixture
def mock_repo(mock_issue):
    """Mock GitHub repository object."""
    repo = MagicMock()
    repo.full_name = "h2oai/example-repo"
    repo.get_issue.return_value = mock_issue
    return repo


@pytest.fixture
def mock_github_client(mock_repo):
    """Mock GitHub client."""
    client = MagicMock()
    client.get_repo.return_value = mock_repo
    return client


@pytest.fixture
def github_output(tmp_path, monkeypatch):
    """Point GITHUB_OUTPUT at a temp file and return its path."""
    output_file = tmp_path / "github_output"
    output_file.write_text("")
    monkeypatch.setenv("GITHUB_OUTPUT", str(output_file))
    return output_file

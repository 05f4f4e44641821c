"""Tests for slash command parsing and matching."""

import json

import pytest

from scripts.utils.exceptions import ConfigurationError
from scripts.utils.slash_commands import (
    ENTRY_SHAPE_ERROR,
    SlashCommand,
    format_slash_commands_prompt,
    format_slash_commands_summary,
    match_slash_commands,
    parse_slash_commands,
)


class TestParseSlashCommands:
    """Tests for parse_slash_commands."""

    def test_parses_json_array(self):
        """Valid JSON gives typed commands."""
        raw = json.dumps([{"name": "/review", "prompt": "Review the code"}])
        assert parse_slash_commands(raw) == [SlashCommand(name="/review", prompt="Review the code")]

    @pytest.mark.parametrize("raw", [None, "", "   ", "[]", []])
    def test_empty_configuration(self, raw):
        """Missing or empty configuration means no commands."""
        assert parse_slash_commands(raw) == []

    def test_accepts_decoded_list(self):
        """Lists from the YAML config file are accepted as-is."""
        commands = parse_slash_commands([{"name": "/docs", "prompt": "Update docs"}])
        assert commands[0].name == "/docs"

    def test_invalid_json(self):
        """Malformed JSON is a configuration error."""
        with pytest.raises(ConfigurationError, match="not valid JSON"):
            parse_slash_commands("[{name: /review}]")

    @pytest.mark.parametrize("raw", ['{"name": "/review", "prompt": "x"}', '"/review"', "3"])
    def test_requires_array(self, raw):
        """Anything but an array is rejected."""
        with pytest.raises(ConfigurationError, match="must be an array"):
            parse_slash_commands(raw)

    @pytest.mark.parametrize(
        "entry",
        [
            {"name": "/review"},
            {"prompt": "Review"},
            {"name": 3, "prompt": "Review"},
            {"name": "/review", "prompt": None},
            {"name": "", "prompt": "Review"},
            "/review",
            None,
        ],
    )
    def test_rejects_bad_entries(self, entry):
        """Entries need string name and prompt."""
        with pytest.raises(ConfigurationError) as exc_info:
            parse_slash_commands(json.dumps([entry]))
        assert ENTRY_SHAPE_ERROR in str(exc_info.value)


class TestMatchSlashCommands:
    """Tests for match_slash_commands."""

    def test_matches_names_in_instruction(self, slash_commands):
        """Commands named anywhere in the instruction are used."""
        used = match_slash_commands("@h2ogpte /review this PR please", slash_commands)
        assert [c.name for c in used] == ["/review"]

    def test_sorted_by_name(self, slash_commands):
        """Results come back in name order, not config order."""
        used = match_slash_commands("/test and /review and /docs", slash_commands)
        assert [c.name for c in used] == ["/docs", "/review", "/test"]

    def test_substring_containment(self, slash_commands):
        """Matching is plain containment, so "/testing" uses "/test"."""
        used = match_slash_commands("run /testing now", slash_commands)
        assert [c.name for c in used] == ["/test"]

    def test_case_sensitive(self, slash_commands):
        """Names must match exactly."""
        assert match_slash_commands("/REVIEW this", slash_commands) == []

    def test_duplicates_collapsed(self):
        """A command configured twice is used once."""
        commands = [
            SlashCommand(name="/review", prompt="first"),
            SlashCommand(name="/review", prompt="second"),
        ]
        used = match_slash_commands("/review", commands)
        assert used == [SlashCommand(name="/review", prompt="first")]

    @pytest.mark.parametrize("instruction", [None, ""])
    def test_empty_instruction(self, slash_commands, instruction):
        """Nothing is matched in an empty instruction."""
        assert match_slash_commands(instruction, slash_commands) == []


class TestFormatSlashCommands:
    """Tests for the slash command prompt and summary."""

    def test_prompt_block(self):
        """The prompt block lists each requested command."""
        used = [SlashCommand(name="/review", prompt="Review the code and provide feedback")]
        assert format_slash_commands_prompt(used) == (
            "<slash_commands>\n"
            "Slash commands are a way for the user to predefine specific actions for you "
            "(the agent) to perform in the repository.\n"
            "The following slash commands were requested by the user:\n"
            "- /review: Review the code and provide feedback\n"
            "</slash_commands>"
        )

    def test_prompt_block_sorted(self, slash_commands):
        """Entries are listed in name order."""
        prompt = format_slash_commands_prompt(slash_commands)
        assert prompt.index("- /docs:") < prompt.index("- /review:") < prompt.index("- /test:")

    def test_empty_prompt(self):
        """No commands means no prompt block."""
        assert format_slash_commands_prompt([]) == ""

    def test_summary(self, slash_commands):
        """Summary is the sorted, space-joined names."""
        assert format_slash_commands_summary(slash_commands) == "/docs /review /test"

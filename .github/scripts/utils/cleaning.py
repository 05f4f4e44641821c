"""
Cleanup passes for agent turn text.

Each pass removes one kind of agent noise and nothing else:
- Turn titles (<stream_turn_title>...</stream_turn_title>)
- Telemetry lines (**Completed LLM call in ...**, **Executing python code blocks**, ...)
- Citation markers ([citation: 3])

Passes are plain str -> str functions so they can be tested one at a time.
clean() re-applies them until the text stops changing, which keeps it
idempotent whatever order the passes run in.
"""

import re
from typing import Callable

TURN_TITLE_OPEN = "<stream_turn_title>"

_TITLE_BODY = r"<stream_turn_title>(?:(?!</stream_turn_title>).)*</stream_turn_title>"

# A title sitting on its own line(s) takes its line break with it
TURN_TITLE_LINE_PATTERN = re.compile(
    r"^[ \t]*" + _TITLE_BODY + r"[ \t]*(?:\n|\Z)", re.MULTILINE | re.DOTALL
)
TURN_TITLE_PATTERN = re.compile(_TITLE_BODY, re.DOTALL)

TELEMETRY_LINE_PATTERN = re.compile(
    r"[ \t]*\*\*(?:"
    r"Completed LLM call in .*?"
    r"| \[\d[^\]\n]*\] .*?"
    r"|Executing python code blocks"
    r"|No executable code blocks found, terminating conversation\.*"
    r")\*\*[ \t\r]*"
)

CITATION_PATTERN = re.compile(r" ?\[citation: ?\d+\]")


def _rewrite_lines(text: str, rewrite: Callable[[str], str]) -> str:
    """Apply a per-line rewrite, dropping lines that only went blank because of it."""
    kept = []
    for line in text.split("\n"):
        new_line = rewrite(line)
        if new_line.strip() or not line.strip():
            kept.append(new_line)
    return "\n".join(kept)


def remove_turn_titles(text: str) -> str:
    """Remove turn-title tags together with the title they wrap."""
    text = TURN_TITLE_LINE_PATTERN.sub("", text)
    return TURN_TITLE_PATTERN.sub("", text)


def remove_telemetry_lines(text: str) -> str:
    """Remove bold agent status lines (timings, turn counts, code execution notices)."""
    lines = text.split("\n")
    return "\n".join(line for line in lines if not TELEMETRY_LINE_PATTERN.fullmatch(line))


def remove_citations(text: str) -> str:
    """
    Remove [citation: N] markers and the single space in front of them.

    "text [citation:1]." becomes "text.", so punctuation stays attached.
    """
    return _rewrite_lines(text, lambda line: CITATION_PATTERN.sub("", line))


CLEANING_PASSES: tuple[Callable[[str], str], ...] = (
    remove_turn_titles,
    remove_telemetry_lines,
    remove_citations,
)


def clean(text: str) -> str:
    """Strip agent noise from text. clean(clean(x)) == clean(x)."""
    while True:
        cleaned = text
        for cleaning_pass in CLEANING_PASSES:
            cleaned = cleaning_pass(cleaned)
        if cleaned == text:
            return cleaned
        text = cleaned


def trim_blank_lines(text: str) -> str:
    """Drop leading and trailing blank lines, keeping everything in between."""
    lines = text.split("\n")
    start = 0
    end = len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return "\n".join(lines[start:end])

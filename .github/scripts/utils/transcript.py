"""
Final-answer extraction from h2oGPTe agent transcripts.

The agent returns one long string: every turn it took, separated by an
ENDOFTURN marker, with turn titles, timing lines and citations mixed in.
This module picks the turn that holds the answer and cleans it up for a
GitHub comment.

Selection order (first match wins):
1. No marker at all: the transcript is returned untouched
2. The last turn containing a "## ⚡️ TL;DR" heading, from that heading on
3. The second-to-last turn (the last closed one), then the trailing turn,
   then older turns, skipping turns that are empty once cleaned

Max-turns notices from the agent are swapped for a readable warning.
"""

import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .cleaning import TURN_TITLE_OPEN, TURN_TITLE_PATTERN, clean, trim_blank_lines

END_OF_TURN = "ENDOFTURN"

NO_VALID_RESPONSE = "The agent did not return a valid response. Please check h2oGPTe."

MAX_TURNS_NOTICE = (
    "Reached max number of turns, increase agent accuracy (or max turns) "
    "if seems to have finished without completing task."
)

MAX_TURNS_WARNING = (
    "**⚠️ Warning: Maximum Turns Reached.**\n\n"
    "💡 Hint: If this is a recurring issue, try increasing the `agent_max_turns` "
    "or `agent_accuracy` in your config file."
)

MAX_TURNS_HEADER = "**Warning: Maximum Turns Reached**\n\n---\n\n"

# Any whitespace run between words, so wrapped notices still match in full
MAX_TURNS_NOTICE_PATTERN = re.compile(r"\s+".join(re.escape(w) for w in MAX_TURNS_NOTICE.split()))

# Older agents prefixed the final turn instead: "Max turns 10 out of 20 reached, ..."
MAX_TURNS_PREFIX_PATTERN = re.compile(
    r"Max turns \d+ out of \d+ reached, ending conversation"
    r"(?: to allow for final turn response\. Increase agent accuracy or turns if needed\."
    r"|\.\.\.)"
)

# "#" or "##", optional lightning bolt (U+26A1, optional variation selector), then TL;DR
_TLDR_HEADING = r"^[ \t]{0,3}#{1,2}[ \t]+(?:\u26a1\ufe0f?[ \t]*)?TL;DR"
TLDR_HEADING_PATTERN = re.compile(_TLDR_HEADING, re.MULTILINE | re.IGNORECASE)
STRICT_TLDR_HEADING_PATTERN = re.compile(_TLDR_HEADING, re.MULTILINE)


class SelectionRule(str, Enum):
    """Which rule picked the final segment."""

    UNSEGMENTED = "unsegmented"
    TLDR = "tldr"
    POSITIONAL = "positional"
    EMPTY = "empty"


class SegmentSelection(BaseModel):
    """The segment chosen as the agent's final answer."""

    model_config = ConfigDict(strict=True, frozen=True)

    rule: SelectionRule = Field(description="Rule that made the choice")
    index: Optional[int] = Field(default=None, description="0-based segment position")
    segment: str = Field(default="", description="Raw text of the chosen segment")


def split_segments(transcript: str, delimiter: str = END_OF_TURN) -> list[str]:
    """
    Split a transcript on every delimiter. Empty segments are kept.

    An empty delimiter splits nothing: the whole transcript is one segment.
    """
    if not delimiter:
        return [transcript]
    return transcript.split(delimiter)


def tldr_heading_pattern(strict: bool = False) -> re.Pattern:
    """Heading pattern; strict mode requires the exact "TL;DR" casing."""
    return STRICT_TLDR_HEADING_PATTERN if strict else TLDR_HEADING_PATTERN


def has_tldr_heading(text: str, strict: bool = False) -> bool:
    """Check if text has a TL;DR heading line."""
    return tldr_heading_pattern(strict).search(text) is not None


def _positional_order(count: int) -> list[int]:
    # Last closed turn first, then the trailing one, then older turns
    return [count - 2, count - 1] + list(range(count - 3, -1, -1))


def select_final_segment(segments: list[str], strict: bool = False) -> SegmentSelection:
    """
    Choose the segment holding the agent's final answer.

    Returns a SegmentSelection; rule UNSEGMENTED means the transcript had no
    delimiter and should be used as-is, EMPTY means nothing usable was found.
    """
    if len(segments) < 2:
        return SegmentSelection(
            rule=SelectionRule.UNSEGMENTED,
            segment=segments[0] if segments else "",
        )

    for index in range(len(segments) - 1, -1, -1):
        if has_tldr_heading(clean(segments[index]), strict):
            return SegmentSelection(rule=SelectionRule.TLDR, index=index, segment=segments[index])

    for index in _positional_order(len(segments)):
        if clean(segments[index]).strip():
            return SegmentSelection(
                rule=SelectionRule.POSITIONAL, index=index, segment=segments[index]
            )

    return SegmentSelection(rule=SelectionRule.EMPTY)


def has_max_turns_notice(text: str) -> bool:
    """Check for the full "Reached max number of turns, ..." sentence anywhere in text."""
    return MAX_TURNS_NOTICE_PATTERN.search(text) is not None


def split_max_turns_prefix(text: str) -> tuple[Optional[str], str]:
    """
    Detect an old-style "Max turns X out of Y reached" prefix.

    Returns (header, rest): header is MAX_TURNS_HEADER when the text starts
    with the prefix, else None. rest is what follows the prefix, verbatim, or
    the untouched text.
    """
    stripped = text.lstrip()
    match = MAX_TURNS_PREFIX_PATTERN.match(stripped)
    if not match:
        return None, text
    return MAX_TURNS_HEADER, stripped[match.end() :]


def locate_tldr(segment: str, strict: bool = False) -> str:
    """
    Cut a segment down to its last TL;DR heading and what follows it.

    The answer stops at the first turn title after the heading; anything
    after a turn title is that turn's footer. The result is cleaned and
    trimmed of surrounding blank lines.
    """
    title_spans = [m.span() for m in TURN_TITLE_PATTERN.finditer(segment)]
    headings = [
        m
        for m in tldr_heading_pattern(strict).finditer(segment)
        if not any(start <= m.start() < end for start, end in title_spans)
    ]
    if not headings:
        return trim_blank_lines(clean(segment))

    answer = segment[headings[-1].start() :]
    title_index = answer.find(TURN_TITLE_OPEN)
    if title_index != -1:
        answer = answer[:title_index]
    return trim_blank_lines(clean(answer))


def render_segment(segment: str, use_tldr: bool, strict: bool = False) -> str:
    """Clean a chosen segment, applying the max-turns header and TL;DR cut."""
    header, body = split_max_turns_prefix(trim_blank_lines(clean(segment)))
    if header:
        print("Max turns prefix detected in final agent turn")
    if use_tldr:
        body = locate_tldr(segment, strict)
    return (header or "") + body


def extract_final_agent_response(
    transcript: Optional[str], delimiter: str = END_OF_TURN, strict: bool = False
) -> str:
    """
    Extract the user-facing answer from a raw agent transcript.

    Never raises: unusable input gives NO_VALID_RESPONSE, a transcript
    without delimiters comes back unchanged.
    """
    if not transcript or not isinstance(transcript, str):
        return NO_VALID_RESPONSE

    if has_max_turns_notice(clean(transcript)):
        print("Max turns reached detected in agent response")
        return MAX_TURNS_WARNING

    selection = select_final_segment(split_segments(transcript, delimiter), strict=strict)

    if selection.rule == SelectionRule.UNSEGMENTED:
        print("Could not find any end of turn markers, returning raw agent response")
        return transcript
    if selection.rule == SelectionRule.EMPTY:
        print("Warning: Every agent turn was empty after cleaning")
        return NO_VALID_RESPONSE
    if selection.rule == SelectionRule.POSITIONAL:
        print(f"Could not find TL;DR section, using turn {selection.index}")

    response = render_segment(
        selection.segment, use_tldr=selection.rule == SelectionRule.TLDR, strict=strict
    )
    return response if response.strip() else NO_VALID_RESPONSE

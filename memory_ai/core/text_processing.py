"""Text utilities for cleaning LLM output before structural parsing.

Chat models frequently wrap JSON answers in markdown code fences
(```json ... ```), sometimes with prose before or after the fence. The
helpers here strip that wrapping and decode the payload so provider clients
only have to deal with plain JSON values.
"""

from __future__ import annotations

import json
import re
from typing import Any, Final


# =============================================================================
# Fence Patterns
# =============================================================================

# First fenced block, any (or no) language tag: ```json\n{...}\n```
_FENCE_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"```[ \t]*([A-Za-z0-9_+-]*)[ \t]*\r?\n?(.*?)\r?\n?[ \t]*```",
    re.DOTALL,
)

# Whole reply is one fence; the body runs to the last closing marker so
# fences nested inside JSON string values stay intact.
_WRAPPED_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"\A```[ \t]*[A-Za-z0-9_+-]*[ \t]*\r?\n?(.*)```\Z",
    re.DOTALL,
)


# =============================================================================
# Public API
# =============================================================================


def strip_code_fence(content: str) -> str:
    """Return the body of the first markdown code fence in ``content``.

    Content without a fence is returned stripped of surrounding whitespace.

    Examples:
        >>> strip_code_fence('```json\\n{"a": 1}\\n```')
        '{"a": 1}'

        >>> strip_code_fence('Here you go:\\n```\\n[1, 2]\\n```')
        '[1, 2]'

        >>> strip_code_fence('  {"a": 1}  ')
        '{"a": 1}'
    """
    if "```" not in content:
        return content.strip()

    match = _FENCE_PATTERN.search(content)
    if match is None:
        # Unterminated fence: drop the opening marker line and keep the rest
        return content.split("```", 1)[1].partition("\n")[2].strip()

    return match.group(2).strip()


def parse_json_payload(content: str) -> Any:
    """Decode JSON from LLM output, tolerating a surrounding code fence.

    The reply is decoded as-is first; fence unwrapping is only attempted
    when that fails, so backticks inside string values never affect a
    well-formed reply.

    Args:
        content: Raw message text returned by a provider.

    Returns:
        The decoded JSON value.

    Raises:
        ValueError: If neither the text nor any fenced body is valid JSON
            (json.JSONDecodeError is a ValueError subclass).
    """
    text = content.strip()
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        error = e

    for candidate in _fenced_bodies(text):
        try:
            return json.loads(candidate)
        except json.JSONDecodeError:
            continue

    raise error


def _fenced_bodies(text: str) -> list[str]:
    if "```" not in text:
        return []

    bodies = []
    wrapped = _WRAPPED_PATTERN.match(text)
    if wrapped is not None:
        bodies.append(wrapped.group(1).strip())
    bodies.append(strip_code_fence(text))
    return bodies

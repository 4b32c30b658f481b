"""TeamCity service message encoding.

Service message syntax:
    ##teamcity[<name> <key>='<value>' ...]
    ##teamcity[<name> '<value>']

Values are escaped exactly once, here, when interpolated into a message.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

PREFIX = "##teamcity"

_ESCAPES = {
    "|": "||",
    "\n": "|n",
    "\r": "|r",
    "'": "|'",
    "]": "|]",
}
_UNESCAPES = {escaped[1]: char for char, escaped in _ESCAPES.items()}


class MessageName(StrEnum):
    """Service message names emitted by the reporter."""

    TEST_SUITE_STARTED = "testSuiteStarted"
    TEST_SUITE_FINISHED = "testSuiteFinished"
    TEST_STARTED = "testStarted"
    TEST_FINISHED = "testFinished"
    TEST_FAILED = "testFailed"
    TEST_IGNORED = "testIgnored"
    TEST_STD_OUT = "testStdOut"
    TEST_STD_ERR = "testStdErr"
    PROGRESS_MESSAGE = "progressMessage"


def escape(text: object) -> str:
    """Escape text for use inside a service message value.

    Trims surrounding whitespace, then substitutes the reserved characters
    in a single pass, so "|" produced by a substitution is never re-escaped.

    Args:
        text: Value to escape. Non-str values are converted with str().

    Returns:
        Escaped text, same characters otherwise, no truncation.
    """
    return "".join(_ESCAPES.get(char, char) for char in str(text).strip())


def unescape(text: str) -> str:
    """Reverse escape() (except for the trimmed whitespace).

    Unknown escape sequences are kept verbatim.
    """
    chars: list[str] = []
    i = 0
    while i < len(text):
        char = text[i]
        if char == "|" and i + 1 < len(text) and text[i + 1] in _UNESCAPES:
            chars.append(_UNESCAPES[text[i + 1]])
            i += 2
            continue
        chars.append(char)
        i += 1
    return "".join(chars)


def format_message(name: str, attributes: Mapping[str, object]) -> str:
    """Render one service message with key/value attributes.

    Attribute order follows the mapping's insertion order.

    Args:
        name: Message name.
        attributes: Raw (unescaped) attribute values.

    Returns:
        Single line without trailing newline.
    """
    parts = [f"{key}='{escape(value)}'" for key, value in attributes.items()]
    return f"{PREFIX}[{' '.join([name, *parts])}]"


def format_single(name: str, value: object) -> str:
    """Render one service message with a single unnamed value."""
    return f"{PREFIX}[{name} '{escape(value)}']"

"""TeamCity service message protocol: escaping and message rendering."""

from teamcity_bdd.application.protocol.service_message import (
    MessageName,
    escape,
    format_message,
    format_single,
    unescape,
)

__all__ = [
    "MessageName",
    "escape",
    "format_message",
    "format_single",
    "unescape",
]

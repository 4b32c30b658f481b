"""Domain ports (interfaces/protocols)."""

from teamcity_bdd.domain.ports.clock import Clock
from teamcity_bdd.domain.ports.event_sink import EventSink, OutputSink

__all__ = [
    "Clock",
    "EventSink",
    "OutputSink",
]

"""
Shared dataclasses used across the guide pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Channel:
    """Channel as listed in the feed."""
    id: str
    display_name: str


@dataclass(frozen=True, slots=True)
class RawProgram:
    """Programme entry as listed in the feed, timestamps still unparsed."""
    channel_id: str
    start: str
    stop: str
    title: str


@dataclass(frozen=True, slots=True)
class DisplayProgram:
    """Filtered programme ready to be rendered."""
    channel_name: str
    title: str
    start: datetime
    end: datetime


__all__ = ["Channel", "RawProgram", "DisplayProgram"]

"""
Guide Filter Service

Selects the prime-time programs of whitelisted channels and resolves their
channel names. All inputs, including the reference date, are passed in
explicitly so the filter never reads the clock.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from primetime.services.guide_types import Channel, DisplayProgram, RawProgram
from primetime.utils.timezone import parse_xmltv_timestamp


logger = logging.getLogger(__name__)


class UnknownChannelError(LookupError):
    """Raised when a programme references a channel id missing from the feed"""

    def __init__(self, channel_id: str):
        super().__init__(f"No channel with id '{channel_id}' in the feed")
        self.channel_id = channel_id


@dataclass(frozen=True, slots=True)
class EveningWindow:
    """Start-time slot (both bounds exclusive) and minimum duration of a program."""
    start: time = time(20, 45)
    end: time = time(21, 20)
    min_duration: timedelta = timedelta(minutes=35)


def filter_channel_ids(channels: Iterable[Channel], whitelist: Iterable[str]) -> set[str]:
    """
    Collect ids of channels whose display name is whitelisted

    Matching is exact and case-sensitive.
    """
    allowed = set(whitelist)
    return {channel.id for channel in channels if channel.display_name in allowed}


def build_channel_index(channels: Iterable[Channel]) -> dict[str, str]:
    """Map channel id to display name, keeping the first entry of a duplicated id."""
    index: dict[str, str] = {}
    for channel in channels:
        index.setdefault(channel.id, channel.display_name)
    return index


def resolve_channel_name(channel_id: str, index: Mapping[str, str]) -> str:
    """
    Return the display name of a channel id

    Raises:
        UnknownChannelError: If the id is not in the index
    """
    try:
        return index[channel_id]
    except KeyError:
        raise UnknownChannelError(channel_id) from None


def is_evening_program(start: datetime, stop: datetime, today: date, window: EveningWindow) -> bool:
    """
    Check whether a program airs in the evening window of the given day

    Date and time of day are the feed's own wall-clock values; the duration
    is computed on the offset-aware datetimes.
    """
    return (
        start.date() == today
        and window.start < start.time() < window.end
        and stop - start > window.min_duration
    )


def filter_programs(
    channels: Sequence[Channel],
    programs: Iterable[RawProgram],
    *,
    today: date,
    whitelist: Iterable[str],
    window: EveningWindow | None = None
) -> list[DisplayProgram]:
    """
    Reduce the feed to the display-ready evening programs

    Every program's channel is resolved first, so a dangling channel reference
    fails the run even on a non-whitelisted channel. Timestamps are only parsed
    for programs that passed the whitelist.

    Args:
        channels: Channels listed in the feed
        programs: Programs listed in the feed
        today: Local calendar date the programs must start on
        whitelist: Channel display names to keep
        window: Evening window, defaults to 20:45-21:20 and > 35 minutes

    Returns:
        Display programs in feed order

    Raises:
        UnknownChannelError: If a program references an unknown channel id
        DateFormatError: If a whitelisted program has a malformed timestamp
    """
    window = window or EveningWindow()
    index = build_channel_index(channels)
    allowed_ids = filter_channel_ids(channels, whitelist)

    logger.debug(
        "Filtering programs for %s: %s whitelisted channel ids, window %s -> %s, > %s",
        today.isoformat(),
        len(allowed_ids),
        window.start,
        window.end,
        window.min_duration,
    )

    selected: list[DisplayProgram] = []
    whitelisted_count = 0

    for program in programs:
        channel_name = resolve_channel_name(program.channel_id, index)
        if program.channel_id not in allowed_ids:
            continue
        whitelisted_count += 1

        start = parse_xmltv_timestamp(program.start)
        stop = parse_xmltv_timestamp(program.stop)
        if not is_evening_program(start, stop, today, window):
            continue

        selected.append(DisplayProgram(
            channel_name=channel_name,
            title=program.title,
            start=start,
            end=stop,
        ))

    logger.info(
        f"Filter summary - Whitelisted programs: {whitelisted_count}, Evening programs: {len(selected)}"
    )

    return selected

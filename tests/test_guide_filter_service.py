from datetime import date, datetime, time, timedelta, timezone

import pytest

from conftest import build_feed
from primetime.config import DEFAULT_CHANNEL_WHITELIST
from primetime.services.guide_filter_service import (
    EveningWindow,
    UnknownChannelError,
    build_channel_index,
    filter_channel_ids,
    filter_programs,
    is_evening_program,
    resolve_channel_name,
)
from primetime.services.guide_types import Channel, DisplayProgram, RawProgram
from primetime.services.xmltv_parser_service import parse_xmltv_bytes
from primetime.utils.timezone import DateFormatError

PARIS = timezone(timedelta(hours=2))
TODAY = date(2025, 10, 18)
WINDOW = EveningWindow()

CHANNELS = [
    Channel("TF1.fr", "TF1"),
    Channel("France2.fr", "France 2"),
    Channel("Gulli.fr", "Gulli"),
]


def at(hour, minute, second=0, day=18):
    return datetime(2025, 10, day, hour, minute, second, tzinfo=PARIS)


class TestFilterChannelIds:
    """Whitelist matching on display names."""

    def test_keeps_only_whitelisted(self):
        assert filter_channel_ids(CHANNELS, DEFAULT_CHANNEL_WHITELIST) == {"TF1.fr", "France2.fr"}

    def test_match_is_exact_and_case_sensitive(self):
        channels = [
            Channel("a", "tf1"),
            Channel("b", "France 2 "),
            Channel("c", "RMC Decouverte"),
            Channel("d", "Cherie 25"),
            Channel("e", "RMC Découverte"),
        ]
        assert filter_channel_ids(channels, DEFAULT_CHANNEL_WHITELIST) == {"e"}

    def test_whitelisted_names_absent_from_feed(self):
        assert filter_channel_ids([], DEFAULT_CHANNEL_WHITELIST) == set()


class TestChannelResolver:
    """Channel id to display name lookup."""

    def test_resolves_known_id(self):
        assert resolve_channel_name("France2.fr", build_channel_index(CHANNELS)) == "France 2"

    def test_unknown_id_raises(self):
        with pytest.raises(UnknownChannelError) as exc_info:
            resolve_channel_name("Missing.fr", build_channel_index(CHANNELS))
        assert exc_info.value.channel_id == "Missing.fr"
        assert isinstance(exc_info.value, LookupError)

    def test_first_duplicate_wins(self):
        index = build_channel_index([Channel("dup", "First"), Channel("dup", "Second")])
        assert index == {"dup": "First"}


class TestIsEveningProgram:
    """Evening window predicate boundaries."""

    def test_typical_prime_time(self):
        assert is_evening_program(at(21, 5), at(22, 50), TODAY, WINDOW)

    @pytest.mark.parametrize("start, expected", [
        ((20, 45, 0), False),
        ((20, 45, 1), True),
        ((21, 19, 59), True),
        ((21, 20, 0), False),
        ((20, 30, 0), False),
        ((21, 45, 0), False),
    ])
    def test_start_bounds_are_exclusive(self, start, expected):
        begin = at(*start)
        assert is_evening_program(begin, begin + timedelta(hours=1), TODAY, WINDOW) is expected

    @pytest.mark.parametrize("duration, expected", [
        (timedelta(minutes=35), False),
        (timedelta(minutes=35, seconds=1), True),
        (timedelta(minutes=20), False),
        (timedelta(hours=2), True),
    ])
    def test_duration_is_strictly_longer(self, duration, expected):
        begin = at(21, 0)
        assert is_evening_program(begin, begin + duration, TODAY, WINDOW) is expected

    def test_other_days_excluded(self):
        assert not is_evening_program(at(21, 0, day=17), at(23, 0, day=17), TODAY, WINDOW)
        assert not is_evening_program(at(21, 0, day=19), at(23, 0, day=19), TODAY, WINDOW)

    def test_wall_clock_time_is_not_converted(self):
        # 21:00 in UTC-05:00 is 02:00 UTC the next day, yet it is prime time locally
        offset = timezone(timedelta(hours=-5))
        start = datetime(2025, 10, 18, 21, 0, tzinfo=offset)
        assert is_evening_program(start, start + timedelta(hours=1), TODAY, WINDOW)

    def test_duration_accounts_for_offsets(self):
        # Stop written in UTC: 19:30 UTC is 21:30 at +02:00, only 30 minutes
        stop = datetime(2025, 10, 18, 19, 30, tzinfo=timezone.utc)
        assert not is_evening_program(at(21, 0), stop, TODAY, WINDOW)

    def test_custom_window(self):
        window = EveningWindow(start=time(18, 0), end=time(19, 0), min_duration=timedelta(minutes=10))
        assert is_evening_program(at(18, 30), at(18, 45), TODAY, window)
        assert not is_evening_program(at(21, 0), at(23, 0), TODAY, window)


class TestFilterPrograms:
    """Whitelist, window and resolution combined."""

    def test_selects_and_resolves_in_feed_order(self):
        programs = [
            RawProgram("France2.fr", "20251018211000 +0200", "20251018230000 +0200", "Envoyé spécial"),
            RawProgram("TF1.fr", "20251018181000 +0200", "20251018190000 +0200", "Jeu"),
            RawProgram("TF1.fr", "20251018210500 +0200", "20251018225000 +0200", "Koh-Lanta"),
        ]

        result = filter_programs(CHANNELS, programs, today=TODAY, whitelist=DEFAULT_CHANNEL_WHITELIST)

        assert result == [
            DisplayProgram("France 2", "Envoyé spécial", at(21, 10), at(23, 0)),
            DisplayProgram("TF1", "Koh-Lanta", at(21, 5), at(22, 50)),
        ]

    def test_non_whitelisted_channel_never_selected(self):
        programs = [RawProgram("Gulli.fr", "20251018210000 +0200", "20251018230000 +0200", "Cartoon")]
        assert filter_programs(CHANNELS, programs, today=TODAY, whitelist=DEFAULT_CHANNEL_WHITELIST) == []

    def test_programs_from_other_days_excluded(self):
        programs = [RawProgram("TF1.fr", "20251017210000 +0200", "20251017230000 +0200", "Yesterday")]
        assert filter_programs(CHANNELS, programs, today=TODAY, whitelist=DEFAULT_CHANNEL_WHITELIST) == []

    def test_unknown_channel_fails_the_run(self):
        programs = [
            RawProgram("TF1.fr", "20251018210000 +0200", "20251018230000 +0200", "Film"),
            RawProgram("Ghost.fr", "20251018090000 +0200", "20251018093000 +0200", "Morning"),
        ]
        with pytest.raises(UnknownChannelError):
            filter_programs(CHANNELS, programs, today=TODAY, whitelist=DEFAULT_CHANNEL_WHITELIST)

    def test_malformed_timestamp_on_whitelisted_channel_is_fatal(self):
        programs = [RawProgram("TF1.fr", "2025-10-18 21:00", "20251018230000 +0200", "Film")]
        with pytest.raises(DateFormatError):
            filter_programs(CHANNELS, programs, today=TODAY, whitelist=DEFAULT_CHANNEL_WHITELIST)

    def test_timestamp_with_trailing_newline_from_feed_is_fatal(self):
        content = build_feed(
            [("TF1.fr", "TF1")],
            [("TF1.fr", "20251018205000 +0200&#10;", "20251018213000 +0200", "Film")],
        )
        channels, programs = parse_xmltv_bytes(content)
        assert programs[0].start == "20251018205000 +0200\n"

        with pytest.raises(DateFormatError):
            filter_programs(channels, programs, today=TODAY, whitelist=("TF1",))

    def test_malformed_timestamp_on_other_channel_is_ignored(self):
        programs = [RawProgram("Gulli.fr", "garbage", "garbage", "Cartoon")]
        assert filter_programs(CHANNELS, programs, today=TODAY, whitelist=DEFAULT_CHANNEL_WHITELIST) == []

    def test_custom_whitelist(self):
        programs = [RawProgram("Gulli.fr", "20251018210000 +0200", "20251018230000 +0200", "Cartoon")]
        result = filter_programs(CHANNELS, programs, today=TODAY, whitelist=("Gulli",))
        assert [p.channel_name for p in result] == ["Gulli"]

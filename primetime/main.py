from datetime import datetime, timedelta
import logging

import httpx

from primetime.config import CustomSettings, settings as default_settings, setup_logging
from primetime.services import (
    DisplayProgram,
    EveningWindow,
    filter_programs,
    parse_xmltv_bytes,
    print_table,
)
from primetime.utils.file_operations import fetch_feed
from primetime.utils.logging_helpers import (
    log_feed_summary,
    log_run_start,
    log_section_end,
    log_section_start,
)
from primetime.utils.timezone import local_today


logger = logging.getLogger(__name__)


def build_window(settings: CustomSettings) -> EveningWindow:
    return EveningWindow(
        start=settings.window_start,
        end=settings.window_end,
        min_duration=timedelta(minutes=settings.min_duration_minutes),
    )


def run(
    settings: CustomSettings | None = None,
    *,
    now: datetime | None = None,
    client: httpx.Client | None = None
) -> list[DisplayProgram]:
    """
    Fetch the feed, keep tonight's prime-time programs and print them

    Args:
        settings: Configuration, defaults to the environment-loaded settings
        now: Reference time for "today", defaults to the local current time
        client: Optional HTTP client used for the download

    Returns:
        The programs that were printed
    """
    settings = settings or default_settings
    now = now or datetime.now()
    log_run_start(logger, now)

    log_section_start(logger, "feed download")
    content = fetch_feed(
        settings.feed_url,
        timeout=settings.http_timeout_sec,
        check_status=settings.check_http_status,
        client=client,
    )
    log_section_end(logger, "feed download")

    log_section_start(logger, "feed parsing")
    channels, programs = parse_xmltv_bytes(content)
    log_feed_summary(logger, len(channels), len(programs))
    log_section_end(logger, "feed parsing")

    log_section_start(logger, "program filtering")
    selected = filter_programs(
        channels,
        programs,
        today=local_today(now),
        whitelist=settings.channel_whitelist,
        window=build_window(settings),
    )
    log_section_end(logger, "program filtering")

    print_table(selected)
    return selected


def main() -> None:
    """Console entry point"""
    setup_logging()
    try:
        run()
    except Exception as e:
        logger.error(f"Failed to build prime-time guide: {e}")
        raise

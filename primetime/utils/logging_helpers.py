"""
Structured logging helpers for consistent log formatting.

Provides utilities for structured, clean logging without excessive decorative separators.
"""
import logging
from datetime import datetime


def log_section_start(logger: logging.Logger, section_name: str) -> None:
    """
    Log the start of a processing section.

    Args:
        logger: Logger instance
        section_name: Name of the section being started
    """
    logger.info(f"Starting: {section_name}")


def log_section_end(logger: logging.Logger, section_name: str) -> None:
    """
    Log the end of a processing section.

    Args:
        logger: Logger instance
        section_name: Name of the section being ended
    """
    logger.info(f"Completed: {section_name}")


def log_run_start(logger: logging.Logger, now: datetime) -> None:
    """Log guide build start with the reference time used for filtering."""
    logger.info(f"Guide build started, reference time {now.isoformat()}")


def log_feed_summary(
    logger: logging.Logger,
    channels_count: int,
    programs_count: int
) -> None:
    """
    Log parsed feed summary.

    Args:
        logger: Logger instance
        channels_count: Number of channels in the feed
        programs_count: Number of programs in the feed
    """
    logger.info(f"Feed summary - Channels: {channels_count}, Programs: {programs_count}")

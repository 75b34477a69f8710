"""Shared fixtures: a tiny XMLTV feed builder and a fixed reference date."""
from datetime import date, datetime
from xml.sax.saxutils import escape, quoteattr

import pytest

TODAY = date(2025, 10, 18)
NOW = datetime(2025, 10, 18, 18, 30)


def build_feed(channels, programmes) -> bytes:
    """
    Build an XMLTV document

    Args:
        channels: (id, display_name) pairs
        programmes: (channel_id, start, stop, title) tuples
    """
    parts = ['<?xml version="1.0" encoding="UTF-8"?>', '<tv generator-info-name="tests">']
    for channel_id, name in channels:
        parts.append(
            f'<channel id={quoteattr(channel_id)}><display-name>{escape(name)}</display-name></channel>'
        )
    for channel_id, start, stop, title in programmes:
        parts.append(
            f'<programme start="{start}" stop="{stop}" channel={quoteattr(channel_id)}>'
            f'<title lang="fr">{escape(title)}</title></programme>'
        )
    parts.append("</tv>")
    return "\n".join(parts).encode("utf-8")


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def now() -> datetime:
    return NOW

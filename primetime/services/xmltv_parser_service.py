import logging
from typing import Optional

from lxml import etree # type: ignore

from primetime.services.guide_types import Channel, RawProgram

logger = logging.getLogger(__name__)


class FeedParseError(ValueError):
    """Raised when the feed is not well-formed XMLTV"""
    pass


def parse_xmltv_bytes(content: bytes) -> tuple[list[Channel], list[RawProgram]]:
    """
    Parse XMLTV document and return channels and programs

    The whole document must parse: a single malformed channel or programme
    fails the operation.

    Args:
        content: Raw XML bytes

    Returns:
        Tuple of (channels, programs), both in document order

    Raises:
        FeedParseError: If XML is malformed or an element misses a required field
    """
    logger.debug(f"Parsing XMLTV document ({len(content)} bytes)")

    parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)
    try:
        root = etree.fromstring(content, parser)
    except etree.XMLSyntaxError as e:
        logger.error(f"  XML parsing error: {e}")
        raise FeedParseError(f"Feed is not well-formed XML: {e}") from e

    logger.debug(f"  XML document loaded (root tag: {root.tag})")

    channels = _parse_channels(root)
    programs = _parse_programs(root)

    logger.info(f"XMLTV parsing complete: {len(channels)} channels, {len(programs)} programs")

    return channels, programs


def _parse_channels(root: etree._Element) -> list[Channel]:
    """Extract channels from XMLTV root element"""
    channels = []

    for channel in root.findall('channel'):
        channel_id = _require_attribute(channel, 'id')
        display_name = _require_text(channel, 'display-name', channel_id)
        channels.append(Channel(id=channel_id, display_name=display_name))

    return channels


def _parse_programs(root: etree._Element) -> list[RawProgram]:
    """Extract programs from XMLTV root element"""
    programs = []

    for programme in root.findall('programme'):
        channel_id = _require_attribute(programme, 'channel')
        programs.append(RawProgram(
            channel_id=channel_id,
            start=_require_attribute(programme, 'start'),
            stop=_require_attribute(programme, 'stop'),
            title=_require_text(programme, 'title', channel_id),
        ))

    return programs


def _require_attribute(element: etree._Element, name: str) -> str:
    value = element.get(name)
    if value is None:
        raise FeedParseError(
            f"<{element.tag}> on line {element.sourceline} is missing the '{name}' attribute"
        )
    return value


def _require_text(element: etree._Element, tag: str, owner: str) -> str:
    text = _get_text(element, tag)
    if text is None:
        raise FeedParseError(
            f"<{element.tag}> for '{owner}' on line {element.sourceline} has no <{tag}>"
        )
    return text


def _get_text(element: etree._Element, tag: str) -> Optional[str]:
    """Safely extract text from XML element (first matching child, empty text allowed)"""
    child = element.find(tag)
    if child is None:
        return None
    return (child.text or "").strip()

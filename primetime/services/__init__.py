"""
Services package for the prime-time guide

This package contains the parsing, filtering and rendering stages.
"""
from primetime.services.guide_types import Channel, DisplayProgram, RawProgram
from primetime.services.guide_filter_service import EveningWindow, UnknownChannelError, filter_programs
from primetime.services.renderer_service import print_table, render_table
from primetime.services.xmltv_parser_service import FeedParseError, parse_xmltv_bytes

__all__ = [
    'Channel',
    'DisplayProgram',
    'RawProgram',
    'EveningWindow',
    'UnknownChannelError',
    'filter_programs',
    'print_table',
    'render_table',
    'FeedParseError',
    'parse_xmltv_bytes',
]

"""
Renderer Service

Draws the selected programs as a fixed-width box table.
"""
import sys
from collections.abc import Iterable
from typing import TextIO

from primetime.services.guide_types import DisplayProgram

CHANNEL_WIDTH = 14
TITLE_WIDTH = 55
TIME_WIDTH = 13

HEADERS = ("Chaine", "Titre", "Horaires")


def truncate_title(title: str, limit: int = TITLE_WIDTH) -> str:
    """Keep the first `limit` characters, without any ellipsis."""
    return title[:limit]


def _border(left: str, middle: str, right: str) -> str:
    # Each column is padded by one space on both sides
    segments = ("─" * (width + 2) for width in (CHANNEL_WIDTH, TITLE_WIDTH, TIME_WIDTH))
    return left + middle.join(segments) + right


def _row(channel: str, title: str, hours: str) -> str:
    return f"│ {channel:<{CHANNEL_WIDTH}} │ {title:<{TITLE_WIDTH}} │ {hours:<{TIME_WIDTH}} │"


def format_time_range(program: DisplayProgram) -> str:
    return f"{program.start:%H:%M} - {program.end:%H:%M}"


def render_table(programs: Iterable[DisplayProgram]) -> list[str]:
    """
    Render programs as table lines

    Column widths are fixed; an overlong channel name pushes the rest of its
    row to the right instead of resizing the table.

    Args:
        programs: Programs in display order

    Returns:
        Lines of the table, without trailing newlines
    """
    lines = [
        _border("┌", "┬", "┐"),
        _row(*HEADERS),
        _border("├", "┼", "┤"),
    ]
    for program in programs:
        lines.append(_row(
            program.channel_name,
            truncate_title(program.title),
            format_time_range(program),
        ))
    lines.append(_border("└", "┴", "┘"))
    return lines


def print_table(programs: Iterable[DisplayProgram], stream: TextIO | None = None) -> None:
    """Write the rendered table to stdout (or the given stream)."""
    out = stream or sys.stdout
    for line in render_table(programs):
        print(line, file=out)

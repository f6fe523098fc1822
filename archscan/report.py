"""Render scan results for the terminal."""

from typing import List, Tuple

from archscan.models import ScanResult

SECTION_TITLES: List[Tuple[str, str]] = [
    ("Intel Binaries", "intel"),
    ("Apple Binaries", "apple_silicon"),
    ("Universal Binaries", "universal"),
]


def render_report(result: ScanResult) -> str:
    """Three titled sections separated by a blank line, one path per line.

    Buckets are rendered in the order they are stored; pass a sorted result.
    """
    sections = []
    for title, field_name in SECTION_TITLES:
        lines = [title]
        lines.extend(getattr(result, field_name))
        sections.append("\n".join(lines))
    return "\n\n".join(sections)


def render_json(result: ScanResult) -> str:
    return result.model_dump_json(indent=2)

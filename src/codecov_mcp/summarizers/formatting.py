from collections.abc import Iterable
import json
from typing import Any

from codecov_mcp.models import Page


NOT_AVAILABLE = "N/A"
SHORT_SHA_LENGTH = 7


def is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def or_na(value: Any) -> Any:
    return NOT_AVAILABLE if value is None else value


def format_percentage(value: Any, digits: int = 2) -> str:
    if not is_number(value):
        return NOT_AVAILABLE
    return f"{value:.{digits}f}%"


def format_number(value: Any, digits: int = 2) -> str:
    if not is_number(value):
        return NOT_AVAILABLE
    return f"{value:.{digits}f}"


def coverage_delta(base: Any, head: Any) -> float | None:
    if not is_number(base) or not is_number(head):
        return None
    return head - base


def format_delta(delta: float | None) -> str:
    if delta is None:
        return NOT_AVAILABLE
    sign = "+" if delta >= 0 else ""
    return f"{sign}{delta:.2f}%"


def compress_line_ranges(lines: Iterable[int]) -> str:
    """Collapse ascending line numbers into ``"3-5, 7"`` style ranges."""
    ranges: list[str] = []
    start: int | None = None
    end: int | None = None

    for line in lines:
        if end is not None and line == end + 1:
            end = line
            continue
        if start is not None:
            ranges.append(f"{start}" if start == end else f"{start}-{end}")
        start = end = line

    if start is not None:
        ranges.append(f"{start}" if start == end else f"{start}-{end}")

    return ", ".join(ranges) if ranges else "none"


def short_sha(sha: str | None) -> str | None:
    return sha[:SHORT_SHA_LENGTH] if sha else None


def first_line(message: str | None) -> str | None:
    if message is None:
        return None
    return message.split("\n", 1)[0]


def page_info(page: Page[Any]) -> dict[str, Any]:
    return {
        "has_next": page.has_next,
        "has_previous": page.has_previous,
        "total_pages": or_na(page.total_pages),
    }


def paginated_summary(page: Page[Any], key: str, items: list[Any]) -> dict[str, Any]:
    return {
        "total_count": or_na(page.count),
        "page_info": page_info(page),
        key: items,
    }


def to_json(summary: Any) -> str:
    return json.dumps(summary, indent=2, ensure_ascii=False)

from typing import Any

from codecov_mcp.models import (
    CoverageTreeNode,
    FileCoverageReport,
    LineCoverage,
    TotalsSnapshot,
)
from codecov_mcp.summarizers.formatting import (
    NOT_AVAILABLE,
    compress_line_ranges,
    format_number,
    format_percentage,
    is_number,
    or_na,
    to_json,
)


TREE_INDENT = "  "


def build_totals_summary(snapshot: TotalsSnapshot) -> dict[str, Any]:
    totals = snapshot.totals
    if totals is None:
        return {
            "coverage_percentage": NOT_AVAILABLE,
            "lines": NOT_AVAILABLE,
            "commit_sha": or_na(snapshot.commit_sha),
        }

    return {
        "coverage_percentage": format_percentage(totals.coverage),
        "lines": {
            "total": or_na(totals.lines),
            "covered": or_na(totals.hits),
            "missed": or_na(totals.misses),
            "partial": or_na(totals.partials),
        },
        "files_count": or_na(totals.files),
        "branches": or_na(totals.branches),
        "methods": or_na(totals.methods),
        "complexity": {
            "total": or_na(totals.complexity_total),
            "ratio": format_number(totals.complexity_ratio),
        },
        "commit_sha": or_na(snapshot.commit_sha),
    }


def summarize_totals(snapshot: TotalsSnapshot) -> str:
    return to_json(build_totals_summary(snapshot))


def classify_lines(
    line_coverage: list[LineCoverage],
) -> tuple[list[int], list[int], list[int]]:
    """Split lines into (missed, partial, covered); irrelevant lines are skipped."""
    missed: list[int] = []
    partial: list[int] = []
    covered: list[int] = []

    for line in line_coverage:
        if not is_number(line.coverage):
            continue
        if line.coverage == 0:
            missed.append(line.line_number)
        elif line.coverage > 0:
            if line.is_partial_hit:
                partial.append(line.line_number)
            else:
                covered.append(line.line_number)

    return missed, partial, covered


def build_file_coverage_summary(report: FileCoverageReport) -> dict[str, Any]:
    missed, partial, covered = classify_lines(report.line_coverage)
    totals = report.totals

    return {
        "file": report.name,
        "commit_sha": or_na(report.commit_sha),
        "coverage_percentage": format_percentage(totals.coverage if totals else None),
        "totals": {
            "lines": or_na(totals.lines if totals else None),
            "hits": or_na(totals.hits if totals else None),
            "misses": or_na(totals.misses if totals else None),
            "partials": or_na(totals.partials if totals else None),
        },
        "uncovered_lines": compress_line_ranges(missed),
        "partial_lines": compress_line_ranges(partial),
        "covered_lines": compress_line_ranges(covered),
        "uncovered_line_count": len(missed),
        "partial_line_count": len(partial),
        "commit_file_url": or_na(report.commit_file_url),
    }


def summarize_file_coverage(report: FileCoverageReport) -> str:
    return to_json(build_file_coverage_summary(report))


def _render_node(node: CoverageTreeNode, depth: int, lines: list[str]) -> None:
    label = f"{node.name}/" if node.is_directory else node.name
    lines.append(
        f"{TREE_INDENT * depth}{label} - {format_percentage(node.coverage, 1)} "
        f"({or_na(node.hits)}/{or_na(node.lines)} lines)"
    )
    for child in node.children:
        _render_node(child, depth + 1, lines)


def render_tree(nodes: list[CoverageTreeNode]) -> str:
    lines: list[str] = []
    for node in nodes:
        _render_node(node, 0, lines)
    return "\n".join(lines)


def summarize_tree(nodes: list[CoverageTreeNode]) -> str:
    if not nodes:
        return "Coverage Tree:\n\n(no coverage data)"
    return f"Coverage Tree:\n\n{render_tree(nodes)}"

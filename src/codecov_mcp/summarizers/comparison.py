from typing import Any

from codecov_mcp.models import ComparisonFile, CoverageComparison, PatchTotals
from codecov_mcp.summarizers.formatting import (
    NOT_AVAILABLE,
    coverage_delta,
    format_delta,
    format_percentage,
    or_na,
    short_sha,
    to_json,
)


MAX_CHANGED_FILES = 20
MAX_UNTRACKED_FILES = 10


def _patch_block(patch: PatchTotals | None) -> dict[str, Any] | None:
    if patch is None:
        return None
    return {
        "coverage": format_percentage(patch.coverage),
        "hits": or_na(patch.hits),
        "misses": or_na(patch.misses),
    }


def _file_delta(file: ComparisonFile) -> float | None:
    base = file.totals.base.coverage if file.totals.base else None
    head = file.totals.head.coverage if file.totals.head else None
    return coverage_delta(base, head)


def changed_files(comparison: CoverageComparison) -> list[ComparisonFile]:
    """Files with a diff or change summary, most regressed first.

    Files whose delta cannot be computed sort as if it were zero; the sort
    is stable so backend order breaks ties.
    """
    relevant = [
        file
        for file in comparison.files
        if file.has_diff or file.change_summary is not None
    ]
    return sorted(relevant, key=lambda file: _file_delta(file) or 0.0)


def _file_item(file: ComparisonFile) -> dict[str, Any]:
    base = file.totals.base.coverage if file.totals.base else None
    head = file.totals.head.coverage if file.totals.head else None
    return {
        "name": file.name,
        "base_coverage": format_percentage(base),
        "head_coverage": format_percentage(head),
        "change": format_delta(_file_delta(file)),
        "patch": _patch_block(file.totals.patch),
        "lines_added": or_na(file.stats.added if file.stats else None),
        "lines_removed": or_na(file.stats.removed if file.stats else None),
    }


def build_comparison_summary(comparison: CoverageComparison) -> dict[str, Any]:
    totals = comparison.totals
    base_coverage = totals.base.coverage if totals.base else None
    head_coverage = totals.head.coverage if totals.head else None
    files = changed_files(comparison)

    patch_coverage: Any = "No patch coverage data"
    if totals.patch is not None:
        patch_coverage = {
            "percentage": format_percentage(totals.patch.coverage),
            "hits": or_na(totals.patch.hits),
            "misses": or_na(totals.patch.misses),
            "partials": or_na(totals.patch.partials),
        }

    return {
        "comparison": {
            "base_commit": short_sha(comparison.base_commit) or NOT_AVAILABLE,
            "head_commit": short_sha(comparison.head_commit) or NOT_AVAILABLE,
        },
        "coverage_totals": {
            "base": format_percentage(base_coverage),
            "head": format_percentage(head_coverage),
            "change": format_delta(coverage_delta(base_coverage, head_coverage)),
        },
        "patch_coverage": patch_coverage,
        "files_changed": len(files),
        "untracked_files": len(comparison.untracked),
        "has_unmerged_base_commits": comparison.has_unmerged_base_commits,
        "changed_files": [_file_item(file) for file in files[:MAX_CHANGED_FILES]],
    }


def untracked_warning(untracked: list[str]) -> str:
    if not untracked:
        return ""
    lines = ["WARNING: Untracked files (new files without coverage):"]
    lines.extend(untracked[:MAX_UNTRACKED_FILES])
    if len(untracked) > MAX_UNTRACKED_FILES:
        lines.append(f"... and {len(untracked) - MAX_UNTRACKED_FILES} more")
    return "\n".join(lines)


def summarize_comparison(comparison: CoverageComparison) -> str:
    text = to_json(build_comparison_summary(comparison))
    warning = untracked_warning(comparison.untracked)
    if warning:
        text += f"\n\n{warning}"
    return text

import json

from codecov_mcp.models import (
    ComparisonFile,
    ComparisonTotals,
    CoverageComparison,
    CoverageTotals,
    FileChangeSummary,
    FileTotals,
    PatchTotals,
)
from codecov_mcp.summarizers.comparison import (
    build_comparison_summary,
    changed_files,
    summarize_comparison,
    untracked_warning,
)


def _file(name, base, head, has_diff=False, change_summary=None):
    return ComparisonFile(
        name=name,
        totals=FileTotals(
            base=CoverageTotals(coverage=base),
            head=CoverageTotals(coverage=head),
        ),
        has_diff=has_diff,
        change_summary=change_summary,
    )


def _comparison(files=None, untracked=None, patch=None):
    return CoverageComparison(
        base_commit="aaaaaaaaaaaa",
        head_commit="bbbbbbbbbbbb",
        totals=ComparisonTotals(
            base=CoverageTotals(coverage=70.0),
            head=CoverageTotals(coverage=72.5),
            patch=patch,
        ),
        files=files or [],
        untracked=untracked or [],
    )


def test_should_keep_only_changed_files_sorted_by_delta():
    comparison = _comparison(
        files=[
            _file("b.py", 50.0, 95.0, has_diff=True),
            _file("c.py", 60.0, 60.0),
            _file("a.py", 90.0, 80.0, change_summary=FileChangeSummary(misses=1)),
        ]
    )

    summary = build_comparison_summary(comparison)

    assert [f["name"] for f in summary["changed_files"]] == ["a.py", "b.py"]
    assert summary["changed_files"][0]["change"] == "-10.00%"
    assert summary["changed_files"][1]["change"] == "+45.00%"
    assert summary["files_changed"] == 2


def test_should_sort_unknown_delta_as_zero_and_keep_backend_order():
    files = [
        _file("up.py", 10.0, 20.0, has_diff=True),
        _file("unknown.py", None, 50.0, has_diff=True),
        _file("flat.py", 40.0, 40.0, has_diff=True),
        _file("down.py", 20.0, 10.0, has_diff=True),
    ]

    ordered = changed_files(_comparison(files=files))

    assert [f.name for f in ordered] == ["down.py", "unknown.py", "flat.py", "up.py"]


def test_should_cap_changed_files_list():
    files = [_file(f"f{i}.py", 50.0, 50.0 + i, has_diff=True) for i in range(25)]

    summary = build_comparison_summary(_comparison(files=files))

    assert len(summary["changed_files"]) == 20
    assert summary["files_changed"] == 25


def test_should_summarize_totals_and_patch_coverage():
    summary = build_comparison_summary(
        _comparison(patch=PatchTotals(hits=8, misses=2, partials=0, coverage=80.0))
    )

    assert summary["comparison"] == {"base_commit": "aaaaaaa", "head_commit": "bbbbbbb"}
    assert summary["coverage_totals"] == {
        "base": "70.00%",
        "head": "72.50%",
        "change": "+2.50%",
    }
    assert summary["patch_coverage"] == {
        "percentage": "80.00%",
        "hits": 8,
        "misses": 2,
        "partials": 0,
    }


def test_should_note_missing_patch_coverage():
    summary = build_comparison_summary(_comparison())

    assert summary["patch_coverage"] == "No patch coverage data"
    assert summary["has_unmerged_base_commits"] is False


def test_should_append_untracked_warning_with_overflow_count():
    untracked = [f"new_{i}.py" for i in range(15)]

    text = summarize_comparison(_comparison(untracked=untracked))
    body, warning = text.split("\n\n", 1)

    assert json.loads(body)["untracked_files"] == 15
    warning_lines = warning.split("\n")
    assert warning_lines[0] == "WARNING: Untracked files (new files without coverage):"
    assert warning_lines[1:11] == untracked[:10]
    assert warning_lines[-1] == "... and 5 more"


def test_should_omit_warning_when_nothing_is_untracked():
    text = summarize_comparison(_comparison())

    assert "WARNING" not in text
    assert untracked_warning([]) == ""

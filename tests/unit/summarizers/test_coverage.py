import json

from codecov_mcp.models import (
    CoverageTotals,
    CoverageTreeNode,
    FileCoverageReport,
    LineCoverage,
    TotalsSnapshot,
)
from codecov_mcp.summarizers.coverage import (
    build_file_coverage_summary,
    build_totals_summary,
    classify_lines,
    render_tree,
    summarize_file_coverage,
    summarize_tree,
)


def test_should_summarize_totals():
    snapshot = TotalsSnapshot(
        totals=CoverageTotals(
            files=4, lines=200, hits=150, misses=40, partials=10, coverage=75.0,
            complexity_total=12, complexity_ratio=0.5,
        ),
        commit_sha="abc123",
    )

    summary = build_totals_summary(snapshot)

    assert summary["coverage_percentage"] == "75.00%"
    assert summary["lines"] == {"total": 200, "covered": 150, "missed": 40, "partial": 10}
    assert summary["files_count"] == 4
    assert summary["branches"] == "N/A"
    assert summary["complexity"] == {"total": 12, "ratio": "0.50"}


def test_should_summarize_missing_totals_as_not_available():
    summary = build_totals_summary(TotalsSnapshot(totals=None, commit_sha=None))

    assert summary == {
        "coverage_percentage": "N/A",
        "lines": "N/A",
        "commit_sha": "N/A",
    }


def test_should_classify_lines_by_hit_count():
    lines = [
        LineCoverage(1, 0),
        LineCoverage(2, 0),
        LineCoverage(3, 4, is_partial_hit=True),
        LineCoverage(4, None),
        LineCoverage(5, 2),
    ]

    assert classify_lines(lines) == ([1, 2], [3], [5])


def test_should_summarize_file_coverage_with_line_ranges():
    report = FileCoverageReport(
        name="src/app.py",
        commit_sha="abc123",
        totals=CoverageTotals(lines=8, hits=4, misses=3, partials=1, coverage=50.0),
        line_coverage=[
            LineCoverage(1, 1),
            LineCoverage(2, 1),
            LineCoverage(3, 0),
            LineCoverage(4, 0),
            LineCoverage(5, 0),
            LineCoverage(6, 1, is_partial_hit=True),
            LineCoverage(7, 0),
            LineCoverage(8, None),
        ],
    )

    summary = build_file_coverage_summary(report)

    assert summary["file"] == "src/app.py"
    assert summary["coverage_percentage"] == "50.00%"
    assert summary["uncovered_lines"] == "3-5, 7"
    assert summary["partial_lines"] == "6"
    assert summary["covered_lines"] == "1-2"
    assert summary["uncovered_line_count"] == 4
    assert summary["partial_line_count"] == 1
    assert summary["commit_file_url"] == "N/A"


def test_should_render_file_summary_as_json():
    report = FileCoverageReport(name="empty.py", commit_sha=None, totals=None)

    parsed = json.loads(summarize_file_coverage(report))

    assert parsed["uncovered_lines"] == "none"
    assert parsed["totals"]["lines"] == "N/A"


def test_should_render_tree_with_indentation():
    tree = [
        CoverageTreeNode(
            name="src",
            coverage=75.0,
            lines=20,
            hits=15,
            children=[
                CoverageTreeNode(name="app.py", coverage=50.0, lines=10, hits=5),
                CoverageTreeNode(
                    name="lib",
                    coverage=100.0,
                    lines=10,
                    hits=10,
                    children=[
                        CoverageTreeNode(name="util.py", coverage=100.0, lines=10, hits=10)
                    ],
                ),
            ],
        ),
        CoverageTreeNode(name="setup.py", coverage=None, lines=None, hits=None),
    ]

    assert render_tree(tree).split("\n") == [
        "src/ - 75.0% (15/20 lines)",
        "  app.py - 50.0% (5/10 lines)",
        "  lib/ - 100.0% (10/10 lines)",
        "    util.py - 100.0% (10/10 lines)",
        "setup.py - N/A (N/A/N/A lines)",
    ]


def test_should_render_same_tree_text_every_time():
    tree = [CoverageTreeNode(name="app.py", coverage=12.345, lines=3, hits=1)]

    assert summarize_tree(tree) == summarize_tree(tree)
    assert summarize_tree(tree) == "Coverage Tree:\n\napp.py - 12.3% (1/3 lines)"


def test_should_note_empty_tree():
    assert summarize_tree([]) == "Coverage Tree:\n\n(no coverage data)"

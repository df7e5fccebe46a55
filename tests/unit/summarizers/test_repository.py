import json

from codecov_mcp.models import (
    Commit,
    CommitAuthor,
    CommitReference,
    CoverageTotals,
    Owner,
    Page,
    PullRequest,
    Repository,
    RepositoryDetail,
)
from codecov_mcp.summarizers.repository import (
    build_commits_summary,
    build_pulls_summary,
    build_repositories_summary,
    build_repository_summary,
    summarize_repositories,
)


def _page(results, next_url=None, previous=None):
    return Page(
        count=len(results), next=next_url, previous=previous, total_pages=1,
        results=results,
    )


def test_should_summarize_repository_list():
    page = _page(
        [
            Repository(
                name="widgets",
                active=True,
                language="python",
                branch="main",
                totals=CoverageTotals(coverage=91.234),
            ),
            Repository(name="gadgets"),
        ],
        next_url="https://api.codecov.io/next",
    )

    summary = build_repositories_summary(page)

    assert summary["total_count"] == 2
    assert summary["page_info"]["has_next"] is True
    assert summary["repositories"][0]["coverage"] == "91.23%"
    assert summary["repositories"][1]["coverage"] == "N/A"


def test_should_render_repository_list_as_json():
    parsed = json.loads(summarize_repositories(_page([])))

    assert parsed["repositories"] == []
    assert parsed["page_info"]["has_previous"] is False


def test_should_summarize_repository_detail():
    repo = RepositoryDetail(
        name="widgets",
        private=True,
        author=Owner(service="github", username="acme"),
        totals=CoverageTotals(coverage=80.0, lines=10, hits=8, misses=2),
        upload_token="0f8fad5b-d9cb-469f-a165-70867728950e",
    )

    summary = build_repository_summary(repo)

    assert summary["owner"] == {"username": "acme", "service": "github"}
    assert summary["coverage"]["percentage"] == "80.00%"
    assert summary["coverage"]["files"] == "N/A"
    assert "upload_token" not in summary


def test_should_note_repository_without_coverage():
    summary = build_repository_summary(RepositoryDetail(name="empty"))

    assert summary["coverage"] == "No coverage data available"


def test_should_summarize_commits():
    page = _page(
        [
            Commit(
                commitid="0123456789abcdef",
                message="Add feature\n\nDetails here",
                author=CommitAuthor(username="dev"),
                totals=CoverageTotals(coverage=60.0),
            ),
            Commit(commitid="fedcba9876543210"),
        ]
    )

    commits = build_commits_summary(page)["commits"]

    assert commits[0]["short_sha"] == "0123456"
    assert commits[0]["message"] == "Add feature"
    assert commits[0]["author"] == "dev"
    assert commits[1]["author"] == "Unknown"
    assert commits[1]["coverage"] == "N/A"


def test_should_summarize_pull_requests():
    page = _page(
        [
            PullRequest(
                pullid=42,
                title="Raise coverage",
                state="open",
                author=CommitAuthor(name="Sam"),
                base=CommitReference(commitid="aaaaaaaaaa", branch="main"),
                head=CommitReference(commitid="bbbbbbbbbb", branch="feature"),
            )
        ]
    )

    pulls = build_pulls_summary(page)["pull_requests"]

    assert pulls[0]["id"] == 42
    assert pulls[0]["author"] == "Sam"
    assert pulls[0]["base"] == {"branch": "main", "commit": "aaaaaaa"}
    assert pulls[0]["head"] == {"branch": "feature", "commit": "bbbbbbb"}

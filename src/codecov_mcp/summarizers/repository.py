from typing import Any

from codecov_mcp.models import Commit, Page, PullRequest, Repository, RepositoryDetail
from codecov_mcp.summarizers.formatting import (
    first_line,
    format_percentage,
    or_na,
    paginated_summary,
    short_sha,
    to_json,
)


def _repository_item(repo: Repository) -> dict[str, Any]:
    return {
        "name": repo.name,
        "active": repo.active,
        "language": repo.language,
        "default_branch": repo.branch,
        "coverage": format_percentage(repo.totals.coverage if repo.totals else None),
        "last_updated": repo.updatestamp,
    }


def build_repositories_summary(page: Page[Repository]) -> dict[str, Any]:
    return paginated_summary(
        page, "repositories", [_repository_item(repo) for repo in page.results]
    )


def summarize_repositories(page: Page[Repository]) -> str:
    return to_json(build_repositories_summary(page))


def build_repository_summary(repo: RepositoryDetail) -> dict[str, Any]:
    coverage: Any = "No coverage data available"
    if repo.totals is not None:
        coverage = {
            "percentage": format_percentage(repo.totals.coverage),
            "lines": or_na(repo.totals.lines),
            "hits": or_na(repo.totals.hits),
            "misses": or_na(repo.totals.misses),
            "files": or_na(repo.totals.files),
        }

    return {
        "name": repo.name,
        "active": repo.active,
        "activated": repo.activated,
        "private": repo.private,
        "language": repo.language,
        "default_branch": repo.branch,
        "owner": {
            "username": repo.author.username if repo.author else None,
            "service": repo.author.service if repo.author else None,
        },
        "coverage": coverage,
        "last_updated": repo.updatestamp,
    }


def summarize_repository(repo: RepositoryDetail) -> str:
    return to_json(build_repository_summary(repo))


def _commit_item(commit: Commit) -> dict[str, Any]:
    return {
        "sha": commit.commitid,
        "short_sha": short_sha(commit.commitid),
        "message": first_line(commit.message),
        "branch": commit.branch,
        "author": commit.author.display_name if commit.author else "Unknown",
        "timestamp": commit.timestamp,
        "ci_passed": commit.ci_passed,
        "state": commit.state,
        "coverage": format_percentage(
            commit.totals.coverage if commit.totals else None
        ),
    }


def build_commits_summary(page: Page[Commit]) -> dict[str, Any]:
    return paginated_summary(
        page, "commits", [_commit_item(commit) for commit in page.results]
    )


def summarize_commits(page: Page[Commit]) -> str:
    return to_json(build_commits_summary(page))


def _pull_item(pull: PullRequest) -> dict[str, Any]:
    return {
        "id": pull.pullid,
        "title": pull.title,
        "state": pull.state,
        "author": pull.author.display_name if pull.author else "Unknown",
        "base": (
            {"branch": pull.base.branch, "commit": short_sha(pull.base.commitid)}
            if pull.base
            else None
        ),
        "head": (
            {"branch": pull.head.branch, "commit": short_sha(pull.head.commitid)}
            if pull.head
            else None
        ),
        "last_updated": pull.updatestamp,
    }


def build_pulls_summary(page: Page[PullRequest]) -> dict[str, Any]:
    return paginated_summary(
        page, "pull_requests", [_pull_item(pull) for pull in page.results]
    )


def summarize_pulls(page: Page[PullRequest]) -> str:
    return to_json(build_pulls_summary(page))

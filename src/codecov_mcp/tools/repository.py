from codecov_mcp.client import CoverageClient
from codecov_mcp.clients.base import ClientResult
from codecov_mcp.models import Commit, Page, PullRequest, Repository, RepositoryDetail
from codecov_mcp.summarizers.repository import (
    summarize_commits,
    summarize_pulls,
    summarize_repositories,
    summarize_repository,
)
from codecov_mcp.tools.params import (
    GetRepositoryParams,
    ListCommitsParams,
    ListPullsParams,
    ListRepositoriesParams,
)
from codecov_mcp.tools.registry import registry


@registry.register(
    "codecov_list_repositories",
    "List repositories for an owner/organization that have coverage data in "
    "Codecov. Useful for discovering which repos have coverage configured.",
    ListRepositoriesParams,
    summarize=summarize_repositories,
)
def list_repositories(
    client: CoverageClient, params: ListRepositoriesParams
) -> ClientResult[Page[Repository]]:
    return client.list_repositories(
        params.owner,
        service=params.service,
        page=params.page,
        page_size=params.page_size,
        active=params.active,
        names=params.names,
    )


@registry.register(
    "codecov_get_repository",
    "Get detailed information about a specific repository including its "
    "coverage configuration and current totals.",
    GetRepositoryParams,
    summarize=summarize_repository,
)
def get_repository(
    client: CoverageClient, params: GetRepositoryParams
) -> ClientResult[RepositoryDetail]:
    return client.get_repository(params.owner, params.repo, service=params.service)


@registry.register(
    "codecov_list_commits",
    "List commits that have coverage data uploaded. Shows commit SHA, message, "
    "author, and coverage totals for each commit.",
    ListCommitsParams,
    summarize=summarize_commits,
)
def list_commits(
    client: CoverageClient, params: ListCommitsParams
) -> ClientResult[Page[Commit]]:
    return client.list_commits(
        params.owner,
        params.repo,
        service=params.service,
        page=params.page,
        page_size=params.page_size,
        branch=params.branch,
    )


@registry.register(
    "codecov_list_pulls",
    "List pull requests with their coverage information. Shows PR title, "
    "state, base/head commits, and coverage comparison.",
    ListPullsParams,
    summarize=summarize_pulls,
)
def list_pulls(
    client: CoverageClient, params: ListPullsParams
) -> ClientResult[Page[PullRequest]]:
    return client.list_pull_requests(
        params.owner,
        params.repo,
        service=params.service,
        page=params.page,
        page_size=params.page_size,
        state=params.state,
    )

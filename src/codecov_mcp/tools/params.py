from pydantic import BaseModel, ConfigDict, Field

from codecov_mcp.client import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PullState, Service


class BaseParams(BaseModel):
    model_config = ConfigDict(extra="forbid")

    owner: str = Field(
        min_length=1,
        description="Repository owner/organization name (e.g., 'facebook', 'microsoft')",
    )
    service: Service | None = Field(
        default=None,
        description=(
            "Git hosting service provider. Defaults to 'github'. "
            "Options: github, gitlab, bitbucket"
        ),
    )


class RepoParams(BaseParams):
    repo: str = Field(min_length=1, description="Repository name (e.g., 'react')")


class PageParams(BaseModel):
    page: int | None = Field(
        default=None, ge=1, description="Page number for pagination (1-indexed)"
    )
    page_size: int | None = Field(
        default=None,
        ge=1,
        le=MAX_PAGE_SIZE,
        description=(
            f"Number of results per page (1-{MAX_PAGE_SIZE}). Defaults to the "
            f"server's configured page size ({DEFAULT_PAGE_SIZE} unless overridden)"
        ),
    )


_BRANCH_DESCRIPTION = (
    "Branch name. If not specified, uses the repository's default branch"
)
_SHA_DESCRIPTION = (
    "Git commit SHA. If not specified, uses the latest commit on the branch"
)


class ListRepositoriesParams(BaseParams, PageParams):
    active: bool | None = Field(
        default=None, description="Only return repositories that are (in)active"
    )
    names: list[str] | None = Field(
        default=None, description="Only return repositories with these names"
    )


class GetRepositoryParams(RepoParams):
    pass


class CoverageTotalsParams(RepoParams):
    branch: str | None = Field(default=None, description=_BRANCH_DESCRIPTION)
    sha: str | None = Field(default=None, description=_SHA_DESCRIPTION)


class FileCoverageParams(CoverageTotalsParams):
    path: str = Field(
        min_length=1,
        description="File path relative to repository root (e.g., 'src/utils/helper.ts')",
    )


class CoverageTreeParams(CoverageTotalsParams):
    path: str | None = Field(
        default=None, description="Directory path to start the tree from"
    )
    depth: int | None = Field(
        default=None, ge=1, le=10, description="Maximum depth of the tree (1-10)"
    )


class CompareCoverageParams(RepoParams):
    base: str | None = Field(
        default=None, description="Base commit SHA or branch to compare from"
    )
    head: str | None = Field(
        default=None, description="Head commit SHA or branch to compare to"
    )
    pullid: int | None = Field(
        default=None,
        ge=1,
        description="Pull request number. When set, base and head are usually omitted",
    )


class ListCommitsParams(RepoParams, PageParams):
    branch: str | None = Field(default=None, description="Filter commits by branch")


class ListPullsParams(RepoParams, PageParams):
    state: PullState | None = Field(
        default=None, description="Filter by state: open, closed, or merged"
    )

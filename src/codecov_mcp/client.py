from abc import ABC, abstractmethod
from enum import StrEnum
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from codecov_mcp.clients.base import ClientResult
    from codecov_mcp.models import (
        Commit,
        CoverageComparison,
        CoverageTreeNode,
        FileCoverageReport,
        Page,
        PullRequest,
        Repository,
        RepositoryDetail,
        TotalsSnapshot,
    )


class Service(StrEnum):
    GITHUB = "github"
    GITLAB = "gitlab"
    BITBUCKET = "bitbucket"


class PullState(StrEnum):
    OPEN = "open"
    CLOSED = "closed"
    MERGED = "merged"


DEFAULT_SERVICE = Service.GITHUB
API_BASE_URL = "https://api.codecov.io/api/v2"
DEFAULT_PAGE_SIZE = 25
MAX_PAGE_SIZE = 100


class CoverageClient(ABC):
    @abstractmethod
    def list_repositories(
        self,
        owner: str,
        service: Service | None = None,
        page: int | None = None,
        page_size: int | None = None,
        active: bool | None = None,
        names: list[str] | None = None,
    ) -> "ClientResult[Page[Repository]]":
        raise NotImplementedError

    @abstractmethod
    def get_repository(
        self, owner: str, repo: str, service: Service | None = None
    ) -> "ClientResult[RepositoryDetail]":
        raise NotImplementedError

    @abstractmethod
    def get_coverage_totals(
        self,
        owner: str,
        repo: str,
        service: Service | None = None,
        sha: str | None = None,
        branch: str | None = None,
    ) -> "ClientResult[TotalsSnapshot]":
        raise NotImplementedError

    @abstractmethod
    def get_file_coverage(
        self,
        owner: str,
        repo: str,
        path: str,
        service: Service | None = None,
        sha: str | None = None,
        branch: str | None = None,
    ) -> "ClientResult[FileCoverageReport]":
        raise NotImplementedError

    @abstractmethod
    def get_coverage_tree(
        self,
        owner: str,
        repo: str,
        service: Service | None = None,
        sha: str | None = None,
        branch: str | None = None,
        path: str | None = None,
        depth: int | None = None,
    ) -> "ClientResult[list[CoverageTreeNode]]":
        raise NotImplementedError

    @abstractmethod
    def compare_coverage(
        self,
        owner: str,
        repo: str,
        service: Service | None = None,
        base: str | None = None,
        head: str | None = None,
        pullid: int | None = None,
    ) -> "ClientResult[CoverageComparison]":
        raise NotImplementedError

    @abstractmethod
    def list_commits(
        self,
        owner: str,
        repo: str,
        service: Service | None = None,
        page: int | None = None,
        page_size: int | None = None,
        branch: str | None = None,
    ) -> "ClientResult[Page[Commit]]":
        raise NotImplementedError

    @abstractmethod
    def list_pull_requests(
        self,
        owner: str,
        repo: str,
        service: Service | None = None,
        page: int | None = None,
        page_size: int | None = None,
        state: PullState | None = None,
    ) -> "ClientResult[Page[PullRequest]]":
        raise NotImplementedError

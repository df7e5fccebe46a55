from typing import Any
from urllib.parse import quote

import requests

from codecov_mcp.adapters.codecov_mapper import CodecovMapper
from codecov_mcp.client import (
    API_BASE_URL,
    DEFAULT_PAGE_SIZE,
    DEFAULT_SERVICE,
    PullState,
    Service,
)
from codecov_mcp.clients.base import BaseCoverageClient, ClientResult
from codecov_mcp.exceptions import ConfigurationError
from codecov_mcp.logger import get_logger
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


class CodecovClient(BaseCoverageClient):
    def __init__(
        self,
        token: str,
        default_service: Service = DEFAULT_SERVICE,
        base_url: str | None = None,
        timeout: float | None = None,
        page_size: int | None = None,
        logger: Any | None = None,
        session: requests.Session | None = None,
    ) -> None:
        if not token:
            raise ConfigurationError(
                "CODECOV_API_TOKEN is required. Set it as an environment variable."
            )

        session = session or requests.Session()
        session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/json",
            }
        )
        super().__init__(
            session=session,
            base_url=base_url or API_BASE_URL,
            default_service=default_service,
            timeout=timeout,
            logger=logger or get_logger(self.__class__.__name__),
        )
        self.page_size = page_size or DEFAULT_PAGE_SIZE
        self.mapper = CodecovMapper()

    def _repo_path(self, service: Service | None, owner: str, repo: str) -> str:
        return f"/{self._resolve_service(service)}/{owner}/repos/{repo}"

    def list_repositories(
        self,
        owner: str,
        service: Service | None = None,
        page: int | None = None,
        page_size: int | None = None,
        active: bool | None = None,
        names: list[str] | None = None,
    ) -> ClientResult[Page[Repository]]:
        params = self._query_params(
            page_size=page_size or self.page_size,
            page=page,
            active=active,
            names=names,
        )
        return self._fetch(
            f"/{self._resolve_service(service)}/{owner}/repos/",
            lambda data: self.mapper.to_page(data, self.mapper.to_repository),
            params,
        )

    def get_repository(
        self, owner: str, repo: str, service: Service | None = None
    ) -> ClientResult[RepositoryDetail]:
        return self._fetch(
            f"{self._repo_path(service, owner, repo)}/",
            self.mapper.to_repository_detail,
        )

    def get_coverage_totals(
        self,
        owner: str,
        repo: str,
        service: Service | None = None,
        sha: str | None = None,
        branch: str | None = None,
    ) -> ClientResult[TotalsSnapshot]:
        # sha and branch are both forwarded; the backend decides precedence
        return self._fetch(
            f"{self._repo_path(service, owner, repo)}/totals/",
            self.mapper.to_totals_snapshot,
            self._query_params(sha=sha, branch=branch),
        )

    def get_file_coverage(
        self,
        owner: str,
        repo: str,
        path: str,
        service: Service | None = None,
        sha: str | None = None,
        branch: str | None = None,
    ) -> ClientResult[FileCoverageReport]:
        # The whole file path is one route component, slashes included
        encoded_path = quote(path, safe="")
        return self._fetch(
            f"{self._repo_path(service, owner, repo)}/file_report/{encoded_path}/",
            self.mapper.to_file_coverage_report,
            self._query_params(sha=sha, branch=branch),
        )

    def get_coverage_tree(
        self,
        owner: str,
        repo: str,
        service: Service | None = None,
        sha: str | None = None,
        branch: str | None = None,
        path: str | None = None,
        depth: int | None = None,
    ) -> ClientResult[list[CoverageTreeNode]]:
        return self._fetch(
            f"{self._repo_path(service, owner, repo)}/report/tree",
            self.mapper.to_tree,
            self._query_params(sha=sha, branch=branch, path=path, depth=depth),
        )

    def compare_coverage(
        self,
        owner: str,
        repo: str,
        service: Service | None = None,
        base: str | None = None,
        head: str | None = None,
        pullid: int | None = None,
    ) -> ClientResult[CoverageComparison]:
        # pullid is not given precedence over base/head here; all are forwarded
        return self._fetch(
            f"{self._repo_path(service, owner, repo)}/compare/",
            self.mapper.to_comparison,
            self._query_params(base=base, head=head, pullid=pullid),
        )

    def list_commits(
        self,
        owner: str,
        repo: str,
        service: Service | None = None,
        page: int | None = None,
        page_size: int | None = None,
        branch: str | None = None,
    ) -> ClientResult[Page[Commit]]:
        params = self._query_params(
            page_size=page_size or self.page_size, page=page, branch=branch
        )
        return self._fetch(
            f"{self._repo_path(service, owner, repo)}/commits/",
            lambda data: self.mapper.to_page(data, self.mapper.to_commit),
            params,
        )

    def list_pull_requests(
        self,
        owner: str,
        repo: str,
        service: Service | None = None,
        page: int | None = None,
        page_size: int | None = None,
        state: PullState | None = None,
    ) -> ClientResult[Page[PullRequest]]:
        params = self._query_params(
            page_size=page_size or self.page_size,
            page=page,
            state=str(state) if state is not None else None,
        )
        return self._fetch(
            f"{self._repo_path(service, owner, repo)}/pulls/",
            lambda data: self.mapper.to_page(data, self.mapper.to_pull_request),
            params,
        )

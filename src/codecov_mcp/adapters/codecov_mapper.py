from collections.abc import Callable
from typing import Any, TypeVar

from codecov_mcp.models import (
    Commit,
    CommitAuthor,
    CommitReference,
    ComparisonFile,
    ComparisonTotals,
    CoverageComparison,
    CoverageTotals,
    CoverageTreeNode,
    DiffTotals,
    FileChangeSummary,
    FileCoverageReport,
    FileStats,
    FileTotals,
    LineCoverage,
    Owner,
    Page,
    PatchTotals,
    PullRequest,
    Repository,
    RepositoryDetail,
    TotalsSnapshot,
)


T = TypeVar("T")


def _number(value: Any) -> Any:
    # bool is an int subclass but never a metric
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return value


def _text(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _flag(value: Any) -> bool | None:
    return value if isinstance(value, bool) else None


def _mapping(value: Any) -> dict[str, Any] | None:
    return value if isinstance(value, dict) else None


def _require_mapping(value: Any, entity: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"Invalid Codecov {entity} data: expected an object")
    return value


class CodecovMapper:
    @staticmethod
    def to_diff_totals(data: Any) -> DiffTotals | None:
        raw = _mapping(data)
        if raw is None:
            return None
        return DiffTotals(
            files=_number(raw.get("files")),
            lines=_number(raw.get("lines")),
            hits=_number(raw.get("hits")),
            misses=_number(raw.get("misses")),
            partials=_number(raw.get("partials")),
            coverage=_number(raw.get("coverage")),
            branches=_number(raw.get("branches")),
            methods=_number(raw.get("methods")),
            messages=_number(raw.get("messages")),
        )

    @staticmethod
    def to_coverage_totals(data: Any) -> CoverageTotals | None:
        raw = _mapping(data)
        if raw is None:
            return None
        return CoverageTotals(
            files=_number(raw.get("files")),
            lines=_number(raw.get("lines")),
            hits=_number(raw.get("hits")),
            misses=_number(raw.get("misses")),
            partials=_number(raw.get("partials")),
            coverage=_number(raw.get("coverage")),
            branches=_number(raw.get("branches")),
            methods=_number(raw.get("methods")),
            messages=_number(raw.get("messages")),
            sessions=_number(raw.get("sessions")),
            complexity=_number(raw.get("complexity")),
            complexity_total=_number(raw.get("complexity_total")),
            complexity_ratio=_number(raw.get("complexity_ratio")),
            diff=CodecovMapper.to_diff_totals(raw.get("diff")),
        )

    @staticmethod
    def to_patch_totals(data: Any) -> PatchTotals | None:
        raw = _mapping(data)
        if raw is None:
            return None
        return PatchTotals(
            hits=_number(raw.get("hits")),
            misses=_number(raw.get("misses")),
            partials=_number(raw.get("partials")),
            coverage=_number(raw.get("coverage")),
        )

    @staticmethod
    def to_totals_snapshot(data: Any) -> TotalsSnapshot:
        raw = _require_mapping(data, "totals")
        return TotalsSnapshot(
            totals=CodecovMapper.to_coverage_totals(raw.get("totals")),
            commit_sha=_text(raw.get("commit_sha")),
        )

    @staticmethod
    def to_line_coverage(data: Any) -> LineCoverage:
        raw = _require_mapping(data, "line coverage")
        line_number = raw.get("line_number")
        if isinstance(line_number, bool) or not isinstance(line_number, int):
            raise ValueError("Invalid Codecov line coverage data: missing line_number")
        return LineCoverage(
            line_number=line_number,
            coverage=_number(raw.get("coverage")),
            is_partial_hit=bool(raw.get("is_partial_hit")),
        )

    @staticmethod
    def to_file_coverage_report(data: Any) -> FileCoverageReport:
        raw = _require_mapping(data, "file report")
        return FileCoverageReport(
            name=_text(raw.get("name")) or "",
            commit_sha=_text(raw.get("commit_sha")),
            totals=CodecovMapper.to_coverage_totals(raw.get("totals")),
            line_coverage=[
                CodecovMapper.to_line_coverage(line)
                for line in raw.get("line_coverage") or []
            ],
            commit_file_url=_text(raw.get("commit_file_url")),
        )

    @staticmethod
    def to_tree_node(data: Any) -> CoverageTreeNode:
        raw = _require_mapping(data, "tree node")
        return CoverageTreeNode(
            name=_text(raw.get("name")) or "",
            full_path=_text(raw.get("full_path")),
            coverage=_number(raw.get("coverage")),
            lines=_number(raw.get("lines")),
            hits=_number(raw.get("hits")),
            partials=_number(raw.get("partials")),
            misses=_number(raw.get("misses")),
            children=[
                CodecovMapper.to_tree_node(child)
                for child in raw.get("children") or []
            ],
        )

    @staticmethod
    def to_tree(data: Any) -> list[CoverageTreeNode]:
        if not isinstance(data, list):
            raise ValueError("Invalid Codecov tree data: expected a list of nodes")
        return [CodecovMapper.to_tree_node(node) for node in data]

    @staticmethod
    def to_owner(data: Any) -> Owner | None:
        raw = _mapping(data)
        if raw is None:
            return None
        return Owner(
            service=_text(raw.get("service")),
            username=_text(raw.get("username")),
            name=_text(raw.get("name")),
            avatar_url=_text(raw.get("avatar_url")),
        )

    @staticmethod
    def to_repository(data: Any) -> Repository:
        raw = _require_mapping(data, "repository")
        return Repository(
            name=_text(raw.get("name")) or "",
            private=_flag(raw.get("private")),
            updatestamp=_text(raw.get("updatestamp")),
            author=CodecovMapper.to_owner(raw.get("author")),
            language=_text(raw.get("language")),
            branch=_text(raw.get("branch")),
            active=_flag(raw.get("active")),
            activated=_flag(raw.get("activated")),
            totals=CodecovMapper.to_coverage_totals(raw.get("totals")),
        )

    @staticmethod
    def to_repository_detail(data: Any) -> RepositoryDetail:
        raw = _require_mapping(data, "repository")
        return RepositoryDetail(
            name=_text(raw.get("name")) or "",
            private=_flag(raw.get("private")),
            updatestamp=_text(raw.get("updatestamp")),
            author=CodecovMapper.to_owner(raw.get("author")),
            language=_text(raw.get("language")),
            branch=_text(raw.get("branch")),
            active=_flag(raw.get("active")),
            activated=_flag(raw.get("activated")),
            totals=CodecovMapper.to_coverage_totals(raw.get("totals")),
            upload_token=_text(raw.get("upload_token")),
            yaml=_text(raw.get("yaml")),
        )

    @staticmethod
    def to_commit_author(data: Any) -> CommitAuthor | None:
        raw = _mapping(data)
        if raw is None:
            return None
        return CommitAuthor(
            id=_number(raw.get("id")),
            username=_text(raw.get("username")),
            name=_text(raw.get("name")),
            email=_text(raw.get("email")),
        )

    @staticmethod
    def to_commit(data: Any) -> Commit:
        raw = _require_mapping(data, "commit")
        return Commit(
            commitid=_text(raw.get("commitid")) or "",
            message=_text(raw.get("message")),
            timestamp=_text(raw.get("timestamp")),
            ci_passed=_flag(raw.get("ci_passed")),
            author=CodecovMapper.to_commit_author(raw.get("author")),
            branch=_text(raw.get("branch")),
            totals=CodecovMapper.to_coverage_totals(raw.get("totals")),
            state=_text(raw.get("state")),
            parent=_text(raw.get("parent")),
        )

    @staticmethod
    def to_commit_reference(data: Any) -> CommitReference | None:
        raw = _mapping(data)
        if raw is None:
            return None
        return CommitReference(
            commitid=_text(raw.get("commitid")),
            branch=_text(raw.get("branch")),
        )

    @staticmethod
    def to_pull_request(data: Any) -> PullRequest:
        raw = _require_mapping(data, "pull request")
        pullid = raw.get("pullid")
        if isinstance(pullid, bool) or not isinstance(pullid, int):
            raise ValueError("Invalid Codecov pull request data: missing pullid")
        return PullRequest(
            pullid=pullid,
            title=_text(raw.get("title")),
            state=_text(raw.get("state")),
            updatestamp=_text(raw.get("updatestamp")),
            author=CodecovMapper.to_commit_author(raw.get("author")),
            base=CodecovMapper.to_commit_reference(raw.get("base")),
            head=CodecovMapper.to_commit_reference(raw.get("head")),
            compared_to=CodecovMapper.to_commit_reference(raw.get("compared_to")),
        )

    @staticmethod
    def to_comparison_file(data: Any) -> ComparisonFile:
        raw = _require_mapping(data, "comparison file")
        totals = _mapping(raw.get("totals")) or {}
        stats = _mapping(raw.get("stats"))
        change_summary = _mapping(raw.get("change_summary"))
        return ComparisonFile(
            name=_text(raw.get("name")) or "",
            totals=FileTotals(
                base=CodecovMapper.to_coverage_totals(totals.get("base")),
                head=CodecovMapper.to_coverage_totals(totals.get("head")),
                patch=CodecovMapper.to_patch_totals(totals.get("patch")),
            ),
            has_diff=bool(raw.get("has_diff")),
            stats=(
                FileStats(
                    added=_number(stats.get("added")),
                    removed=_number(stats.get("removed")),
                )
                if stats is not None
                else None
            ),
            change_summary=(
                FileChangeSummary(
                    hits=_number(change_summary.get("hits")),
                    misses=_number(change_summary.get("misses")),
                    partials=_number(change_summary.get("partials")),
                )
                if change_summary is not None
                else None
            ),
        )

    @staticmethod
    def to_comparison(data: Any) -> CoverageComparison:
        raw = _require_mapping(data, "comparison")
        totals = _mapping(raw.get("totals")) or {}
        return CoverageComparison(
            base_commit=_text(raw.get("base_commit")),
            head_commit=_text(raw.get("head_commit")),
            totals=ComparisonTotals(
                base=CodecovMapper.to_coverage_totals(totals.get("base")),
                head=CodecovMapper.to_coverage_totals(totals.get("head")),
                patch=CodecovMapper.to_patch_totals(totals.get("patch")),
            ),
            files=[
                CodecovMapper.to_comparison_file(item)
                for item in raw.get("files") or []
            ],
            untracked=[
                path for path in raw.get("untracked") or [] if isinstance(path, str)
            ],
            has_unmerged_base_commits=bool(raw.get("has_unmerged_base_commits")),
        )

    @staticmethod
    def to_page(data: Any, item_mapper: Callable[[Any], T]) -> Page[T]:
        raw = _require_mapping(data, "paginated response")
        return Page(
            count=_number(raw.get("count")),
            next=_text(raw.get("next")),
            previous=_text(raw.get("previous")),
            total_pages=_number(raw.get("total_pages")),
            results=[item_mapper(item) for item in raw.get("results") or []],
        )

from dataclasses import dataclass, field
from typing import Generic, TypeVar


T = TypeVar("T")


@dataclass(frozen=True)
class DiffTotals:
    files: int | None = None
    lines: int | None = None
    hits: int | None = None
    misses: int | None = None
    partials: int | None = None
    coverage: float | None = None
    branches: int | None = None
    methods: int | None = None
    messages: int | None = None


@dataclass(frozen=True)
class CoverageTotals:
    """Aggregate metrics for a code unit.

    hits + misses + partials is expected to match lines, but that is the
    backend's accounting and is reported as received.
    """

    files: int | None = None
    lines: int | None = None
    hits: int | None = None
    misses: int | None = None
    partials: int | None = None
    coverage: float | None = None
    branches: int | None = None
    methods: int | None = None
    messages: int | None = None
    sessions: int | None = None
    complexity: float | None = None
    complexity_total: float | None = None
    complexity_ratio: float | None = None
    diff: DiffTotals | None = None


@dataclass(frozen=True)
class PatchTotals:
    hits: int | None = None
    misses: int | None = None
    partials: int | None = None
    coverage: float | None = None


@dataclass(frozen=True)
class TotalsSnapshot:
    totals: CoverageTotals | None
    commit_sha: str | None


@dataclass(frozen=True)
class LineCoverage:
    """coverage is None for irrelevant lines, 0 for a miss, else a hit count."""

    line_number: int
    coverage: int | None
    is_partial_hit: bool = False


@dataclass(frozen=True)
class FileCoverageReport:
    name: str
    commit_sha: str | None
    totals: CoverageTotals | None
    line_coverage: list[LineCoverage] = field(default_factory=list)
    commit_file_url: str | None = None


@dataclass(frozen=True)
class CoverageTreeNode:
    name: str
    full_path: str | None = None
    coverage: float | None = None
    lines: int | None = None
    hits: int | None = None
    partials: int | None = None
    misses: int | None = None
    children: list["CoverageTreeNode"] = field(default_factory=list)

    @property
    def is_directory(self) -> bool:
        return bool(self.children)


@dataclass(frozen=True)
class Owner:
    service: str | None
    username: str | None
    name: str | None = None
    avatar_url: str | None = None


@dataclass(frozen=True)
class Repository:
    name: str
    private: bool | None = None
    updatestamp: str | None = None
    author: Owner | None = None
    language: str | None = None
    branch: str | None = None
    active: bool | None = None
    activated: bool | None = None
    totals: CoverageTotals | None = None


@dataclass(frozen=True)
class RepositoryDetail(Repository):
    upload_token: str | None = None
    yaml: str | None = None


@dataclass(frozen=True)
class CommitAuthor:
    id: int | None = None
    username: str | None = None
    name: str | None = None
    email: str | None = None

    @property
    def display_name(self) -> str:
        return self.username or self.name or "Unknown"


@dataclass(frozen=True)
class Commit:
    commitid: str
    message: str | None = None
    timestamp: str | None = None
    ci_passed: bool | None = None
    author: CommitAuthor | None = None
    branch: str | None = None
    totals: CoverageTotals | None = None
    state: str | None = None
    parent: str | None = None


@dataclass(frozen=True)
class CommitReference:
    commitid: str | None
    branch: str | None = None


@dataclass(frozen=True)
class PullRequest:
    pullid: int
    title: str | None = None
    state: str | None = None
    updatestamp: str | None = None
    author: CommitAuthor | None = None
    base: CommitReference | None = None
    head: CommitReference | None = None
    compared_to: CommitReference | None = None


@dataclass(frozen=True)
class FileStats:
    added: int | None = None
    removed: int | None = None


@dataclass(frozen=True)
class FileChangeSummary:
    hits: int | None = None
    misses: int | None = None
    partials: int | None = None


@dataclass(frozen=True)
class FileTotals:
    base: CoverageTotals | None = None
    head: CoverageTotals | None = None
    patch: PatchTotals | None = None


@dataclass(frozen=True)
class ComparisonFile:
    name: str
    totals: FileTotals = field(default_factory=FileTotals)
    has_diff: bool = False
    stats: FileStats | None = None
    change_summary: FileChangeSummary | None = None


@dataclass(frozen=True)
class ComparisonTotals:
    base: CoverageTotals | None = None
    head: CoverageTotals | None = None
    patch: PatchTotals | None = None


@dataclass(frozen=True)
class CoverageComparison:
    base_commit: str | None
    head_commit: str | None
    totals: ComparisonTotals = field(default_factory=ComparisonTotals)
    files: list[ComparisonFile] = field(default_factory=list)
    untracked: list[str] = field(default_factory=list)
    has_unmerged_base_commits: bool = False


@dataclass(frozen=True)
class Page(Generic[T]):
    count: int | None
    next: str | None
    previous: str | None
    total_pages: int | None
    results: list[T] = field(default_factory=list)

    @property
    def has_next(self) -> bool:
        return bool(self.next)

    @property
    def has_previous(self) -> bool:
        return bool(self.previous)

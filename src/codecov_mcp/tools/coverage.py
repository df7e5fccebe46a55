from codecov_mcp.client import CoverageClient
from codecov_mcp.clients.base import ClientResult
from codecov_mcp.models import CoverageTreeNode, FileCoverageReport, TotalsSnapshot
from codecov_mcp.summarizers.coverage import (
    summarize_file_coverage,
    summarize_totals,
    summarize_tree,
)
from codecov_mcp.tools.params import (
    CoverageTotalsParams,
    CoverageTreeParams,
    FileCoverageParams,
)
from codecov_mcp.tools.registry import registry


@registry.register(
    "codecov_get_coverage_totals",
    "Get overall coverage metrics for a repository. Returns coverage percentage, "
    "lines covered/missed, and other totals. Use this to check the current "
    "coverage status of a repo.",
    CoverageTotalsParams,
    summarize=summarize_totals,
)
def get_coverage_totals(
    client: CoverageClient, params: CoverageTotalsParams
) -> ClientResult[TotalsSnapshot]:
    return client.get_coverage_totals(
        params.owner,
        params.repo,
        service=params.service,
        sha=params.sha,
        branch=params.branch,
    )


@registry.register(
    "codecov_get_file_coverage",
    "Get detailed line-by-line coverage for a specific file. Shows which lines "
    "are covered, missed, or partially covered. Essential for identifying "
    "untested code in a specific file.",
    FileCoverageParams,
    summarize=summarize_file_coverage,
)
def get_file_coverage(
    client: CoverageClient, params: FileCoverageParams
) -> ClientResult[FileCoverageReport]:
    return client.get_file_coverage(
        params.owner,
        params.repo,
        params.path,
        service=params.service,
        sha=params.sha,
        branch=params.branch,
    )


@registry.register(
    "codecov_get_coverage_tree",
    "Get hierarchical coverage report showing coverage by directory and file. "
    "Useful for understanding which parts of the codebase have low coverage.",
    CoverageTreeParams,
    summarize=summarize_tree,
)
def get_coverage_tree(
    client: CoverageClient, params: CoverageTreeParams
) -> ClientResult[list[CoverageTreeNode]]:
    return client.get_coverage_tree(
        params.owner,
        params.repo,
        service=params.service,
        sha=params.sha,
        branch=params.branch,
        path=params.path,
        depth=params.depth,
    )

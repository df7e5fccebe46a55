from codecov_mcp.client import CoverageClient
from codecov_mcp.clients.base import ClientResult
from codecov_mcp.models import CoverageComparison
from codecov_mcp.summarizers.comparison import summarize_comparison
from codecov_mcp.tools.params import CompareCoverageParams
from codecov_mcp.tools.registry import registry


@registry.register(
    "codecov_compare_coverage",
    "Compare coverage between two commits, branches, or for a pull request. "
    "Shows coverage diff, changed files, and patch coverage. Essential for "
    "reviewing coverage impact of changes.",
    CompareCoverageParams,
    summarize=summarize_comparison,
)
def compare_coverage(
    client: CoverageClient, params: CompareCoverageParams
) -> ClientResult[CoverageComparison]:
    return client.compare_coverage(
        params.owner,
        params.repo,
        service=params.service,
        base=params.base,
        head=params.head,
        pullid=params.pullid,
    )

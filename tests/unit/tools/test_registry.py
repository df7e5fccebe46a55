from unittest.mock import MagicMock

import pytest
import responses
from responses import matchers

from codecov_mcp.app import CoverageApplication
from codecov_mcp.clients.base import ClientResult
from codecov_mcp.clients.codecov_client import CodecovClient
from codecov_mcp.config import CodecovConfig
from codecov_mcp.exceptions import APIError
from codecov_mcp.models import TotalsSnapshot
from codecov_mcp.server import _load_tools
from codecov_mcp.tools.params import RepoParams
from codecov_mcp.tools.registry import OperationResult, ToolRegistry, registry


@pytest.fixture(scope="module", autouse=True)
def load_tools():
    _load_tools()


@pytest.fixture
def mock_client():
    return MagicMock()


def test_should_register_tool_once():
    local = ToolRegistry()

    @local.register("echo", "Echo", RepoParams, summarize=str)
    def echo(client, params):
        return ClientResult.success(params.repo)

    assert local.get("echo").fetch is echo
    with pytest.raises(ValueError, match="already registered"):
        local.register("echo", "Echo", RepoParams, summarize=str)(echo)


def test_should_summarize_successful_fetch(mock_client):
    mock_client.get_coverage_totals.return_value = ClientResult.success(
        TotalsSnapshot(totals=None, commit_sha="abc123")
    )

    outcome = registry.execute(
        "codecov_get_coverage_totals",
        lambda: mock_client,
        {"owner": "acme", "repo": "widgets", "branch": "main"},
    )

    assert not outcome.is_error
    assert '"commit_sha": "abc123"' in outcome.text
    mock_client.get_coverage_totals.assert_called_once_with(
        "acme", "widgets", service=None, sha=None, branch="main"
    )


def test_should_report_unknown_tool(mock_client):
    outcome = registry.execute("codecov_delete_everything", lambda: mock_client, {})

    assert outcome == OperationResult(
        text="Error: Unknown tool: codecov_delete_everything", is_error=True
    )


@pytest.mark.parametrize(
    ("arguments", "field"),
    [
        ({"repo": "widgets"}, "owner"),
        ({"owner": "acme", "repo": "widgets", "page_size": 500}, "page_size"),
        ({"owner": "acme", "repo": "widgets", "state": "draft"}, "state"),
        ({"owner": "acme", "repo": "widgets", "color": "blue"}, "color"),
    ],
)
def test_should_reject_invalid_input_without_calling_client(
    mock_client, arguments, field
):
    outcome = registry.execute("codecov_list_pulls", lambda: mock_client, arguments)

    assert outcome.is_error
    assert outcome.text.startswith(f"Error: Invalid input for '{field}'")
    mock_client.list_pull_requests.assert_not_called()


def test_should_report_client_failure_as_single_line(mock_client):
    mock_client.get_repository.return_value = ClientResult.failure(
        APIError(message="Backend\nexploded")
    )

    outcome = registry.execute(
        "codecov_get_repository", lambda: mock_client, {"owner": "a", "repo": "b"}
    )

    assert outcome == OperationResult(text="Error: Backend exploded", is_error=True)


def test_should_catch_unexpected_exceptions(mock_client):
    mock_client.get_coverage_tree.side_effect = RuntimeError("boom")

    outcome = registry.execute(
        "codecov_get_coverage_tree", lambda: mock_client, {"owner": "a", "repo": "b"}
    )

    assert outcome == OperationResult(text="Error: boom", is_error=True)


def test_should_report_client_construction_failure():
    def provider():
        raise APIError(message="no client")

    outcome = registry.execute(
        "codecov_get_repository", provider, {"owner": "a", "repo": "b"}
    )

    assert outcome.text == "Error: no client"


@responses.activate
def test_should_report_missing_repository_end_to_end():
    responses.get(
        "https://api.codecov.io/api/v2/github/acme/repos/missing/",
        json={"detail": "Not found."},
        status=404,
    )
    client = CodecovClient(token="test-token")

    outcome = registry.execute(
        "codecov_get_repository", lambda: client, {"owner": "acme", "repo": "missing"}
    )

    assert outcome.is_error
    assert outcome.text == "Error: Resource not found. Check the owner, repo, or path."


@responses.activate
def test_should_report_rate_limit_end_to_end():
    responses.get(
        "https://api.codecov.io/api/v2/github/acme/repos/widgets/commits/",
        status=429,
    )
    client = CodecovClient(token="test-token")

    outcome = registry.execute(
        "codecov_list_commits", lambda: client, {"owner": "acme", "repo": "widgets"}
    )

    assert outcome.text == "Error: Rate limit exceeded. Try again later."


@responses.activate
def test_should_compare_pull_request_end_to_end():
    responses.get(
        "https://api.codecov.io/api/v2/github/acme/repos/widgets/compare/",
        json={
            "base_commit": "aaaaaaaaaa",
            "head_commit": "bbbbbbbbbb",
            "totals": {"base": {"coverage": 50.0}, "head": {"coverage": 55.0}},
            "files": [],
            "untracked": ["new.py"],
        },
        match=[matchers.query_param_matcher({"pullid": "9"})],
    )
    client = CodecovClient(token="test-token")

    outcome = registry.execute(
        "codecov_compare_coverage",
        lambda: client,
        {"owner": "acme", "repo": "widgets", "pullid": 9},
    )

    assert not outcome.is_error
    assert '"change": "+5.00%"' in outcome.text
    assert outcome.text.endswith("new.py")


_EMPTY_PAGE = {
    "count": 0,
    "next": None,
    "previous": None,
    "total_pages": 1,
    "results": [],
}


@pytest.mark.parametrize(
    ("arguments", "expected_page_size"),
    [
        ({"owner": "acme", "repo": "widgets"}, "50"),
        ({"owner": "acme", "repo": "widgets", "page_size": 10}, "10"),
    ],
)
@responses.activate
def test_should_use_configured_page_size_unless_caller_sets_one(
    arguments, expected_page_size
):
    responses.get(
        "https://api.codecov.io/api/v2/github/acme/repos/widgets/commits/",
        json=_EMPTY_PAGE,
        match=[matchers.query_param_matcher({"page_size": expected_page_size})],
    )
    app = CoverageApplication(CodecovConfig(token="test-token", page_size=50))

    outcome = registry.execute("codecov_list_commits", lambda: app.client, arguments)

    assert not outcome.is_error
    assert len(responses.calls) == 1


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        (404, "Error: Resource not found. Check the owner, repo, or path."),
        (429, "Error: Rate limit exceeded. Try again later."),
    ],
)
@responses.activate
def test_should_report_file_coverage_failures_end_to_end(status, expected):
    responses.get(
        "https://api.codecov.io/api/v2/github/acme/repos/widgets/"
        "file_report/src%2Futils%2Fhelper.ts/",
        json={"detail": "nope"},
        status=status,
    )
    client = CodecovClient(token="test-token")

    outcome = registry.execute(
        "codecov_get_file_coverage",
        lambda: client,
        {"owner": "acme", "repo": "widgets", "path": "src/utils/helper.ts"},
    )

    assert outcome == OperationResult(text=expected, is_error=True)
    assert "src%2Futils%2Fhelper.ts" in responses.calls[0].request.url

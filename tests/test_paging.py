import pytest
from harbor_mcp.core.catalog import TOOL_CATALOG
from harbor_mcp.core.dispatcher import ToolDispatcher
from harbor_mcp.core.tools._paging import (
    MAX_PAGE_SIZE,
    check_page,
    clamp_page_size,
    page_envelope,
)
from mcp.shared.exceptions import McpError
from mcp.types import INVALID_PARAMS


def test_clamp_page_size_bounds():
    assert clamp_page_size(0) == 1
    assert clamp_page_size(500) == MAX_PAGE_SIZE
    assert clamp_page_size("20") == 20


@pytest.mark.parametrize("value", ["abc", None, 1.5j, True])
def test_non_integer_page_size_is_invalid_params(value):
    with pytest.raises(McpError) as exc:
        clamp_page_size(value)
    assert exc.value.error.code == INVALID_PARAMS
    assert exc.value.error.message == "page_size must be an integer"


@pytest.mark.parametrize("value", ["abc", None, [1]])
def test_non_integer_page_is_invalid_params(value):
    with pytest.raises(McpError) as exc:
        check_page(value)
    assert exc.value.error.code == INVALID_PARAMS
    assert exc.value.error.message == "page must be an integer"


def test_page_below_one_is_invalid_params():
    with pytest.raises(McpError) as exc:
        check_page(0)
    assert exc.value.error.code == INVALID_PARAMS


def test_page_envelope_next_page():
    assert page_envelope([{}], page=1, page_size=1, total=3)["next_page"] == 2
    assert page_envelope([{}], page=3, page_size=1, total=3)["next_page"] is None


@pytest.mark.asyncio
async def test_bad_page_through_dispatcher_never_reaches_harbor():
    # No HTTP client is needed: validation fails before any request
    dispatcher = ToolDispatcher("unused-client", catalog=TOOL_CATALOG)

    with pytest.raises(McpError) as exc:
        await dispatcher.call_tool("list_projects", {"page": "abc"})

    assert exc.value.error.code == INVALID_PARAMS
    assert "page must be an integer" in exc.value.error.message

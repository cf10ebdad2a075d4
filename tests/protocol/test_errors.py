"""Tests for the protocol and domain error hierarchies."""

import pytest

from mcpedge.protocol.errors import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    McpError,
    MethodNotFoundError,
    ToolError,
    ToolExecutionError,
    ToolNotFoundError,
)


class TestErrorHierarchy:
    @pytest.mark.parametrize(
        "cls",
        [InvalidRequestError, MethodNotFoundError, InvalidParamsError, InternalError],
    )
    def test_protocol_errors_are_mcp_errors(self, cls: type) -> None:
        assert issubclass(cls, McpError)

    def test_domain_errors_are_not_protocol_errors(self) -> None:
        assert not issubclass(ToolError, McpError)
        assert issubclass(ToolNotFoundError, ToolError)
        assert issubclass(ToolExecutionError, ToolError)


class TestProtocolErrors:
    def test_invalid_request(self) -> None:
        err = InvalidRequestError()
        assert err.code == INVALID_REQUEST == -32600
        assert err.message == "Invalid Request"
        assert err.data is None

    def test_method_not_found_keeps_method(self) -> None:
        err = MethodNotFoundError("tools/LIST")
        assert err.code == METHOD_NOT_FOUND == -32601
        assert err.method == "tools/LIST"
        assert str(err) == "Method not found"

    def test_invalid_params_carries_data(self) -> None:
        err = InvalidParamsError(data="Prompt 'x' not found")
        assert err.code == INVALID_PARAMS == -32602
        assert err.message == "Invalid params"
        assert err.data == "Prompt 'x' not found"

    def test_internal_error_detail(self) -> None:
        err = InternalError("boom")
        assert err.code == INTERNAL_ERROR == -32603
        assert err.data == "boom"

    def test_internal_error_without_detail(self) -> None:
        assert InternalError().data is None


class TestToolErrors:
    def test_not_found_message(self) -> None:
        err = ToolNotFoundError("nope")
        assert err.name == "nope"
        assert err.detail == "Tool 'nope' not found"

    def test_execution_detail(self) -> None:
        err = ToolExecutionError("text parameter is required")
        assert str(err) == "text parameter is required"


class TestReservedCodes:
    def test_only_emitted_codes_are_defined(self) -> None:
        from mcpedge.protocol import errors

        codes = {
            name: value
            for name, value in vars(errors).items()
            if name.isupper() and isinstance(value, int)
        }
        assert codes == {
            "INVALID_REQUEST": -32600,
            "METHOD_NOT_FOUND": -32601,
            "INVALID_PARAMS": -32602,
            "INTERNAL_ERROR": -32603,
        }

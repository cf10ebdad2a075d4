"""Tests for CapabilityRegistry lookups and soft failures."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import pytest

from mcpedge.protocol.errors import ToolExecutionError
from mcpedge.registry.models import (
    Annotations,
    CallToolResult,
    GetPromptResult,
    Prompt,
    PromptArgument,
    PromptMessage,
    ReadResourceResult,
    Resource,
    ResourceContents,
    ResourceTemplate,
    TextContent,
    Tool,
)
from mcpedge.registry.registry import CapabilityRegistry, PromptNotFoundError, isoformat

NOW = datetime(2024, 6, 1, 12, 0, 0, 5000, tzinfo=timezone.utc)


def _shout(arguments: dict[str, Any], now: datetime) -> CallToolResult:
    word = arguments.get("word")
    if not word:
        raise ToolExecutionError("word is required")
    return CallToolResult(content=[TextContent(text=str(word).upper())])


def _read(uri: str, now: datetime) -> ReadResourceResult:
    return ReadResourceResult(contents=[ResourceContents(uri=uri, text="body")])


def _render(arguments: dict[str, str], now: datetime) -> GetPromptResult:
    who = arguments.get("who", "nobody")
    return GetPromptResult(messages=[PromptMessage(content=TextContent(text=f"hi {who}"))])


@pytest.fixture
def reg() -> CapabilityRegistry:
    registry = CapabilityRegistry(clock=lambda: NOW)
    registry.add_tool(Tool(name="shout"), _shout)
    registry.add_tool(Tool(name="stamped", meta={"category": "x"}), _shout, timestamped=True)
    registry.add_resource(Resource(uri="t://a", name="a"), _read)
    registry.add_resource(
        Resource(uri="t://b", name="b", annotations=Annotations(priority=0.5)),
        _read,
        timestamped=True,
    )
    registry.add_template(
        ResourceTemplate(name="tpl", uri_template="t://{kind}", completions={"kind": ("Alpha", "alpine", "beta")})
    )
    registry.add_prompt(
        Prompt(name="hello", arguments=[PromptArgument(name="who", completions=("Ann", "andy", "Bob"))]),
        _render,
    )
    return registry


class TestIsoformat:
    def test_millisecond_utc(self) -> None:
        assert isoformat(NOW) == "2024-06-01T12:00:00.005Z"


class TestRegistration:
    def test_duplicate_tool_rejected(self, reg: CapabilityRegistry) -> None:
        with pytest.raises(ValueError, match="Duplicate tool: shout"):
            reg.add_tool(Tool(name="shout"), _shout)

    def test_duplicate_resource_rejected(self, reg: CapabilityRegistry) -> None:
        with pytest.raises(ValueError, match="Duplicate resource"):
            reg.add_resource(Resource(uri="t://a", name="again"), _read)


class TestTools:
    def test_list_stamps_only_timestamped(self, reg: CapabilityRegistry) -> None:
        tools = {t.name: t for t in reg.list_tools()}
        assert tools["shout"].meta is None
        assert tools["stamped"].meta == {"category": "x", "lastModified": "2024-06-01T12:00:00.005Z"}

    def test_list_does_not_mutate_definition(self, reg: CapabilityRegistry) -> None:
        reg.list_tools()
        again = {t.name: t for t in reg.list_tools()}
        assert again["stamped"].meta == {"category": "x", "lastModified": isoformat(NOW)}

    def test_call(self, reg: CapabilityRegistry) -> None:
        result = reg.call_tool("shout", {"word": "hey"})
        assert result.content[0].text == "HEY"
        assert result.is_error is None

    def test_unknown_tool_is_soft_failure(self, reg: CapabilityRegistry) -> None:
        result = reg.call_tool("missing", {})
        assert result.is_error is True
        assert result.content[0].text == "Error: Tool 'missing' not found"

    def test_execution_error_is_soft_failure(self, reg: CapabilityRegistry) -> None:
        result = reg.call_tool("shout", {})
        assert result.is_error is True
        assert result.content[0].text == "Error: word is required"
        assert result.content[0].annotations == Annotations(audience=["user"], priority=1)

    def test_other_exceptions_propagate(self) -> None:
        registry = CapabilityRegistry()

        def broken(arguments: dict[str, Any], now: datetime) -> CallToolResult:
            raise RuntimeError("bug")

        registry.add_tool(Tool(name="broken"), broken)
        with pytest.raises(RuntimeError, match="bug"):
            registry.call_tool("broken", {})


class TestResources:
    def test_list_stamps_annotations(self, reg: CapabilityRegistry) -> None:
        resources = {r.uri: r for r in reg.list_resources()}
        assert resources["t://a"].annotations is None
        stamped = resources["t://b"].annotations
        assert stamped is not None
        assert stamped.priority == 0.5
        assert stamped.last_modified == isoformat(NOW)

    def test_read(self, reg: CapabilityRegistry) -> None:
        result = reg.read_resource("t://a")
        assert result.contents[0].uri == "t://a"

    def test_read_unknown_is_empty(self, reg: CapabilityRegistry) -> None:
        assert reg.read_resource("t://zzz").contents == []

    def test_templates(self, reg: CapabilityRegistry) -> None:
        assert [t.uri_template for t in reg.list_templates()] == ["t://{kind}"]


class TestPrompts:
    def test_get(self, reg: CapabilityRegistry) -> None:
        result = reg.get_prompt("hello", {"who": "Zed"})
        assert result.messages[0].content.text == "hi Zed"

    def test_get_unknown_raises(self, reg: CapabilityRegistry) -> None:
        with pytest.raises(PromptNotFoundError, match="Prompt 'nope' not found"):
            reg.get_prompt("nope", {})


class TestComplete:
    def test_prompt_argument_case_insensitive(self, reg: CapabilityRegistry) -> None:
        completion = reg.complete("ref/prompt", "hello", "who", "AN")
        assert completion.values == ["Ann", "andy"]
        assert completion.total == 2
        assert completion.has_more is False

    def test_template_variable(self, reg: CapabilityRegistry) -> None:
        completion = reg.complete("ref/resource", "t://{kind}", "kind", "al")
        assert completion.values == ["Alpha", "alpine"]

    def test_empty_value_returns_all(self, reg: CapabilityRegistry) -> None:
        assert reg.complete("ref/prompt", "hello", "who", "").total == 3

    @pytest.mark.parametrize(
        ("ref_type", "key", "arg"),
        [
            ("ref/prompt", "unknown", "who"),
            ("ref/prompt", "hello", "unknown"),
            ("ref/resource", "t://other", "kind"),
            ("ref/resource", "t://{kind}", "unknown"),
        ],
    )
    def test_unknown_is_empty(self, reg: CapabilityRegistry, ref_type: Any, key: str, arg: str) -> None:
        completion = reg.complete(ref_type, key, arg, "a")
        assert completion.values == []
        assert completion.total == 0

"""CapabilityRegistry — the read-only catalog behind the capability methods.

Maintains name/uri-keyed tables and performs the second-level lookup for
``tools/call``, ``resources/read``, ``prompts/get`` and
``completion/complete``. Lookups that miss are reported as domain results
(``isError`` tool results, empty resource contents, empty completions) and
never as protocol errors; the only exception is :class:`PromptNotFoundError`,
which the dispatcher maps to ``Invalid params``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Literal, Protocol

from mcpedge.protocol.errors import ToolExecutionError, ToolNotFoundError
from mcpedge.registry.models import (
    Annotations,
    CallToolResult,
    Completion,
    GetPromptResult,
    Prompt,
    ReadResourceResult,
    Resource,
    ResourceTemplate,
    Tool,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class ToolHandler(Protocol):
    """Runs a tool. Raises :class:`ToolExecutionError` for in-band failures."""

    def __call__(self, arguments: dict[str, Any], now: datetime) -> CallToolResult: ...


class ResourceReader(Protocol):
    """Produces the contents of one resource."""

    def __call__(self, uri: str, now: datetime) -> ReadResourceResult: ...


class PromptRenderer(Protocol):
    """Renders a prompt from its (string) arguments."""

    def __call__(self, arguments: dict[str, str], now: datetime) -> GetPromptResult: ...


class PromptNotFoundError(LookupError):
    """Requested prompt does not exist in the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Prompt '{name}' not found")


def isoformat(moment: datetime) -> str:
    """Millisecond-precision UTC timestamp, e.g. ``2025-01-01T00:00:00.000Z``."""
    utc = moment.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class _ToolEntry:
    definition: Tool
    handler: ToolHandler
    timestamped: bool


@dataclass(frozen=True)
class _ResourceEntry:
    definition: Resource
    reader: ResourceReader
    timestamped: bool


@dataclass(frozen=True)
class _PromptEntry:
    definition: Prompt
    renderer: PromptRenderer


class CapabilityRegistry:
    """Static catalog of tools, resources, resource templates and prompts.

    Populated once at startup, then only read. Entries registered with
    ``timestamped=True`` get a fresh ``lastModified`` stamp every time they
    are listed; everything else in a listing is identical across calls.

    Usage::

        registry = CapabilityRegistry()
        registry.add_tool(Tool(name="echo"), echo_handler)

        registry.list_tools()                       # [Tool(...)]
        registry.call_tool("echo", {"text": "hi"})  # CallToolResult
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or _utcnow
        self._tools: dict[str, _ToolEntry] = {}
        self._resources: dict[str, _ResourceEntry] = {}
        self._templates: dict[str, ResourceTemplate] = {}
        self._prompts: dict[str, _PromptEntry] = {}

    def now(self) -> datetime:
        return self._clock()

    # -- registration -------------------------------------------------------

    def add_tool(self, definition: Tool, handler: ToolHandler, *, timestamped: bool = False) -> None:
        self._check_unique(self._tools, definition.name, "tool")
        self._tools[definition.name] = _ToolEntry(definition, handler, timestamped)

    def add_resource(
        self,
        definition: Resource,
        reader: ResourceReader,
        *,
        timestamped: bool = False,
    ) -> None:
        self._check_unique(self._resources, definition.uri, "resource")
        self._resources[definition.uri] = _ResourceEntry(definition, reader, timestamped)

    def add_template(self, definition: ResourceTemplate) -> None:
        self._check_unique(self._templates, definition.uri_template, "resource template")
        self._templates[definition.uri_template] = definition

    def add_prompt(self, definition: Prompt, renderer: PromptRenderer) -> None:
        self._check_unique(self._prompts, definition.name, "prompt")
        self._prompts[definition.name] = _PromptEntry(definition, renderer)

    @staticmethod
    def _check_unique(table: dict[str, Any], key: str, kind: str) -> None:
        if key in table:
            msg = f"Duplicate {kind}: {key}"
            raise ValueError(msg)

    # -- tools --------------------------------------------------------------

    def list_tools(self) -> list[Tool]:
        stamp = isoformat(self.now())
        tools: list[Tool] = []
        for entry in self._tools.values():
            tool = entry.definition
            if entry.timestamped:
                meta = {**(tool.meta or {}), "lastModified": stamp}
                tool = tool.model_copy(update={"meta": meta})
            tools.append(tool)
        return tools

    def call_tool(self, name: str, arguments: dict[str, Any]) -> CallToolResult:
        """Run *name*; unknown tools and execution failures become ``isError`` results."""
        entry = self._tools.get(name)
        if entry is None:
            logger.info("tools/call: unknown tool %r", name)
            return CallToolResult.failure(str(ToolNotFoundError(name)))
        try:
            return entry.handler(arguments, self.now())
        except ToolExecutionError as exc:
            logger.info("tools/call: %s failed: %s", name, exc.detail)
            return CallToolResult.failure(
                exc.detail, annotations=Annotations(audience=["user"], priority=1)
            )

    # -- resources ----------------------------------------------------------

    def list_resources(self) -> list[Resource]:
        stamp = isoformat(self.now())
        resources: list[Resource] = []
        for entry in self._resources.values():
            resource = entry.definition
            if entry.timestamped:
                base = resource.annotations or Annotations()
                annotations = base.model_copy(update={"last_modified": stamp})
                resource = resource.model_copy(update={"annotations": annotations})
            resources.append(resource)
        return resources

    def read_resource(self, uri: str) -> ReadResourceResult:
        entry = self._resources.get(uri)
        if entry is None:
            logger.info("resources/read: unknown uri %r", uri)
            return ReadResourceResult()
        return entry.reader(uri, self.now())

    def list_templates(self) -> list[ResourceTemplate]:
        return list(self._templates.values())

    # -- prompts ------------------------------------------------------------

    def list_prompts(self) -> list[Prompt]:
        return [entry.definition for entry in self._prompts.values()]

    def get_prompt(self, name: str, arguments: dict[str, str]) -> GetPromptResult:
        entry = self._prompts.get(name)
        if entry is None:
            raise PromptNotFoundError(name)
        return entry.renderer(arguments, self.now())

    # -- completion ---------------------------------------------------------

    def complete(
        self,
        ref_type: Literal["ref/prompt", "ref/resource"],
        ref_key: str,
        argument: str,
        value: str,
    ) -> Completion:
        """Prefix-filter the candidates for *argument* of the referenced item.

        *ref_key* is a prompt name for ``ref/prompt`` and a URI template for
        ``ref/resource``. Matching is case-insensitive.
        """
        candidates = self._candidates(ref_type, ref_key, argument)
        prefix = value.lower()
        return Completion.from_values([c for c in candidates if c.lower().startswith(prefix)])

    def _candidates(self, ref_type: str, ref_key: str, argument: str) -> tuple[str, ...]:
        if ref_type == "ref/prompt":
            entry = self._prompts.get(ref_key)
            arg = entry.definition.argument(argument) if entry else None
            return arg.completions if arg else ()
        template = self._templates.get(ref_key)
        if template is None:
            return ()
        return template.completions.get(argument, ())

"""Capability models — the payloads of the tools, resources and prompts methods.

Field names are snake_case in Python and camelCase on the wire. Always
serialize through :meth:`WireModel.to_wire` so aliases are applied and unset
optional members are left out.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class WireModel(BaseModel):
    """Immutable model serialized with protocol aliases."""

    model_config = {"populate_by_name": True, "frozen": True}

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


# ---------------------------------------------------------------------------
# Content
# ---------------------------------------------------------------------------


class Annotations(WireModel):
    """Audience/priority hints attached to content, resources and templates."""

    audience: list[Literal["user", "assistant"]] | None = None
    priority: int | float | None = None
    last_modified: str | None = Field(default=None, alias="lastModified")


class TextContent(WireModel):
    """A text content block."""

    type: Literal["text"] = "text"
    text: str
    annotations: Annotations | None = None


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


class ToolAnnotations(WireModel):
    """Behavioural hints for a tool."""

    title: str | None = None
    read_only_hint: bool | None = Field(default=None, alias="readOnlyHint")
    destructive_hint: bool | None = Field(default=None, alias="destructiveHint")
    idempotent_hint: bool | None = Field(default=None, alias="idempotentHint")
    open_world_hint: bool | None = Field(default=None, alias="openWorldHint")


class Tool(WireModel):
    """A tool definition as returned by ``tools/list``."""

    name: str
    title: str | None = None
    description: str = ""
    input_schema: dict[str, Any] = Field(
        default_factory=lambda: {"type": "object", "properties": {}},
        alias="inputSchema",
    )
    output_schema: dict[str, Any] | None = Field(default=None, alias="outputSchema")
    annotations: ToolAnnotations | None = None
    meta: dict[str, Any] | None = Field(default=None, alias="_meta")


class CallToolResult(WireModel):
    """The result of ``tools/call``.

    ``is_error`` marks a domain failure; the envelope carrying it is still a
    JSON-RPC success.
    """

    content: list[TextContent] = Field(default_factory=list)
    structured_content: dict[str, Any] | None = Field(default=None, alias="structuredContent")
    is_error: bool | None = Field(default=None, alias="isError")

    @classmethod
    def failure(cls, detail: str, annotations: Annotations | None = None) -> CallToolResult:
        """Build an in-band error result whose text reads ``Error: <detail>``."""
        return cls(
            is_error=True,
            content=[TextContent(text=f"Error: {detail}", annotations=annotations)],
        )


# ---------------------------------------------------------------------------
# Resources
# ---------------------------------------------------------------------------


class Resource(WireModel):
    """A concrete resource as returned by ``resources/list``."""

    uri: str
    name: str
    title: str | None = None
    description: str | None = None
    mime_type: str | None = Field(default=None, alias="mimeType")
    annotations: Annotations | None = None
    size: int | None = None
    meta: dict[str, Any] | None = Field(default=None, alias="_meta")


class ResourceContents(WireModel):
    """Text contents of a resource."""

    uri: str
    mime_type: str | None = Field(default=None, alias="mimeType")
    text: str
    meta: dict[str, Any] | None = Field(default=None, alias="_meta")


class ReadResourceResult(WireModel):
    """The result of ``resources/read``. Empty ``contents`` means not found."""

    contents: list[ResourceContents] = Field(default_factory=list)


class ResourceTemplate(WireModel):
    """A parameterised resource as returned by ``resources/templates/list``.

    ``completions`` maps template variables to their completion candidates and
    is never serialized.
    """

    name: str
    title: str | None = None
    uri_template: str = Field(alias="uriTemplate")
    description: str | None = None
    mime_type: str | None = Field(default=None, alias="mimeType")
    annotations: Annotations | None = None
    meta: dict[str, Any] | None = Field(default=None, alias="_meta")
    completions: dict[str, tuple[str, ...]] = Field(default_factory=dict, exclude=True)


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------


class PromptArgument(WireModel):
    """A named argument a prompt accepts."""

    name: str
    title: str | None = None
    description: str | None = None
    required: bool = False
    completions: tuple[str, ...] = Field(default=(), exclude=True)


class Prompt(WireModel):
    """A prompt definition as returned by ``prompts/list``."""

    name: str
    title: str | None = None
    description: str | None = None
    arguments: list[PromptArgument] | None = None
    meta: dict[str, Any] | None = Field(default=None, alias="_meta")

    def argument(self, name: str) -> PromptArgument | None:
        for arg in self.arguments or []:
            if arg.name == name:
                return arg
        return None


class PromptMessage(WireModel):
    """One message of a rendered prompt."""

    role: Literal["user", "assistant"] = "user"
    content: TextContent


class GetPromptResult(WireModel):
    """The result of ``prompts/get``."""

    description: str | None = None
    messages: list[PromptMessage] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Completion
# ---------------------------------------------------------------------------


class Completion(WireModel):
    """Completion candidates for one argument. Never paginated."""

    values: list[str] = Field(default_factory=list)
    total: int = 0
    has_more: bool = Field(default=False, alias="hasMore")

    @classmethod
    def from_values(cls, values: list[str]) -> Completion:
        return cls(values=values, total=len(values), has_more=False)

"""Capability registry — the static catalog of tools, resources and prompts."""

from mcpedge.registry.builtin import build_default_registry
from mcpedge.registry.models import (
    Annotations,
    CallToolResult,
    Completion,
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
    ToolAnnotations,
)
from mcpedge.registry.registry import CapabilityRegistry, PromptNotFoundError

__all__ = [
    "Annotations",
    "CallToolResult",
    "CapabilityRegistry",
    "Completion",
    "GetPromptResult",
    "Prompt",
    "PromptArgument",
    "PromptMessage",
    "PromptNotFoundError",
    "ReadResourceResult",
    "Resource",
    "ResourceContents",
    "ResourceTemplate",
    "TextContent",
    "Tool",
    "ToolAnnotations",
    "build_default_registry",
]

"""Shared CLI output formatters."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from mcpedge.registry.registry import CapabilityRegistry
    from mcpedge.server.transport import HttpReply

console = Console()


def print_reply(reply: HttpReply, *, as_json: bool = False) -> None:
    """Print an HTTP reply: status line, then the body (pretty JSON when possible)."""
    if not as_json:
        style = "green" if reply.status < 300 else "red"
        console.print(f"[{style}]HTTP {reply.status}[/{style}]")
    if not reply.body:
        if not as_json:
            console.print("[dim](empty body)[/dim]")
        return
    if reply.headers.get("Content-Type", "").startswith("application/json"):
        console.print_json(reply.text)
    else:
        console.print(reply.text)


def print_catalog(registry: CapabilityRegistry, *, as_json: bool = False) -> None:
    """Pretty-print every capability in *registry*."""
    if as_json:
        data: dict[str, Any] = {
            "tools": [t.to_wire() for t in registry.list_tools()],
            "resources": [r.to_wire() for r in registry.list_resources()],
            "resourceTemplates": [t.to_wire() for t in registry.list_templates()],
            "prompts": [p.to_wire() for p in registry.list_prompts()],
        }
        console.print_json(json.dumps(data))
        return

    tools = Table(title="Tools")
    tools.add_column("Name", style="cyan")
    tools.add_column("Description")
    for tool in registry.list_tools():
        tools.add_row(tool.name, _truncate(tool.description))
    console.print(tools)

    resources = Table(title="Resources")
    resources.add_column("URI", style="cyan")
    resources.add_column("Name")
    resources.add_column("MIME type")
    for resource in registry.list_resources():
        resources.add_row(resource.uri, resource.name, resource.mime_type or "-")
    for template in registry.list_templates():
        resources.add_row(template.uri_template, template.name, template.mime_type or "-")
    console.print(resources)

    prompts = Table(title="Prompts")
    prompts.add_column("Name", style="cyan")
    prompts.add_column("Arguments")
    prompts.add_column("Description")
    for prompt in registry.list_prompts():
        args = ", ".join(
            f"{a.name}{'*' if a.required else ''}" for a in prompt.arguments or []
        ) or "-"
        prompts.add_row(prompt.name, args, _truncate(prompt.description or ""))
    console.print(prompts)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
